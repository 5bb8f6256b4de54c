"""
WebSocket Event Handlers

Publish/subscribe channels for real-time play. Each game is a room named
``game/<game_id>``. Leaderboard subscribers join ``leaderboard`` for the
overall ranking or ``leaderboard/<difficulty>`` for a single tier.
"""

from flask_socketio import emit, join_room, leave_room

from ..errors import MastermindError
from ..models.game import GameStatus
from ..services.game_service import get_game_service
from ..utils.decorators import websocket_player_required
from ..utils.game_logger import game_logger

LEADERBOARD_ROOM = 'leaderboard'


def game_room(game_id: str) -> str:
    return f"game/{game_id}"


def leaderboard_room(difficulty=None) -> str:
    return f"{LEADERBOARD_ROOM}/{difficulty}" if difficulty else LEADERBOARD_ROOM


def broadcast_guess_result(socketio, game_id, events):
    """Publish scored guess events to everyone subscribed to the game."""
    socketio.emit('guess_result', {
        'game_id': game_id,
        'events': events
    }, to=game_room(game_id))


def broadcast_leaderboard_update(socketio, difficulty=None):
    """
    Publish the current leaderboard after a game ends.

    Subscribers to all difficulties get the overall ranking; subscribers to
    ``difficulty`` get that tier's ranking only.
    """
    game_service = get_game_service()
    if not game_service:
        return
    for room_difficulty in (None, difficulty) if difficulty else (None,):
        records = game_service.get_leaderboard(room_difficulty)
        socketio.emit('leaderboard_update', {
            'difficulty': room_difficulty,
            'leaderboard': [record.to_dict() for record in records]
        }, to=leaderboard_room(room_difficulty))


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        emit('connected', {'message': 'Connected'})

    @socketio.on('join_game')
    @websocket_player_required
    def handle_join_game(data, user=None):
        """Subscribe to a game's channel."""
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        game_id = data.get('game_id')
        if not game_id:
            emit('error', {'error': 'Game ID is required', 'code': 'invalid_input'})
            return

        try:
            state = game_service.get_game_state(game_id, user['id'])
        except MastermindError as e:
            emit('error', {'error': e.message, 'code': e.code})
            return

        room = game_room(game_id)
        join_room(room)
        game_logger.logger.info(f"WebSocket: {user['id']} joined game {game_id}")

        emit('joined', {'room': room, 'state': state})

    @socketio.on('leave_game')
    def handle_leave_game(data):
        """Unsubscribe from a game's channel."""
        game_id = (data or {}).get('game_id')
        if not game_id:
            emit('error', {'error': 'Game ID is required', 'code': 'invalid_input'})
            return

        room = game_room(game_id)
        leave_room(room)
        emit('left', {'room': room})

    @socketio.on('publish')
    @websocket_player_required
    def handle_publish(data, user=None):
        """
        Process a batch of guess events published on a game channel.

        Each event is ``{id, payload: {guess}}``. Successful results are
        broadcast to the game room as one ``guess_result`` batch; failures
        are reported to the publisher only.
        """
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        game_id = data.get('game_id')
        events = data.get('events')
        if not game_id or not isinstance(events, list):
            emit('error', {'error': 'game_id and events are required', 'code': 'invalid_input'})
            return

        join_room(game_room(game_id))

        results = []
        game_over = False
        for event in events:
            event = event if isinstance(event, dict) else {}
            event_id = event.get('id')
            guess = (event.get('payload') or {}).get('guess')
            try:
                result = game_service.submit_guess(game_id, user['id'], guess, user.get('username'))
            except MastermindError as e:
                game_logger.logger.warning(
                    f"WebSocket: guess rejected for game {game_id} ({e.code}): {e.message}"
                )
                emit('error', {'id': event_id, 'error': e.message, 'code': e.code})
                continue

            results.append({'id': event_id, 'payload': result.to_dict()})
            if result.game_status.is_terminal:
                game_over = True
                event_name = 'game_won' if result.game_status is GameStatus.WON else 'game_lost'
                game_logger.log_game_event(
                    game_id, event_name, user['id'], guesses_used=result.guess_number
                )

        if results:
            broadcast_guess_result(socketio, game_id, results)
        if game_over:
            difficulty = game_service.get_game(game_id, user['id']).difficulty
            broadcast_leaderboard_update(socketio, difficulty)

    @socketio.on('subscribe_leaderboard')
    def handle_subscribe_leaderboard(data=None):
        """Subscribe to leaderboard updates and receive the current ranking."""
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        difficulty = (data or {}).get('difficulty')
        try:
            records = game_service.get_leaderboard(difficulty)
        except MastermindError as e:
            emit('error', {'error': e.message, 'code': e.code})
            return

        join_room(leaderboard_room(difficulty))
        emit('leaderboard_update', {
            'difficulty': difficulty,
            'leaderboard': [record.to_dict() for record in records]
        })

    @socketio.on('unsubscribe_leaderboard')
    def handle_unsubscribe_leaderboard(data=None):
        room = leaderboard_room((data or {}).get('difficulty'))
        leave_room(room)
        emit('left', {'room': room})
