"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, current_app, request, jsonify

from ..errors import MastermindError
from ..models.game import GameStatus
from ..services.game_service import get_game_service
from ..utils.decorators import require_player
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_limit
from ..websocket.handlers import broadcast_guess_result, broadcast_leaderboard_update

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _error_response(action, error, game_id=None):
    """Turn an exception into the JSON error envelope and log it."""
    if isinstance(error, MastermindError):
        error_response, status = error.to_dict(), error.status_code
    else:
        game_logger.log_error(request, error, action, game_id)
        error_response, status = {'success': False, 'error': str(error)}, 500

    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), status


@game_bp.route('/mastermind', methods=['POST'])
@require_player
def new_game():
    """Create a new game."""
    game_service = get_game_service()
    if not game_service:
        return _service_unavailable()

    data = request.get_json(silent=True) or {}
    difficulty = data.get('difficulty')
    user_id = request.user['user_id']

    game_logger.log_user_action(request, 'new_game', difficulty=difficulty)

    try:
        game = game_service.create_new_game(user_id, difficulty)
    except Exception as e:
        return _error_response('new_game', e)

    response_data = {
        'success': True,
        'game_id': game.game_id,
        'state': game.to_public_dict()
    }
    game_logger.log_server_response(
        request, 'new_game', True, response_data, game.game_id,
        difficulty=game.difficulty, code_length=game.code_length
    )
    return jsonify(response_data), 201


@game_bp.route('/mastermind', methods=['GET'])
@require_player
def list_games():
    """List the caller's games, newest first."""
    game_service = get_game_service()
    if not game_service:
        return _service_unavailable()

    difficulty = request.args.get('difficulty') or None
    try:
        limit = parse_limit(request.args.get('limit'))
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    game_logger.log_user_action(request, 'list_games', difficulty=difficulty, limit=limit)

    try:
        games = game_service.list_games(request.user['user_id'], difficulty, limit)
    except Exception as e:
        return _error_response('list_games', e)

    return jsonify({'success': True, 'games': games})


@game_bp.route('/mastermind/<game_id>', methods=['GET'])
@require_player
def get_state(game_id):
    """Get current game state."""
    game_service = get_game_service()
    if not game_service:
        return _service_unavailable()

    game_logger.log_user_action(request, 'get_state', game_id)

    try:
        state = game_service.get_game_state(game_id, request.user['user_id'])
    except Exception as e:
        return _error_response('get_state', e, game_id)

    response_data = {
        'success': True,
        'state': state
    }
    game_logger.log_server_response(
        request, 'get_state', True, response_data, game_id,
        total_guesses=state['totalGuesses'], game_status=state['gameStatus']
    )
    return jsonify(response_data)


@game_bp.route('/mastermind/<game_id>/guess', methods=['POST'])
@require_player
def make_guess(game_id):
    """Submit a guess for evaluation."""
    game_service = get_game_service()
    if not game_service:
        return _service_unavailable()

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'guess' not in data:
        error_response = {
            'success': False,
            'error': 'Guess is required'
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 400

    guess = data['guess']
    user = request.user
    game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess)

    try:
        result = game_service.submit_guess(game_id, user['user_id'], guess, user['username'])
    except Exception as e:
        return _error_response('submit_guess', e, game_id)

    payload = result.to_dict()
    response_data = {
        'success': True,
        'result': payload
    }
    game_logger.log_server_response(
        request, 'submit_guess', True, response_data, game_id,
        guess_number=result.guess_number, game_status=result.game_status.value
    )

    socketio = current_app.extensions.get('socketio')
    if socketio:
        broadcast_guess_result(socketio, game_id, [{'id': None, 'payload': payload}])

    if result.game_status.is_terminal:
        event = 'game_won' if result.game_status is GameStatus.WON else 'game_lost'
        game_logger.log_game_event(
            game_id, event, user['user_id'],
            guesses_used=result.guess_number, secret_code=payload['secretCode']
        )
        if socketio:
            difficulty = game_service.get_game(game_id, user['user_id']).difficulty
            broadcast_leaderboard_update(socketio, difficulty)

    return jsonify(response_data)


@game_bp.route('/mastermind/<game_id>', methods=['DELETE'])
@require_player
def delete_game(game_id):
    """Delete a game record."""
    game_service = get_game_service()
    if not game_service:
        return _service_unavailable()

    game_logger.log_user_action(request, 'delete_game', game_id)

    try:
        success = game_service.delete_game(game_id, request.user['user_id'])
    except Exception as e:
        return _error_response('delete_game', e, game_id)

    response_data = {'success': success}
    game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)
    if not success:
        response_data['error'] = 'Game not found'
        return jsonify(response_data), 404

    game_logger.log_game_event(game_id, 'game_deleted', request.user['user_id'])
    return jsonify(response_data)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    game_service = get_game_service()

    game_logger.log_user_action(request, 'health_check')

    try:
        response_data = {
            'status': 'healthy',
            'store_backend': game_service.game_store.backend if game_service else None,
            'active_games': game_service.game_store.count() if game_service else 0,
            'log_stats': game_logger.get_log_stats(),
        }
    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        return jsonify({'status': 'error', 'error': str(e)}), 500

    game_logger.log_server_response(request, 'health_check', True, response_data)
    return jsonify(response_data)
