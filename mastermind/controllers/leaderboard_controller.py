"""
Leaderboard Controller

Handles leaderboard HTTP endpoints.
"""

from flask import Blueprint, request, jsonify

from ..errors import MastermindError
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_limit

leaderboard_bp = Blueprint('leaderboard', __name__)


@leaderboard_bp.route('/mastermind/leaderboard', methods=['GET'])
def get_leaderboard():
    """Ranked leaderboard, optionally for a single difficulty."""
    game_service = get_game_service()
    if not game_service:
        return jsonify({
            'success': False,
            'error': 'Game service unavailable'
        }), 500

    difficulty = request.args.get('difficulty') or None
    try:
        limit = parse_limit(request.args.get('limit'))
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    game_logger.log_user_action(request, 'get_leaderboard', difficulty=difficulty, limit=limit)

    try:
        records = game_service.get_leaderboard(difficulty, limit)
    except MastermindError as e:
        game_logger.log_server_response(request, 'get_leaderboard', False, e.to_dict())
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        game_logger.log_error(request, e, 'get_leaderboard')
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    response_data = {
        'success': True,
        'leaderboard': [record.to_dict() for record in records]
    }
    game_logger.log_server_response(
        request, 'get_leaderboard', True, response_data, entries=len(records)
    )
    return jsonify(response_data)
