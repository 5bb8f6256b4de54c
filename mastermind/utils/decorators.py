"""
Identity Decorators

Contains decorators that resolve the calling player for HTTP and WebSocket
handlers. Authentication happens upstream; these only read the identity the
gateway forwards.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit

from .helpers import get_user_identity


def require_player(f):
    """
    Decorator to require a player identity on HTTP endpoints.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        identity = get_user_identity(request)
        if not identity['user_id']:
            return jsonify({
                'success': False,
                'error': 'X-User-Id header required'
            }), 400

        request.user = identity
        return f(*args, **kwargs)

    return decorated_function


def websocket_player_required(f):
    """Decorator for WebSocket events that act on behalf of a player."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        data = args[0] if args and isinstance(args[0], dict) else None
        user_id = (data or {}).get('user_id')
        if not user_id:
            emit('error', {'error': 'user_id is required', 'code': 'invalid_input'})
            return

        kwargs['user'] = {'id': str(user_id), 'username': data.get('username')}
        return f(*args, **kwargs)

    return decorated_function
