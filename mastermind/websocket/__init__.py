"""
WebSocket Package

Socket.IO channels for games and the leaderboard.
"""

from .handlers import register_websocket_handlers, broadcast_guess_result, broadcast_leaderboard_update

__all__ = ['register_websocket_handlers', 'broadcast_guess_result', 'broadcast_leaderboard_update']
