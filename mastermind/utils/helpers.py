"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from flask import request


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract player identity information from request."""
    if request_obj is None:
        request_obj = request

    return {
        'user_ip': request_obj.remote_addr or 'unknown',
        'user_id': (request_obj.headers.get('X-User-Id') or '').strip() or None,
        'username': (request_obj.headers.get('X-Username') or '').strip() or None,
    }


def parse_limit(value) -> Optional[int]:
    """Parse an optional positive ``limit`` query parameter."""
    if value in (None, ''):
        return None
    limit = int(value)
    if limit < 1:
        raise ValueError("limit must be a positive integer")
    return limit
