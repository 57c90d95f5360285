"""Middleware for client authentication context."""
from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, session


def get_current_client_id() -> Optional[int]:
    """Client id stored in the Flask session by the login flow, or None."""
    raw = session.get(current_app.config.get('SESSION_CLIENT_KEY', 'client_id'))
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        current_app.logger.warning(f"[AUTH] Ignoring malformed client id in session: {raw!r}")
        return None


def load_client():
    """
    Load the authenticated client id into g.

    Called before each request. The id is not checked against the
    database here; order registration re-validates it.
    """
    g.client_id = get_current_client_id()


def require_client(f):
    """
    Decorator: Require an authenticated client.

    Returns a JSON 401 instead of redirecting; the booking API has no
    login page of its own.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.get('client_id') is None:
            return jsonify({
                'status': 'error',
                'code': 'UNAUTHENTICATED',
                'message': 'Faça login para continuar.'
            }), 401
        return f(*args, **kwargs)
    return decorated_function
