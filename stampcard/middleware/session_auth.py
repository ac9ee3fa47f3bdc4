"""
Admin Session Middleware.

Resolves the `session_id` cookie to an AdminUser once per request and
provides decorators that gate admin endpoints.

Authorization rule: an establishment_admin may only act on their own
establishment; a superuser may act on any.
"""
from functools import wraps
from flask import request, g, current_app

from ..services.session_service import SessionService
from ..utils.exceptions import AuthError, ForbiddenError

DEFAULT_COOKIE = 'session_id'


def session_cookie_name() -> str:
    return current_app.config.get('ADMIN_SESSION_COOKIE', DEFAULT_COOKIE)


def load_current_user() -> None:
    """before_request hook: set g.current_user from the session cookie."""
    session_id = request.cookies.get(session_cookie_name())
    g.session_id = session_id
    g.current_user = SessionService().resolve_session(session_id) if session_id else None


def get_current_user():
    return getattr(g, 'current_user', None)


def require_admin_session(f):
    """
    Decorator requiring a logged-in admin.

    Usage:
        @require_admin_session
        def my_endpoint():
            user = g.current_user
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if get_current_user() is None:
            raise AuthError()
        return f(*args, **kwargs)

    return decorated_function


def require_establishment_access(f):
    """
    Decorator requiring a logged-in admin allowed to act on the
    establishment named by the `establishment_id` URL parameter.

    Sets g.establishment_id.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = get_current_user()
        if user is None:
            raise AuthError()

        establishment_id = kwargs.get('establishment_id')
        if not user.can_access(establishment_id):
            raise ForbiddenError()

        g.establishment_id = establishment_id
        return f(*args, **kwargs)

    return decorated_function


def require_superuser(f):
    """Decorator requiring a logged-in superuser."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = get_current_user()
        if user is None:
            raise AuthError()
        if not user.is_superuser:
            raise ForbiddenError()
        return f(*args, **kwargs)

    return decorated_function


def set_session_cookie(response, session_id: str):
    """Attach the admin session cookie to a response."""
    days = current_app.config.get('SESSION_DAYS', 7)
    response.set_cookie(
        session_cookie_name(),
        session_id,
        max_age=60 * 60 * 24 * days,
        path='/',
        httponly=True,
        samesite='Lax',
        secure=current_app.config.get('SESSION_COOKIE_SECURE', False)
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(session_cookie_name(), path='/')
    return response
