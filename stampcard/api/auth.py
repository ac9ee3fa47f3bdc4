"""
Authentication API endpoints.
Admin login and logout with a cookie-backed session.
"""
import logging
from flask import Blueprint, jsonify, g

from ..middleware.session_auth import (
    require_admin_session,
    set_session_cookie,
    clear_session_cookie,
)
from ..services.session_service import SessionService
from ..utils.errors import ErrorCode
from ..utils.exceptions import AuthError, ValidationError
from .common import get_json_body

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Login with email and password.

    Request body:
        email: string (required)
        password: string (required)

    Returns:
        {"user": {...}} and sets the session_id cookie
    """
    data = get_json_body()
    email = data.get('email')
    password = data.get('password')

    if not email or not password:
        raise ValidationError('Email and password required')
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError('Email and password must be strings')

    service = SessionService()
    user = service.authenticate(email, password)
    if user is None:
        raise AuthError('Invalid email or password', ErrorCode.INVALID_CREDENTIALS.value)

    admin_session = service.create_session(user.id)

    response = jsonify({'user': user.to_dict()})
    return set_session_cookie(response, admin_session.id)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Destroy the current session. Safe to call when logged out."""
    session_id = getattr(g, 'session_id', None)
    if session_id:
        SessionService().destroy_session(session_id)

    response = jsonify({'success': True})
    return clear_session_cookie(response)


@auth_bp.route('/me', methods=['GET'])
@require_admin_session
def me():
    """Current admin user."""
    return jsonify({'user': g.current_user.to_dict()})
