"""
Session Service

Cookie-backed admin sessions. A session is valid for SESSION_DAYS from
creation; expired rows are skipped by lookups rather than deleted eagerly.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from flask import current_app, has_app_context

from ..extensions import db
from ..models import AdminUser, AdminSession
from ..utils.passwords import hash_password, verify_password
from ..utils.tokens import generate_guid

logger = logging.getLogger(__name__)

SESSION_DAYS = 7

# Hash compared against when the email is unknown, so both paths cost a bcrypt check
_dummy_hash = None


def _session_lifetime() -> timedelta:
    days = SESSION_DAYS
    if has_app_context():
        days = current_app.config.get('SESSION_DAYS', SESSION_DAYS)
    return timedelta(days=days)


class SessionService:
    """Create, resolve and destroy admin sessions."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def authenticate(self, email: str, password: str) -> Optional[AdminUser]:
        """Return the admin user for valid credentials, else None."""
        global _dummy_hash
        if not email or not password:
            return None

        user = self.session.query(AdminUser).filter_by(email=email.strip().lower()).first()
        if user is None:
            if _dummy_hash is None:
                _dummy_hash = hash_password(generate_guid())
            verify_password(password, _dummy_hash)
            return None

        if not verify_password(password, user.password_hash):
            logger.info(f'Failed login for user={user.id}')
            return None
        return user

    def create_session(self, user_id: str) -> AdminSession:
        """Open a new session for a user."""
        now = datetime.utcnow()
        admin_session = AdminSession(
            id=generate_guid(),
            user_id=user_id,
            created_at=now,
            expires_at=now + _session_lifetime()
        )
        self.session.add(admin_session)
        self.session.commit()
        logger.info(f'Session created for user={user_id}')
        return admin_session

    def resolve_session(self, session_id: str) -> Optional[AdminUser]:
        """Admin user behind a non-expired session, or None."""
        if not session_id or not isinstance(session_id, str):
            return None
        return self.session.query(AdminUser).join(
            AdminSession, AdminSession.user_id == AdminUser.id
        ).filter(
            AdminSession.id == session_id,
            AdminSession.expires_at > datetime.utcnow()
        ).first()

    def destroy_session(self, session_id: str) -> None:
        """Delete a session. Unknown ids are ignored."""
        if not session_id:
            return
        self.session.query(AdminSession).filter_by(id=session_id).delete()
        self.session.commit()

    def purge_expired(self) -> int:
        """Delete expired sessions and return how many were removed."""
        deleted = self.session.query(AdminSession).filter(
            AdminSession.expires_at <= datetime.utcnow()
        ).delete()
        self.session.commit()
        if deleted:
            logger.info(f'Purged {deleted} expired sessions')
        return deleted
