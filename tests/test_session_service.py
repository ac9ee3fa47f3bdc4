"""
Tests for the Session Service.
"""
from datetime import datetime, timedelta

from stampcard.extensions import db
from stampcard.models import AdminSession
from stampcard.services.session_service import SessionService
from stampcard.utils.tokens import generate_guid


class TestSessions:

    def test_create_session_expires_in_seven_days(self, app, sample_admin):
        """Test that sessions last seven days."""
        admin_session = SessionService().create_session(sample_admin.id)

        lifetime = admin_session.expires_at - admin_session.created_at
        assert lifetime == timedelta(days=7)

    def test_resolve_session_returns_user(self, app, sample_admin):
        """Test resolving a live session."""
        service = SessionService()
        admin_session = service.create_session(sample_admin.id)

        assert service.resolve_session(admin_session.id).id == sample_admin.id

    def test_resolve_unknown_or_empty_session(self, app, sample_admin):
        """Test resolving unknown and empty session ids."""
        service = SessionService()
        assert service.resolve_session(generate_guid()) is None
        assert service.resolve_session('') is None
        assert service.resolve_session(None) is None

    def test_expired_session_is_ignored(self, app, sample_admin):
        """Test that expired sessions do not resolve."""
        service = SessionService()
        admin_session = service.create_session(sample_admin.id)
        admin_session.expires_at = datetime.utcnow() - timedelta(seconds=1)
        db.session.commit()

        assert service.resolve_session(admin_session.id) is None

    def test_destroy_session_is_idempotent(self, app, sample_admin):
        """Test destroying a session twice."""
        service = SessionService()
        admin_session = service.create_session(sample_admin.id)

        service.destroy_session(admin_session.id)
        service.destroy_session(admin_session.id)

        assert service.resolve_session(admin_session.id) is None

    def test_purge_expired(self, app, sample_admin):
        """Test purging only expired sessions."""
        service = SessionService()
        live = service.create_session(sample_admin.id)
        expired = service.create_session(sample_admin.id)
        expired.expires_at = datetime.utcnow() - timedelta(days=1)
        db.session.commit()

        assert service.purge_expired() == 1
        assert db.session.get(AdminSession, live.id) is not None


class TestAuthenticate:

    def test_valid_credentials(self, app, sample_admin):
        """Test authenticating with valid credentials."""
        user = SessionService().authenticate('ADMIN@example.com', 'abc123')
        assert user.id == sample_admin.id

    def test_wrong_password(self, app, sample_admin):
        """Test authenticating with a wrong password."""
        assert SessionService().authenticate('admin@example.com', 'wrong') is None

    def test_unknown_email(self, app, sample_admin):
        """Test authenticating an unknown email."""
        assert SessionService().authenticate('nobody@example.com', 'abc123') is None

    def test_missing_fields(self, app):
        """Test authenticating with missing credentials."""
        assert SessionService().authenticate('', '') is None
