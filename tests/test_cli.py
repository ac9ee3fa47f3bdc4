"""
Tests for the admin CLI commands.
"""
from datetime import datetime, timedelta

from stampcard.extensions import db
from stampcard.models import AdminSession, AdminUser, Establishment
from stampcard.services.session_service import SessionService


class TestAdminCommands:

    def test_create_superuser(self, app):
        """Test creating a superuser from the command line."""
        runner = app.test_cli_runner()

        result = runner.invoke(args=[
            'admin', 'create-superuser',
            '--email', 'Root@Example.com',
            '--password', 'supersecret'
        ])

        assert result.exit_code == 0, result.output
        assert 'Superuser created successfully' in result.output
        user = AdminUser.query.filter_by(email='root@example.com').first()
        assert user.is_superuser
        assert user.establishment_id is None

    def test_create_superuser_duplicate(self, app, superuser):
        """Test that an existing email is reported as a command error."""
        runner = app.test_cli_runner()

        result = runner.invoke(args=[
            'admin', 'create-superuser',
            '--email', 'root@example.com',
            '--password', 'supersecret'
        ])

        assert result.exit_code != 0
        assert 'already exists' in result.output

    def test_create_superuser_over_long_password(self, app):
        """Test that a password over 72 bytes fails cleanly without creating a user."""
        runner = app.test_cli_runner()

        result = runner.invoke(args=[
            'admin', 'create-superuser',
            '--email', 'root@example.com',
            '--password', 'x' * 100
        ])

        assert result.exit_code == 1
        assert '72 bytes' in result.output
        assert AdminUser.query.count() == 0

    def test_seed(self, app):
        """Test seeding a demo establishment with a custom grid size."""
        runner = app.test_cli_runner()

        result = runner.invoke(args=[
            'admin', 'seed',
            '--email', 'demo@example.com',
            '--grid-size', '6'
        ])

        assert result.exit_code == 0, result.output
        establishment = Establishment.query.one()
        assert establishment.grid_size == 6
        assert establishment.admins.first().email == 'demo@example.com'

    def test_seed_invalid_grid_size(self, app):
        """Test that seeding with an out-of-range grid size creates nothing."""
        runner = app.test_cli_runner()

        result = runner.invoke(args=['admin', 'seed', '--grid-size', '50'])

        assert result.exit_code != 0
        assert Establishment.query.count() == 0

    def test_purge_sessions(self, app, sample_admin):
        """Test that purge-sessions removes only expired sessions."""
        service = SessionService()
        live_id = service.create_session(sample_admin.id).id
        stale = service.create_session(sample_admin.id)
        stale_id = stale.id
        stale.expires_at = datetime.utcnow() - timedelta(minutes=1)
        db.session.commit()

        result = app.test_cli_runner().invoke(args=['admin', 'purge-sessions'])

        assert result.exit_code == 0, result.output
        assert 'Purged 1 expired sessions' in result.output
        assert db.session.get(AdminSession, live_id) is not None
        assert db.session.get(AdminSession, stale_id) is None
