"""
CLI Commands for Stampcard.

Usage:
    flask admin create-superuser --email ops@example.com --password s3cret!
    flask admin seed --name "Test Coffee Shop"
    flask admin purge-sessions
    flask db upgrade                      # Apply migrations (Flask-Migrate)
"""
from .admin import init_app as init_admin_commands


def init_app(app):
    """Register all CLI commands with the Flask app."""
    init_admin_commands(app)
