"""
CLI Commands for administration.

# Expired session cleanup (run daily)
0 3 * * * cd /app && flask admin purge-sessions
"""

import click
from flask.cli import with_appcontext

from ..services.establishment_service import EstablishmentService
from ..services.session_service import SessionService
from ..utils.exceptions import StampcardError
from ..utils.tokens import generate_token


@click.group('admin')
def admin_cli():
    """Administration commands."""
    pass


@admin_cli.command('create-superuser')
@click.option('--email', required=True, help='Login email for the superuser')
@click.option('--password', required=True, help='Password (min 6 characters)')
@with_appcontext
def create_superuser(email, password):
    """Create a superuser that can manage every establishment."""
    try:
        user = EstablishmentService().create_superuser(email, password)
    except StampcardError as e:
        raise click.ClickException(e.message)

    click.echo('Superuser created successfully')
    click.echo(f'  Email: {user.email}')


@admin_cli.command('seed')
@click.option('--name', default='Test Coffee Shop', help='Establishment name')
@click.option('--email', default=None, help='Admin email (generated if omitted)')
@click.option('--password', default='test123', help='Admin password')
@click.option('--grid-size', default=9, type=int, help='Stamps per card')
@with_appcontext
def seed(name, email, password, grid_size):
    """Create a demo establishment with one admin."""
    if not email:
        email = f'admin-{generate_token()[:8]}@example.com'

    try:
        created = EstablishmentService().create_establishment(
            name=name,
            email=email,
            password=password,
            grid_size=grid_size,
        )
    except StampcardError as e:
        raise click.ClickException(e.message)

    establishment = created['establishment']
    click.echo('Database seeded successfully')
    click.echo(f'  Establishment ID: {establishment.id}')
    click.echo(f'  Name: {establishment.name}')
    click.echo(f'  Admin email: {email}')
    click.echo(f'  Admin password: {password}')


@admin_cli.command('purge-sessions')
@with_appcontext
def purge_sessions():
    """Delete expired admin sessions."""
    deleted = SessionService().purge_expired()
    click.echo(f'Purged {deleted} expired sessions')


def init_app(app):
    """Register admin commands with the Flask app."""
    app.cli.add_command(admin_cli)
