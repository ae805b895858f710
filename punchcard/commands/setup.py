"""
CLI Commands for first-run setup.

    flask setup init-db
    flask setup create-admin --email owner@shop.com --password 's3cret-pass'

Both commands are safe to re-run.
"""

import click
from flask import current_app
from flask.cli import with_appcontext
from ..extensions import db
from ..services.staff_service import StaffService
from ..utils.exceptions import PunchcardError
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


@click.group('setup')
def setup_cli():
    """Database and account setup commands."""
    pass


@setup_cli.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    logger.info('Database tables created')
    click.echo('Database initialized')


@setup_cli.command('create-admin')
@click.option('--email', default=None, help='Manager email (default DEFAULT_ADMIN_EMAIL)')
@click.option('--password', default=None, help='Manager password (default DEFAULT_ADMIN_PASSWORD)')
@click.option('--name', default='Administrator', help='Display name')
@with_appcontext
def create_admin(email, password, name):
    """Create the bootstrap manager account unless it already exists."""
    email = email or current_app.config['DEFAULT_ADMIN_EMAIL']
    password = password or current_app.config['DEFAULT_ADMIN_PASSWORD']

    try:
        staff, created = StaffService().ensure_manager(email, password, name=name)
    except PunchcardError as e:
        raise click.ClickException(e.message)

    if created:
        logger.info(f'Bootstrap manager {staff.email} created')
        click.echo(f'Created manager account: {staff.email}')
        if password == 'admin123':
            click.echo('WARNING: default password in use, change it after first login')
    else:
        click.echo(f'Account already exists: {staff.email}')


def init_app(app):
    """Register setup commands with Flask app."""
    app.cli.add_command(setup_cli)
