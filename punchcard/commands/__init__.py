"""
CLI Commands for the punchcard back office.

Usage:
    flask setup init-db          # Create all tables
    flask setup create-admin     # Create the bootstrap manager account
"""
from .setup import init_app as init_setup_commands


def init_app(app):
    """Register all CLI commands with the Flask app."""
    init_setup_commands(app)
