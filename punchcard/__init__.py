"""
Punchcard Loyalty Back Office
Flask application factory
"""
import os
import logging
from flask import Flask, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .extensions import db, migrate
from .config import get_config, validate_config
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config_name: str = None) -> Flask:
    """
    Application factory for creating Flask app instances.

    Args:
        config_name: Configuration environment (development, production, testing)

    Returns:
        Configured Flask application
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    # Setup logging before anything else
    setup_logging()
    validate_config(config_name)

    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    CORS(
        app,
        origins=app.config['CORS_ORIGINS'],
        supports_credentials=True,
        allow_headers=['Content-Type', 'Authorization', 'X-Webhook-Secret']
    )

    # Notification transport, shared by every request
    from .services.email_service import EmailService
    app.extensions['email_service'] = EmailService.from_config(app.config)

    # Register blueprints
    register_blueprints(app)

    # Register CLI commands
    from .commands import init_app as init_commands
    init_commands(app)

    # Register error handlers
    register_error_handlers(app)

    # Health check endpoint
    @app.route('/api/health')
    def health_check():
        return {'status': 'healthy', 'service': 'punchcard'}

    logger.info(f'Punchcard app created ({config_name})')
    return app


def register_blueprints(app: Flask) -> None:
    """Register all API blueprints."""
    from .api.auth import auth_bp
    from .api.customers import customers_bp
    from .api.punchcards import punchcards_bp
    from .api.staff import staff_bp
    from .api.shopify import shopify_bp
    from .webhooks.social import social_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(customers_bp, url_prefix='/api/customers')
    app.register_blueprint(punchcards_bp, url_prefix='/api/punchcards')
    app.register_blueprint(staff_bp, url_prefix='/api/staff')
    app.register_blueprint(shopify_bp, url_prefix='/api/shopify')
    app.register_blueprint(social_bp, url_prefix='/api/webhooks')


def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from .utils.errors import (
        ErrorCode,
        error_response,
        exception_response,
        bad_request,
        not_found,
        internal_error
    )
    from .utils.exceptions import PunchcardError

    @app.errorhandler(PunchcardError)
    def handle_punchcard_error(error):
        db.session.rollback()
        return exception_response(error)

    @app.errorhandler(400)
    def handle_bad_request(error):
        return bad_request(error.description or 'Bad request')

    @app.errorhandler(404)
    def handle_not_found(error):
        return not_found(f'No route for {request.path}')

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return error_response('Method not allowed', ErrorCode.INVALID_REQUEST, 405, log_error=False)

    @app.errorhandler(500)
    def handle_internal_error(error):
        db.session.rollback()
        original = getattr(error, 'original_exception', None)
        if original is not None and not isinstance(original, HTTPException):
            logger.exception(f'Unhandled error on {request.method} {request.path}', exc_info=original)
        return internal_error()
