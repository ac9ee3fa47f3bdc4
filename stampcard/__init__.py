"""
Stampcard Loyalty Service
Flask application factory
"""
import os
import logging
from flask import Flask, send_from_directory
from flask_cors import CORS
from sqlalchemy.exc import OperationalError, DisconnectionError, TimeoutError as PoolTimeoutError
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

    # Frontends call the API with the session cookie
    CORS(
        app,
        origins=app.config['CORS_ORIGINS'],
        supports_credentials=True,
        allow_headers=['Content-Type', 'X-Request-ID']
    )

    # Logo storage
    from .services.blob_store import LocalBlobStore
    app.extensions['blob_store'] = LocalBlobStore(app.config['UPLOAD_FOLDER'])

    # Request ID tracking, then the admin session lookup
    from .middleware import init_request_id_tracking, load_current_user
    init_request_id_tracking(app)
    app.before_request(load_current_user)

    # Register blueprints
    register_blueprints(app)

    # Serve stored logos
    serve_uploads(app)

    # Register CLI commands
    from .commands import init_app as init_commands
    init_commands(app)

    # Register error handlers
    register_error_handlers(app)

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return {'status': 'healthy', 'service': 'stampcard'}

    logger.info(f'Stampcard app created (config={config_name})')
    return app


def serve_uploads(app: Flask) -> None:
    """Serve files written by the local blob store."""

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        response = send_from_directory(app.extensions['blob_store'].root, filename)
        response.headers['Cache-Control'] = 'public, max-age=86400'  # 1 day
        return response


def register_blueprints(app: Flask) -> None:
    """Register all API blueprints."""
    from .api.auth import auth_bp
    from .api.establishments import establishments_bp
    from .api.tokens import tokens_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(establishments_bp, url_prefix='/api/establishments')
    app.register_blueprint(tokens_bp, url_prefix='/api/tokens')


def register_error_handlers(app: Flask) -> None:
    """Map every failure to a JSON {error, code} body."""
    from .utils.errors import ErrorCode, error_response, internal_error
    from .utils.exceptions import StampcardError

    @app.errorhandler(StampcardError)
    def handle_stampcard_error(error):
        if error.status_code >= 500:
            db.session.rollback()
            cause = getattr(error, 'original_error', None)
            logger.error(f'{error.code}: {error.message} (cause: {cause!r})')
        return error_response(error.message, error.code, error.status_code, log_error=False)

    @app.errorhandler(PoolTimeoutError)
    @app.errorhandler(OperationalError)
    @app.errorhandler(DisconnectionError)
    def handle_database_unavailable(error):
        db.session.rollback()
        logger.exception('Database unavailable')
        return error_response(
            'Service temporarily unavailable, please retry',
            ErrorCode.TRANSIENT_ERROR,
            500,
            log_error=False
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        codes = {
            404: ErrorCode.NOT_FOUND,
            405: ErrorCode.METHOD_NOT_ALLOWED,
            413: ErrorCode.PAYLOAD_TOO_LARGE,
        }
        code = codes.get(error.code, ErrorCode.INVALID_REQUEST)
        return error_response(error.name, code, error.code, log_error=False)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception('Unhandled error')
        return internal_error()
