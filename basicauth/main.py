"""Flask application entry point."""

import logging
from datetime import timedelta

from flask import Flask, jsonify
from flask_cors import CORS

from .auth.api import auth_bp
from .auth.decorators import EXTENSION_KEY
from .auth.passwords import PasswordHasher
from .auth.service import AuthService
from .auth.token import TokenService
from .config import Settings
from .db import init_db
from .exceptions import (
    AuthenticationError,
    BasicAuthError,
    ConfigurationError,
    ConflictError,
    ResourceNotFound,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _error_response(error: BasicAuthError, status: int, error_type: str | None = None):
    response = {
        "error": {
            "type": error_type or error.__class__.__name__,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), status


# Error handlers
def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return _error_response(error, 400, "ValidationError")


def handle_authentication_error(error):
    """Handle AuthenticationError exceptions."""
    return _error_response(error, 401, "AuthenticationError")


def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _error_response(error, 404, "ResourceNotFound")


def handle_conflict(error):
    """Handle ConflictError exceptions."""
    return _error_response(error, 409, "ConflictError")


def handle_basic_auth_error(error):
    """Handle generic BasicAuthError exceptions (hashing, storage)."""
    logger.error(f"{error.__class__.__name__}: {error.message}")
    return _error_response(error, 500)


def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}")
    return jsonify({
        "error": {
            "type": "InternalServerError",
            "message": "An internal error occurred"
        }
    }), 500


def create_app(settings: Settings | None = None) -> Flask:
    """
    Build the Flask application.

    Settings are read once here and handed to the services by reference;
    request handlers reach the AuthService through app.extensions.

    Raises:
        ConfigurationError: If no JWT secret key is configured
    """
    if settings is None:
        settings = Settings()

    if not settings.jwt_secret_key:
        logger.error("JWT_SECRET_KEY is not set; refusing to start")
        raise ConfigurationError("JWT secret key must be configured")

    app = Flask(__name__)

    # CORS configuration
    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    try:
        init_db(settings.database_path)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    app.extensions[EXTENSION_KEY] = AuthService(
        database_path=settings.database_path,
        hasher=PasswordHasher(settings.bcrypt_work_factor),
        tokens=TokenService(
            settings.jwt_secret_key,
            expiry=timedelta(hours=settings.jwt_expiry_hours),
        ),
        hide_recovery_user_existence=settings.hide_recovery_user_existence,
    )

    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(AuthenticationError, handle_authentication_error)
    app.register_error_handler(ResourceNotFound, handle_not_found)
    app.register_error_handler(ConflictError, handle_conflict)
    app.register_error_handler(BasicAuthError, handle_basic_auth_error)
    app.register_error_handler(500, handle_internal_error)

    # Health check endpoint
    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok"})

    app.register_blueprint(auth_bp)

    return app


def run():
    """Console entry point: load settings from the environment and serve."""
    settings = Settings()
    app = create_app(settings)
    logger.info(f"Listening on {settings.host}:{settings.port}")
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
