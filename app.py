"""Application factory."""

import json
import logging
import os
import uuid
from datetime import datetime, timedelta, timezone

from flask import Flask, jsonify, g, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from models import db
from routes.auth import auth_bp
from routes.buildings import buildings_bp
from routes.cctv import cctv_bp
from routes.contacts import contacts_bp
from routes.dashboard import dashboard_bp
from routes.messages import messages_bp
from routes.notifications import notifications_bp
from routes.rooms import rooms_bp
from routes.users import users_bp
from services import CredentialManager
from services.user_repository import UserRepository
from storage import build_reset_code_store

migrate = Migrate()
jwt = JWTManager()


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Rate limiting
    key_prefix = app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())
    limiter = Limiter(
        get_remote_address,
        default_limits=[lambda: app.config.get("RATE_LIMIT", "120 per minute")],
        storage_uri=app.config.get("RATELIMIT_STORAGE_URI", "memory://"),
        headers_enabled=app.config.get("RATELIMIT_HEADERS_ENABLED", True),
        key_prefix=key_prefix,
    )
    limiter.init_app(app)
    app.config["RATELIMIT_KEY_PREFIX"] = key_prefix

    # Credential lifecycle
    app.extensions["credential_manager"] = CredentialManager(
        UserRepository(),
        build_reset_code_store(app.config.get("RESET_CODE_STORE", "memory")),
        reset_code_ttl=timedelta(minutes=app.config.get("RESET_CODE_TTL_MINUTES", 15)),
    )

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(users_bp, url_prefix="/users")
    app.register_blueprint(buildings_bp, url_prefix="/buildings")
    app.register_blueprint(rooms_bp, url_prefix="/rooms")
    app.register_blueprint(cctv_bp, url_prefix="/cctv")
    app.register_blueprint(contacts_bp, url_prefix="/contacts")
    app.register_blueprint(messages_bp, url_prefix="/messages")
    app.register_blueprint(notifications_bp, url_prefix="/notifications")
    app.register_blueprint(dashboard_bp, url_prefix="/dashboard")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify(
            {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
        )

    # Errors
    _register_error_handlers(app)

    return app


def _configure_logging(app: Flask) -> None:
    """Apply LOG_LEVEL to the Flask logger and the service loggers."""

    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    app.logger.setLevel(level)
    logging.getLogger("services").setLevel(level)


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):  # pragma: no cover
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = g.get("request_id") or str(uuid.uuid4())
        response = error.get_response()
        payload = {
            "error": getattr(error, "name", "Error"),
            "detail": error.description,
            "request_id": request_id,
        }
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.exception("Unhandled application error", exc_info=error)
        payload = {
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred.",
            "request_id": request_id,
        }
        response = jsonify(payload)
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
