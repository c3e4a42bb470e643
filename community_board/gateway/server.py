"""
API gateway: combines the auth, events and comments blueprints under /api.
This is the local entrypoint for development.
"""

import logging
import os
from typing import Optional, Tuple

from flask import Flask, Response, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv

from community_board.database.store import Store, create_store
from community_board.errors import CommunityBoardError
from community_board.services import Services, build_services

load_dotenv()

# Basic console logging during API requests
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="[%(levelname)s] %(asctime)s - %(message)s",
)

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def cors_origins() -> list:
    raw = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def register_error_handlers(app: Flask) -> None:
    """Map domain errors and HTTP errors to `{error: message}` JSON bodies."""

    @app.errorhandler(CommunityBoardError)
    def handle_domain_error(error: CommunityBoardError) -> Tuple[Response, int]:
        if error.status_code >= 500:
            logging.error(f"[Gateway] {request.method} {request.path} failed: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        if error.code == 404 and request.path.startswith("/api"):
            return jsonify({"error": f"API endpoint not found: {request.path}"}), 404
        return jsonify({"error": error.description or error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception) -> Tuple[Response, int]:
        logging.exception(f"[Gateway] Unhandled error on {request.method} {request.path}")
        return jsonify({"error": "Internal Server Error"}), 500


def create_app(store: Optional[Store] = None, services: Optional[Services] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        store (Store, optional): Storage backend; defaults to the one DATABASE_URL selects.
        services (Services, optional): Pre-built domain services (overrides `store`).

    Returns:
        Flask: The configured Flask application.
    """
    app = Flask(__name__)

    # Session cookies cross origins from the frontend dev server
    CORS(app, resources={
        r"/api/*": {
            "origins": cors_origins(),
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "supports_credentials": True,
        }
    })

    if services is None:
        services = build_services(store if store is not None else create_store())
    app.extensions["community_board"] = services

    # --- REGISTER BLUEPRINTS ---
    from community_board.auth_service.routes import auth_bp
    from community_board.comments_service.routes import comments_bp
    from community_board.events_service.routes import events_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(events_bp, url_prefix="/api/events")
    app.register_blueprint(comments_bp, url_prefix="/api")
    logging.info("All blueprints registered successfully.")

    register_error_handlers(app)

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health():
        """
        Health check endpoint.
        """
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == "__main__":
    app = create_app()
    port = int(os.getenv("GATEWAY_PORT", 7000))
    app.run(host="0.0.0.0", port=port, debug=os.getenv("FLASK_DEBUG", "false").lower() == "true")
