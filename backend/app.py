from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from quiniela.service import configure_logging

from .config import load_settings
from .routes.health import bp as health_bp
from .routes.quiniela import bp as quiniela_bp


def create_app() -> Flask:
    settings = load_settings()
    configure_logging(settings.flask.debug)
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.flask.secret_key
    # Keep region and slot labels in display order.
    app.json.sort_keys = False

    app.register_blueprint(health_bp)
    app.register_blueprint(quiniela_bp, url_prefix="/api")

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return app
