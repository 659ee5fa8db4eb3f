"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import InternalServerError

from investcalc.app.api.routes import api_bp
from investcalc.config import Settings, configure_logging
from investcalc.core.cache import ResponseCache

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, cache: Optional[ResponseCache] = None) -> Flask:
    """Build the Flask app instance.

    ``cache`` lets callers share or replace the response cache; by default a
    fresh one is sized from ``settings``.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config["INVESTCALC_SETTINGS"] = settings
    app.extensions["response_cache"] = cache if cache is not None else ResponseCache(
        max_entries=settings.cache_max_entries,
        ttl_seconds=settings.cache_ttl_seconds,
    )

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")

    @app.errorhandler(InternalServerError)
    def _handle_internal_error(exc: InternalServerError):
        # Flask has already logged the traceback of the original exception
        return jsonify({"error": "Internal server error"}), HTTPStatus.INTERNAL_SERVER_ERROR

    logger.info("investcalc API configured for %d CORS origin(s)", len(settings.cors_origins))
    return app
