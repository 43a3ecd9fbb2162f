"""Flask application setup and blueprint wiring."""

from __future__ import annotations

import os
import time
import traceback
from typing import Optional

from flask import Flask, abort, g, jsonify, request, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from mentor_api.config import Settings, load_settings
from mentor_api.routes import register_routes
from mentor_api.routes.mentor import MENTOR_PATHS
from mentor_api.services.mentor_gateway import MentorGateway, build_gateway

REQUEST_LIMIT_BYTES = 10 * 1024 * 1024  # 10 MB per request

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"]


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[MentorGateway] = None,
) -> Flask:
    """Configure and return the Flask application instance.

    The gateway (and the OpenAI client inside it) is built once here and shared
    by every request; pass ``gateway`` to substitute a test double.
    """
    settings = settings or load_settings()

    app = Flask(__name__, static_folder=None)
    CORS(
        app,
        resources={r"/api/*": {"origins": "*"}},
        methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    app.config["MAX_CONTENT_LENGTH"] = REQUEST_LIMIT_BYTES
    app.config["MENTOR_SETTINGS"] = settings
    app.extensions["mentor_gateway"] = gateway or build_gateway(settings)

    register_preflight_handler(app)
    if settings.is_development:
        register_request_logging(app)
    register_error_handlers(app, settings)
    register_routes(app)

    if settings.is_production and not settings.serverless and settings.static_dir:
        register_static_site(app, settings.static_dir)

    return app


def register_preflight_handler(app: Flask) -> None:
    """Answer every OPTIONS request with an empty 200; CORS headers are added afterwards."""

    @app.before_request
    def _preflight():
        if request.method == "OPTIONS":
            return app.response_class(status=200)
        return None


def register_request_logging(app: Flask) -> None:
    """Log method, path, status and duration for API calls."""

    @app.before_request
    def _start_timer() -> None:
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.pop("request_started", None)
        if started is not None and request.path.startswith("/api"):
            duration_ms = int((time.perf_counter() - started) * 1000)
            app.logger.info("%s %s %s in %sms", request.method, request.path, response.status_code, duration_ms)
        return response


def register_error_handlers(app: Flask, settings: Settings) -> None:
    @app.errorhandler(MethodNotAllowed)
    def _method_not_allowed(_exc):
        return jsonify(error=f"Method {request.method} not allowed"), 405

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify(message=exc.description or exc.name), exc.code or 500

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        app.logger.exception("Server error")
        body = {"message": str(exc) or "Internal Server Error"}
        if settings.is_development:
            body["error"] = traceback.format_exc()
        return jsonify(body), 500


def register_static_site(app: Flask, static_dir: str) -> None:
    """Serve the built front-end, falling back to index.html for client routes."""
    dist_path = os.path.abspath(static_dir)
    app.logger.info("[Production] Serving static files from: %s", dist_path)

    @app.get("/", defaults={"path": ""})
    @app.get("/<path:path>")
    def _static_site(path: str):
        if path.startswith("api/"):
            if f"/{path}" in MENTOR_PATHS:
                raise MethodNotAllowed()
            abort(404)
        if path and os.path.isfile(os.path.join(dist_path, path)):
            return send_from_directory(dist_path, path)
        return send_from_directory(dist_path, "index.html")


app = create_app()
