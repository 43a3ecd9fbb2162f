"""Blueprint registration helper."""

from __future__ import annotations

from flask import Flask

from .health import bp as health_bp
from .mentor import bp as mentor_bp


def register_routes(app: Flask) -> None:
    """Register all application blueprints on the provided Flask app."""
    app.register_blueprint(health_bp)
    app.register_blueprint(mentor_bp)
