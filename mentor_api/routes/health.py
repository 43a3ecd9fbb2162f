"""Health check and read-only role catalog endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from mentor_api.roles import JOB_ROLES, get_role_by_id

bp = Blueprint("health", __name__, url_prefix="/api")


@bp.get("/health")
def health():
    settings = current_app.config["MENTOR_SETTINGS"]
    return (
        jsonify(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(),
            environment=settings.environment,
        ),
        200,
    )


@bp.get("/roles")
def list_roles():
    """List every job role in the catalog."""
    return jsonify(roles=[role.to_payload() for role in JOB_ROLES]), 200


@bp.get("/roles/<role_id>")
def get_role(role_id: str):
    role = get_role_by_id(role_id)
    if role is None:
        return jsonify(error=f"Unknown role '{role_id}'."), 404
    return jsonify(role.to_payload()), 200
