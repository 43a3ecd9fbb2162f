"""/api/mentor endpoints forwarding to the mentor gateway."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from mentor_api.services.mentor_gateway import (
    CHAT,
    GENERATE_ASSESSMENT,
    GENERATE_PRACTICE,
    MentorGateway,
    dispatch,
)

bp = Blueprint("mentor", __name__, url_prefix="/api/mentor")

MENTOR_PATHS = tuple(f"{bp.url_prefix}/{operation}" for operation in (CHAT, GENERATE_PRACTICE, GENERATE_ASSESSMENT))


def get_gateway() -> MentorGateway:
    """Return the gateway constructed for this application."""
    return current_app.extensions["mentor_gateway"]


def _respond(operation: str):
    payload: Any = request.get_json(silent=True)
    if payload is None:
        payload = {}
    current_app.logger.debug("POST /api/mentor/%s - received body: %s", operation, payload)
    body, status = dispatch(get_gateway(), operation, payload)
    return jsonify(body), status


@bp.post("/chat")
def mentor_chat():
    """Answer a learner message with a validated mentor response."""
    return _respond(CHAT)


@bp.post("/generate-practice")
def generate_practice():
    """Generate a hands-on practice scenario for a role."""
    return _respond(GENERATE_PRACTICE)


@bp.post("/generate-assessment")
def generate_assessment():
    """Generate assessment questions for a role and topic."""
    return _respond(GENERATE_ASSESSMENT)
