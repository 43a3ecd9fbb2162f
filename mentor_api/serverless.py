"""Serverless entrypoint exposing the mentor operations as a single function.

The handler accepts API-gateway style events (``httpMethod``, ``path``,
``body``) and returns ``{statusCode, headers, body}``. Routing, CORS and
method checks mirror the Flask app; the operations themselves go through the
same :func:`~mentor_api.services.mentor_gateway.dispatch` call.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Callable, Dict, Optional

from mentor_api.config import load_settings
from mentor_api.services.mentor_gateway import OPERATIONS, MentorGateway, build_gateway, dispatch

_LOGGER = logging.getLogger(__name__)

MENTOR_PREFIX = "/api/mentor/"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept, Authorization",
}


def _response(status: int, body: Optional[Any] = None) -> Dict[str, Any]:
    headers = dict(CORS_HEADERS)
    if body is None:
        return {"statusCode": status, "headers": headers, "body": ""}
    headers["Content-Type"] = "application/json"
    return {"statusCode": status, "headers": headers, "body": json.dumps(body)}


def _decode_body(event: Dict[str, Any]) -> Any:
    raw = event.get("body")
    if raw is None or raw == "":
        return {}
    if isinstance(raw, (dict, list)):
        return raw
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    try:
        return json.loads(raw)
    except ValueError:
        return {}


def make_handler(gateway: MentorGateway) -> Callable[[Dict[str, Any], Any], Dict[str, Any]]:
    """Bind a handler function to an already constructed gateway."""

    def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
        method = str(event.get("httpMethod") or "GET").upper()
        path = str(event.get("path") or "/").rstrip("/")

        if method == "OPTIONS":
            return _response(200)

        operation = path[len(MENTOR_PREFIX):] if path.startswith(MENTOR_PREFIX) else None
        if operation not in OPERATIONS:
            return _response(404, {"error": f"No route for {path or '/'}"})

        if method != "POST":
            return _response(405, {"error": f"Method {method} not allowed"})

        _LOGGER.info("POST %s", path)
        body, status = dispatch(gateway, operation, _decode_body(event))
        return _response(status, body)

    return handler


handler = make_handler(build_gateway(load_settings()))
