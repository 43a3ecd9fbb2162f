"""Wrapper utilities around the OpenAI client."""

from __future__ import annotations

from typing import Any, Dict, Optional

from openai import OpenAI

from mentor_api.config import DEFAULT_MODEL, Settings


def get_openai_client(settings: Settings) -> Optional[OpenAI]:
    """Instantiate an OpenAI client, or ``None`` when no API key is configured."""
    if not settings.openai_api_key:
        return None
    return OpenAI(api_key=settings.openai_api_key)


def json_output_format(
    schema: Optional[Dict[str, Any]] = None,
    *,
    name: str = "mentor_output",
) -> Dict[str, Any]:
    """Build the ``text.format`` block asking for JSON, optionally schema-constrained."""
    if schema is None:
        return {"format": {"type": "json_object"}}
    return {
        "format": {
            "type": "json_schema",
            "name": name,
            "schema": schema,
            "strict": False,
        }
    }


def create_json_response(
    client: OpenAI,
    instructions: str,
    prompt: str,
    *,
    schema: Optional[Dict[str, Any]] = None,
    schema_name: str = "mentor_output",
    model: Optional[str] = None,
    max_output_tokens: int = 1500,
):
    """Invoke the Responses API with a system instruction and JSON output mode."""
    return client.responses.create(
        model=model or DEFAULT_MODEL,
        instructions=instructions,
        input=prompt,
        max_output_tokens=max_output_tokens,
        text=json_output_format(schema, name=schema_name),
    )
