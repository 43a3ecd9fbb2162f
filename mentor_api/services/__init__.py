"""Service layer modules for the Cyber Mentor API."""

from . import mentor_gateway, openai_service, prompts

__all__ = [
    "mentor_gateway",
    "openai_service",
    "prompts",
]
