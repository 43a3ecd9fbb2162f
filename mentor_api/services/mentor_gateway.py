"""Stateless bridge between mentor requests and the generative-AI upstream.

Each operation builds a role-conditioned instruction, makes exactly one
upstream call, decodes the JSON reply and hands it through a single trust
boundary (:meth:`MentorGateway._accept_output`). Chat replies are always
validated against the contract; generated practice scenarios and assessments
are only validated when ``strict_output`` is enabled.

:func:`dispatch` is the transport-neutral entry point shared by the Flask
blueprint and the serverless handler. It flattens every failure into a fixed
JSON error body with HTTP 500.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from openai import OpenAI, OpenAIError

from mentor_api.config import DEFAULT_MODEL, Settings
from mentor_api.errors import (
    InvalidRequest,
    MentorError,
    SchemaViolation,
    UpstreamContractViolation,
    UpstreamUnavailable,
)
from mentor_api.schemas import (
    MENTOR_RESPONSE_JSON_SCHEMA,
    MentorResponse,
    parse_json_text,
    validate_assessment_questions,
    validate_mentor_request,
    validate_mentor_response,
    validate_practice_scenario,
)
from mentor_api.services import openai_service, prompts

_LOGGER = logging.getLogger(__name__)

CHAT = "chat"
GENERATE_PRACTICE = "generate-practice"
GENERATE_ASSESSMENT = "generate-assessment"
OPERATIONS = (CHAT, GENERATE_PRACTICE, GENERATE_ASSESSMENT)

UNAVAILABLE_MESSAGE = "I'm temporarily unavailable. Please try again in a moment."
PRACTICE_FAILED_MESSAGE = "Failed to generate practice scenario"
ASSESSMENT_FAILED_MESSAGE = "Failed to generate assessment questions"

DEFAULT_QUESTION_COUNT = 5
DEFAULT_DIFFICULTY = "Beginner"
DEFAULT_TOPIC = "core security fundamentals"


class MentorGateway:
    """Per-call mentor operations over an injected OpenAI client."""

    def __init__(
        self,
        client: Optional[OpenAI],
        *,
        model: str = DEFAULT_MODEL,
        max_output_tokens: int = 1500,
        strict_output: bool = False,
    ) -> None:
        self._client = client
        self.model = model
        self.max_output_tokens = max_output_tokens
        self.strict_output = strict_output

        self._validators: Dict[str, Callable[[Any], Any]] = {CHAT: validate_mentor_response}
        if strict_output:
            self._validators[GENERATE_PRACTICE] = validate_practice_scenario
            self._validators[GENERATE_ASSESSMENT] = validate_assessment_questions

    def chat(self, payload: Any) -> MentorResponse:
        """Answer a learner message in the mentor persona."""
        try:
            request = validate_mentor_request(payload)
        except SchemaViolation as exc:
            raise InvalidRequest(exc.message, exc.fields) from exc

        instructions = prompts.build_chat_instructions(request.job_role, request.context)
        raw_text = self._complete(
            instructions,
            request.message,
            schema=MENTOR_RESPONSE_JSON_SCHEMA,
            schema_name="mentor_response",
        )
        return self._accept_output(CHAT, parse_json_text(raw_text))

    def generate_practice(
        self,
        job_role: Optional[str],
        difficulty: Optional[str],
        topic: Optional[str],
    ) -> Any:
        """Generate a hands-on practice scenario; the shape is requested in prose only."""
        difficulty = difficulty or DEFAULT_DIFFICULTY
        topic = topic or DEFAULT_TOPIC
        raw_text = self._complete(
            prompts.build_practice_instructions(job_role, difficulty, topic),
            prompts.build_practice_prompt(job_role, difficulty, topic),
        )
        return self._accept_output(GENERATE_PRACTICE, parse_json_text(raw_text))

    def generate_assessment(
        self,
        job_role: Optional[str],
        topic: Optional[str],
        question_count: Any = DEFAULT_QUESTION_COUNT,
    ) -> Any:
        """Generate assessment questions, returned as a JSON array when possible."""
        count = _coerce_question_count(question_count)
        topic = topic or DEFAULT_TOPIC
        raw_text = self._complete(
            prompts.build_assessment_instructions(job_role, topic, count),
            prompts.build_assessment_prompt(job_role, topic, count),
        )
        return self._accept_output(GENERATE_ASSESSMENT, _unwrap_questions(parse_json_text(raw_text)))

    def _complete(
        self,
        instructions: str,
        prompt: str,
        *,
        schema: Optional[Dict[str, Any]] = None,
        schema_name: str = "mentor_output",
    ) -> str:
        if self._client is None:
            raise UpstreamUnavailable(
                "Generative AI client is not configured",
                details="OPENAI_API_KEY environment variable is not set",
            )
        try:
            completion = openai_service.create_json_response(
                self._client,
                instructions,
                prompt,
                schema=schema,
                schema_name=schema_name,
                model=self.model,
                max_output_tokens=self.max_output_tokens,
            )
        except OpenAIError as exc:
            raise UpstreamUnavailable(
                "Upstream OpenAI request failed",
                details=getattr(exc, "message", None) or str(exc),
            ) from exc
        return (getattr(completion, "output_text", None) or "").strip()

    def _accept_output(self, operation: str, data: Any) -> Any:
        validator = self._validators.get(operation)
        if validator is None:
            return data
        try:
            return validator(data)
        except SchemaViolation as exc:
            raise UpstreamContractViolation(
                f"Upstream output for {operation} violated its schema",
                details=exc.message,
            ) from exc


def _coerce_question_count(value: Any) -> int:
    if isinstance(value, bool):
        return DEFAULT_QUESTION_COUNT
    try:
        count = int(value)
    except (TypeError, ValueError):
        return DEFAULT_QUESTION_COUNT
    return count if count > 0 else DEFAULT_QUESTION_COUNT


def _unwrap_questions(data: Any) -> Any:
    # JSON mode only yields objects, so the array usually arrives wrapped.
    if isinstance(data, dict) and isinstance(data.get("questions"), list):
        return data["questions"]
    return data


def build_gateway(settings: Settings) -> MentorGateway:
    """Construct the process-wide gateway from configuration."""
    return MentorGateway(
        openai_service.get_openai_client(settings),
        model=settings.openai_model,
        max_output_tokens=settings.max_output_tokens,
        strict_output=settings.strict_output,
    )


def dispatch(gateway: MentorGateway, operation: str, payload: Any) -> Tuple[Any, int]:
    """Run one mentor operation and return ``(json_body, status_code)``."""
    body: Dict[str, Any] = payload if isinstance(payload, dict) else {}

    if operation == CHAT:
        try:
            result = gateway.chat(payload)
        except MentorError as exc:
            _LOGGER.warning("Mentor chat failed (%s): %s", exc.kind, exc.message)
            return {"error": UNAVAILABLE_MESSAGE, "details": exc.details or exc.message}, 500
        except Exception as exc:  # pragma: no cover - catch-all safety net
            _LOGGER.exception("Unexpected error during mentor chat")
            return {"error": UNAVAILABLE_MESSAGE, "details": str(exc)}, 500
        return result.to_payload(), 200

    if operation == GENERATE_PRACTICE:
        try:
            scenario = gateway.generate_practice(
                body.get("jobRole"), body.get("difficulty"), body.get("topic")
            )
        except Exception:
            _LOGGER.exception("Practice generation error")
            return {"error": PRACTICE_FAILED_MESSAGE}, 500
        return scenario, 200

    if operation == GENERATE_ASSESSMENT:
        try:
            questions = gateway.generate_assessment(
                body.get("jobRole"),
                body.get("topic"),
                body.get("questionCount", DEFAULT_QUESTION_COUNT),
            )
        except Exception:
            _LOGGER.exception("Assessment generation error")
            return {"error": ASSESSMENT_FAILED_MESSAGE}, 500
        return questions, 200

    raise ValueError(f"Unknown mentor operation: {operation}")
