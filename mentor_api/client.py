"""HTTP client for the mentor endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

import requests

from mentor_api.config import Settings, load_settings
from mentor_api.errors import RequestFailed
from mentor_api.schemas import MentorRequest

_LOGGER = logging.getLogger(__name__)

CHAT_PATH = "/api/mentor/chat"
PRACTICE_PATH = "/api/mentor/generate-practice"
ASSESSMENT_PATH = "/api/mentor/generate-assessment"


def resolve_base_address(settings: Settings) -> str:
    """Return the configured API base URL.

    Without an explicit ``MENTOR_API_BASE_URL`` a production deployment talks to
    its own origin (empty prefix) and development targets the local server.
    """
    if settings.api_base_url is not None:
        return settings.api_base_url
    if settings.is_production:
        return ""
    return f"http://localhost:{settings.port}"


class MentorClient:
    """Performs JSON POSTs against the mentor gateway."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        if base_url is None:
            base_url = resolve_base_address(settings or load_settings())
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def post(self, endpoint_path: str, body: Any) -> Any:
        url = f"{self.base_url}{endpoint_path}"
        response = self.session.post(
            url,
            json=body,
            headers={"Content-Type": "application/json"},
        )
        if not response.ok:
            _LOGGER.warning("POST %s returned %s %s", endpoint_path, response.status_code, response.reason)
            raise RequestFailed(response.status_code, response.reason or "")
        return response.json()

    def ask_mentor(self, request: Union[MentorRequest, Dict[str, Any]]) -> Dict[str, Any]:
        body = request.to_payload() if isinstance(request, MentorRequest) else request
        return self.post(CHAT_PATH, body)

    def generate_practice(self, job_role: str, difficulty: str, topic: str) -> Any:
        return self.post(
            PRACTICE_PATH,
            {"jobRole": job_role, "difficulty": difficulty, "topic": topic},
        )

    def generate_assessment(self, job_role: str, topic: str, question_count: int = 5) -> Any:
        return self.post(
            ASSESSMENT_PATH,
            {"jobRole": job_role, "topic": topic, "questionCount": question_count},
        )

    # Helper method to create contextual requests
    @staticmethod
    def create_contextual_request(
        message: str,
        job_role: Optional[str] = None,
        context: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        request: Dict[str, Any] = {"message": message}
        if job_role is not None:
            request["jobRole"] = job_role
        if context is not None:
            request["context"] = context
        if session_id is not None:
            request["sessionId"] = session_id
        return request

    # Common mentor interactions
    def ask_for_guidance(self, message: str, job_role: Optional[str] = None) -> Dict[str, Any]:
        return self.ask_mentor(self.create_contextual_request(message, job_role, "seeking guidance"))

    def request_methodology(self, task: str, job_role: str) -> Dict[str, Any]:
        return self.ask_mentor(
            self.create_contextual_request(
                f"Please provide a detailed methodology for: {task}",
                job_role,
                "methodology request",
            )
        )

    def ask_for_hints(self, problem: str, job_role: Optional[str] = None) -> Dict[str, Any]:
        return self.ask_mentor(
            self.create_contextual_request(
                f"I'm stuck on this problem: {problem}. Can you provide some hints?",
                job_role,
                "hint request",
            )
        )

    def request_career_advice(self, current_level: str, target_role: str) -> Dict[str, Any]:
        return self.ask_mentor(
            self.create_contextual_request(
                f"I'm currently at {current_level} level and want to become a {target_role}. "
                "What should be my next steps?",
                target_role,
                "career advice",
            )
        )
