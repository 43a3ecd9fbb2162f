"""Tests for the HTTP client adapter."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from mentor_api.client import MentorClient, resolve_base_address
from mentor_api.config import Settings
from mentor_api.errors import RequestFailed
from mentor_api.schemas import MentorRequest


class _DummyResponse:
    def __init__(self, status_code: int, payload: Any = None, reason: str = "OK") -> None:
        self.status_code = status_code
        self._payload = payload
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _RecordingSession:
    def __init__(self, response: _DummyResponse) -> None:
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    def post(self, url, json=None, headers=None):
        self.calls.append({"url": url, "json": json, "headers": headers})
        return self.response


def test_resolve_base_address_prefers_explicit_setting():
    settings = Settings(api_base_url="https://mentor.example.com", environment="development")
    assert resolve_base_address(settings) == "https://mentor.example.com"


def test_resolve_base_address_same_origin_in_production():
    assert resolve_base_address(Settings(environment="production")) == ""


def test_resolve_base_address_local_in_development():
    assert resolve_base_address(Settings(environment="development", port=3000)) == "http://localhost:3000"


def test_post_sends_json_and_returns_body():
    session = _RecordingSession(_DummyResponse(200, {"summary": "s"}))
    client = MentorClient("http://localhost:3000/", session=session)

    assert client.post("/api/mentor/chat", {"message": "hi"}) == {"summary": "s"}

    call = session.calls[0]
    assert call["url"] == "http://localhost:3000/api/mentor/chat"
    assert call["json"] == {"message": "hi"}
    assert call["headers"] == {"Content-Type": "application/json"}


def test_post_raises_request_failed_on_error_status():
    session = _RecordingSession(_DummyResponse(500, {"error": "down"}, reason="Internal Server Error"))
    client = MentorClient("", session=session)

    with pytest.raises(RequestFailed) as excinfo:
        client.post("/api/mentor/chat", {"message": "hi"})

    assert excinfo.value.status_code == 500
    assert excinfo.value.status_text == "Internal Server Error"
    assert str(excinfo.value) == "API request failed: Internal Server Error"


def test_post_propagates_json_decode_errors():
    session = _RecordingSession(_DummyResponse(200, ValueError("bad json")))

    with pytest.raises(ValueError):
        MentorClient("", session=session).post("/api/mentor/chat", {})


def test_client_uses_settings_when_no_base_url():
    session = _RecordingSession(_DummyResponse(200, {}))
    client = MentorClient(session=session, settings=Settings(environment="development", port=5050))

    client.generate_practice("soc-analyst", "Beginner", "phishing")

    assert session.calls[0]["url"] == "http://localhost:5050/api/mentor/generate-practice"
    assert session.calls[0]["json"] == {"jobRole": "soc-analyst", "difficulty": "Beginner", "topic": "phishing"}


def test_generate_assessment_defaults_question_count():
    session = _RecordingSession(_DummyResponse(200, []))
    MentorClient("", session=session).generate_assessment("soc-analyst", "SIEM")

    assert session.calls[0]["url"] == "/api/mentor/generate-assessment"
    assert session.calls[0]["json"] == {"jobRole": "soc-analyst", "topic": "SIEM", "questionCount": 5}


def test_ask_mentor_accepts_contract_model():
    session = _RecordingSession(_DummyResponse(200, {}))
    MentorClient("", session=session).ask_mentor(MentorRequest(message="hi", job_role="soc-analyst"))

    assert session.calls[0]["json"] == {"message": "hi", "jobRole": "soc-analyst"}


@pytest.mark.parametrize(
    "method, args, expected_message, expected_context",
    [
        ("ask_for_guidance", ("Where do I start?",), "Where do I start?", "seeking guidance"),
        ("request_methodology", ("a web app pentest", "red-team-operator"), "Please provide a detailed methodology for: a web app pentest", "methodology request"),
        ("ask_for_hints", ("decoding base64 logs",), "I'm stuck on this problem: decoding base64 logs. Can you provide some hints?", "hint request"),
    ],
)
def test_contextual_helpers(method, args, expected_message, expected_context):
    session = _RecordingSession(_DummyResponse(200, {}))
    getattr(MentorClient("", session=session), method)(*args)

    body = session.calls[0]["json"]
    assert body["message"] == expected_message
    assert body["context"] == expected_context


def test_request_career_advice_targets_role():
    session = _RecordingSession(_DummyResponse(200, {}))
    MentorClient("", session=session).request_career_advice("Beginner", "SOC Analyst")

    body = session.calls[0]["json"]
    assert body["jobRole"] == "SOC Analyst"
    assert body["context"] == "career advice"
    assert "want to become a SOC Analyst" in body["message"]
