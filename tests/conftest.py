"""Shared pytest fixtures for the mentor API."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List

import mongomock
import pytest

# Ensure the application package is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mentor_api.config import Settings  # noqa: E402
from mentor_api.main import create_app  # noqa: E402
from mentor_api.services.mentor_gateway import MentorGateway  # noqa: E402

VALID_MENTOR_JSON = (
    '{"summary": "OSINT is open-source intelligence.",'
    ' "response": "Start with passive reconnaissance using public sources.",'
    ' "confidence": "High",'
    ' "hints": ["Check WHOIS records"]}'
)


class FakeResponses:
    """Records Responses API calls and replays scripted outputs."""

    def __init__(self, outputs: List[Any]) -> None:
        self.outputs = list(outputs)
        self.calls: List[Dict[str, Any]] = []

    def create(self, **kwargs: Any):
        self.calls.append(kwargs)
        output = self.outputs.pop(0) if len(self.outputs) > 1 else self.outputs[0]
        if isinstance(output, Exception):
            raise output
        return SimpleNamespace(output_text=output, model=kwargs.get("model"))


class FakeOpenAI:
    def __init__(self, *outputs: Any) -> None:
        self.responses = FakeResponses(list(outputs) or [VALID_MENTOR_JSON])

    @property
    def calls(self) -> List[Dict[str, Any]]:
        return self.responses.calls


@pytest.fixture
def fake_openai():
    """Factory for fake OpenAI clients returning the given raw outputs in order."""
    return FakeOpenAI


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="test-key", environment="test")


@pytest.fixture
def make_client(settings: Settings):
    """Build a Flask test client around a gateway using the supplied fake upstream."""

    def _make(upstream=None, **overrides: Any):
        gateway = MentorGateway(upstream, model="test-model")
        app = create_app(settings=replace(settings, **overrides), gateway=gateway)
        app.config["TESTING"] = True
        return app.test_client()

    return _make


@pytest.fixture
def mongo_db():
    """Provide an isolated in-memory MongoDB database for each test."""
    test_db_name = "test_cyber_mentor"
    client = mongomock.MongoClient()
    db = client[test_db_name]

    yield db

    client.drop_database(test_db_name)
