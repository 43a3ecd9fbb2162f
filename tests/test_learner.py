"""Tests for the learner workflows combining the client and the store."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from mentor_api.errors import RequestFailed
from mentor_api.learner import LearnerSession
from mentor_api.storage import MemoryBackend, ProgressStore


class FakeMentorClient:
    """Stands in for MentorClient without any HTTP traffic."""

    def __init__(self, reply: Any = None, error: Exception = None) -> None:
        self.reply = reply or {"summary": "s", "response": "Use passive recon first.", "confidence": "High"}
        self.error = error
        self.requests: List[Dict[str, Any]] = []

    create_contextual_request = staticmethod(
        lambda message, job_role=None, context=None, session_id=None: {
            key: value
            for key, value in {
                "message": message,
                "jobRole": job_role,
                "context": context,
                "sessionId": session_id,
            }.items()
            if value is not None
        }
    )

    def ask_mentor(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def store():
    return ProgressStore(MemoryBackend())


def test_ask_records_both_sides(store):
    client = FakeMentorClient()
    session = LearnerSession(client, store)

    reply = session.ask("What is OSINT?", job_role="soc-analyst", session_id="s-1")

    assert reply["confidence"] == "High"
    assert client.requests == [{"message": "What is OSINT?", "jobRole": "soc-analyst", "sessionId": "s-1"}]

    history = store.get_chat_history()
    assert [entry["role"] for entry in history] == ["user", "mentor"]
    assert history[1]["content"] == "Use passive recon first."
    assert history[1]["mentorResponse"]["summary"] == "s"


def test_ask_failure_keeps_only_user_message(store):
    session = LearnerSession(FakeMentorClient(error=RequestFailed(500, "Internal Server Error")), store)

    with pytest.raises(RequestFailed):
        session.ask("What is OSINT?")

    assert [entry["role"] for entry in store.get_chat_history()] == ["user"]


def test_complete_assessment_updates_progress_and_activity(store):
    session = LearnerSession(FakeMentorClient(), store)

    record = session.complete_assessment("soc-analyst", "quiz", [{"question": "Q1", "score": 100}], 80)

    assert record["jobRole"] == "soc-analyst"
    assert record["totalScore"] == 80
    assert store.get_progress("soc-analyst") == 80
    assert len(store.get_assessment_results("soc-analyst")) == 1

    activity = store.get_recent_activities()[0]
    assert activity["type"] == "assessment"
    assert activity["xp"] == 80
    assert activity["title"] == "SOC Analyst quiz completed"


def test_lower_assessment_score_does_not_reduce_progress(store):
    store.update_progress("soc-analyst", 90)
    LearnerSession(FakeMentorClient(), store).complete_assessment("soc-analyst", "knowledge-check", [], 40)

    assert store.get_progress("soc-analyst") == 90


def test_practice_feedback_bumps_progress_with_clamp(store):
    session = LearnerSession(FakeMentorClient(), store)
    store.update_progress("malware-analyst", 95)

    assert session.submit_practice_feedback("malware-analyst", "Unpack a sample") == 100
    assert store.get_recent_activities()[0]["title"] == "Unpack a sample"


def test_progress_snapshot(store):
    session = LearnerSession(FakeMentorClient(), store)
    store.update_progress("soc-analyst", 20)

    snapshot = session.progress_snapshot("soc-analyst")

    assert snapshot["role"] == {"id": "soc-analyst", "progress": 20}
    assert snapshot["overall"]["activeRoles"] == 1
