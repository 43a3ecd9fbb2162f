"""Client-side learner workflows built on the mentor client and the progress store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from mentor_api.client import MentorClient
from mentor_api.errors import RequestFailed
from mentor_api.roles import role_label
from mentor_api.schemas import ActivityEntry, AssessmentResultRecord, ChatMessage
from mentor_api.storage import ProgressStore

_LOGGER = logging.getLogger(__name__)

PRACTICE_PROGRESS_GAIN = 10


class LearnerSession:
    """Ties mentor calls to the learner's locally stored progress."""

    def __init__(self, client: MentorClient, store: ProgressStore) -> None:
        self.client = client
        self.store = store

    def ask(
        self,
        message: str,
        job_role: Optional[str] = None,
        context: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Send a chat message and record both sides of the exchange."""
        self.store.save_chat_message(
            ChatMessage(role="user", content=message, job_role=job_role, session_id=session_id).to_payload()
        )
        try:
            reply = self.client.ask_mentor(
                self.client.create_contextual_request(message, job_role, context, session_id)
            )
        except RequestFailed as exc:
            _LOGGER.warning("Mentor chat request failed: %s", exc.message)
            raise

        self.store.save_chat_message(
            ChatMessage(
                role="mentor",
                content=str(reply.get("response", "")),
                job_role=job_role,
                session_id=session_id,
                mentor_response=reply,
            ).to_payload()
        )
        return reply

    def complete_assessment(
        self,
        job_role: str,
        assessment_type: str,
        questions: List[Dict[str, Any]],
        total_score: int,
    ) -> Dict[str, Any]:
        """Record a finished assessment and lift role progress to at least its score."""
        record = AssessmentResultRecord(
            job_role=job_role,
            assessment_type=assessment_type,
            questions=questions,
            total_score=total_score,
            completed_at=datetime.now(timezone.utc).isoformat(),
        ).to_payload()
        self.store.save_assessment_result(record)

        if total_score > self.store.get_progress(job_role):
            self.store.update_progress(job_role, total_score)

        self.store.add_activity(
            ActivityEntry(
                type="assessment",
                title=f"{role_label(job_role)} {assessment_type} completed",
                description=f"Scored {total_score}%",
                role=job_role,
                xp=total_score,
            ).to_payload()
        )
        return record

    def submit_practice_feedback(
        self,
        job_role: str,
        scenario_title: str,
        progress_gain: int = PRACTICE_PROGRESS_GAIN,
    ) -> int:
        """Credit a finished practice scenario; returns the new role progress."""
        self.store.update_progress(job_role, self.store.get_progress(job_role) + progress_gain)
        self.store.add_activity(
            ActivityEntry(
                type="practice",
                title=scenario_title,
                description=f"Practice submitted for {role_label(job_role)}",
                role=job_role,
                xp=progress_gain,
            ).to_payload()
        )
        return self.store.get_progress(job_role)

    def progress_snapshot(self, role_id: Optional[str] = None) -> Dict[str, Any]:
        snapshot: Dict[str, Any] = {"overall": self.store.get_overall_stats()}
        if role_id:
            snapshot["role"] = {"id": role_id, "progress": self.store.get_progress(role_id)}
        return snapshot
