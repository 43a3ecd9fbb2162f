"""Pydantic contracts for values crossing the client/gateway boundary."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mentor_api.errors import SchemaViolation

__all__ = [
    "MENTOR_MESSAGE_MAX_LENGTH",
    "MENTOR_RESPONSE_JSON_SCHEMA",
    "AssessmentQuestion",
    "AssessmentResultRecord",
    "ActivityEntry",
    "ChatMessage",
    "MentorRequest",
    "MentorResponse",
    "PracticeScenario",
    "parse_json_text",
    "validate_assessment_questions",
    "validate_mentor_request",
    "validate_mentor_response",
    "validate_practice_scenario",
]

MENTOR_MESSAGE_MAX_LENGTH = 1000

Confidence = Literal["High", "Medium", "Low"]


class _Contract(BaseModel):
    """Shared configuration: camelCase aliases on the wire, strict scalar types."""

    model_config = ConfigDict(populate_by_name=True, strict=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """Serialise to the JSON shape the client expects, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class MentorRequest(_Contract):
    message: str = Field(min_length=1, max_length=MENTOR_MESSAGE_MAX_LENGTH)
    job_role: Optional[str] = Field(default=None, alias="jobRole")
    context: Optional[str] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class MentorResponse(_Contract):
    summary: str
    response: str
    confidence: Confidence
    methodology: Optional[List[str]] = None
    examples: Optional[List[str]] = None
    practice_task: Optional[str] = Field(default=None, alias="practiceTask")
    hints: Optional[List[str]] = None
    kpis: Optional[List[str]] = None
    follow_up_questions: Optional[List[str]] = Field(default=None, alias="followUpQuestions")


class PracticeScenario(BaseModel):
    """Practice exercise shape; lenient because it is only enforced on request."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    scenario: str
    objectives: List[str] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    hints: List[str] = Field(default_factory=list)
    expected_outcome: Optional[str] = Field(default=None, alias="expectedOutcome")
    safety_notes: List[str] = Field(default_factory=list, alias="safetyNotes")


class AssessmentQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    question: str
    options: List[str] = Field(default_factory=list)
    correct_answer: Union[str, int] = Field(alias="correctAnswer")
    explanation: Optional[str] = None
    difficulty: Optional[str] = None
    points: Optional[int] = None


class ChatMessage(_Contract):
    role: Literal["user", "mentor"]
    content: str
    job_role: Optional[str] = Field(default=None, alias="jobRole")
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    mentor_response: Optional[Dict[str, Any]] = Field(default=None, alias="mentorResponse")


class AssessmentResultRecord(_Contract):
    job_role: str = Field(alias="jobRole")
    assessment_type: Literal["knowledge-check", "practice", "quiz"] = Field(alias="assessmentType")
    questions: List[Dict[str, Any]] = Field(default_factory=list)
    total_score: int = Field(ge=0, le=100, alias="totalScore")
    completed_at: str = Field(alias="completedAt")


class ActivityEntry(_Contract):
    type: str
    title: str
    description: Optional[str] = None
    role: Optional[str] = None
    xp: int = 0


# Output shape requested from the upstream model for chat replies.
MENTOR_RESPONSE_JSON_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {"type": "string"},
        "response": {"type": "string"},
        "methodology": {"type": "array", "items": {"type": "string"}},
        "examples": {"type": "array", "items": {"type": "string"}},
        "practiceTask": {"type": "string"},
        "hints": {"type": "array", "items": {"type": "string"}},
        "confidence": {"type": "string", "enum": ["High", "Medium", "Low"]},
        "kpis": {"type": "array", "items": {"type": "string"}},
        "followUpQuestions": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["summary", "response", "confidence"],
}


_T = TypeVar("_T", bound=BaseModel)


def _describe_errors(exc: ValidationError) -> tuple[str, List[str]]:
    fields: List[str] = []
    parts: List[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = ".".join(str(part) for part in loc) or "(root)"
        top_level = str(loc[0]) if loc else "(root)"
        if top_level not in fields:
            fields.append(top_level)
        parts.append(f"{field}: {error.get('msg')}")
    return "; ".join(parts), fields


def _validate(model: Type[_T], data: Any) -> _T:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        message, fields = _describe_errors(exc)
        raise SchemaViolation(message, fields) from exc


def validate_mentor_request(data: Any) -> MentorRequest:
    """Validate an inbound chat payload; raise :class:`SchemaViolation` listing bad fields."""
    return _validate(MentorRequest, data)


def validate_mentor_response(data: Any) -> MentorResponse:
    """Validate a parsed upstream reply; raise :class:`SchemaViolation` naming the field."""
    return _validate(MentorResponse, data)


def validate_practice_scenario(data: Any) -> Dict[str, Any]:
    return _validate(PracticeScenario, data).model_dump(by_alias=True, exclude_none=True)


def validate_assessment_questions(data: Any) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        raise SchemaViolation("(root): Input should be a valid list", ["(root)"])
    questions: List[Dict[str, Any]] = []
    for index, item in enumerate(data):
        try:
            question = AssessmentQuestion.model_validate(item)
        except ValidationError as exc:
            message, _ = _describe_errors(exc)
            raise SchemaViolation(f"[{index}] {message}", [str(index)]) from exc
        questions.append(question.model_dump(by_alias=True, exclude_none=True))
    return questions


def parse_json_text(text: Optional[str]) -> Any:
    """Decode model output as JSON, treating empty or malformed text as ``{}``."""
    if not text or not text.strip():
        return {}
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return {}
