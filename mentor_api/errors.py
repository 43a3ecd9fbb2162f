"""Error taxonomy shared by the gateway, the store and the client adapter."""

from __future__ import annotations

from typing import List, Optional, Sequence


class MentorError(Exception):
    """Base class for every failure raised by the mentor stack."""

    kind = "MentorError"

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class SchemaViolation(MentorError):
    """A value crossing the client/gateway boundary failed validation."""

    kind = "SchemaViolation"

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields: List[str] = list(fields)


class InvalidRequest(MentorError):
    """Caller-supplied input was rejected before any upstream call."""

    kind = "InvalidRequest"

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields: List[str] = list(fields)


class UpstreamUnavailable(MentorError):
    """The generative-AI service could not be reached or returned an error."""

    kind = "UpstreamUnavailable"


class UpstreamContractViolation(MentorError):
    """The generative-AI service answered with output outside its requested schema."""

    kind = "UpstreamContractViolation"


class RequestFailed(MentorError):
    """The gateway answered the client with a non-success HTTP status."""

    kind = "RequestFailed"

    def __init__(self, status_code: int, status_text: str) -> None:
        super().__init__(f"API request failed: {status_text}")
        self.status_code = status_code
        self.status_text = status_text


class StorageFailure(MentorError):
    """A read or write against the persistence backend failed."""

    kind = "StorageFailure"


class ConfigurationError(MentorError):
    """An environment variable holds a value the application cannot use."""

    kind = "ConfigurationError"
