"""Typed, request-terminal failures raised by extraction and summarization."""

from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    NOT_FOUND = "NotFound"
    FETCH_ERROR = "FetchError"
    UPSTREAM_ERROR = "UpstreamError"
    NOT_CONFIGURED = "NotConfigured"


class DigestError(Exception):
    """Base failure carrying a kind, a caller-facing message and optional details."""

    status_code = 500

    def __init__(self, kind: FailureKind, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ExtractionFailure(DigestError):
    """No usable text could be derived from the request input."""

    status_code = 400


class SummarizationFailure(DigestError):
    """The summarization backend is unconfigured, unreachable or returned an error."""

    status_code = 500
