"""Error codes and the single exception type surfaced to tool callers.

Not-found conditions inside the core (registry miss, 404 on a document) are
``None`` return values, not exceptions. ``FlowDocsError`` is reserved for
failures the caller must be told about; the server turns it into a structured
``isError`` tool result.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    FETCH_FAILED = "FETCH_FAILED"
    REGISTRY_UNAVAILABLE = "REGISTRY_UNAVAILABLE"
    BROWSER_LAUNCH_FAILED = "BROWSER_LAUNCH_FAILED"
    RENDER_TIMEOUT = "RENDER_TIMEOUT"


class FlowDocsError(Exception):
    """Failure reported to the tool caller."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_payload(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }
