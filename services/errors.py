"""Error taxonomy shared by the webhook endpoints and report synthesis."""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class AssistantError(Exception):
    """Base error carrying an HTTP status and a JSON-able payload."""

    status_code = 500
    label = "Internal Server Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.label, "message": self.message}


class ValidationError(AssistantError):  # Malformed or missing request fields
    status_code = 400
    label = "Bad Request"


class AuthError(AssistantError):  # Bad or missing shared-secret header
    status_code = 401
    label = "Unauthorized"


class NotFoundError(AssistantError):
    status_code = 404
    label = "Not Found"

    def __init__(self, message: str, *, available: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.available = list(available or [])

    def payload(self) -> Dict[str, Any]:
        body = super().payload()
        body["availableSessions"] = self.available
        return body


class UpstreamError(AssistantError):
    """Transcript or generation provider failure."""

    status_code = 502
    label = "Upstream Error"

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        stage: str | None = None,
        upstream_status: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.stage = stage
        self.upstream_status = upstream_status
        self.detail = detail

    def payload(self) -> Dict[str, Any]:
        body = super().payload()
        body.update(
            {
                "provider": self.provider,
                "stage": self.stage,
                "upstreamStatus": self.upstream_status,
                "details": self.detail,
            }
        )
        return body


class ParseError(AssistantError):
    """Generator output could not be reduced to a valid evaluation report."""

    status_code = 500
    label = "Failed to parse report"

    def __init__(self, message: str, *, raw_preview: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.raw_preview = raw_preview
        self.stage = stage

    def payload(self) -> Dict[str, Any]:
        body = super().payload()
        body.update({"stage": self.stage, "details": self.message, "rawResponse": self.raw_preview})
        return body


__all__ = [
    "AssistantError",
    "AuthError",
    "NotFoundError",
    "ParseError",
    "UpstreamError",
    "ValidationError",
]
