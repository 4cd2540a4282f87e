"""
Domain exceptions for the Event Timeline service.

Every error a client can see derives from TimelineException, so the HTTP
layer and the WebSocket channel render them the same way:
``{"error": <code>, "message": <text>, "details": {...}}``.
"""

from typing import Any


class TimelineException(Exception):
    """
    Base exception for timeline errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code sent to clients
        details: Structured context (field names, item ids, ...)
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Client-facing error body."""
        return {"error": self.error_code, "message": self.message, "details": self.details}


class ValidationException(TimelineException):
    """A request or message payload was rejected."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, "VALIDATION_ERROR", {"field": field} if field else None)


class AuthenticationException(TimelineException):
    """Bad credentials, or a missing/invalid operator session."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(TimelineException):
    """A command targeted an item id that is not on the timeline."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TimelineInvariantError(TimelineException):
    """A timeline would break the unique-id or single-live rule."""

    def __init__(self, reason: str, item_ids: list[str] | None = None):
        super().__init__(
            f"Timeline invariant violated: {reason}",
            "TIMELINE_INVARIANT_ERROR",
            {"reason": reason, "item_ids": item_ids or []},
        )
