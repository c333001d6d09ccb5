"""Domain error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations

from fastapi import status


class TrackerError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, str]:
        return {"error": self.code, "detail": self.message}


class InvalidArgument(TrackerError):
    """Missing, empty or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_argument"


class NotFound(TrackerError):
    """A referenced team, location, assignment or visit does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class Conflict(TrackerError):
    """The request contradicts the current state."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class StorageTimeout(TrackerError):
    """A storage wait exceeded its deadline."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "timeout"


class InternalError(TrackerError):
    """Unexpected storage or consistency failure."""


__all__ = [
    "TrackerError",
    "InvalidArgument",
    "NotFound",
    "Conflict",
    "StorageTimeout",
    "InternalError",
]
