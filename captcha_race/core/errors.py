"""Error taxonomy shared by the storage, service and API layers."""

from __future__ import annotations

from typing import Any, Dict


class LeaderboardError(Exception):
    """Base error carrying the HTTP status and machine-readable code."""

    status_code = 500
    code = "leaderboard_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.code, "message": self.message}


class ScoreValidationError(LeaderboardError):
    """A submitted entry is missing a required field or has a bad value."""

    status_code = 400
    code = "validation_error"


class StorageUnavailable(LeaderboardError):
    """The backing key-value store is unreachable or misconfigured."""

    status_code = 500
    code = "storage_unavailable"


class MalformedStoredData(LeaderboardError):
    """The persisted leaderboard value could not be decoded."""

    status_code = 500
    code = "malformed_stored_data"


__all__ = [
    "LeaderboardError",
    "MalformedStoredData",
    "ScoreValidationError",
    "StorageUnavailable",
]
