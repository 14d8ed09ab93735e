"""Core configuration and infrastructure helpers."""

from .config import Settings, get_settings
from .errors import (
    LeaderboardError,
    MalformedStoredData,
    ScoreValidationError,
    StorageUnavailable,
)
from .logging import configure_logging
from .time import utc_isoformat, utcnow

__all__ = [
    "LeaderboardError",
    "MalformedStoredData",
    "ScoreValidationError",
    "Settings",
    "StorageUnavailable",
    "configure_logging",
    "get_settings",
    "utc_isoformat",
    "utcnow",
]
