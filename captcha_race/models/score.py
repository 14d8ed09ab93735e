"""Score entry model and the rules that normalize client submissions."""

from __future__ import annotations

import math
import uuid
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import ScoreValidationError
from ..core.time import utc_isoformat

ANONYMOUS = "Anonymous"
NAME_MAX_LENGTH = 40

_COUNTERS = {
    "retries": "retries",
    "attempts": "attempts",
    "failures": "failures",
    "skips": "skips",
    "rageClicks": "rage_clicks",
}


def _generate_id() -> str:
    return uuid.uuid4().hex[:12]


def _seconds(payload: Mapping[str, Any], key: str, required: bool) -> Optional[float]:
    raw = payload.get(key)
    if raw is None:
        if required:
            raise ScoreValidationError(f"Missing required field: {key}")
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ScoreValidationError(f"{key} must be a number")
    try:
        value = float(raw)
    except OverflowError as exc:
        raise ScoreValidationError(f"{key} must be a non-negative finite number") from exc
    if not math.isfinite(value) or value < 0:
        raise ScoreValidationError(f"{key} must be a non-negative finite number")
    return value


def _counter(payload: Mapping[str, Any], key: str) -> int:
    raw = payload.get(key)
    if raw is None:
        return 0
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ScoreValidationError(f"{key} must be an integer")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ScoreValidationError(f"{key} must be an integer")
        raw = int(raw)
    if raw < 0:
        raise ScoreValidationError(f"{key} must not be negative")
    return raw


def _name(payload: Mapping[str, Any]) -> str:
    raw = payload.get("name")
    if raw is None:
        return ANONYMOUS
    if not isinstance(raw, str):
        raise ScoreValidationError("name must be a string")
    name = raw.strip()[:NAME_MAX_LENGTH]
    return name or ANONYMOUS


def _text(payload: Mapping[str, Any], key: str) -> Optional[str]:
    raw = payload.get(key)
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return None


class ScoreEntry(BaseModel):
    """One completed run, as stored on the leaderboard.

    Attributes are snake_case; the wire format is the camelCase JSON the
    browser client sends and renders.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: Optional[str] = None
    name: str = ANONYMOUS
    captcha_seconds: float = Field(alias="captchaSeconds", ge=0)
    retries: int = Field(default=0, ge=0)
    attempts: int = Field(default=0, ge=0)
    failures: int = Field(default=0, ge=0)
    skips: int = Field(default=0, ge=0)
    rage_clicks: int = Field(default=0, alias="rageClicks", ge=0)
    kasada_seconds: Optional[float] = Field(default=None, alias="kasadaSeconds", ge=0)
    beat_the_clock: Optional[bool] = Field(default=None, alias="beatTheClock")
    date: Optional[str] = None

    @classmethod
    def from_payload(
        cls, payload: Any, *, now: Optional[datetime] = None
    ) -> "ScoreEntry":
        """Validate a client submission and fill in server-side defaults.

        Raises ``ScoreValidationError`` when ``captchaSeconds`` is missing or
        not a non-negative number, or when any counter is invalid. A missing
        or blank name becomes ``"Anonymous"``; missing ``id`` and ``date`` are
        generated.
        """

        if not isinstance(payload, Mapping):
            raise ScoreValidationError("Entry must be a JSON object")

        beat_the_clock = payload.get("beatTheClock")
        if beat_the_clock is not None and not isinstance(beat_the_clock, bool):
            raise ScoreValidationError("beatTheClock must be a boolean")

        counters = {attr: _counter(payload, key) for key, attr in _COUNTERS.items()}
        return cls(
            id=_text(payload, "id") or _generate_id(),
            name=_name(payload),
            captcha_seconds=_seconds(payload, "captchaSeconds", required=True),
            kasada_seconds=_seconds(payload, "kasadaSeconds", required=False),
            beat_the_clock=beat_the_clock,
            date=_text(payload, "date") or utc_isoformat(now),
            **counters,
        )

    @classmethod
    def from_stored(cls, item: Any) -> "ScoreEntry":
        """Rebuild an entry read back from the backing store."""

        return cls.model_validate(item)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON object clients consume."""

        return self.model_dump(by_alias=True, exclude_none=True)


__all__ = ["ANONYMOUS", "NAME_MAX_LENGTH", "ScoreEntry"]
