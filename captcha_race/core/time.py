"""Clock helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def utc_isoformat(moment: datetime | None = None) -> str:
    """Render a UTC timestamp the way browsers' ``Date.toISOString`` does."""

    moment = (moment or utcnow()).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


__all__ = ["utc_isoformat", "utcnow"]
