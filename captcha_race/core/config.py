"""Application settings and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import load_dotenv

load_dotenv(override=False)

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Leaderboard ----------------------------------------------------------------
LEADERBOARD_KEY = os.getenv("LEADERBOARD_KEY", "captcha-race-leaderboard")
LEADERBOARD_LIMIT = _env_int("LEADERBOARD_LIMIT", 25)
if LEADERBOARD_LIMIT < 1:
    raise RuntimeError("LEADERBOARD_LIMIT must be at least 1")

LEADERBOARD_STORE = os.getenv("LEADERBOARD_STORE", "sqlite").strip().lower()
LEADERBOARD_STRICT_READS = _env_bool("LEADERBOARD_STRICT_READS", False)


# Backing stores -------------------------------------------------------------
DATABASE_URL = os.getenv(
    "DATABASE_URL", f"sqlite:///{_PROJECT_ROOT / 'data' / 'leaderboard.db'}"
)

CLOUDFLARE_ACCOUNT_ID = os.getenv("CLOUDFLARE_ACCOUNT_ID") or None
CLOUDFLARE_KV_NAMESPACE_ID = os.getenv("CLOUDFLARE_KV_NAMESPACE_ID") or None
CLOUDFLARE_API_TOKEN = os.getenv("CLOUDFLARE_API_TOKEN") or None
CLOUDFLARE_TIMEOUT = _env_float("CLOUDFLARE_TIMEOUT", 10.0)


# HTTP surface ---------------------------------------------------------------
# ALLOWED_CORS_ORIGINS can contain a comma-separated list; "*" allows any.
ALLOWED_CORS_ORIGINS = _unique(_split_csv(os.getenv("ALLOWED_CORS_ORIGINS"))) or ["*"]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class Settings:
    """Snapshot of the settings a leaderboard deployment is built from."""

    leaderboard_key: str = LEADERBOARD_KEY
    leaderboard_limit: int = LEADERBOARD_LIMIT
    store: str = LEADERBOARD_STORE
    strict_reads: bool = LEADERBOARD_STRICT_READS
    database_url: str = DATABASE_URL
    cloudflare_account_id: Optional[str] = CLOUDFLARE_ACCOUNT_ID
    cloudflare_namespace_id: Optional[str] = CLOUDFLARE_KV_NAMESPACE_ID
    cloudflare_api_token: Optional[str] = CLOUDFLARE_API_TOKEN
    cloudflare_timeout: float = CLOUDFLARE_TIMEOUT
    allowed_origins: List[str] = field(
        default_factory=lambda: list(ALLOWED_CORS_ORIGINS)
    )
    log_level: str = LOG_LEVEL


def get_settings() -> Settings:
    """Return the settings derived from the process environment."""

    return Settings()


__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CLOUDFLARE_ACCOUNT_ID",
    "CLOUDFLARE_API_TOKEN",
    "CLOUDFLARE_KV_NAMESPACE_ID",
    "CLOUDFLARE_TIMEOUT",
    "DATABASE_URL",
    "LEADERBOARD_KEY",
    "LEADERBOARD_LIMIT",
    "LEADERBOARD_STORE",
    "LEADERBOARD_STRICT_READS",
    "LOG_LEVEL",
    "Settings",
    "get_settings",
]
