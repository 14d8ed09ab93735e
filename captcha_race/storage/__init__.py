"""Backing key-value stores for the leaderboard."""

from __future__ import annotations

from ..core.config import Settings
from ..core.errors import StorageUnavailable
from .base import KeyValueStore
from .cloudflare import CloudflareKVStore
from .memory import MemoryKeyValueStore
from .sql import SQLKeyValueStore

STORE_BACKENDS = ("sqlite", "memory", "cloudflare")


def build_store(settings: Settings) -> KeyValueStore:
    """Construct the backend named by ``settings.store``."""

    if settings.store == "memory":
        return MemoryKeyValueStore()
    if settings.store in {"sqlite", "sql"}:
        return SQLKeyValueStore(settings.database_url)
    if settings.store == "cloudflare":
        return CloudflareKVStore(
            settings.cloudflare_account_id,
            settings.cloudflare_namespace_id,
            settings.cloudflare_api_token,
            timeout=settings.cloudflare_timeout,
        )
    raise StorageUnavailable(
        f"Unknown LEADERBOARD_STORE {settings.store!r}; "
        f"expected one of {', '.join(STORE_BACKENDS)}"
    )


__all__ = [
    "CloudflareKVStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SQLKeyValueStore",
    "STORE_BACKENDS",
    "build_store",
]
