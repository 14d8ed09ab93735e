"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core import StorageUnavailable, utc_isoformat
from ...services import LeaderboardService
from ...storage import KeyValueStore
from .leaderboard import get_leaderboard_service

router = APIRouter(tags=["system"])

PROBE_KEY = "captcha-race-probe"


def _read_probe(store: KeyValueStore, key: str) -> Dict[str, Any]:
    try:
        value = store.get(key)
    except StorageUnavailable as exc:
        return {"ok": False, "error": exc.message}
    return {"ok": True, "present": value is not None}


def _write_probe(store: KeyValueStore, value: str) -> Dict[str, Any]:
    try:
        store.put(PROBE_KEY, value)
    except StorageUnavailable as exc:
        return {"ok": False, "error": exc.message}
    return {"ok": True}


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style readiness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/_debug/store")
def debug_store(
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> Dict[str, Any]:
    """Check that the backing store can be read and written."""

    store = service.store
    now = utc_isoformat()
    return {
        "store": store.name,
        "key": service.key,
        "limit": service.limit,
        "strictReads": service.strict_reads,
        "readTest": _read_probe(store, service.key),
        "writeTest": _write_probe(store, now),
        "timestamp": now,
    }


__all__ = ["PROBE_KEY", "router"]
