"""API assembly helpers."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core import LeaderboardError, ScoreValidationError
from .routers import ALL_ROUTERS

logger = logging.getLogger(__name__)


def register_routes(app: FastAPI) -> None:
    """Attach all application routers to the given app."""

    for router in ALL_ROUTERS:
        app.include_router(router)


def _describe(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}"


def register_error_handlers(app: FastAPI, headers: Optional[Dict[str, str]] = None) -> None:
    """Render domain, request and unexpected errors as ``{success, error, message}``.

    ``headers`` are attached to the fallback 500 response, which is sent from
    outside every middleware.
    """

    @app.exception_handler(LeaderboardError)
    async def handle_leaderboard_error(request: Request, exc: LeaderboardError) -> JSONResponse:
        return JSONResponse(exc.to_payload(), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ScoreValidationError(_describe(exc))
        return JSONResponse(error.to_payload(), status_code=error.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            {"success": False, "error": "internal_error", "message": "Internal server error"},
            status_code=500,
            headers=headers,
        )


__all__ = ["register_error_handlers", "register_routes"]
