"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import register_error_handlers, register_routes
from .core import Settings, configure_logging, get_settings
from .services import LeaderboardService
from .storage import KeyValueStore, build_store

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type"]


def create_app(
    store: Optional[KeyValueStore] = None, settings: Optional[Settings] = None
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if store is None:
        store = build_store(settings)
    service = LeaderboardService(
        store,
        key=settings.leaderboard_key,
        limit=settings.leaderboard_limit,
        strict_reads=settings.strict_reads,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.setup()
        logger.info(
            "Leaderboard %r served from %s store (top %d)",
            service.key,
            store.name,
            service.limit,
        )
        yield
        store.close()

    app = FastAPI(title="Captcha Race Leaderboard API", version=__version__, lifespan=lifespan)
    app.state.leaderboard = service

    cors_headers = {
        "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
        "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
    }
    if "*" in settings.allowed_origins:
        cors_headers["Access-Control-Allow-Origin"] = "*"

    @app.middleware("http")
    async def stamp_cors_headers(request: Request, call_next):
        # CORSMiddleware only answers requests carrying an Origin header.
        response = await call_next(request)
        for name, value in cors_headers.items():
            response.headers.setdefault(name, value)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
    )

    register_error_handlers(app, cors_headers)
    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("captcha_race.app:app", host="127.0.0.1", port=3000, reload=True)
