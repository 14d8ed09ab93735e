"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, Response

from ...services import LeaderboardService

router = APIRouter(tags=["leaderboard"])


def get_leaderboard_service(request: Request) -> LeaderboardService:
    """FastAPI dependency returning the app's leaderboard service."""

    return request.app.state.leaderboard


@router.get("/leaderboard")
def get_leaderboard(
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> List[Dict[str, Any]]:
    """Get the ranked leaderboard, fastest first."""

    return [entry.to_wire() for entry in service.list()]


@router.post("/leaderboard")
def submit_score(
    body: Dict[str, Any],
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> Dict[str, Any]:
    """Submit one finished run and return the updated leaderboard."""

    leaderboard = service.submit(body)
    return {
        "success": True,
        "leaderboard": [entry.to_wire() for entry in leaderboard],
    }


@router.options("/leaderboard")
def leaderboard_preflight() -> Response:
    """Answer bare cross-origin preflight requests."""

    return Response(status_code=200, media_type="application/json")


__all__ = ["get_leaderboard_service", "router"]
