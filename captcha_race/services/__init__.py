"""Service layer helpers."""

from .leaderboard import LeaderboardService

__all__ = ["LeaderboardService"]
