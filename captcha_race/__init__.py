"""Shared leaderboard service for the captcha race demo."""

__version__ = "0.3.0"
