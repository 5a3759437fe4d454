# src/rankboard/schemas/__init__.py

"""Pydantic schemas for API validation and serialization."""

from .first_place import (
    BeatmapDifficulty,
    BeatmapRead,
    FirstPlaceScore,
    FirstPlacesResponse,
    ScoreRead,
)
from .leaderboard import LeaderboardResponse, LeaderboardUser, ModeStats
from .pagination import Page
from .player import UserRead

__all__ = [
    # First places
    "BeatmapDifficulty",
    "BeatmapRead",
    "FirstPlaceScore",
    "FirstPlacesResponse",
    "ScoreRead",
    # Leaderboard
    "LeaderboardResponse",
    "LeaderboardUser",
    "ModeStats",
    # Pagination
    "Page",
    # Player
    "UserRead",
]
