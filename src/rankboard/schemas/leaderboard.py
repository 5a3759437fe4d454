# src/rankboard/schemas/leaderboard.py

"""Leaderboard schemas for per-mode rankings."""

from pydantic import BaseModel, ConfigDict, Field

from .player import UserRead


class ModeStats(BaseModel):
    """A player's statistics for the requested mode and variant.

    Attributes:
        ranked_score: Sum of best scores on ranked beatmaps
        total_score: Sum of every submitted score
        playcount: Number of submitted plays
        replays_watched: Times other players watched this player's replays
        total_hits: Sum of all non-miss judgements
        level: Fractional level derived from total_score
        accuracy: Weighted average accuracy (0-100)
        pp: Performance points, the metric the ranking index orders by
        global_leaderboard_rank: 1-based global position, None if unranked
        country_leaderboard_rank: 1-based position within the player's country
    """

    ranked_score: int = Field(0, ge=0)
    total_score: int = Field(0, ge=0)
    playcount: int = Field(0, ge=0)
    replays_watched: int = Field(0, ge=0)
    total_hits: int = Field(0, ge=0)
    level: float = Field(0.0, ge=0.0)
    accuracy: float = Field(0.0, ge=0.0, le=100.0)
    pp: int = Field(0, ge=0)
    global_leaderboard_rank: int | None = Field(None, ge=1)
    country_leaderboard_rank: int | None = Field(None, ge=1)

    model_config = ConfigDict(from_attributes=True)


class LeaderboardUser(UserRead):
    """Single entry in a leaderboard page."""

    play_style: int = 0
    favourite_mode: int = 0
    chosen_mode: ModeStats


class LeaderboardResponse(BaseModel):
    """A page of the leaderboard.

    Attributes:
        users: Players in ranking index order, best first
        total: Players with statistics for this mode; counted from the
            relational store, so it may differ from the index size. None
            when the page was empty and nothing was counted.
        page: 1-based page number that was served
        page_size: Page size that was served after normalization
    """

    users: list[LeaderboardUser] = Field(default_factory=list)
    total: int | None = Field(None, ge=0)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
