# src/rankboard/schemas/first_place.py

"""Pydantic schemas for a player's first-place scores."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BeatmapDifficulty(BaseModel):
    """Star rating of a beatmap in every mode."""

    std: float = 0.0
    taiko: float = 0.0
    ctb: float = 0.0
    mania: float = 0.0


class BeatmapRead(BaseModel):
    """Beatmap the first place was set on."""

    beatmap_id: int
    beatmapset_id: int
    beatmap_md5: str
    song_name: str
    ar: float
    od: float
    difficulty: float
    difficulty2: BeatmapDifficulty
    max_combo: int
    hit_length: int
    ranked: int
    ranked_status_frozen: int
    latest_update: datetime

    model_config = ConfigDict(from_attributes=True)


class ScoreRead(BaseModel):
    """A single submitted score."""

    id: int
    beatmap_md5: str
    score: int = Field(..., ge=0)
    max_combo: int = Field(..., ge=0)
    full_combo: bool
    mods: int = Field(..., ge=0)
    count_300: int = Field(..., ge=0)
    count_100: int = Field(..., ge=0)
    count_50: int = Field(..., ge=0)
    count_katu: int = Field(..., ge=0)
    count_geki: int = Field(..., ge=0)
    count_miss: int = Field(..., ge=0)
    time: datetime
    play_mode: int
    accuracy: float
    pp: float
    completed: int

    model_config = ConfigDict(from_attributes=True)


class FirstPlaceScore(BaseModel):
    """A first-place score with its beatmap and letter grade."""

    score: ScoreRead
    beatmap: BeatmapRead
    rank: str


class FirstPlacesResponse(BaseModel):
    """A page of a player's first places.

    Attributes:
        total: First places held in this mode and variant, across all pages
        scores: Scores on the requested page, most recent first
    """

    total: int = Field(0, ge=0)
    scores: list[FirstPlaceScore] = Field(default_factory=list)
