# src/rankboard/db/models.py

"""Database models for the RankBoard application.

The relational schema is owned and populated by the score submission
service. These mappings describe the subset of it that is read here.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base = declarative_base()


# ===============================================
# Mixins for Per-Mode Statistic Columns
# ===============================================


class ModeStatsMixin:
    """Columns repeated for every mode in each variant's statistics table.

    The column suffix is the mode's short name: std, taiko, ctb, mania.
    """

    id: Mapped[int] = mapped_column(ForeignKey("users.id"), primary_key=True)
    username_aka: Mapped[str] = mapped_column(String(32), default="", nullable=False)

    ranked_score_std: Mapped[int] = mapped_column(BigInteger, default=0)
    ranked_score_taiko: Mapped[int] = mapped_column(BigInteger, default=0)
    ranked_score_ctb: Mapped[int] = mapped_column(BigInteger, default=0)
    ranked_score_mania: Mapped[int] = mapped_column(BigInteger, default=0)

    total_score_std: Mapped[int] = mapped_column(BigInteger, default=0)
    total_score_taiko: Mapped[int] = mapped_column(BigInteger, default=0)
    total_score_ctb: Mapped[int] = mapped_column(BigInteger, default=0)
    total_score_mania: Mapped[int] = mapped_column(BigInteger, default=0)

    playcount_std: Mapped[int] = mapped_column(default=0)
    playcount_taiko: Mapped[int] = mapped_column(default=0)
    playcount_ctb: Mapped[int] = mapped_column(default=0)
    playcount_mania: Mapped[int] = mapped_column(default=0)

    avg_accuracy_std: Mapped[float] = mapped_column(default=0.0)
    avg_accuracy_taiko: Mapped[float] = mapped_column(default=0.0)
    avg_accuracy_ctb: Mapped[float] = mapped_column(default=0.0)
    avg_accuracy_mania: Mapped[float] = mapped_column(default=0.0)

    pp_std: Mapped[int] = mapped_column(default=0)
    pp_taiko: Mapped[int] = mapped_column(default=0)
    pp_ctb: Mapped[int] = mapped_column(default=0)
    pp_mania: Mapped[int] = mapped_column(default=0)


class ScoreMixin:
    """Columns shared by the per-variant score tables."""

    id: Mapped[int] = mapped_column(primary_key=True)
    beatmap_md5: Mapped[str] = mapped_column(String(32), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    score: Mapped[int] = mapped_column(BigInteger, default=0)
    max_combo: Mapped[int] = mapped_column(default=0)
    full_combo: Mapped[bool] = mapped_column(default=False)
    mods: Mapped[int] = mapped_column(default=0)
    # Hit counts are stored under digit-leading column names
    count_300: Mapped[int] = mapped_column("300_count", default=0)
    count_100: Mapped[int] = mapped_column("100_count", default=0)
    count_50: Mapped[int] = mapped_column("50_count", default=0)
    count_katu: Mapped[int] = mapped_column("katus_count", default=0)
    count_geki: Mapped[int] = mapped_column("gekis_count", default=0)
    count_miss: Mapped[int] = mapped_column("misses_count", default=0)
    time: Mapped[int] = mapped_column(default=0)
    play_mode: Mapped[int] = mapped_column(default=0)
    accuracy: Mapped[float] = mapped_column(default=0.0)
    pp: Mapped[float] = mapped_column(default=0.0)
    completed: Mapped[int] = mapped_column(default=0)


# ===============================================
# Player Tables
# ===============================================


class User(Base):
    """Represents a registered player.

    Timestamps are stored as unix seconds.
    """

    __tablename__ = "users"
    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str | None] = mapped_column(String(32), nullable=True)
    register_datetime: Mapped[int] = mapped_column(default=0)
    privileges: Mapped[int] = mapped_column(default=0)
    latest_activity: Mapped[int] = mapped_column(default=0)

    def __init__(self, **kw: Any):
        super().__init__(**kw)


class UserStats(Base, ModeStatsMixin):
    """Standard statistics plus metadata shared by every variant.

    Country, play style, favourite mode, replays watched and total hits are
    only stored here and are read from this table for every variant.
    """

    __tablename__ = "users_stats"
    country: Mapped[str] = mapped_column(String(2), default="XX", nullable=False)
    play_style: Mapped[int] = mapped_column(default=0)
    favourite_mode: Mapped[int] = mapped_column(default=0)

    replays_watched_std: Mapped[int] = mapped_column(default=0)
    replays_watched_taiko: Mapped[int] = mapped_column(default=0)
    replays_watched_ctb: Mapped[int] = mapped_column(default=0)
    replays_watched_mania: Mapped[int] = mapped_column(default=0)

    total_hits_std: Mapped[int] = mapped_column(default=0)
    total_hits_taiko: Mapped[int] = mapped_column(default=0)
    total_hits_ctb: Mapped[int] = mapped_column(default=0)
    total_hits_mania: Mapped[int] = mapped_column(default=0)

    def __init__(self, **kw: Any):
        super().__init__(**kw)


class RelaxStats(Base, ModeStatsMixin):
    """Relax variant statistics."""

    __tablename__ = "rx_stats"

    def __init__(self, **kw: Any):
        super().__init__(**kw)


class AutopilotStats(Base, ModeStatsMixin):
    """Autopilot variant statistics."""

    __tablename__ = "ap_stats"

    def __init__(self, **kw: Any):
        super().__init__(**kw)


# ===============================================
# Beatmap, Score and First Place Tables
# ===============================================


class Beatmap(Base):
    """A ranked difficulty, addressed by its file checksum."""

    __tablename__ = "beatmaps"
    id: Mapped[int] = mapped_column(primary_key=True)
    beatmap_id: Mapped[int] = mapped_column(default=0)
    beatmapset_id: Mapped[int] = mapped_column(default=0)
    beatmap_md5: Mapped[str] = mapped_column(String(32), unique=True)
    song_name: Mapped[str] = mapped_column(String, default="")
    ar: Mapped[float] = mapped_column(default=0.0)
    od: Mapped[float] = mapped_column(default=0.0)
    difficulty_std: Mapped[float] = mapped_column(default=0.0)
    difficulty_taiko: Mapped[float] = mapped_column(default=0.0)
    difficulty_ctb: Mapped[float] = mapped_column(default=0.0)
    difficulty_mania: Mapped[float] = mapped_column(default=0.0)
    max_combo: Mapped[int] = mapped_column(default=0)
    hit_length: Mapped[int] = mapped_column(default=0)
    ranked: Mapped[int] = mapped_column(default=0)
    ranked_status_freezed: Mapped[int] = mapped_column(default=0)
    latest_update: Mapped[int] = mapped_column(default=0)

    def __init__(self, **kw: Any):
        super().__init__(**kw)


class Score(Base, ScoreMixin):
    """Standard variant score."""

    __tablename__ = "scores"

    def __init__(self, **kw: Any):
        super().__init__(**kw)


class RelaxScore(Base, ScoreMixin):
    """Relax variant score."""

    __tablename__ = "scores_relax"

    def __init__(self, **kw: Any):
        super().__init__(**kw)


class AutopilotScore(Base, ScoreMixin):
    """Autopilot variant score."""

    __tablename__ = "scores_ap"

    def __init__(self, **kw: Any):
        super().__init__(**kw)


class FirstPlace(Base):
    """Marks the score currently holding #1 on a beatmap.

    `score_id` points into the score table selected by `relax`
    (0 standard, 1 relax, 2 autopilot), so it carries no foreign key.
    """

    __tablename__ = "first_places"
    id: Mapped[int] = mapped_column(primary_key=True)
    score_id: Mapped[int] = mapped_column(index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    beatmap_md5: Mapped[str] = mapped_column(String(32))
    mode: Mapped[int] = mapped_column(default=0)
    relax: Mapped[int] = mapped_column(default=0)

    def __init__(self, **kw: Any):
        super().__init__(**kw)
