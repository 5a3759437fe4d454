# src/rankboard/variants.py

"""Game modes and competitive variants.

Every variant keeps its statistics, scores and ranking indexes apart. A
`VariantSchema` bundles all of those per variant so callers pick one schema
up front instead of branching on the variant at every step.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from sqlalchemy.orm import InstrumentedAttribute

from rankboard.db import models
from rankboard.services.ranking_index import RankingIndexKey


class GameMode(IntEnum):
    """Game disciplines, numbered as the game client numbers them."""

    STD = 0
    TAIKO = 1
    CTB = 2
    MANIA = 3

    @property
    def suffix(self) -> str:
        """Short name used in column names and index keys."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: int | None) -> GameMode:
        """Map a raw query value to a mode, falling back to std."""
        try:
            return cls(value)
        except ValueError:
            return cls.STD


class Variant(IntEnum):
    """Competitive rule sets tracked with separate statistics."""

    STANDARD = 0
    RELAX = 1
    AUTOPILOT = 2

    @classmethod
    def parse(cls, value: int | None) -> Variant:
        """Map a raw query value to a variant, falling back to standard."""
        try:
            return cls(value)
        except ValueError:
            return cls.STANDARD


@dataclass(frozen=True)
class VariantSchema:
    """Index key kind and relational tables backing one variant."""

    variant: Variant
    index_kind: str
    stats_model: type[models.ModeStatsMixin]
    score_model: type[models.ScoreMixin]

    def global_key(self, mode: GameMode) -> RankingIndexKey:
        return RankingIndexKey(kind=self.index_kind, mode=mode.suffix)

    def country_key(self, mode: GameMode, country: str) -> RankingIndexKey:
        return RankingIndexKey(kind=self.index_kind, mode=mode.suffix, country=country)

    def stat(self, name: str, mode: GameMode) -> InstrumentedAttribute:
        """Return the variant's per-mode column, e.g. `rx_stats.pp_taiko`."""
        return getattr(self.stats_model, f"{name}_{mode.suffix}")

    @property
    def shares_metadata_table(self) -> bool:
        """True when the statistics table is also the shared metadata table."""
        return self.stats_model is models.UserStats


VARIANT_SCHEMAS: dict[Variant, VariantSchema] = {
    Variant.STANDARD: VariantSchema(
        variant=Variant.STANDARD,
        index_kind="leaderboard",
        stats_model=models.UserStats,
        score_model=models.Score,
    ),
    Variant.RELAX: VariantSchema(
        variant=Variant.RELAX,
        index_kind="leaderboard_relax",
        stats_model=models.RelaxStats,
        score_model=models.RelaxScore,
    ),
    Variant.AUTOPILOT: VariantSchema(
        variant=Variant.AUTOPILOT,
        index_kind="leaderboard_ap",
        stats_model=models.AutopilotStats,
        score_model=models.AutopilotScore,
    ),
}


def get_variant_schema(variant: Variant) -> VariantSchema:
    return VARIANT_SCHEMAS[variant]
