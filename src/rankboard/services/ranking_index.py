# src/rankboard/services/ranking_index.py

"""Read access to the precomputed ranking indexes.

Each index is a sorted set scored by performance points. One exists per
variant kind and mode, plus one per country for the same pair. Indexes are
maintained elsewhere; this module only reads them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from rankboard.exceptions import RankingIndexUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingIndexKey:
    """Address of one ranking index.

    Attributes:
        kind: Variant leaderboard kind, e.g. "leaderboard_relax"
        mode: Mode suffix, e.g. "std" or "mania"
        country: Country code for a country-scoped index, None for global
    """

    kind: str
    mode: str
    country: str | None = None

    def __post_init__(self) -> None:
        if self.country is not None:
            # Country indexes are always addressed in lower case
            object.__setattr__(self, "country", self.country.lower())

    @property
    def is_global(self) -> bool:
        return self.country is None

    def for_country(self, country: str) -> RankingIndexKey:
        """Return the country-scoped key for the same kind and mode."""
        return RankingIndexKey(kind=self.kind, mode=self.mode, country=country)

    def render(self, namespace: str) -> str:
        """Render as `{namespace}:{kind}:{mode}[:{country}]`."""
        key = f"{namespace}:{self.kind}:{self.mode}"
        if self.country is not None:
            key += f":{self.country}"
        return key


class RankingIndex(Protocol):
    """Interface every ranking index backend must satisfy."""

    async def page_of_members(
        self, key: RankingIndexKey, offset: int, count: int
    ) -> list[int]:
        """Return player IDs ranked `offset` .. `offset + count - 1`, best first."""
        ...

    async def rank_of(self, key: RankingIndexKey, player_id: int) -> int | None:
        """Return the 1-based rank of a player, or None when not indexed."""
        ...


class RedisRankingIndex:
    """Ranking index backed by Redis sorted sets."""

    def __init__(self, redis_client: Redis, namespace: str) -> None:
        self.redis = redis_client
        self.namespace = namespace

    async def page_of_members(
        self, key: RankingIndexKey, offset: int, count: int
    ) -> list[int]:
        if count <= 0:
            return []
        redis_key = key.render(self.namespace)
        try:
            members = await self.redis.zrevrange(redis_key, offset, offset + count - 1)
        except RedisError as e:
            logger.error(
                "Ranking index range read failed",
                extra={"index_key": redis_key, "offset": offset, "count": count},
            )
            raise RankingIndexUnavailableError(redis_key, str(e)) from e

        player_ids: list[int] = []
        for member in members:
            try:
                player_ids.append(int(member))
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping non-numeric ranking index member %r",
                    member,
                    extra={"index_key": redis_key},
                )
        return player_ids

    async def rank_of(self, key: RankingIndexKey, player_id: int) -> int | None:
        redis_key = key.render(self.namespace)
        try:
            rank = await self.redis.zrevrank(redis_key, str(player_id))
        except RedisError as e:
            logger.error(
                "Ranking index rank read failed",
                extra={"index_key": redis_key, "player_id": player_id},
            )
            raise RankingIndexUnavailableError(redis_key, str(e)) from e

        # ZREVRANK is zero-based; rank numbers shown to players are one-based
        return None if rank is None else int(rank) + 1
