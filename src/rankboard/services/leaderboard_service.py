# src/rankboard/services/leaderboard_service.py

"""Business logic for resolving a leaderboard page."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from rankboard.config import LEADERBOARD_TIMEOUT_SECONDS, RANK_LOOKUP_CONCURRENCY
from rankboard.exceptions import LeaderboardTimeoutError
from rankboard.schemas.leaderboard import LeaderboardUser
from rankboard.schemas.pagination import Page
from rankboard.services.hydrator import RelationalHydrator
from rankboard.services.ranking_index import RankingIndex, RankingIndexKey
from rankboard.variants import GameMode, Variant, VariantSchema, get_variant_schema

logger = logging.getLogger(__name__)


@dataclass
class LeaderboardQuery:
    """Raw leaderboard request; page values are 1-based and unvalidated."""

    mode: GameMode = GameMode.STD
    variant: Variant = Variant.STANDARD
    country: str | None = None
    page: int | None = None
    page_size: int | None = None


@dataclass
class LeaderboardPage:
    """Resolved leaderboard page.

    Attributes:
        users: Rank-annotated records in ranking index order
        page: Normalized page window that was served
        total: Relational member count, None when the page was empty
        decode_errors: Rows skipped by the hydrator because they failed to decode
    """

    users: list[LeaderboardUser]
    page: Page
    total: int | None = None
    decode_errors: int = 0


class LeaderboardService:
    """Combines the ranking index with relational player data.

    The ranking index decides who is on a page and in which order; the
    relational store only supplies the display fields for those players.
    """

    def __init__(
        self,
        index: RankingIndex,
        hydrator: RelationalHydrator,
        *,
        rank_concurrency: int = RANK_LOOKUP_CONCURRENCY,
        timeout: float = LEADERBOARD_TIMEOUT_SECONDS,
    ) -> None:
        self.index = index
        self.hydrator = hydrator
        self.rank_concurrency = max(rank_concurrency, 1)
        self.timeout = timeout

    async def get_leaderboard(self, query: LeaderboardQuery) -> LeaderboardPage:
        """Resolve one leaderboard page within the request deadline.

        Raises:
            LeaderboardTimeoutError: If the deadline passes; in-flight index
                and relational calls are cancelled.
            StoreUnavailableError: If either store fails; no partial page
                is returned.
        """
        try:
            return await asyncio.wait_for(self._resolve(query), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(
                "Leaderboard request timed out",
                extra={
                    "variant": query.variant.name,
                    "mode": query.mode.suffix,
                    "timeout_seconds": self.timeout,
                },
            )
            raise LeaderboardTimeoutError(self.timeout) from None

    async def _resolve(self, query: LeaderboardQuery) -> LeaderboardPage:
        page = Page.normalize(query.page, query.page_size)
        schema = get_variant_schema(query.variant)

        base_key = schema.global_key(query.mode)
        page_key = base_key.for_country(query.country) if query.country else base_key

        player_ids = await self.index.page_of_members(page_key, page.offset, page.size)
        if not player_ids:
            return LeaderboardPage(users=[], page=page)

        hydrated = await self.hydrator.hydrate(player_ids, query.variant, query.mode)

        # Index order is authoritative; players missing from the store drop out
        users = [
            hydrated.records[player_id]
            for player_id in player_ids
            if player_id in hydrated.records
        ]
        if len(users) < len(player_ids):
            logger.info(
                "Dropped %d indexed players without relational rows",
                len(player_ids) - len(users),
                extra={"index_key": page_key, "decode_errors": hydrated.decode_errors},
            )

        await self._annotate_ranks(schema, query.mode, base_key, users)

        total = await self.hydrator.count_members(
            query.variant, query.mode, query.country
        )
        return LeaderboardPage(
            users=users,
            page=page,
            total=total,
            decode_errors=hydrated.decode_errors,
        )

    async def _annotate_ranks(
        self,
        schema: VariantSchema,
        mode: GameMode,
        base_key: RankingIndexKey,
        users: list[LeaderboardUser],
    ) -> None:
        """Attach global and country ranks to each record concurrently.

        The country rank is read from the index of the player's own
        country, not from the country the page was filtered by.
        """
        semaphore = asyncio.Semaphore(self.rank_concurrency)

        async def annotate(user: LeaderboardUser) -> None:
            async with semaphore:
                global_rank = await self.index.rank_of(base_key, user.id)
                country_rank = None
                if user.country:
                    country_rank = await self.index.rank_of(
                        schema.country_key(mode, user.country), user.id
                    )
            user.chosen_mode.global_leaderboard_rank = global_rank
            user.chosen_mode.country_leaderboard_rank = country_rank

        tasks = [asyncio.ensure_future(annotate(user)) for user in users]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise
