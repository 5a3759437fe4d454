# src/rankboard/services/hydrator.py

"""Expands ranked player IDs into full leaderboard records."""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass, field

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rankboard.db.models import User, UserStats
from rankboard.exceptions import RelationalStoreUnavailableError
from rankboard.levels import get_level_precise
from rankboard.schemas.leaderboard import LeaderboardUser, ModeStats
from rankboard.variants import GameMode, Variant, VariantSchema, get_variant_schema

logger = logging.getLogger(__name__)


@dataclass
class HydrationResult:
    """Records found for a batch of player IDs.

    Attributes:
        records: Decoded records keyed by player ID, in no particular order
        decode_errors: Rows that were fetched but could not be decoded
    """

    records: dict[int, LeaderboardUser] = field(default_factory=dict)
    decode_errors: int = 0


def build_user_query(
    schema: VariantSchema, mode: GameMode, player_ids: Collection[int]
) -> Select:
    """Build the batched hydration query for one variant and mode.

    Every variant selects the same labelled columns with the same join
    shape; only the statistics table differs. Country, play style,
    favourite mode, replays and hits always come from `users_stats`.
    """
    stats = schema.stats_model
    pp = schema.stat("pp", mode)
    ranked_score = schema.stat("ranked_score", mode)

    query = select(
        User.id.label("id"),
        User.username.label("username"),
        User.register_datetime.label("registered_on"),
        User.privileges.label("privileges"),
        User.latest_activity.label("latest_activity"),
        stats.username_aka.label("username_aka"),
        UserStats.country.label("country"),
        UserStats.play_style.label("play_style"),
        UserStats.favourite_mode.label("favourite_mode"),
        ranked_score.label("ranked_score"),
        schema.stat("total_score", mode).label("total_score"),
        schema.stat("playcount", mode).label("playcount"),
        getattr(UserStats, f"replays_watched_{mode.suffix}").label("replays_watched"),
        getattr(UserStats, f"total_hits_{mode.suffix}").label("total_hits"),
        schema.stat("avg_accuracy", mode).label("accuracy"),
        pp.label("pp"),
    ).select_from(User)

    query = query.join(UserStats, UserStats.id == User.id)
    if not schema.shares_metadata_table:
        query = query.join(stats, stats.id == User.id)

    # Deterministic per-row order only; display order comes from the index
    return query.where(User.id.in_(list(player_ids))).order_by(
        pp.desc(), ranked_score.desc()
    )


def decode_row(row) -> LeaderboardUser:
    """Turn one hydration row into a leaderboard record.

    Raises:
        pydantic.ValidationError: If the row holds values the schema rejects
    """
    chosen_mode = ModeStats(
        ranked_score=row["ranked_score"],
        total_score=row["total_score"],
        playcount=row["playcount"],
        replays_watched=row["replays_watched"],
        total_hits=row["total_hits"],
        level=get_level_precise(int(row["total_score"] or 0)),
        accuracy=row["accuracy"],
        pp=row["pp"],
    )
    return LeaderboardUser(
        id=row["id"],
        username=row["username"],
        username_aka=row["username_aka"] or "",
        registered_on=row["registered_on"],
        privileges=row["privileges"],
        latest_activity=row["latest_activity"],
        country=row["country"],
        play_style=row["play_style"],
        favourite_mode=row["favourite_mode"],
        chosen_mode=chosen_mode,
    )


class RelationalHydrator:
    """Reads player and statistic rows for a page of ranked players."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def hydrate(
        self, player_ids: Collection[int], variant: Variant, mode: GameMode
    ) -> HydrationResult:
        """Fetch records for `player_ids` in a single query.

        IDs with no matching rows are omitted. Rows that fail to decode
        are logged and skipped, so the result may hold fewer records than
        there are matching rows; `decode_errors` counts the skipped rows.
        """
        result = HydrationResult()
        if not player_ids:
            return result

        schema = get_variant_schema(variant)
        query = build_user_query(schema, mode, player_ids)
        try:
            rows = (await self.db.execute(query)).mappings().all()
        except SQLAlchemyError as e:
            logger.error(
                "Hydration query failed",
                extra={"variant": variant.name, "mode": mode.suffix},
            )
            raise RelationalStoreUnavailableError("hydration", str(e)) from e

        for row in rows:
            try:
                record = decode_row(row)
            except (PydanticValidationError, TypeError, ValueError) as e:
                result.decode_errors += 1
                logger.warning(
                    "Skipping undecodable leaderboard row for player %s: %s",
                    row.get("id"),
                    e,
                    extra={"player_id": row.get("id"), "variant": variant.name},
                )
                continue
            result.records[record.id] = record

        logger.debug(
            "Hydrated %d of %d players",
            len(result.records),
            len(player_ids),
            extra={"decode_errors": result.decode_errors},
        )
        return result

    async def count_members(
        self, variant: Variant, mode: GameMode, country: str | None = None
    ) -> int:
        """Count players holding pp in this variant and mode.

        Counted straight from the statistics table, independently of the
        ranking index, so it can differ from the number of indexed players.
        """
        schema = get_variant_schema(variant)
        stats = schema.stats_model
        query = select(func.count()).select_from(User).join(
            UserStats, UserStats.id == User.id
        )
        if not schema.shares_metadata_table:
            query = query.join(stats, stats.id == User.id)
        query = query.where(schema.stat("pp", mode) > 0)
        if country:
            query = query.where(func.lower(UserStats.country) == country.lower())

        try:
            return int((await self.db.execute(query)).scalar_one())
        except SQLAlchemyError as e:
            raise RelationalStoreUnavailableError("member count", str(e)) from e
