# src/rankboard/services/first_place_service.py

"""Business logic for listing a player's first-place scores."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rankboard.db import models
from rankboard.exceptions import MissingFieldError, RelationalStoreUnavailableError
from rankboard.grading import get_grade
from rankboard.schemas import first_place as first_place_schema
from rankboard.schemas.pagination import Page
from rankboard.variants import GameMode, Variant, get_variant_schema

logger = logging.getLogger(__name__)

# Score status for a submitted score that is the player's best on the map
COMPLETED_BEST = 3


@dataclass
class FirstPlacesPage:
    """Resolved page of first places."""

    total: int
    scores: list[first_place_schema.FirstPlaceScore] = field(default_factory=list)
    decode_errors: int = 0


def _decode(score: models.ScoreMixin, beatmap: models.Beatmap) -> first_place_schema.FirstPlaceScore:
    score_read = first_place_schema.ScoreRead.model_validate(score)
    beatmap_read = first_place_schema.BeatmapRead(
        beatmap_id=beatmap.beatmap_id,
        beatmapset_id=beatmap.beatmapset_id,
        beatmap_md5=beatmap.beatmap_md5,
        song_name=beatmap.song_name,
        ar=beatmap.ar,
        od=beatmap.od,
        difficulty=beatmap.difficulty_std,
        difficulty2=first_place_schema.BeatmapDifficulty(
            std=beatmap.difficulty_std,
            taiko=beatmap.difficulty_taiko,
            ctb=beatmap.difficulty_ctb,
            mania=beatmap.difficulty_mania,
        ),
        max_combo=beatmap.max_combo,
        hit_length=beatmap.hit_length,
        ranked=beatmap.ranked,
        ranked_status_frozen=beatmap.ranked_status_freezed,
        latest_update=beatmap.latest_update,
    )
    grade = get_grade(
        GameMode.parse(score_read.play_mode),
        score_read.mods,
        score_read.accuracy,
        score_read.count_300,
        score_read.count_100,
        score_read.count_50,
        score_read.count_miss,
    )
    return first_place_schema.FirstPlaceScore(
        score=score_read, beatmap=beatmap_read, rank=grade
    )


async def get_first_places(
    db: AsyncSession,
    user_id: int | None,
    mode: GameMode,
    variant: Variant,
    page: Page,
) -> FirstPlacesPage:
    """
    Return the first places a player holds in one mode and variant,
    most recent first.

    Raises:
        MissingFieldError: If no user ID was given.
        RelationalStoreUnavailableError: If the database query fails.
    """
    if not user_id:
        raise MissingFieldError("id")

    schema = get_variant_schema(variant)
    score_model = schema.score_model

    count_query = select(func.count()).select_from(models.FirstPlace).where(
        models.FirstPlace.user_id == user_id,
        models.FirstPlace.mode == int(mode),
        models.FirstPlace.relax == int(variant),
    )
    query = (
        select(score_model, models.Beatmap)
        .join(models.FirstPlace, models.FirstPlace.score_id == score_model.id)
        .join(models.Beatmap, models.Beatmap.beatmap_md5 == score_model.beatmap_md5)
        .where(
            score_model.completed == COMPLETED_BEST,
            models.FirstPlace.user_id == user_id,
            models.FirstPlace.relax == int(variant),
            score_model.play_mode == int(mode),
        )
        .order_by(score_model.time.desc())
        .offset(page.offset)
        .limit(page.size)
    )

    try:
        total = (await db.execute(count_query)).scalar_one()
        rows = (await db.execute(query)).all()
    except SQLAlchemyError as e:
        logger.error(
            "First places query failed",
            extra={"user_id": user_id, "variant": variant.name, "mode": mode.suffix},
        )
        raise RelationalStoreUnavailableError("first places", str(e)) from e

    result = FirstPlacesPage(total=total)
    for score, beatmap in rows:
        try:
            result.scores.append(_decode(score, beatmap))
        except (PydanticValidationError, TypeError, ValueError) as e:
            result.decode_errors += 1
            logger.warning(
                "Skipping undecodable first place score %s: %s",
                score.id,
                e,
                extra={"user_id": user_id, "score_id": score.id},
            )
    return result
