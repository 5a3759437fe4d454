# tests/test_hydrator.py

"""Tests for hydrating ranked player IDs from the relational store."""

from datetime import datetime, timezone

import pytest
from rankboard.exceptions import RelationalStoreUnavailableError
from rankboard.levels import get_level_precise
from rankboard.services.hydrator import RelationalHydrator
from rankboard.variants import GameMode, Variant
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession


@pytest.mark.asyncio
async def test_hydrate_returns_joined_records(db_session: AsyncSession, add_player):
    await add_player(
        7,
        username="cookiezi",
        country="KR",
        pp=1500,
        ranked_score=900,
        total_score=5000000,
        username_aka="chocomint",
    )

    result = await RelationalHydrator(db_session).hydrate([7], Variant.STANDARD, GameMode.STD)

    assert result.decode_errors == 0
    record = result.records[7]
    assert record.username == "cookiezi"
    assert record.username_aka == "chocomint"
    assert record.country == "KR"
    assert record.registered_on == datetime.fromtimestamp(1600000000, tz=timezone.utc)
    assert record.chosen_mode.pp == 1500
    assert record.chosen_mode.ranked_score == 900
    assert record.chosen_mode.total_score == 5000000
    assert record.chosen_mode.playcount == 10
    assert record.chosen_mode.replays_watched == 4
    assert record.chosen_mode.total_hits == 1234
    assert record.chosen_mode.accuracy == pytest.approx(98.5)
    assert record.chosen_mode.level == pytest.approx(get_level_precise(5000000))
    # Ranks are attached later by the orchestrator
    assert record.chosen_mode.global_leaderboard_rank is None
    assert record.chosen_mode.country_leaderboard_rank is None


@pytest.mark.asyncio
async def test_missing_players_are_omitted(db_session: AsyncSession, add_player):
    await add_player(7, pp=1500)
    await add_player(9, pp=900)

    result = await RelationalHydrator(db_session).hydrate(
        [7, 3, 9], Variant.STANDARD, GameMode.STD
    )

    assert set(result.records) == {7, 9}
    assert result.decode_errors == 0


@pytest.mark.asyncio
async def test_empty_input_returns_empty_result(db_session: AsyncSession):
    result = await RelationalHydrator(db_session).hydrate([], Variant.STANDARD, GameMode.STD)

    assert result.records == {}
    assert result.decode_errors == 0


@pytest.mark.asyncio
async def test_undecodable_row_is_skipped_and_counted(
    db_session: AsyncSession, add_player
):
    await add_player(1, pp=2000)
    await add_player(2, pp=-10)  # negative pp fails validation
    await add_player(3, pp=1000)

    result = await RelationalHydrator(db_session).hydrate(
        [1, 2, 3], Variant.STANDARD, GameMode.STD
    )

    assert set(result.records) == {1, 3}
    assert result.decode_errors == 1


@pytest.mark.asyncio
async def test_null_username_is_a_decode_error(db_session: AsyncSession, add_player):
    await add_player(4, pp=100)
    await db_session.execute(text("UPDATE users SET username = NULL WHERE id = 4"))
    await db_session.commit()

    result = await RelationalHydrator(db_session).hydrate([4], Variant.STANDARD, GameMode.STD)

    assert result.records == {}
    assert result.decode_errors == 1


@pytest.mark.parametrize("variant", [Variant.RELAX, Variant.AUTOPILOT])
@pytest.mark.asyncio
async def test_variant_reads_its_own_statistics(
    db_session: AsyncSession, add_player, variant
):
    await add_player(
        5,
        country="FR",
        pp=777,
        ranked_score=321,
        variant=variant,
        mode=GameMode.TAIKO,
        username_aka="rx-alias",
    )

    result = await RelationalHydrator(db_session).hydrate([5], variant, GameMode.TAIKO)
    record = result.records[5]

    assert record.chosen_mode.pp == 777
    assert record.chosen_mode.ranked_score == 321
    assert record.username_aka == "rx-alias"
    # Shared metadata always comes from the standard statistics table
    assert record.country == "FR"
    assert record.chosen_mode.total_hits == 1234

    standard = await RelationalHydrator(db_session).hydrate(
        [5], Variant.STANDARD, GameMode.TAIKO
    )
    assert standard.records[5].chosen_mode.pp == 0


@pytest.mark.asyncio
async def test_variant_without_statistics_row_omits_player(
    db_session: AsyncSession, add_player
):
    await add_player(6, pp=500)  # standard only

    result = await RelationalHydrator(db_session).hydrate([6], Variant.RELAX, GameMode.STD)

    assert result.records == {}
    assert result.decode_errors == 0


@pytest.mark.asyncio
async def test_database_failure_raises_unavailable(db_session: AsyncSession):
    await db_session.execute(text("DROP TABLE users_stats"))

    with pytest.raises(RelationalStoreUnavailableError):
        await RelationalHydrator(db_session).hydrate([1], Variant.STANDARD, GameMode.STD)


# =============================================================================
# Member Count
# =============================================================================


@pytest.mark.asyncio
async def test_count_members_counts_players_with_pp(db_session: AsyncSession, add_player):
    await add_player(1, pp=100, country="US")
    await add_player(2, pp=200, country="us")
    await add_player(3, pp=300, country="JP")
    await add_player(4, pp=0, country="US")

    hydrator = RelationalHydrator(db_session)

    assert await hydrator.count_members(Variant.STANDARD, GameMode.STD) == 3
    assert await hydrator.count_members(Variant.STANDARD, GameMode.STD, "us") == 2
    assert await hydrator.count_members(Variant.STANDARD, GameMode.MANIA) == 0


@pytest.mark.asyncio
async def test_count_members_per_variant(db_session: AsyncSession, add_player):
    await add_player(1, pp=100, variant=Variant.RELAX)
    await add_player(2, pp=100, variant=Variant.AUTOPILOT)
    await add_player(3, pp=100, variant=Variant.AUTOPILOT)

    hydrator = RelationalHydrator(db_session)

    assert await hydrator.count_members(Variant.RELAX, GameMode.STD) == 1
    assert await hydrator.count_members(Variant.AUTOPILOT, GameMode.STD) == 2
    assert await hydrator.count_members(Variant.STANDARD, GameMode.STD) == 0
