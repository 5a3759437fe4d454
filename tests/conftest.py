# tests/conftest.py

"""Pytest configuration and fixtures."""

import asyncio
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from rankboard.db.models import AutopilotStats, Base, RelaxStats, User, UserStats
from rankboard.db.ranking_store import get_ranking_index
from rankboard.db.session import get_db
from rankboard.main import app
from rankboard.services.ranking_index import RedisRankingIndex
from rankboard.variants import GameMode, Variant
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_NAMESPACE = "ripple"


class FakeSortedSetRedis:
    """In-memory stand-in for the two sorted-set reads the index uses.

    Ties on score are broken by member in reverse lexicographic order,
    matching ZREVRANGE.
    """

    def __init__(self) -> None:
        self.sorted_sets: dict[str, dict[str, float]] = {}
        self.fail = False
        self.delay = 0.0
        self.calls: list[tuple[str, str]] = []

    def seed(self, key: str, scores: dict) -> None:
        members = self.sorted_sets.setdefault(key, {})
        members.update({str(member): float(score) for member, score in scores.items()})

    def _ordered(self, key: str) -> list[str]:
        members = self.sorted_sets.get(key, {})
        return [
            member
            for member, _ in sorted(
                members.items(), key=lambda kv: (kv[1], kv[0]), reverse=True
            )
        ]

    async def _before(self, command: str, key: str) -> None:
        self.calls.append((command, key))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RedisConnectionError("Connection refused")

    async def zrevrange(self, key: str, start: int, end: int) -> list[str]:
        await self._before("zrevrange", key)
        return self._ordered(key)[start : end + 1]

    async def zrevrank(self, key: str, member: str) -> int | None:
        await self._before("zrevrank", key)
        ordered = self._ordered(key)
        return ordered.index(member) if member in ordered else None


@pytest.fixture
def fake_redis() -> FakeSortedSetRedis:
    return FakeSortedSetRedis()


@pytest.fixture
def ranking_index(fake_redis: FakeSortedSetRedis) -> RedisRankingIndex:
    return RedisRankingIndex(fake_redis, namespace=TEST_NAMESPACE)  # type: ignore[arg-type]


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, with the schema created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=db_engine, expire_on_commit=False, autocommit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
def add_player(db_session: AsyncSession):
    """Return a helper inserting a player with statistics for one variant.

    Statistics are written for the given mode. The standard table is always
    created because it holds country and other shared metadata.
    """

    async def _add_player(
        player_id: int,
        *,
        username: str | None = None,
        country: str = "US",
        pp: int = 0,
        ranked_score: int = 0,
        total_score: int = 0,
        variant: Variant = Variant.STANDARD,
        mode: GameMode = GameMode.STD,
        username_aka: str = "",
    ) -> None:
        suffix = mode.suffix
        user = User(
            id=player_id,
            username=username if username is not None else f"player{player_id}",
            register_datetime=1600000000,
            privileges=3,
            latest_activity=1700000000,
        )
        shared = UserStats(id=player_id, country=country, username_aka=username_aka)
        stats_by_variant = {
            Variant.STANDARD: shared,
            Variant.RELAX: RelaxStats(id=player_id, username_aka=username_aka),
            Variant.AUTOPILOT: AutopilotStats(id=player_id, username_aka=username_aka),
        }
        stats = stats_by_variant[variant]
        setattr(stats, f"pp_{suffix}", pp)
        setattr(stats, f"ranked_score_{suffix}", ranked_score)
        setattr(stats, f"total_score_{suffix}", total_score)
        setattr(stats, f"playcount_{suffix}", 10)
        setattr(stats, f"avg_accuracy_{suffix}", 98.5)
        setattr(shared, f"replays_watched_{suffix}", 4)
        setattr(shared, f"total_hits_{suffix}", 1234)

        db_session.add(user)
        db_session.add(shared)
        if stats is not shared:
            db_session.add(stats)
        await db_session.commit()

    return _add_player


@pytest.fixture
async def async_client(
    db_session: AsyncSession, ranking_index: RedisRankingIndex
) -> AsyncGenerator[AsyncClient, None]:
    """Fixture to provide an async test client for the API."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ranking_index] = lambda: ranking_index

    transport = ASGITransport(app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    del app.dependency_overrides[get_db]
    del app.dependency_overrides[get_ranking_index]
