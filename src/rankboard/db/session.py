# src/rankboard/db/session.py

"""Relational store session management.

The player and statistics tables are written by the score submission
service; sessions opened here only ever read from them.
"""
import logging
import os
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

logger = logging.getLogger(__name__)

# Database URL from environment variable with SQLite fallback for development
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./rankboard.db")
DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"


def _create_engine() -> AsyncEngine:
    """Create the async engine.

    Pool settings only apply to server databases (e.g. MySQL via aiomysql);
    SQLite gets the dialect's default pool.
    """
    if DATABASE_URL.startswith("sqlite"):
        return create_async_engine(DATABASE_URL, echo=DB_ECHO)

    return create_async_engine(
        DATABASE_URL,
        pool_size=int(os.getenv("DB_POOL_SIZE", "20")),
        max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
        pool_pre_ping=True,  # Leaderboard reads must not hit a dead connection
        pool_recycle=int(os.getenv("DB_POOL_RECYCLE", "3600")),
        echo=DB_ECHO,
    )


engine = _create_engine()

AsyncSessionLocal = async_sessionmaker(
    bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a read session per request.

    The session is rolled back if the request fails part way through a
    read, then closed.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error("Database session error, rolling back: %s", e)
            await session.rollback()
            raise
