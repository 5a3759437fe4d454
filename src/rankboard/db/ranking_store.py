# src/rankboard/db/ranking_store.py

"""Redis connection used to read the precomputed ranking indexes."""

import logging

from redis.asyncio import Redis

from rankboard.config import RANKING_KEY_NAMESPACE, REDIS_URL
from rankboard.services.ranking_index import RankingIndex, RedisRankingIndex

logger = logging.getLogger(__name__)

# decode_responses=True so sorted-set members come back as str, not bytes
redis_client: Redis = Redis.from_url(REDIS_URL, decode_responses=True)


def get_ranking_index() -> RankingIndex:
    """FastAPI dependency that provides the Redis-backed ranking index."""
    return RedisRankingIndex(redis_client, namespace=RANKING_KEY_NAMESPACE)


async def close_ranking_store() -> None:
    """Release the Redis connection pool on shutdown."""
    logger.info("Closing ranking store connection pool")
    await redis_client.aclose()
