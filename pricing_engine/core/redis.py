import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from pricing_engine.core.config import settings
from pricing_engine.core.metrics import redis_connected

logger = logging.getLogger(__name__)

# None until init_redis succeeds; every cache user checks for it.
redis: Optional[Redis] = None


async def init_redis() -> Redis:
    global redis
    client = Redis.from_url(settings.REDIS_URL, decode_responses=False)
    try:
        await client.ping()
    except RedisError as e:
        logger.error(f"Failed to connect to Redis at {settings.REDIS_URL}: {e}")
        await client.aclose()
        raise
    redis = client
    redis_connected.set(1)
    logger.info("Connected to Redis, quote and config caching enabled")
    return redis


async def close_redis():
    global redis
    if redis is not None:
        await redis.aclose()
        redis = None
    redis_connected.set(0)


def get_redis() -> Optional[Redis]:
    """Return the shared client, or None when caching is unavailable."""
    return redis


async def redis_healthy() -> bool:
    client = get_redis()
    if client is None:
        return False
    try:
        return bool(await client.ping())
    except RedisError as e:
        logger.warning(f"Redis ping failed: {e}")
        return False
