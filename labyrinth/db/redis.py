"""Redis connection used by the session store."""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from labyrinth.config import get_settings

logger = logging.getLogger(__name__)

# Global Redis connection pool
_redis_pool: Optional[redis.ConnectionPool] = None
_redis_client: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    """Get the shared Redis client, creating the pool on first use."""
    global _redis_pool, _redis_client

    if _redis_client is None:
        url = get_settings().redis_url
        _redis_pool = redis.ConnectionPool.from_url(url, decode_responses=True)
        _redis_client = redis.Redis(connection_pool=_redis_pool)
        logger.info(f"Connected Redis pool for {_redis_pool.connection_kwargs.get('host', url)}")

    return _redis_client


async def ping_redis(client: redis.Redis) -> bool:
    """True if the server answers PING."""
    try:
        return bool(await client.ping())
    except RedisError as e:
        logger.warning(f"Redis ping failed: {e}")
        return False


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis_pool, _redis_client

    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None

    if _redis_pool:
        await _redis_pool.disconnect()
        _redis_pool = None
