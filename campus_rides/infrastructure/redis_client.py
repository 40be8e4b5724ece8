"""
Redis connection pool for the lifecycle event channel.

The pool is built on first use, so an API running with
``EVENTS_ENABLED=false`` never opens a connection.
"""

from typing import Optional

import redis.asyncio as aioredis

from campus_rides.config import settings

_pool: Optional[aioredis.ConnectionPool] = None


async def get_redis() -> aioredis.Redis:
    """Return a Redis client backed by the shared connection pool."""
    global _pool
    if _pool is None:
        _pool = aioredis.ConnectionPool.from_url(
            settings.redis_url, decode_responses=True
        )
    return aioredis.Redis(connection_pool=_pool)


async def close_redis() -> None:
    global _pool
    if _pool is not None:
        await _pool.disconnect()
        _pool = None
