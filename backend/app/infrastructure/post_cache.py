"""Redis Post Cache — look-aside key/value layer with a fixed TTL.

Invariants:
    - Every set() carries the configured TTL (no entry outlives cache_ttl_seconds)
    - get() returns None on a miss, never raises for absence
    - All redis client failures mapped to CacheError (core/errors.py)

Design Decisions:
    - redis.asyncio client shared process-wide: connection pool is internal to the client
    - decode_responses=True at construction: the cache contract is str in, str out
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.core.errors import CacheError, ErrorContext

logger = logging.getLogger(__name__)


def create_redis_client(redis_url: str) -> redis.Redis:
    return redis.from_url(redis_url, decode_responses=True)


class RedisPostCache:
    """PostCache over a redis.asyncio client."""

    def __init__(self, client: redis.Redis, ttl_seconds: int = 300):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.client = client
        self.ttl_seconds = ttl_seconds

    async def get(self, key: str) -> str | None:
        try:
            value = await self.client.get(key)
        except RedisError as e:
            raise CacheError(str(e), "get", ErrorContext(operation="cache_get")) from e
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await self.client.set(key, value, ex=self.ttl_seconds)
        except RedisError as e:
            raise CacheError(str(e), "set", ErrorContext(operation="cache_set")) from e

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as e:
            raise CacheError(str(e), "delete", ErrorContext(operation="cache_delete")) from e

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
