# src/cache/redis_store.py — v1
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for distributed/multi-instance deployments; expiry is delegated
to Redis via ``SET ... EX``.
"""

from __future__ import annotations

import logging

from smartrerank.cache.base_cache_store import BaseCacheStore, CacheStoreError

logger = logging.getLogger(__name__)


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for distributed deployments."""

    def __init__(self, redis_url: str, socket_timeout_s: float = 2.0) -> None:
        try:
            import redis.asyncio as aioredis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = aioredis.Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout_s,
            socket_connect_timeout=socket_timeout_s,
        )

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except Exception as e:
            raise CacheStoreError(f"Redis GET {key} failed: {e}") from e

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except Exception as e:
            raise CacheStoreError(f"Redis SET {key} failed: {e}") from e

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()

    @property
    def backend_name(self) -> str:
        return "redis"
