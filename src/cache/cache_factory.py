# src/cache/cache_factory.py — v2
"""Factory for cache store instantiation."""

from __future__ import annotations

from smartrerank.cache.base_cache_store import BaseCacheStore
from smartrerank.config.settings import Settings


class UnsupportedCacheBackendError(ValueError):
    """Raised when the configured cache backend is unknown."""


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore | None:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to an in-memory store.

    Returns:
        Configured BaseCacheStore, or None when caching is disabled.
    """
    if settings is None:
        from smartrerank.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    if not settings.caching_active:
        return None

    backend = settings.cache_backend

    if backend == "memory":
        from smartrerank.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    if backend == "json":
        from smartrerank.cache.json_store import JsonCacheStore
        return JsonCacheStore(cache_root=settings.cache_root)

    if backend == "sqlite":
        from smartrerank.cache.sqlite_store import SqliteCacheStore
        db_path = settings.cache_root.expanduser() / "smartrerank_cache.db"
        return SqliteCacheStore(db_path=db_path)

    if backend == "redis":
        from smartrerank.cache.redis_store import RedisCacheStore
        if not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCacheStore(redis_url=settings.cache_redis_url)

    raise UnsupportedCacheBackendError(f"Unsupported cache backend: {backend!r}")
