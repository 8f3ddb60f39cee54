# src/cache/result_cache.py — v1
"""Read-through / write-through cache of full ranked results.

Every store failure (including a corrupt payload) is logged and treated
as a miss or a no-op; nothing raised by the store reaches the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from smartrerank.cache.base_cache_store import BaseCacheStore
from smartrerank.cache.fingerprint import DEFAULT_KEY_LENGTH, DEFAULT_PREFIX, derive_cache_key
from smartrerank.core.models import Item, RankedResult

logger = logging.getLogger(__name__)


class ResultCache:
    """Mediates RankedResult persistence in a BaseCacheStore."""

    def __init__(
        self,
        store: BaseCacheStore,
        ttl_seconds: int = 3600,
        key_prefix: str = DEFAULT_PREFIX,
        key_length: int = DEFAULT_KEY_LENGTH,
    ) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._key_prefix = key_prefix
        self._key_length = key_length

    @property
    def store(self) -> BaseCacheStore:
        return self._store

    def key_for(
        self,
        query: str,
        items: Sequence[Item],
        mode: str,
        exclude_factors: Iterable[str] = (),
    ) -> str:
        return derive_cache_key(
            query, items, mode, exclude_factors,
            prefix=self._key_prefix, length=self._key_length,
        )

    async def get(self, key: str) -> RankedResult | None:
        """Return the cached result, or None on miss or any failure."""
        try:
            payload = await self._store.get(key)
        except Exception as e:
            logger.warning("Cache read error for %s: %s", key, e)
            return None
        if payload is None:
            logger.debug("Cache miss: %s", key)
            return None
        try:
            result = RankedResult.model_validate_json(payload)
        except ValidationError as e:
            logger.warning("Discarding corrupt cache entry %s: %s", key, e)
            return None
        logger.debug("Cache hit: %s", key)
        return result

    async def put(self, key: str, result: RankedResult) -> None:
        """Store the full (untruncated) result; failures are only logged."""
        payload = result.model_dump_json(by_alias=True, exclude_none=True)
        try:
            await self._store.put(key, payload, self._ttl_seconds)
        except Exception as e:
            logger.warning("Cache write error for %s: %s", key, e)

    async def close(self) -> None:
        await self._store.close()
