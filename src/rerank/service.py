# src/rerank/service.py — v1
"""Rerank orchestration: cache lookup, mode dispatch, top-K truncation.

Flow per request::

    fingerprint → cache hit?  ── yes ──▶ mark cached ─┐
                      │ no                             ├─▶ truncate to top-K
                      ▼                                │
              math | ai (with fallback) ─▶ cache full ─┘

The cached entry is always the complete ranked list; truncation only
affects the outgoing copy.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence

from smartrerank.cache.result_cache import ResultCache
from smartrerank.config.settings import Settings
from smartrerank.core.models import Item, RankedResult, RerankMode
from smartrerank.logging.context import set_rerank_context
from smartrerank.rerank.ai_reranker import AiRerankDelegate
from smartrerank.rerank.math_reranker import MathReranker

logger = logging.getLogger(__name__)


def truncate(result: RankedResult, top_k: int | None) -> RankedResult:
    """Copy of ``result`` holding at most ``top_k`` items (all when top_k <= 0)."""
    if not top_k or top_k <= 0:
        return result
    return result.model_copy(update={"items": result.items[:top_k]})


class RerankService:
    """Long-lived orchestrator shared by all requests."""

    def __init__(
        self,
        math_reranker: MathReranker,
        ai_delegate: AiRerankDelegate | None = None,
        result_cache: ResultCache | None = None,
        ai_fallback_method: RerankMode = "ai",
    ) -> None:
        self._math = math_reranker
        self._ai = ai_delegate or AiRerankDelegate(None, math_reranker)
        self._cache = result_cache
        self._ai_fallback_method = ai_fallback_method

    @classmethod
    def from_settings(cls, settings: Settings) -> RerankService:
        """Wire engine, neural provider and cache from configuration."""
        from smartrerank.cache.cache_factory import create_cache_store
        from smartrerank.features.fallback import create_feature_extractor
        from smartrerank.neural.neural_factory import create_neural_reranker

        math_reranker = MathReranker(
            extractor=create_feature_extractor(settings.nlp_model),
            recency_default=settings.recency_default,
            fuzzy_threshold=settings.fuzzy_threshold,
            reference_year=settings.reference_year,
        )
        store = create_cache_store(settings)
        result_cache = None
        if store is not None:
            result_cache = ResultCache(
                store,
                ttl_seconds=settings.cache_ttl_seconds,
                key_prefix=settings.cache_key_prefix,
                key_length=settings.cache_key_length,
            )
        return cls(
            math_reranker=math_reranker,
            ai_delegate=AiRerankDelegate(create_neural_reranker(settings), math_reranker),
            result_cache=result_cache,
            ai_fallback_method=settings.ai_fallback_method,
        )

    @property
    def result_cache(self) -> ResultCache | None:
        return self._cache

    async def rerank(
        self,
        query: str,
        items: Sequence[Item],
        mode: RerankMode = "math",
        top_k: int | None = None,
        exclude_factors: Iterable[str] = (),
    ) -> RankedResult:
        """Rank ``items`` for ``query`` and return the (truncated) result."""
        excluded = sorted(set(exclude_factors))
        key = self._cache.key_for(query, items, mode, excluded) if self._cache else None
        set_rerank_context(mode, key)

        if self._cache is not None and key is not None:
            hit = await self._cache.get(key)
            if hit is not None:
                logger.info("Cache hit (%d items)", len(hit.items))
                return truncate(hit.model_copy(update={"cached": True}), top_k)

        result = await self._compute(query, items, mode, excluded)

        if self._cache is not None and key is not None:
            await self._cache.put(key, result)

        logger.info(
            "Reranked %d items via %s", len(result.items), result.method,
            extra={"data": {"mode": mode, "method": result.method, "items": len(items)}},
        )
        return truncate(result, top_k)

    async def _compute(
        self,
        query: str,
        items: Sequence[Item],
        mode: RerankMode,
        excluded: list[str],
    ) -> RankedResult:
        if mode == "ai":
            # top-K is not forwarded so the cached AI ranking stays complete
            outcome = await self._ai.rerank(query, items)
            method: RerankMode = self._ai_fallback_method if outcome.fell_back else "ai"
            return RankedResult(items=outcome.items, method=method, cached=False)

        ranked = await asyncio.to_thread(self._math.rerank, query, items, excluded)
        return RankedResult(items=ranked, method="math", cached=False)

    async def close(self) -> None:
        if self._cache is not None:
            await self._cache.close()
        if self._ai.neural is not None:
            await self._ai.neural.aclose()
