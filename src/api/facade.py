# src/api/facade.py — v1
"""Public API facade — single in-process entry point for reranking.

Usage:
    from smartrerank.api.facade import rerank
    result = await rerank("machine learning", [{"id": "a", "content": "..."}])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from smartrerank.config.settings import Settings
from smartrerank.core.models import Item, ItemInput, RankedResult, RerankMode
from smartrerank.rerank.service import RerankService

logger = logging.getLogger(__name__)


async def rerank(
    query: str,
    items: Sequence[Item | Mapping[str, object]],
    mode: RerankMode = "math",
    top_k: int | None = None,
    exclude_factors: Iterable[str] = (),
    settings: Settings | None = None,
    service: RerankService | None = None,
) -> RankedResult:
    """Rerank ``items`` by relevance to ``query``.

    Args:
        query: Query text.
        items: Items as ``Item`` models or ``{"id", "content"}`` mappings.
        mode: "math" (local scoring) or "ai" (neural, falls back to math).
        top_k: Return only the first K items (<= 0 or None = all).
        exclude_factors: Named factors to zero out in math mode.
        settings: Used to build a service when ``service`` is None.
        service: Pre-built service (reused across calls by long-lived callers).

    Returns:
        RankedResult with ranked items, method and cached flag.

    Raises:
        pydantic.ValidationError: If an item lacks a non-empty id or content.
    """
    models = [
        i if isinstance(i, Item) else ItemInput.model_validate(i).to_item() for i in items
    ]
    owned = service is None
    service = service or RerankService.from_settings(settings or Settings())
    try:
        return await service.rerank(
            query, models, mode=mode, top_k=top_k, exclude_factors=exclude_factors,
        )
    finally:
        if owned:
            await service.close()
