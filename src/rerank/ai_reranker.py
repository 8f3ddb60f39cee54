# src/rerank/ai_reranker.py — v1
"""Neural rerank delegation with silent fallback to math scoring.

Modelled as a two-state machine::

    TRY_AI ──success──▶ done (method="ai")
       │
       └──failure────▶ MATH (math rerank, no exclusions) ──▶ done

Failure covers a missing provider, any exception raised by the provider
and any malformed response. The transition is logged, never raised.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from smartrerank.core.models import Item
from smartrerank.neural.base_reranker import BaseNeuralReranker, NeuralRerankError
from smartrerank.rerank.math_reranker import MathReranker

logger = logging.getLogger(__name__)


class AiRerankState(str, enum.Enum):
    TRY_AI = "try_ai"
    MATH = "math"


@dataclass
class AiRerankOutcome:
    """Ranked items plus which state produced them."""

    items: list[Item]
    state: AiRerankState
    fallback_reason: str | None = None

    @property
    def fell_back(self) -> bool:
        return self.state is AiRerankState.MATH


def parse_neural_response(response: Any, item_count: int) -> list[tuple[int, float]]:
    """Validate a ``{"response": [{"id", "score"}, ...]}`` payload.

    Returns:
        ``(index, score)`` pairs in response order.

    Raises:
        NeuralRerankError: If the payload is missing or empty, or any entry is malformed,
            out of range or duplicated.
    """
    if not isinstance(response, dict) or not isinstance(response.get("response"), list):
        raise NeuralRerankError("response is missing or not an array")

    pairs: list[tuple[int, float]] = []
    seen: set[int] = set()
    for entry in response["response"]:
        if not isinstance(entry, dict):
            raise NeuralRerankError(f"malformed entry: {entry!r}")
        idx, score = entry.get("id"), entry.get("score")
        if isinstance(idx, bool) or not isinstance(idx, int):
            raise NeuralRerankError(f"entry id is not an integer: {idx!r}")
        if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
            raise NeuralRerankError(f"entry score is not a finite number: {score!r}")
        if not 0 <= idx < item_count:
            raise NeuralRerankError(f"entry id {idx} out of range for {item_count} items")
        if idx in seen:
            raise NeuralRerankError(f"duplicate entry id {idx}")
        seen.add(idx)
        pairs.append((idx, float(score)))
    if item_count and not pairs:
        raise NeuralRerankError("response ranked no items")
    return pairs


class AiRerankDelegate:
    """Runs the neural capability and falls back to the math reranker."""

    def __init__(
        self,
        neural: BaseNeuralReranker | None,
        math_reranker: MathReranker,
    ) -> None:
        self._neural = neural
        self._math = math_reranker

    @property
    def neural(self) -> BaseNeuralReranker | None:
        return self._neural

    async def rerank(
        self,
        query: str,
        items: Sequence[Item],
        top_k: int | None = None,
    ) -> AiRerankOutcome:
        """Rank ``items`` with the neural capability, or math on failure."""
        state = AiRerankState.TRY_AI
        try:
            ranked = await self._try_ai(query, items, top_k)
            return AiRerankOutcome(items=ranked, state=state)
        except NeuralRerankError as e:
            reason = str(e)

        state = AiRerankState.MATH
        logger.warning(
            "AI rerank failed, falling back to math: %s", reason,
            extra={"data": {"transition": "try_ai->math", "reason": reason}},
        )
        ranked = await asyncio.to_thread(self._math.rerank, query, items)
        return AiRerankOutcome(items=ranked, state=state, fallback_reason=reason)

    async def _try_ai(
        self,
        query: str,
        items: Sequence[Item],
        top_k: int | None,
    ) -> list[Item]:
        if self._neural is None:
            raise NeuralRerankError("no neural provider configured")

        contexts = [{"text": item.content} for item in items]
        clamped = min(top_k, len(items)) if top_k and top_k > 0 else None
        try:
            response = await self._neural.run(query, contexts, top_k=clamped)
        except NeuralRerankError:
            raise
        except Exception as e:
            raise NeuralRerankError(f"{type(e).__name__}: {e}") from e

        pairs = parse_neural_response(response, len(items))
        # Descending score; equal scores keep input order
        pairs.sort(key=lambda p: (-p[1], p[0]))
        return [items[idx].scored(final_score=score) for idx, score in pairs]
