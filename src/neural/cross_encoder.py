# src/neural/cross_encoder.py — v1
"""Local cross-encoder adapter (sentence-transformers).

Models: BAAI/bge-reranker-base, cross-encoder/ms-marco-MiniLM-L-6-v2, etc.
The model is loaded on first use; inference runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from smartrerank.neural.base_reranker import BaseNeuralReranker, NeuralRerankError

logger = logging.getLogger(__name__)


class CrossEncoderReranker(BaseNeuralReranker):
    """Neural reranking with a locally loaded CrossEncoder."""

    def __init__(self, model: str = "BAAI/bge-reranker-base") -> None:
        self._model_name = model
        self.__model = None

    @property
    def _model(self):
        if self.__model is None:
            try:
                from sentence_transformers import CrossEncoder
            except ImportError as e:
                raise NeuralRerankError(
                    "sentence-transformers package required: "
                    "pip install sentence-transformers"
                ) from e
            logger.info("Loading cross-encoder %s", self._model_name)
            self.__model = CrossEncoder(self._model_name)
        return self.__model

    def _predict(self, query: str, texts: list[str]) -> list[float]:
        scores = self._model.predict([(query, t) for t in texts], show_progress_bar=False)
        return [float(s) for s in scores]

    async def run(
        self,
        query: str,
        contexts: list[dict[str, str]],
        top_k: int | None = None,
    ) -> dict[str, Any]:
        texts = [c["text"] for c in contexts]
        try:
            scores = await asyncio.to_thread(self._predict, query, texts)
        except NeuralRerankError:
            raise
        except Exception as e:
            raise NeuralRerankError(f"Cross-encoder inference failed: {e}") from e

        ranked = sorted(
            ({"id": i, "score": s} for i, s in enumerate(scores)),
            key=lambda r: r["score"],
            reverse=True,
        )
        if top_k:
            ranked = ranked[:top_k]
        return {"response": ranked}

    @property
    def provider_name(self) -> str:
        return "cross_encoder"

    @property
    def model_name(self) -> str:
        return self._model_name
