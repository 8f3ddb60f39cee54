# src/neural/base_reranker.py — v1
"""Abstract neural reranking capability.

Implementations receive the query and one ``{"text": ...}`` context per
item (input order) and answer ``{"response": [{"id": index, "score": s}]}``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class NeuralRerankError(Exception):
    """The neural capability failed, timed out or answered malformed data."""


class BaseNeuralReranker(ABC):
    """Unified interface for neural reranking providers."""

    @abstractmethod
    async def run(
        self,
        query: str,
        contexts: list[dict[str, str]],
        top_k: int | None = None,
    ) -> dict[str, Any]:
        """Score contexts against the query in a single attempt.

        Raises:
            NeuralRerankError: On transport or provider failure.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier."""

    async def aclose(self) -> None:
        """Release network or model resources (no-op by default)."""
