# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types — all imports come from core.models.
Wire names are camelCase (``finalScore``, ``excludeFactors``); Python
attributes stay snake_case and both are accepted on input.
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ExcludeFactor = Literal[
    "vectorScore", "semanticScore", "length", "recency", "queryTermMatch"
]
RerankMode = Literal["math", "ai"]

EXCLUDABLE_FACTORS: tuple[str, ...] = get_args(ExcludeFactor)


class CamelModel(BaseModel):
    """Base model serialising to camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# === SCORING ===


class ScoreBundle(CamelModel):
    """Per-item raw factor values used to compute the final score.

    The five named factors (``vector_score`` .. ``length``) may be zeroed by
    the caller through exclusions; ``string_score`` and ``fuzzy_score`` are
    always computed.
    """

    vector_score: float = 0.0
    semantic_score: float = 0.0
    query_term_match: float = 0.0
    recency: float = 0.0
    length: float = 0.0
    string_score: float = 0.0
    fuzzy_score: float = 0.0

    def named_factors(self) -> dict[str, float]:
        """Excludable factors keyed by their wire name."""
        return {
            "vectorScore": self.vector_score,
            "semanticScore": self.semantic_score,
            "queryTermMatch": self.query_term_match,
            "recency": self.recency,
            "length": self.length,
        }

    @property
    def active_factor_count(self) -> int:
        return sum(1 for v in self.named_factors().values() if v > 0)


class ScoreTrace(ScoreBundle):
    """Debug trace attached to math-ranked items (non-authoritative)."""

    excluded_factors: list[ExcludeFactor] = Field(default_factory=list)


# === ITEMS ===


class ItemInput(CamelModel):
    """An item as supplied by a caller: only ``id`` and ``content`` are read.

    Engine-computed fields (``length``, ``finalScore``, ``debug``) sent on
    input are dropped unvalidated.
    """

    id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)

    def to_item(self) -> Item:
        return Item(id=self.id, content=self.content)


class Item(CamelModel):
    """A caller-supplied text item, enriched by the engine on output.

    ``length`` and ``final_score`` are engine-computed; values sent by the
    caller are never used.
    """

    id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    length: int | None = None
    final_score: float | None = None
    debug: ScoreTrace | None = None

    def scored(self, final_score: float, debug: ScoreTrace | None = None) -> Item:
        """Return an enriched copy; the original item is left untouched."""
        return self.model_copy(
            update={
                "final_score": final_score,
                "length": len(self.content),
                "debug": debug,
            }
        )


class RankedResult(CamelModel):
    """Full ranked list — the unit stored in and read from the cache."""

    items: list[Item]
    method: RerankMode
    cached: bool = False
