# src/rerank/math_reranker.py — v1
"""Multi-factor math reranker.

Final score per item (when at least one named factor is non-zero):

    0.25·vector + 0.25·semantic + 0.20·queryTermMatch + 0.15·string
    + 0.10·fuzzy + 0.03·recency + 0.02·length

When every named factor is zero (excluded or genuinely zero), items are
ordered by raw text similarity: 0.6·string + 0.4·fuzzy.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from datetime import datetime, timezone

from smartrerank.core.models import EXCLUDABLE_FACTORS, Item, ScoreBundle, ScoreTrace
from smartrerank.features.base_extractor import BaseFeatureExtractor
from smartrerank.features.fallback import create_feature_extractor
from smartrerank.scoring.fuzzy import DEFAULT_THRESHOLD, fuzzy_scores
from smartrerank.scoring.heuristics import (
    DEFAULT_RECENCY,
    length_score,
    query_term_match,
    recency_score,
)
from smartrerank.scoring.lexical import string_score
from smartrerank.scoring.semantic import semantic_score
from smartrerank.scoring.tfidf import tfidf_similarities

logger = logging.getLogger(__name__)

FACTOR_WEIGHTS: dict[str, float] = {
    "vector_score": 0.25,
    "semantic_score": 0.25,
    "query_term_match": 0.20,
    "string_score": 0.15,
    "fuzzy_score": 0.10,
    "recency": 0.03,
    "length": 0.02,
}
FALLBACK_WEIGHTS: dict[str, float] = {"string_score": 0.6, "fuzzy_score": 0.4}


def combine_scores(bundle: ScoreBundle) -> float:
    """Collapse a score bundle into the final relevance score."""
    weights = FACTOR_WEIGHTS if bundle.active_factor_count > 0 else FALLBACK_WEIGHTS
    return sum(getattr(bundle, name) * weight for name, weight in weights.items())


class MathReranker:
    """Stateless scoring engine; one instance is shared by all requests."""

    def __init__(
        self,
        extractor: BaseFeatureExtractor | None = None,
        recency_default: float = DEFAULT_RECENCY,
        fuzzy_threshold: float = DEFAULT_THRESHOLD,
        reference_year: int | None = None,
    ) -> None:
        self._extractor = extractor or create_feature_extractor()
        self._recency_default = recency_default
        self._fuzzy_threshold = fuzzy_threshold
        self._reference_year = reference_year

    @property
    def extractor(self) -> BaseFeatureExtractor:
        return self._extractor

    def rerank(
        self,
        query: str,
        items: Sequence[Item],
        exclude_factors: Collection[str] = (),
    ) -> list[Item]:
        """Score and order every item; the list is never truncated.

        Args:
            query: Query text.
            items: Items in caller order (not mutated).
            exclude_factors: Named factors to zero out of the composition.

        Returns:
            Enriched copies of ``items`` sorted by descending ``final_score``,
            ties kept in input order.
        """
        excluded = set(exclude_factors)
        unknown = excluded.difference(EXCLUDABLE_FACTORS)
        if unknown:
            raise ValueError(f"Unknown exclude factors: {sorted(unknown)}")

        bundles = self.score_items(query, items, excluded)
        trace_factors = sorted(excluded)

        scored = [
            item.scored(
                final_score=combine_scores(bundle),
                debug=ScoreTrace(**bundle.model_dump(), excluded_factors=trace_factors),
            )
            for item, bundle in zip(items, bundles)
        ]
        scored.sort(key=lambda it: it.final_score or 0.0, reverse=True)
        return scored

    def score_items(
        self,
        query: str,
        items: Sequence[Item],
        excluded: Collection[str] = (),
    ) -> list[ScoreBundle]:
        """Compute the raw factor bundle of every item, in input order."""
        contents = [item.content for item in items]
        current_year = self._reference_year or datetime.now(timezone.utc).year

        # Cross-item signals first: TF-IDF needs the whole batch
        if "vectorScore" in excluded:
            vector_scores = [0.0] * len(items)
        else:
            vector_scores = tfidf_similarities(
                self._extractor.tokenize(query),
                [self._extractor.tokenize(c) for c in contents],
            )
        fuzzy = fuzzy_scores(query, contents, threshold=self._fuzzy_threshold)
        query_features = (
            None if "semanticScore" in excluded else self._extractor.extract_features(query)
        )

        bundles: list[ScoreBundle] = []
        for i, content in enumerate(contents):
            bundles.append(
                ScoreBundle(
                    vector_score=vector_scores[i],
                    semantic_score=(
                        0.0
                        if query_features is None
                        else semantic_score(
                            query_features, self._extractor.extract_features(content)
                        )
                    ),
                    query_term_match=(
                        0.0 if "queryTermMatch" in excluded else query_term_match(query, content)
                    ),
                    recency=(
                        0.0
                        if "recency" in excluded
                        else recency_score(content, current_year, self._recency_default)
                    ),
                    length=0.0 if "length" in excluded else length_score(query, content),
                    string_score=string_score(query, content),
                    fuzzy_score=fuzzy[i],
                )
            )

        logger.debug(
            "Scored %d items (excluded=%s)", len(bundles), sorted(excluded) or "none"
        )
        return bundles
