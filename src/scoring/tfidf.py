# src/scoring/tfidf.py — v1
"""TF-IDF overlap similarity between a query and every item of a batch.

The term-weighting model is fitted once per batch over all item token
lists plus the query as an extra pseudo-document; this is the single
cross-item dependency of math scoring.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

logger = logging.getLogger(__name__)


def _identity(tokens: list[str]) -> list[str]:
    return tokens


class TfidfOverlapModel:
    """Fitted TF-IDF weights for one batch of pre-tokenized documents."""

    def __init__(self, query_tokens: Sequence[str], doc_tokens: Sequence[Sequence[str]]) -> None:
        self._n_docs = len(doc_tokens)
        vectorizer = TfidfVectorizer(analyzer=_identity, lowercase=False, norm=None)
        # Query row goes last so document rows keep their input indices
        matrix = vectorizer.fit_transform([list(d) for d in doc_tokens] + [list(query_tokens)])
        query_row = matrix[self._n_docs].toarray().ravel()
        self._query_cols = np.flatnonzero(query_row > 0)
        self._query_weights = query_row[self._query_cols]
        self._doc_weights = matrix[: self._n_docs][:, self._query_cols].toarray()

    def scores(self) -> np.ndarray:
        """``Σ min(query_w, doc_w) / Σ query_w`` for every document."""
        total = float(self._query_weights.sum())
        if self._n_docs == 0 or total <= 0.0:
            return np.zeros(self._n_docs, dtype=np.float64)
        overlap = np.minimum(self._doc_weights, self._query_weights).sum(axis=1)
        return overlap / total


def tfidf_similarities(
    query_tokens: Sequence[str], doc_tokens: Sequence[Sequence[str]]
) -> list[float]:
    """Per-document TF-IDF similarity to the query, 0.0 when no model can be built."""
    if not query_tokens or not doc_tokens:
        return [0.0] * len(doc_tokens)
    try:
        model = TfidfOverlapModel(query_tokens, doc_tokens)
        return [float(s) for s in model.scores()]
    except Exception:
        logger.exception("TF-IDF model construction failed (scores set to 0)")
        return [0.0] * len(doc_tokens)
