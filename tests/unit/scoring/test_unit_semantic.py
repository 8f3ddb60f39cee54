# tests/unit/scoring/test_semantic.py — v1
"""Tests for scoring/semantic.py — weighted feature overlap."""

from __future__ import annotations

import pytest

from smartrerank.features.models import TextFeatures
from smartrerank.scoring.semantic import overlap_ratio, semantic_score


class TestOverlapRatio:
    def test_case_insensitive(self):
        assert overlap_ratio(["NASA", "mars"], ["nasa"]) == 0.5

    def test_empty_query(self):
        assert overlap_ratio([], ["x"]) == 0.0


class TestSemanticScore:
    def test_no_overlap(self):
        q = TextFeatures(nouns=["machine"])
        c = TextFeatures(nouns=["garden"])
        assert semantic_score(q, c) == 0.0

    def test_renormalised_over_nonzero_features(self):
        # Only nouns overlap (fully): the score is 1.0, not the raw 0.2 weight
        q = TextFeatures(nouns=["machine"], phrases=["machine learning"])
        c = TextFeatures(nouns=["machine"], phrases=["deep vision"])
        assert semantic_score(q, c) == pytest.approx(1.0)

    def test_weighted_average(self):
        q = TextFeatures(phrases=["a b", "c d"], concepts=["nasa"])
        c = TextFeatures(phrases=["a b"], concepts=["nasa"])
        # (0.5*0.4 + 1.0*0.3) / (0.4 + 0.3)
        assert semantic_score(q, c) == pytest.approx(0.5 / 0.7)

    def test_bounded(self):
        q = TextFeatures(nouns=["x"], topics=["y"], phrases=["p q"], concepts=["z"])
        assert semantic_score(q, q) == pytest.approx(1.0)
