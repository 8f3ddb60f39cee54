# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides sample items, a regex-only math reranker (no spaCy model needed),
in-memory caches and a mocked neural capability. No external dependencies.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from smartrerank.cache.memory_store import MemoryCacheStore
from smartrerank.cache.result_cache import ResultCache
from smartrerank.core.models import Item
from smartrerank.features.regex_extractor import RegexFeatureExtractor
from smartrerank.neural.base_reranker import BaseNeuralReranker
from smartrerank.rerank.ai_reranker import AiRerankDelegate
from smartrerank.rerank.math_reranker import MathReranker
from smartrerank.rerank.service import RerankService

REFERENCE_YEAR = 2024


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_items() -> list[Item]:
    """Five items with clearly different relevance to 'machine learning'."""
    return [
        Item(id="garden", content="An unrelated essay on gardening and growing tomatoes in spring."),
        Item(id="ml2023", content="A 2023 paper on machine learning techniques for text ranking."),
        Item(id="cooking", content="Recipes for slow cooked stews and fresh bread."),
        Item(id="mlintro", content="Introduction to machine learning: models, training data and evaluation."),
        Item(id="history", content="A short history of medieval castles written in 2009."),
    ]


@pytest.fixture
def machine_learning_items() -> list[Item]:
    return [
        Item(id="a", content="A 2023 paper on machine learning techniques."),
        Item(id="b", content="An unrelated essay on gardening."),
    ]


# === FIXTURES: Engine ===


@pytest.fixture
def math_reranker() -> MathReranker:
    """Math reranker on the regex extractor with a pinned reference year."""
    return MathReranker(extractor=RegexFeatureExtractor(), reference_year=REFERENCE_YEAR)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def result_cache(memory_store: MemoryCacheStore) -> ResultCache:
    return ResultCache(memory_store, ttl_seconds=3600)


@pytest.fixture
def mock_neural() -> AsyncMock:
    """Mock neural capability; set ``run.return_value`` per test."""
    neural = AsyncMock(spec=BaseNeuralReranker)
    neural.provider_name = "mock"
    neural.model_name = "mock-model"
    neural.run.return_value = {"response": []}
    return neural


@pytest.fixture
def service(
    math_reranker: MathReranker,
    result_cache: ResultCache,
    mock_neural: AsyncMock,
) -> RerankService:
    return RerankService(
        math_reranker=math_reranker,
        ai_delegate=AiRerankDelegate(mock_neural, math_reranker),
        result_cache=result_cache,
    )
