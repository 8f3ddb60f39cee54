# tests/unit/api/test_facade.py — v1
"""Tests for api/facade.py — in-process rerank entry point."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from smartrerank.api.facade import rerank
from smartrerank.config.settings import Settings
from smartrerank.core.models import Item


class TestFacade:
    @pytest.mark.asyncio
    async def test_mappings_and_models_accepted(self, service):
        items = [
            {"id": "b", "content": "An unrelated essay on gardening."},
            Item(id="a", content="A 2023 paper on machine learning techniques."),
        ]
        result = await rerank("machine learning 2023", items, service=service)
        assert [i.id for i in result.items] == ["a", "b"]
        assert result.method == "math"

    @pytest.mark.asyncio
    async def test_engine_fields_in_mappings_ignored(self, service):
        items = [{"id": "a", "content": "machine learning notes", "finalScore": "high"}]
        result = await rerank("machine learning", items, service=service)
        assert result.items[0].length == len("machine learning notes")
        assert result.items[0].final_score is not None

    @pytest.mark.asyncio
    async def test_missing_content_rejected(self, service):
        with pytest.raises(ValidationError):
            await rerank("q", [{"id": "a"}], service=service)

    @pytest.mark.asyncio
    async def test_owned_service_built_from_settings(self, machine_learning_items):
        settings = Settings(
            _env_file=None, cache_backend="none", nlp_model="xx_missing_model",
            reference_year=2024,
        )
        result = await rerank(
            "machine learning 2023", machine_learning_items, top_k=1, settings=settings,
        )
        assert [i.id for i in result.items] == ["a"]
        assert result.cached is False
