# tests/integration/api/test_rerank_flow.py — v1
"""End-to-end HTTP flow on a real app built from Settings (sqlite cache, no network)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from smartrerank.api.app import create_app
from smartrerank.config.settings import Settings

ITEMS = [
    {"id": "1", "content": "Gardening tips for growing tomatoes and peppers in raised beds."},
    {"id": "2", "content": "A 2023 survey of machine learning methods for ranking search results."},
    {"id": "3", "content": "Medieval castle architecture and its defensive features."},
    {"id": "4", "content": "Machine learning pipelines: feature extraction, training and evaluation."},
    {"id": "5", "content": "Bread baking with sourdough starters explained step by step."},
]


@pytest.fixture
def client(tmp_path):
    settings = Settings(
        _env_file=None,
        cache_backend="sqlite",
        cache_root=tmp_path,
        nlp_model="xx_missing_model",
        reference_year=2024,
    )
    with TestClient(create_app(settings), raise_server_exceptions=False) as c:
        yield c


class TestRerankFlow:
    def test_top_k_is_prefix_and_cache_is_shared(self, client):
        full = client.post("/rerank", json={"query": "machine learning", "items": ITEMS})
        assert full.status_code == 200
        full_items = full.json()["items"]
        assert len(full_items) == 5
        assert {i["id"] for i in full_items[:2]} == {"2", "4"}

        top2 = client.post("/rerank", json={"query": "machine learning", "items": ITEMS, "topK": 2})
        data = top2.json()
        assert data["cached"] is True
        assert data["items"] == full_items[:2]

    def test_top_k_larger_than_list(self, client):
        resp = client.post("/rerank", json={"query": "bread", "items": ITEMS, "topK": 50})
        assert len(resp.json()["items"]) == 5

    def test_ai_without_provider_matches_math(self, client):
        ai = client.post("/rerank", json={"query": "castle", "items": ITEMS, "mode": "ai"}).json()
        math = client.post("/rerank", json={"query": "castle", "items": ITEMS}).json()
        assert ai["method"] == "ai"
        assert ai["items"] == math["items"]
        assert ai["items"][0]["id"] == "3"
