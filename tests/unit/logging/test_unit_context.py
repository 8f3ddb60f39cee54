# tests/unit/logging/test_context.py — v1
"""Tests for logging/context.py — contextual logging variables."""

from __future__ import annotations

from smartrerank.logging.context import (
    clear_context,
    get_context,
    set_request_context,
    set_rerank_context,
)


class TestLogContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_initial_state(self):
        ctx = get_context()
        assert ctx.request_id is None
        assert ctx.mode is None
        assert ctx.cache_key is None

    def test_set_request_context(self):
        set_request_context("req1")
        assert get_context().request_id == "req1"

    def test_set_rerank_context(self):
        set_rerank_context("ai", "rerank:0123456789abcdef")
        ctx = get_context()
        assert ctx.mode == "ai"
        assert ctx.cache_key == "rerank:0123456789abcdef"

    def test_as_dict_filters_none(self):
        set_request_context("req1")
        d = get_context().as_dict()
        assert d == {"request_id": "req1"}

    def test_clear(self):
        set_request_context("req1")
        set_rerank_context("math")
        clear_context()
        assert get_context().as_dict() == {}
