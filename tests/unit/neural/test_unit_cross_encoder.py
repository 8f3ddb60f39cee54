# tests/unit/neural/test_cross_encoder.py — v1
"""Tests for neural/cross_encoder.py — mocked CrossEncoder model."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from smartrerank.neural.base_reranker import NeuralRerankError
from smartrerank.neural.cross_encoder import CrossEncoderReranker


class TestCrossEncoderReranker:
    @pytest.mark.asyncio
    async def test_ranked_response(self):
        reranker = CrossEncoderReranker(model="stub")
        model = MagicMock()
        model.predict.return_value = [0.1, 0.9, 0.5]
        with patch.object(CrossEncoderReranker, "_model", model):
            result = await reranker.run("q", [{"text": "a"}, {"text": "b"}, {"text": "c"}])
        assert result == {
            "response": [
                {"id": 1, "score": 0.9},
                {"id": 2, "score": 0.5},
                {"id": 0, "score": 0.1},
            ]
        }
        pairs = model.predict.call_args.args[0]
        assert pairs == [("q", "a"), ("q", "b"), ("q", "c")]

    @pytest.mark.asyncio
    async def test_top_k(self):
        reranker = CrossEncoderReranker(model="stub")
        model = MagicMock()
        model.predict.return_value = [0.1, 0.9, 0.5]
        with patch.object(CrossEncoderReranker, "_model", model):
            result = await reranker.run("q", [{"text": "a"}, {"text": "b"}, {"text": "c"}], top_k=1)
        assert result == {"response": [{"id": 1, "score": 0.9}]}

    @pytest.mark.asyncio
    async def test_inference_error_wrapped(self):
        reranker = CrossEncoderReranker(model="stub")
        model = MagicMock()
        model.predict.side_effect = RuntimeError("CUDA out of memory")
        with patch.object(CrossEncoderReranker, "_model", model):
            with pytest.raises(NeuralRerankError, match="inference failed"):
                await reranker.run("q", [{"text": "a"}])

    @pytest.mark.asyncio
    async def test_missing_package(self):
        import sys
        saved = sys.modules.get("sentence_transformers")
        sys.modules["sentence_transformers"] = None  # type: ignore[assignment]
        try:
            with pytest.raises(NeuralRerankError, match="sentence-transformers"):
                await CrossEncoderReranker(model="stub").run("q", [{"text": "a"}])
        finally:
            if saved is not None:
                sys.modules["sentence_transformers"] = saved
            else:
                sys.modules.pop("sentence_transformers", None)

    def test_names(self):
        reranker = CrossEncoderReranker(model="BAAI/bge-reranker-base")
        assert reranker.provider_name == "cross_encoder"
        assert reranker.model_name == "BAAI/bge-reranker-base"
