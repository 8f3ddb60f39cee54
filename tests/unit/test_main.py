# tests/unit/test_main.py — v1
"""Tests for main.py — CLI entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from smartrerank.main import _build_parser, main


@pytest.fixture
def quiet_env(monkeypatch):
    """Deterministic settings for CLI runs: no cache, regex features, errors only."""
    monkeypatch.setenv("CACHE_BACKEND", "none")
    monkeypatch.setenv("NLP_MODEL", "xx_missing_model")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.setenv("REFERENCE_YEAR", "2024")
    yield
    root = logging.getLogger("smartrerank")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()


@pytest.fixture
def items_file(tmp_path) -> Path:
    path = tmp_path / "items.json"
    path.write_text(json.dumps([
        {"id": "b", "content": "An unrelated essay on gardening."},
        {"id": "a", "content": "A 2023 paper on machine learning techniques."},
        {"id": "c", "content": "Notes on machine learning pipelines."},
    ]), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------

class TestBuildParser:
    def test_version_flag(self, capsys):
        parser = _build_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "smartrerank" in capsys.readouterr().out

    def test_serve_subcommand(self):
        args = _build_parser().parse_args(["serve", "--host", "127.0.0.1", "--port", "9000"])
        assert args.command == "serve"
        assert args.host == "127.0.0.1"
        assert args.port == 9000

    def test_rerank_defaults(self):
        args = _build_parser().parse_args(["rerank", "items.json", "-q", "hello"])
        assert args.file == Path("items.json")
        assert args.query == "hello"
        assert args.mode == "math"
        assert args.top_k is None
        assert args.exclude == []

    def test_rerank_options(self):
        args = _build_parser().parse_args([
            "rerank", "items.json", "-q", "hello", "--mode", "ai",
            "--top-k", "3", "--exclude", "recency", "length",
        ])
        assert args.mode == "ai"
        assert args.top_k == 3
        assert args.exclude == ["recency", "length"]

    def test_rerank_requires_query(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["rerank", "items.json"])

    def test_invalid_mode(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["rerank", "items.json", "-q", "x", "--mode", "hybrid"])


# ---------------------------------------------------------------------------
# Command tests
# ---------------------------------------------------------------------------

class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_rerank_prints_ranked_json(self, quiet_env, items_file, capsys):
        code = main(["rerank", str(items_file), "-q", "machine learning 2023", "--top-k", "2"])
        assert code == 0
        result = json.loads(capsys.readouterr().out)
        assert result["method"] == "math"
        assert result["cached"] is False
        assert [i["id"] for i in result["items"]] == ["a", "c"]

    def test_rerank_missing_file(self, quiet_env, tmp_path):
        assert main(["rerank", str(tmp_path / "nope.json"), "-q", "x"]) == 1

    def test_rerank_empty_array(self, quiet_env, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]", encoding="utf-8")
        assert main(["rerank", str(path), "-q", "x"]) == 1

    def test_rerank_unknown_factor_fails(self, quiet_env, items_file):
        assert main(["rerank", str(items_file), "-q", "x", "--exclude", "popularity"]) == 1

    def test_serve_runs_uvicorn(self, quiet_env):
        with patch("uvicorn.run") as run:
            assert main(["serve", "--port", "9123"]) == 0
        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 9123
