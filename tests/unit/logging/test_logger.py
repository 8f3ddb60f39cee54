# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging

from smartrerank.logging.context import clear_context, set_request_context, set_rerank_context
from smartrerank.logging.logger import JsonFormatter, TextFormatter, get_logger, setup_logging


def _record(msg: str = "Hello", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=level, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_request_context("req-1")
        set_rerank_context("math", "rerank:abcd")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"]["request_id"] == "req-1"
        assert parsed["context"]["mode"] == "math"
        assert parsed["context"]["cache_key"] == "rerank:abcd"

    def test_format_with_extra_data(self):
        record = _record()
        record.data = {"transition": "try_ai->math"}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"]["transition"] == "try_ai->math"

    def test_format_with_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys
            record = logging.LogRecord(
                name="test", level=logging.ERROR, pathname="", lineno=0,
                msg="failed", args=(), exc_info=sys.exc_info(),
            )
        parsed = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in parsed["exception"]


class TestTextFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_context(self):
        set_request_context("req-42")
        set_rerank_context("ai")
        output = TextFormatter().format(_record())
        assert "[req-42]" in output
        assert "(ai)" in output


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("test_module")
        assert logger.name == "smartrerank.test_module"


class TestSetupLogging:
    def teardown_method(self):
        root = logging.getLogger("smartrerank")
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            server_logger = logging.getLogger(name)
            server_logger.handlers.clear()
            server_logger.propagate = True

    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("smartrerank")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("smartrerank")
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reinit_does_not_duplicate(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("smartrerank").handlers) == 1

    def test_setup_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "service.log"
        setup_logging(level="INFO", log_file=log_file)
        root = logging.getLogger("smartrerank")
        assert len(root.handlers) == 2
        get_logger("test").info("written to file")
        for handler in root.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_service_name_stamped_on_json(self):
        parsed = json.loads(JsonFormatter(service="Reranker API").format(_record()))
        assert parsed["service"] == "Reranker API"
        assert parsed["logger"] == "test"

    def test_server_loggers_share_handlers(self):
        setup_logging(log_format="text")
        root = logging.getLogger("smartrerank")
        access = logging.getLogger("uvicorn.access")
        assert access.handlers == root.handlers
        assert access.propagate is False
        assert logging.getLogger("uvicorn.error").propagate is True
        assert logging.getLogger("uvicorn.error").handlers == []
