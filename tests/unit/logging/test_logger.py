# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging

from transcache.logging.context import set_pipeline_context, set_source_context
from transcache.logging.logger import JsonFormatter, TextFormatter, get_logger, setup_logging


def _record(msg: str = "Hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_source_context("app/main.src")
        set_pipeline_context("abc123")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"] == {"filename": "app/main.src", "fingerprint": "abc123"}

    def test_format_with_data(self):
        record = _record()
        record.data = {"path": "/tmp/x"}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"] == {"path": "/tmp/x"}


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_context(self):
        set_source_context("app/main.src")
        set_pipeline_context("0123456789abcdef")
        output = TextFormatter().format(_record())
        assert "[app/main.src]" in output
        assert "(0123456789ab)" in output


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("test_module")
        assert logger.name == "transcache.test_module"


class TestSetupLogging:
    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("transcache")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("transcache")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_no_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("transcache").handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "transcache.log"
        setup_logging(log_file=str(log_file))
        root = logging.getLogger("transcache")
        try:
            assert len(root.handlers) == 2
            root.info("written")
            for h in root.handlers:
                h.flush()
            assert "written" in log_file.read_text(encoding="utf-8")
        finally:
            for h in root.handlers:
                h.close()
            root.handlers.clear()
