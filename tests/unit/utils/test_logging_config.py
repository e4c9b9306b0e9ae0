"""Tests for pargrep.utils.logging_config module."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pargrep.utils.logging_config import (
    JsonFormatter,
    LogFormat,
    LogLevel,
    SearchLogger,
    StructuredFormatter,
    configure_logging,
    disable_logging,
    enable_debug_logging,
    get_logger,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("pargrep", logging.INFO, __file__, 1, "hello", None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


class TestSearchLogger:
    def test_reconfigure_replaces_handlers(self):
        SearchLogger(level=LogLevel.INFO)
        logger = SearchLogger(level=LogLevel.INFO)
        assert len(logger.logger.handlers) == 1
        assert logger.logger.propagate is False

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "pargrep.log"
        logger = SearchLogger(
            level=LogLevel.DEBUG, log_file=log_file, enable_file=True, enable_console=False
        )
        logger.log_file_error("a.txt", "boom", operation="scan")
        for handler in logger.logger.handlers:
            handler.flush()
        assert "Skipping a.txt: boom" in log_file.read_text(encoding="utf-8")

    def test_file_errors_only_at_debug(self, tmp_path: Path):
        log_file = tmp_path / "pargrep.log"
        logger = SearchLogger(
            level=LogLevel.INFO, log_file=log_file, enable_file=True, enable_console=False
        )
        logger.log_file_error("a.txt", "boom")
        logger.log_search_start("foo", ".")
        for handler in logger.logger.handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "a.txt" not in content
        assert "Starting search for pattern: 'foo'" in content


class TestFormatters:
    def test_json_includes_extra(self):
        data = json.loads(JsonFormatter().format(_record(operation="scan")))
        assert data["message"] == "hello"
        assert data["operation"] == "scan"
        assert data["level"] == "INFO"

    def test_structured_includes_extra(self):
        line = StructuredFormatter().format(_record(pattern="foo"))
        assert "[INFO] pargrep: hello" in line
        assert line.endswith("| pattern=foo")


class TestGlobalLogger:
    def test_configure_sets_global(self):
        logger = configure_logging(level=LogLevel.ERROR, format_type=LogFormat.JSON)
        assert get_logger() is logger
        assert isinstance(logger.logger.handlers[0].formatter, JsonFormatter)

    def test_enable_and_disable(self):
        configure_logging(level=LogLevel.WARNING)
        enable_debug_logging()
        assert get_logger().logger.level == logging.DEBUG
        disable_logging()
        assert get_logger().logger.level > logging.CRITICAL
