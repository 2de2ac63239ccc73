"""
Tests for logging setup.

Covers:
- JSON lines on the chosen stream
- Stdlib records rendered like structlog events
- Console output without colors off a terminal
- Quieted library loggers
"""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from jsonmend.config.logging import setup_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


class TestJsonFormat:
    """Test the machine-readable format."""

    def test_event_is_one_json_line(self) -> None:
        stream = io.StringIO()
        setup_logging("INFO", "json", stream=stream)
        structlog.get_logger("jsonmend.test").info("document_repaired", chars=12)

        record = json.loads(stream.getvalue().strip())
        assert record["event"] == "document_repaired"
        assert record["chars"] == 12
        assert record["level"] == "info"
        assert record["logger"] == "jsonmend.test"
        assert "timestamp" in record

    def test_stdlib_record_rendered_as_json(self) -> None:
        stream = io.StringIO()
        setup_logging("INFO", "json", stream=stream)
        logging.getLogger("uvicorn.error").warning("port in use")

        record = json.loads(stream.getvalue().strip())
        assert record["event"] == "port in use"
        assert record["level"] == "warning"

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        setup_logging("ERROR", "json", stream=stream)
        structlog.get_logger("jsonmend.test").info("lenient_parse_failed")
        assert stream.getvalue() == ""


class TestConsoleFormat:
    """Test the human-readable format."""

    def test_no_colors_off_a_terminal(self) -> None:
        stream = io.StringIO()
        setup_logging("INFO", "console", stream=stream)
        structlog.get_logger("jsonmend.test").info("repair_failed", stage="repair")

        output = stream.getvalue()
        assert "repair_failed" in output
        assert "stage=repair" in output
        assert "\x1b[" not in output


class TestNoisyLoggers:
    def test_access_log_quieted(self) -> None:
        setup_logging("DEBUG", "json", stream=io.StringIO())
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger().level == logging.DEBUG
