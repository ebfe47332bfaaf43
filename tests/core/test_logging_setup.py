"""Tests for ``sqlsamples.core.logging``."""

from __future__ import annotations

import json

import pytest
import structlog

from sqlsamples.core.logging import LogContext, clear_context, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    clear_context()
    structlog.reset_defaults()


def _events(captured: str) -> list[dict]:
    return [json.loads(line) for line in captured.splitlines() if line.startswith("{")]


class TestConfigureLogging:
    def test_json_lines_on_stderr(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger("tests").info("seed.loaded", rows=3)
        captured = capsys.readouterr()
        assert captured.out == ""
        (event,) = _events(captured.err)
        assert event["event"] == "seed.loaded"
        assert event["rows"] == 3
        assert event["service.name"] == "sqlsamples"
        assert event["log.level"] == "info"
        assert "@timestamp" in event

    def test_level_filters(self, capsys):
        configure_logging(level="WARNING", json_format=True)
        get_logger("tests").info("example.run")
        get_logger("tests").warning("example.failed")
        events = _events(capsys.readouterr().err)
        assert [e["event"] for e in events] == ["example.failed"]

    def test_log_context_binds_and_unbinds(self, capsys):
        configure_logging(level="INFO", json_format=True)
        logger = get_logger("tests")
        with LogContext(topic="recursive"):
            logger.info("example.run")
        logger.info("example.run")
        first, second = _events(capsys.readouterr().err)
        assert first["topic"] == "recursive"
        assert "topic" not in second
