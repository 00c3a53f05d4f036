# tests/unit/core/test_logging.py
"""Tests for structured logging configuration."""

import json
import logging
from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        from cyclic_schema.core.logging import get_logger

        logger = get_logger("test")
        assert hasattr(logger, "debug")
        assert hasattr(logger, "bind")

    def test_logger_outputs_structured(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs structured JSON."""
        from cyclic_schema.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        logger = get_logger("test")

        logger.info("test message", key="value")

        captured = capsys.readouterr()
        log_line = captured.out.strip().split("\n")[-1]
        data = json.loads(log_line)
        assert data["event"] == "test message"
        assert data["key"] == "value"
        assert "_record" not in data

    def test_logger_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs human-readable in console mode."""
        from cyclic_schema.core.logging import configure_logging, get_logger

        configure_logging(json_output=False)
        logger = get_logger("test")

        logger.info("test message", key="value")

        captured = capsys.readouterr()
        assert "test message" in captured.out
        assert not captured.out.strip().startswith("{")

    def test_engine_silent_without_configuration(self, capsys: pytest.CaptureFixture[str]) -> None:
        """An application that never configures logging sees no engine output."""
        from cyclic_schema import validate_in_place
        from tests.conftest import make_user_schema

        structlog.reset_defaults()
        me: dict[str, object] = {"name": "me"}
        me["friend"] = me

        assert validate_in_place(make_user_schema(), me).ok

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_engine_debug_events_silent_at_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Engine events stay quiet unless DEBUG is requested."""
        from cyclic_schema import validate_in_place
        from cyclic_schema.core.logging import configure_logging
        from cyclic_schema.schema import scalar

        configure_logging(json_output=True, level="INFO")

        validate_in_place(scalar(int), 1)

        assert "validation_finished" not in capsys.readouterr().out

    def test_engine_debug_events_emitted_at_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        from cyclic_schema import validate_in_place
        from cyclic_schema.core.logging import configure_logging
        from cyclic_schema.schema import scalar

        configure_logging(json_output=True, level="DEBUG")

        validate_in_place(scalar(int), 1)

        lines = [json.loads(line) for line in capsys.readouterr().out.strip().split("\n")]
        finished = [line for line in lines if line["event"] == "validation_finished"]
        assert finished[0]["variant"] == "in_place"
        assert finished[0]["ok"] is True

    def test_stdlib_loggers_emit_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """stdlib loggers share the structlog output format."""
        from cyclic_schema.core.logging import configure_logging

        configure_logging(json_output=True)
        logging.getLogger("some.library").warning("from stdlib")

        data = json.loads(capsys.readouterr().out.strip().split("\n")[-1])
        assert data["event"] == "from stdlib"
        assert data["level"] == "warning"
