"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from odtctl.config.logging import clear_run_context, configure_logging, run_context


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    odt = logging.getLogger("odtctl")
    odt_level = odt.level
    yield
    clear_run_context()
    root.handlers = original_handlers
    root.setLevel(original_level)
    odt.setLevel(odt_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("odtctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("odtctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("odtctl.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "odtctl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("odtctl.infrastructure.launcher").debug("Launched %s", "xdg-open")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Launched xdg-open"
        assert parsed["level"] == "debug"

    def test_run_context_is_attached(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        with run_context(folder="20250806"):
            logging.getLogger("odtctl.services.create").warning("hello")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["folder"] == "20250806"

    def test_debug_hidden_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("odtctl.services.create").debug("noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_run_context_ends_with_block(self) -> None:
        with run_context(folder="20250806", filename="notes"):
            assert structlog.contextvars.get_contextvars()["folder"] == "20250806"
        assert "folder" not in structlog.contextvars.get_contextvars()
