"""Tests for the opt-in logging helpers."""

from __future__ import annotations

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

import sorttrace
from sorttrace.logging_config import (
    ENV_LEVEL,
    LOGGER_NAME,
    configure_from_env,
    disable_logging,
    enable_console_logging,
    set_level,
)


def _rich_handlers() -> list:
    return [h for h in logging.getLogger(LOGGER_NAME).handlers if isinstance(h, RichHandler)]


def test_library_is_silent_by_default() -> None:
    handlers = logging.getLogger(LOGGER_NAME).handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
    assert _rich_handlers() == []


def test_enable_console_logging_writes_records() -> None:
    buf = io.StringIO()
    enable_console_logging(level="DEBUG", console=Console(file=buf, width=200))

    sorttrace.run("bubble", [2, 1])

    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
    assert "Bubble Sort: n=2" in buf.getvalue()


def test_enable_console_logging_replaces_previous_handler() -> None:
    enable_console_logging(level="INFO", console=Console(file=io.StringIO()))
    enable_console_logging(level="WARNING", console=Console(file=io.StringIO()))

    handlers = _rich_handlers()
    assert len(handlers) == 1
    assert handlers[0].level == logging.WARNING


def test_set_level_updates_logger_and_handlers() -> None:
    handler = enable_console_logging(level="INFO", console=Console(file=io.StringIO()))
    set_level("ERROR")

    assert logging.getLogger(LOGGER_NAME).level == logging.ERROR
    assert handler.level == logging.ERROR


def test_disable_logging_keeps_null_handler() -> None:
    enable_console_logging(console=Console(file=io.StringIO()))
    disable_logging()

    logger = logging.getLogger(LOGGER_NAME)
    assert _rich_handlers() == []
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
    assert not logger.isEnabledFor(logging.CRITICAL)


def test_configure_from_env(monkeypatch) -> None:
    monkeypatch.delenv(ENV_LEVEL, raising=False)
    assert configure_from_env() is None
    assert _rich_handlers() == []

    monkeypatch.setenv(ENV_LEVEL, "debug")
    handler = configure_from_env()
    assert isinstance(handler, RichHandler)
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
