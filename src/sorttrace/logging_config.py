"""
Logging configuration for sorttrace.

The library is silent by default (the `sorttrace` logger carries only a
NullHandler). Applications opt in:

    import sorttrace
    sorttrace.enable_console_logging(level="DEBUG")

    # or from the environment
    sorttrace.configure_from_env()

Environment variables:
    SORTTRACE_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

import logging
import os
from typing import Literal, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "LOGGER_NAME",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "set_level",
]

LOGGER_NAME = "sorttrace"
ENV_LEVEL = "SORTTRACE_LOGGING"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _get_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def enable_console_logging(
    level: Union[LogLevel, int] = "INFO",
    console: Optional[Console] = None,
) -> RichHandler:
    """
    Send sorttrace log records to a rich console (stderr by default).

    Calling this again replaces the previous console handler.
    """
    _clear_handlers()
    logger = _get_logger()
    logger.setLevel(_get_level(level))

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(_get_level(level))
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return handler


def set_level(level: Union[LogLevel, int]) -> None:
    logger = _get_logger()
    logger.setLevel(_get_level(level))
    for handler in logger.handlers:
        handler.setLevel(_get_level(level))


def disable_logging() -> None:
    """Drop all handlers except the NullHandler and silence the logger."""
    _clear_handlers()
    _get_logger().setLevel(logging.CRITICAL + 1)


def configure_from_env() -> Optional[RichHandler]:
    """Enable console logging when SORTTRACE_LOGGING is set; otherwise no-op."""
    level = os.environ.get(ENV_LEVEL)
    if not level:
        return None
    return enable_console_logging(level=level.upper())  # type: ignore[arg-type]
