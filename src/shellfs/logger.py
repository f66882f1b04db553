"""Diagnostic logging for shellfs.

The cursor writes to a ``ShellLogger``, a ``logging.LoggerAdapter`` that
adds shell-style level control (including ``off``). This module also
installs the colored Rich console handler for interactive use.
"""

from __future__ import annotations

import logging
from enum import Enum

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "LOGGER_NAME",
    "OFF",
    "LogLevel",
    "ShellLogger",
    "configure_logging",
    "get_level",
    "get_logger",
    "set_level",
]

LOGGER_NAME = "shellfs"

# Above CRITICAL, so nothing the cursor emits gets through
OFF = logging.CRITICAL + 10


class LogLevel(str, Enum):
    """Minimum severity a logger lets through."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    OFF = "off"

    @property
    def logging_level(self) -> int:
        """Equivalent ``logging`` module level."""
        return _TO_LOGGING[self]

    @classmethod
    def from_logging_level(cls, level: int) -> LogLevel:
        """Map a ``logging`` level back to the closest LogLevel at or below it."""
        for candidate in (cls.OFF, cls.ERROR, cls.WARN, cls.INFO):
            if level >= candidate.logging_level:
                return candidate
        return cls.DEBUG


_TO_LOGGING = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.OFF: OFF,
}


def set_level(logger: logging.Logger | logging.LoggerAdapter, level: LogLevel | str) -> None:
    """Set a logger's minimum level from a shell-style name."""
    logger.setLevel(LogLevel(level).logging_level)


def get_level(logger: logging.Logger | logging.LoggerAdapter) -> LogLevel:
    """Return a logger's effective level as a LogLevel."""
    return LogLevel.from_logging_level(logger.getEffectiveLevel())


class ShellLogger(logging.LoggerAdapter):
    """Diagnostic sink handed to the cursor.

    Logging calls pass straight through to the wrapped logger; ``level`` and
    ``set_level`` speak in LogLevel names.
    """

    def __init__(self, logger: logging.Logger) -> None:
        super().__init__(logger, {})

    @property
    def level(self) -> LogLevel:
        """Effective minimum level."""
        return get_level(self.logger)

    def set_level(self, level: LogLevel | str) -> None:
        """Change the minimum level, e.g. ``"off"`` to silence the cursor."""
        set_level(self.logger, level)


def get_logger(name: str | None = None) -> ShellLogger:
    """Return a sink for the package logger or one of its children.

    Args:
        name: Child name; ``"cursor"`` yields ``shellfs.cursor``.
    """
    return ShellLogger(logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME))


def configure_logging(
    level: LogLevel | str = LogLevel.WARN,
    console: Console | None = None,
) -> logging.Logger:
    """Attach a Rich handler to the package logger and set its level.

    Calling this again replaces the previously installed handler.

    Args:
        level: Minimum level to emit.
        console: Console to write to. Defaults to stderr.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        log_time_format="[%d/%m/%Y %I:%M:%S %p]",
    )
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    set_level(logger, level)
    return logger
