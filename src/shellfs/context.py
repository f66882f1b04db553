"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

Dependencies are typed using Protocols rather than concrete implementations,
so an in-memory backend or a mock logger can be swapped in without
inheritance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from shellfs.config import Settings
from shellfs.cursor import DirectoryCursor
from shellfs.protocols import DiagnosticSink, FileSystemBackend


def _default_filesystem() -> FileSystemBackend:
    """Create the default filesystem implementation."""
    from shellfs.filesystem import RealFileSystem
    return RealFileSystem()


def _default_logger() -> DiagnosticSink:
    """Return the cursor logger."""
    from shellfs.logger import get_logger
    return get_logger("cursor")


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for everything CLI commands use.
    """

    settings: Settings = field(default_factory=Settings)
    filesystem: FileSystemBackend = field(default_factory=_default_filesystem)
    logger: DiagnosticSink = field(default_factory=_default_logger)

    def make_cursor(self, start: str | Path | None = None) -> DirectoryCursor:
        """Build a cursor wired to this context.

        Args:
            start: Starting directory. Falls back to ``settings.start_dir``,
                then to the backend's working directory.

        Returns:
            A new DirectoryCursor.
        """
        return DirectoryCursor(
            filesystem=self.filesystem,
            logger=self.logger,
            start=start or self.settings.start_dir,
        )


def create_context(
    settings: Settings | None = None,
    filesystem: FileSystemBackend | None = None,
    console: Console | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Reads settings from the environment, configures logging, and wires the
    host filesystem. Use this in production code. For tests, construct
    AppContext directly with test doubles.

    Args:
        settings: Override settings (read from the environment if None).
        filesystem: Override backend (host filesystem if None).
        console: Console the log handler writes to (stderr if None).

    Returns:
        Configured AppContext.
    """
    from shellfs.filesystem import RealFileSystem
    from shellfs.logger import configure_logging, get_logger

    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, console)

    return AppContext(
        settings=settings,
        filesystem=filesystem or RealFileSystem(),
        logger=get_logger("cursor"),
    )
