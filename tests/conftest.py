"""Shared test fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from shellfs.cursor import DirectoryCursor
from shellfs.filesystem import RealFileSystem
from shellfs.logger import LOGGER_NAME
from shellfs.memory import MemoryFileSystem


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo any handler/level changes made to the package and cursor loggers."""
    saved = [
        (logger, list(logger.handlers), logger.level, logger.propagate)
        for logger in (logging.getLogger(LOGGER_NAME), logging.getLogger(f"{LOGGER_NAME}.cursor"))
    ]
    yield
    for logger, handlers, level, propagate in saved:
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate


# ============================================================================
# Backend Fixtures
# ============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """Create a mock diagnostic sink that records every call."""
    return MagicMock()


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Create an in-memory filesystem with a second mount at /mnt/usb."""
    return MemoryFileSystem(cwd="/home/user", mounts=("/mnt/usb",))


@pytest.fixture
def cursor(memory_fs: MemoryFileSystem, mock_logger: MagicMock) -> DirectoryCursor:
    """Create a cursor over the in-memory filesystem, starting in /home/user."""
    return DirectoryCursor(memory_fs, mock_logger)


@pytest.fixture(params=["memory", "real"])
def any_cursor(
    request: pytest.FixtureRequest, tmp_path: Path, mock_logger: MagicMock
) -> DirectoryCursor:
    """Create a cursor over each backend, starting in an empty directory."""
    if request.param == "memory":
        return DirectoryCursor(MemoryFileSystem(cwd="/work"), mock_logger)
    return DirectoryCursor(RealFileSystem(), mock_logger, start=tmp_path)


@pytest.fixture
def populated(cursor: DirectoryCursor) -> DirectoryCursor:
    """Cursor whose directory holds a small project tree.

    Layout::

        project/
            README.md
            src/
                main.py
                data.bin
            docs/
    """
    cursor.mkdir("project")
    cursor.touch("project/README.md", "# Project\n")
    cursor.mkdir("project/src")
    cursor.touch("project/src/main.py", "print('hi')\n")
    cursor.touch("project/src/data.bin", bytes(range(256)))
    cursor.mkdir("project/docs")
    return cursor
