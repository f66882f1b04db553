"""Shared data types for shellfs.

Option records are frozen so a recursive operation can hand the very same
value down to every level.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "CopyOptions",
    "DeleteOptions",
    "MkdirOptions",
    "MoveOptions",
    "PathKind",
    "ReadOptions",
    "StatResult",
]


class PathKind(str, Enum):
    """What a path points at on the backend."""

    MISSING = "missing"
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass(frozen=True)
class StatResult:
    """Outcome of a backend stat call.

    Attributes:
        kind: Type of the entry, MISSING when nothing is there.
        size: Size in bytes (0 for missing entries and directories).
    """

    kind: PathKind
    size: int = 0

    @property
    def exists(self) -> bool:
        return self.kind is not PathKind.MISSING

    @property
    def is_dir(self) -> bool:
        return self.kind is PathKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is PathKind.FILE


MISSING = StatResult(PathKind.MISSING)


@dataclass(frozen=True)
class MkdirOptions:
    """Options for mkdir.

    Attributes:
        silent: Return quietly instead of failing when the target exists.
    """

    silent: bool = False


@dataclass(frozen=True)
class DeleteOptions:
    """Options for delete.

    Attributes:
        recursive: Allow deleting directories and everything below them.
        force: Ignore missing targets and swallow failures.
        silent: Suppress diagnostic logging.
    """

    recursive: bool = False
    force: bool = False
    silent: bool = False


@dataclass(frozen=True)
class CopyOptions:
    """Options for copy.

    Attributes:
        recursive: Allow copying directories.
        overwrite: Replace an existing destination.
        force: Carried through from move's fallback; copy itself ignores it.
        silent: Skip an existing destination quietly and swallow file copy failures.
    """

    recursive: bool = False
    overwrite: bool = False
    force: bool = False
    silent: bool = False


@dataclass(frozen=True)
class MoveOptions:
    """Options for move.

    Attributes:
        overwrite: Replace an existing destination.
        force: Passed to the cleanup delete of a cross-device move.
        silent: Skip an existing destination quietly and swallow rename failures.
    """

    overwrite: bool = False
    force: bool = False
    silent: bool = False


@dataclass(frozen=True)
class ReadOptions:
    """Options for read_file.

    Attributes:
        encoding: Decode contents with this encoding; raw bytes when None.
        flag: Open mode passed to the backend ("r" or "r+").
    """

    encoding: str | None = None
    flag: str = "r"

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.flag not in ("r", "r+"):
            raise ValueError(f"unsupported read flag: {self.flag!r}")
