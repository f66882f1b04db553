"""Protocol definitions for the cursor's collaborators.

The cursor is written against these interfaces rather than concrete classes:
- FileSystemBackend: the primitive filesystem operations it composes
- DiagnosticSink: where progress and error messages go

Implementations satisfy these protocols structurally (duck typing), so a
``ShellLogger`` is a valid sink and an in-memory store is a valid backend.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from shellfs.logger import LogLevel
from shellfs.types import StatResult


@runtime_checkable
class FileSystemBackend(Protocol):
    """Protocol for primitive filesystem operations.

    Query methods (``stat``) report a missing path as a result value.
    Mutating methods raise ``BackendError`` carrying a ``FailureReason``.
    All paths are absolute and already normalized by the caller.
    """

    def getcwd(self) -> str:
        """Return the ambient working directory used as the cursor's start."""
        ...

    def stat(self, path: str) -> StatResult:
        """Describe what is at a path.

        Args:
            path: Absolute path.

        Returns:
            StatResult whose kind is MISSING when nothing exists there.
        """
        ...

    def listdir(self, path: str) -> list[str]:
        """List the names of a directory's direct children.

        Args:
            path: Absolute directory path.

        Returns:
            Entry names in the backend's native order.
        """
        ...

    def mkdir(self, path: str) -> None:
        """Create a single directory level."""
        ...

    def makedirs(self, path: str) -> None:
        """Create a directory together with any missing ancestors."""
        ...

    def create_file(self, path: str, data: bytes) -> None:
        """Create a new file with the given bytes, failing if it exists."""
        ...

    def read_bytes(self, path: str, flag: str = "r") -> bytes:
        """Read a file's raw contents."""
        ...

    def read_text(self, path: str, encoding: str, flag: str = "r") -> str:
        """Read a file's contents decoded with an encoding."""
        ...

    def unlink(self, path: str) -> None:
        """Remove a file."""
        ...

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        ...

    def copy_file(self, src: str, dst: str, overwrite: bool = False) -> None:
        """Copy a file's bytes.

        Args:
            src: Source file path.
            dst: Destination file path.
            overwrite: Replace an existing destination; otherwise the
                destination is created exclusively.
        """
        ...

    def rename(self, src: str, dst: str, replace: bool = False) -> None:
        """Atomically rename an entry.

        Raises:
            BackendError: With reason CROSS_DEVICE when src and dst live on
                different devices.
        """
        ...


@runtime_checkable
class DiagnosticSink(Protocol):
    """Protocol for the cursor's diagnostic output.

    Logging methods match the ``logging.Logger`` call signature. The level
    is exposed in LogLevel terms so callers can quiet or raise the output.
    """

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    @property
    def level(self) -> LogLevel: ...

    def set_level(self, level: LogLevel | str) -> None: ...
