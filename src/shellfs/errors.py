"""Error taxonomy for cursor operations.

Every error carries a display-ready message of the form
``"<op>: <why>: <path>"``. Type-mismatch and existence errors also derive
from the matching builtin ``OSError`` subclass so callers catching those
keep working.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "AlreadyExistsError",
    "BackendError",
    "CrossDeviceError",
    "CurrentDirectoryError",
    "FailureReason",
    "IsDirectoryError",
    "MissingOperandError",
    "NoSuchPathError",
    "NotDirectoryError",
    "RecursiveRequiredError",
    "ShellFSError",
    "UnsupportedTypeError",
]


class FailureReason(str, Enum):
    """Why a backend primitive failed."""

    NOT_FOUND = "not-found"
    ALREADY_EXISTS = "already-exists"
    NOT_A_DIRECTORY = "not-a-directory"
    IS_A_DIRECTORY = "is-a-directory"
    NOT_EMPTY = "not-empty"
    CROSS_DEVICE = "cross-device"
    PERMISSION_DENIED = "permission-denied"
    OTHER = "other"


class ShellFSError(Exception):
    """Base class for all cursor errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class MissingOperandError(ShellFSError):
    """A required argument was empty."""


class NoSuchPathError(ShellFSError, FileNotFoundError):
    """The resolved target does not exist."""


class AlreadyExistsError(ShellFSError, FileExistsError):
    """The target exists where uniqueness was required."""


class NotDirectoryError(ShellFSError, NotADirectoryError):
    """The target exists but is not a directory."""


class IsDirectoryError(ShellFSError, IsADirectoryError):
    """The target is a directory where a file was expected."""


class RecursiveRequiredError(ShellFSError):
    """A directory operation was attempted without the recursive option."""


class UnsupportedTypeError(ShellFSError):
    """The source is neither a regular file nor a directory."""


class CurrentDirectoryError(ShellFSError):
    """The target is the current directory or one of its ancestors."""


class BackendError(ShellFSError):
    """A backend primitive failed.

    Attributes:
        reason: Typed failure kind, used by callers to branch.
        path: Path the failing primitive was acting on, if known.
    """

    def __init__(
        self,
        message: str,
        reason: FailureReason = FailureReason.OTHER,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.path = path

    def rewrap(self, message: str) -> BackendError:
        """Return a copy with a new message, preserving reason and path."""
        return type(self)(message, self.reason, self.path)


class CrossDeviceError(BackendError):
    """A rename was refused because source and destination are on different devices."""

    def __init__(
        self,
        message: str,
        reason: FailureReason = FailureReason.CROSS_DEVICE,
        path: str | None = None,
    ) -> None:
        super().__init__(message, FailureReason.CROSS_DEVICE, path)
