"""Host filesystem backend.

RealFileSystem wraps ``os`` and ``shutil`` operations and translates their
``OSError``s into ``BackendError``s with a typed ``FailureReason``, so the
cursor can branch on the reason instead of on errno values.
"""

from __future__ import annotations

import errno
import os
import shutil
import stat as stat_module
from collections.abc import Iterator
from contextlib import contextmanager

from shellfs.errors import BackendError, CrossDeviceError, FailureReason
from shellfs.types import MISSING, PathKind, StatResult

_ERRNO_REASONS = {
    errno.ENOENT: FailureReason.NOT_FOUND,
    errno.EEXIST: FailureReason.ALREADY_EXISTS,
    errno.ENOTDIR: FailureReason.NOT_A_DIRECTORY,
    errno.EISDIR: FailureReason.IS_A_DIRECTORY,
    errno.ENOTEMPTY: FailureReason.NOT_EMPTY,
    errno.EXDEV: FailureReason.CROSS_DEVICE,
    errno.EACCES: FailureReason.PERMISSION_DENIED,
    errno.EPERM: FailureReason.PERMISSION_DENIED,
}


def reason_for(error: OSError) -> FailureReason:
    """Map an OSError to its FailureReason."""
    return _ERRNO_REASONS.get(error.errno, FailureReason.OTHER)


@contextmanager
def translate_errors(op: str, path: str) -> Iterator[None]:
    """Re-raise OSErrors from the block as BackendErrors.

    Args:
        op: Name of the primitive, used as the message prefix.
        path: Path the primitive acts on.
    """
    try:
        yield
    except OSError as e:
        reason = reason_for(e)
        why = (e.strerror or str(e)).lower()
        error_cls = CrossDeviceError if reason is FailureReason.CROSS_DEVICE else BackendError
        raise error_cls(f"{op}: {why}: {path}", reason, path) from e


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library os and shutil operations.
    Satisfies the FileSystemBackend protocol structurally.
    """

    def getcwd(self) -> str:
        """Return the process working directory."""
        return os.getcwd()

    def stat(self, path: str) -> StatResult:
        """Describe what is at a path, following symlinks."""
        try:
            info = os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return MISSING
        except OSError as e:
            raise BackendError(
                f"stat: {(e.strerror or str(e)).lower()}: {path}", reason_for(e), path
            ) from e
        if stat_module.S_ISDIR(info.st_mode):
            return StatResult(PathKind.DIRECTORY)
        if stat_module.S_ISREG(info.st_mode):
            return StatResult(PathKind.FILE, info.st_size)
        return StatResult(PathKind.OTHER)

    def listdir(self, path: str) -> list[str]:
        """List a directory's entries."""
        with translate_errors("listdir", path):
            return os.listdir(path)

    def mkdir(self, path: str) -> None:
        """Create a single directory."""
        with translate_errors("mkdir", path):
            os.mkdir(path)

    def makedirs(self, path: str) -> None:
        """Create a directory and its missing parents."""
        with translate_errors("makedirs", path):
            os.makedirs(path, exist_ok=True)

    def create_file(self, path: str, data: bytes) -> None:
        """Create a new file, failing if it already exists."""
        with translate_errors("create", path), open(path, "xb") as f:
            f.write(data)

    def read_bytes(self, path: str, flag: str = "r") -> bytes:
        """Read raw file contents."""
        with translate_errors("read", path), open(path, f"{flag}b") as f:
            return f.read()

    def read_text(self, path: str, encoding: str, flag: str = "r") -> str:
        """Read file contents as text."""
        with translate_errors("read", path), open(path, flag, encoding=encoding) as f:
            return f.read()

    def unlink(self, path: str) -> None:
        """Remove a file."""
        with translate_errors("unlink", path):
            os.unlink(path)

    def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        with translate_errors("rmdir", path):
            os.rmdir(path)

    def copy_file(self, src: str, dst: str, overwrite: bool = False) -> None:
        """Copy a file's bytes and permission bits."""
        with translate_errors("copy", dst):
            if overwrite:
                shutil.copyfile(src, dst)
            else:
                with open(src, "rb") as fsrc, open(dst, "xb") as fdst:
                    shutil.copyfileobj(fsrc, fdst)
            shutil.copymode(src, dst)

    def rename(self, src: str, dst: str, replace: bool = False) -> None:
        """Rename an entry atomically."""
        with translate_errors("rename", src):
            if replace:
                os.replace(src, dst)
            else:
                os.rename(src, dst)
