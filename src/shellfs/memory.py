"""In-memory filesystem backend.

MemoryFileSystem keeps a POSIX-style tree in dictionaries. It exists so the
cursor can be exercised without touching the host, and it can simulate the
conditions a single real disk rarely produces on demand:

- mount points, so renames between them fail with CROSS_DEVICE
- denied paths, so mutations on them fail with PERMISSION_DENIED
- special entries (device-like nodes that are neither file nor directory)
"""

from __future__ import annotations

import posixpath

from shellfs.errors import BackendError, CrossDeviceError, FailureReason
from shellfs.types import MISSING, PathKind, StatResult

ROOT = "/"


def _error(op: str, why: str, path: str, reason: FailureReason) -> BackendError:
    error_cls = CrossDeviceError if reason is FailureReason.CROSS_DEVICE else BackendError
    return error_cls(f"{op}: {why}: {path}", reason, path)


class MemoryFileSystem:
    """Dictionary-backed filesystem.

    Satisfies the FileSystemBackend protocol structurally. Directory
    listings preserve insertion order.

    Attributes:
        cwd: Path reported by ``getcwd``.
        mounts: Mount point paths; the root is always a mount.
    """

    def __init__(self, cwd: str = ROOT, mounts: tuple[str, ...] = ()) -> None:
        """Initialize an empty tree containing only the root directory.

        Args:
            cwd: Ambient working directory. Created if missing.
            mounts: Extra mount points. Each is created as a directory.
        """
        self._dirs: dict[str, list[str]] = {ROOT: []}
        self._files: dict[str, bytes] = {}
        self._special: set[str] = set()
        self._denied: set[str] = set()
        self.mounts = (ROOT, *(posixpath.normpath(m) for m in mounts))
        for mount in self.mounts[1:]:
            self.makedirs(mount)
        self.cwd = posixpath.normpath(cwd)
        self.makedirs(self.cwd)

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------

    def add_special(self, path: str) -> None:
        """Create an entry that is neither a regular file nor a directory."""
        self._attach(path, "mknod")
        self._special.add(path)

    def deny(self, path: str) -> None:
        """Make every mutation of ``path`` fail with PERMISSION_DENIED."""
        self._denied.add(posixpath.normpath(path))

    def device_of(self, path: str) -> str:
        """Return the mount point a path lives on."""
        best = ROOT
        for mount in self.mounts:
            if (path == mount or path.startswith(mount.rstrip("/") + "/")) and len(mount) > len(best):
                best = mount
        return best

    # ------------------------------------------------------------------
    # FileSystemBackend
    # ------------------------------------------------------------------

    def getcwd(self) -> str:
        return self.cwd

    def stat(self, path: str) -> StatResult:
        if path in self._dirs:
            return StatResult(PathKind.DIRECTORY)
        if path in self._files:
            return StatResult(PathKind.FILE, len(self._files[path]))
        if path in self._special:
            return StatResult(PathKind.OTHER)
        return MISSING

    def listdir(self, path: str) -> list[str]:
        self._require_dir("listdir", path)
        return list(self._dirs[path])

    def mkdir(self, path: str) -> None:
        self._attach(path, "mkdir")
        self._dirs[path] = []

    def makedirs(self, path: str) -> None:
        kind = self.stat(path).kind
        if kind is PathKind.DIRECTORY:
            return
        if kind is not PathKind.MISSING:
            raise _error("makedirs", "file exists", path, FailureReason.ALREADY_EXISTS)
        parent = posixpath.dirname(path)
        if parent != path:
            self.makedirs(parent)
        self.mkdir(path)

    def create_file(self, path: str, data: bytes) -> None:
        self._attach(path, "create")
        self._files[path] = bytes(data)

    def read_bytes(self, path: str, flag: str = "r") -> bytes:
        return self._read_file("read", path, flag)

    def read_text(self, path: str, encoding: str, flag: str = "r") -> str:
        return self._read_file("read", path, flag).decode(encoding)

    def unlink(self, path: str) -> None:
        kind = self.stat(path).kind
        if kind is PathKind.MISSING:
            raise _error("unlink", "no such file or directory", path, FailureReason.NOT_FOUND)
        if kind is PathKind.DIRECTORY:
            raise _error("unlink", "is a directory", path, FailureReason.IS_A_DIRECTORY)
        self._check_writable("unlink", path)
        self._files.pop(path, None)
        self._special.discard(path)
        self._detach(path)

    def rmdir(self, path: str) -> None:
        self._require_dir("rmdir", path)
        if self._dirs[path]:
            raise _error("rmdir", "directory not empty", path, FailureReason.NOT_EMPTY)
        self._check_writable("rmdir", path)
        if path in self.mounts:
            raise _error("rmdir", "device or resource busy", path, FailureReason.OTHER)
        del self._dirs[path]
        self._detach(path)

    def copy_file(self, src: str, dst: str, overwrite: bool = False) -> None:
        data = self._read_file("copy", src, "r")
        kind = self.stat(dst).kind
        if kind is PathKind.MISSING:
            self._attach(dst, "copy")
        elif not overwrite:
            raise _error("copy", "file exists", dst, FailureReason.ALREADY_EXISTS)
        elif kind is PathKind.DIRECTORY:
            raise _error("copy", "is a directory", dst, FailureReason.IS_A_DIRECTORY)
        else:
            self._check_writable("copy", dst)
        self._files[dst] = data

    def rename(self, src: str, dst: str, replace: bool = False) -> None:
        src_kind = self.stat(src).kind
        if src_kind is PathKind.MISSING:
            raise _error("rename", "no such file or directory", src, FailureReason.NOT_FOUND)
        if self.device_of(src) != self.device_of(dst):
            raise _error("rename", "invalid cross-device link", src, FailureReason.CROSS_DEVICE)
        if src == dst:
            return
        if dst.startswith(src.rstrip("/") + "/"):
            raise _error("rename", "invalid argument", src, FailureReason.OTHER)
        self._check_writable("rename", src)

        dst_kind = self.stat(dst).kind
        if dst_kind is not PathKind.MISSING:
            if not replace:
                raise _error("rename", "file exists", dst, FailureReason.ALREADY_EXISTS)
            self._replace_target(src_kind, dst, dst_kind)
        else:
            self._check_parent("rename", dst)

        self._detach(src)
        self._relocate(src, dst)
        self._dirs[posixpath.dirname(dst)].append(posixpath.basename(dst))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _replace_target(self, src_kind: PathKind, dst: str, dst_kind: PathKind) -> None:
        if dst_kind is PathKind.DIRECTORY:
            if src_kind is not PathKind.DIRECTORY:
                raise _error("rename", "is a directory", dst, FailureReason.IS_A_DIRECTORY)
            if self._dirs[dst]:
                raise _error("rename", "directory not empty", dst, FailureReason.NOT_EMPTY)
            self.rmdir(dst)
        elif src_kind is PathKind.DIRECTORY:
            raise _error("rename", "not a directory", dst, FailureReason.NOT_A_DIRECTORY)
        else:
            self.unlink(dst)

    def _relocate(self, src: str, dst: str) -> None:
        prefix = src.rstrip("/") + "/"

        def moved(path: str) -> str:
            return dst + path[len(src):]

        for table in (self._dirs, self._files):
            for path in [p for p in table if p == src or p.startswith(prefix)]:
                table[moved(path)] = table.pop(path)
        for path in [p for p in self._special if p == src or p.startswith(prefix)]:
            self._special.discard(path)
            self._special.add(moved(path))

    def _attach(self, path: str, op: str) -> None:
        if self.stat(path).exists:
            raise _error(op, "file exists", path, FailureReason.ALREADY_EXISTS)
        self._check_parent(op, path)
        self._dirs[posixpath.dirname(path)].append(posixpath.basename(path))

    def _check_parent(self, op: str, path: str) -> None:
        parent = posixpath.dirname(path)
        parent_kind = self.stat(parent).kind
        if parent_kind is PathKind.MISSING:
            raise _error(op, "no such file or directory", path, FailureReason.NOT_FOUND)
        if parent_kind is not PathKind.DIRECTORY:
            raise _error(op, "not a directory", path, FailureReason.NOT_A_DIRECTORY)
        self._check_writable(op, parent)

    def _detach(self, path: str) -> None:
        self._dirs[posixpath.dirname(path)].remove(posixpath.basename(path))

    def _require_dir(self, op: str, path: str) -> None:
        kind = self.stat(path).kind
        if kind is PathKind.MISSING:
            raise _error(op, "no such file or directory", path, FailureReason.NOT_FOUND)
        if kind is not PathKind.DIRECTORY:
            raise _error(op, "not a directory", path, FailureReason.NOT_A_DIRECTORY)

    def _read_file(self, op: str, path: str, flag: str) -> bytes:
        kind = self.stat(path).kind
        if kind is PathKind.MISSING:
            raise _error(op, "no such file or directory", path, FailureReason.NOT_FOUND)
        if kind is PathKind.DIRECTORY:
            raise _error(op, "is a directory", path, FailureReason.IS_A_DIRECTORY)
        if kind is PathKind.OTHER:
            raise _error(op, "operation not supported", path, FailureReason.OTHER)
        if "+" in flag:
            self._check_writable(op, path)
        return self._files[path]

    def _check_writable(self, op: str, path: str) -> None:
        if path in self._denied:
            raise _error(op, "permission denied", path, FailureReason.PERMISSION_DENIED)
