"""Directory cursor: shell-style operations relative to a tracked directory.

The cursor owns one piece of state, the current directory, and resolves
every path argument against it instead of against the process working
directory. All I/O goes through an injected FileSystemBackend.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from shellfs.errors import (
    AlreadyExistsError,
    BackendError,
    CurrentDirectoryError,
    FailureReason,
    IsDirectoryError,
    MissingOperandError,
    NoSuchPathError,
    NotDirectoryError,
    RecursiveRequiredError,
    ShellFSError,
    UnsupportedTypeError,
)
from shellfs.protocols import DiagnosticSink, FileSystemBackend
from shellfs.types import (
    CopyOptions,
    DeleteOptions,
    MkdirOptions,
    MoveOptions,
    ReadOptions,
)

StrPath = str | os.PathLike[str]


@contextmanager
def backend_failure(prefix: str) -> Iterator[None]:
    """Re-raise BackendErrors from the block with an operation prefix.

    The original reason and path are kept, and the backend's own message
    is appended after the prefix.
    """
    try:
        yield
    except BackendError as e:
        raise e.rewrap(f"{prefix}: {e}") from e


class DirectoryCursor:
    """Stateful facade over a filesystem backend.

    Follows Separate Use from Creation: the constructor requires its
    collaborators. Use ``create()`` for production defaults.
    """

    def __init__(
        self,
        filesystem: FileSystemBackend,
        logger: DiagnosticSink,
        start: StrPath | None = None,
    ) -> None:
        """Initialize the cursor.

        Args:
            filesystem: Backend every operation is performed against.
            logger: Sink for progress and error messages.
            start: Starting directory, absolute or relative to the backend's
                working directory. Defaults to the backend's working directory.

        Raises:
            NoSuchPathError: If ``start`` does not exist.
            NotDirectoryError: If ``start`` is not a directory.
        """
        self.fs = filesystem
        self._logger = logger
        self._current = self._initial_directory(start)
        self._logger.debug("Current directory: %s", self._current)

    @classmethod
    def create(
        cls,
        filesystem: FileSystemBackend | None = None,
        logger: DiagnosticSink | None = None,
        start: StrPath | None = None,
    ) -> DirectoryCursor:
        """Factory method for production instantiation.

        Args:
            filesystem: Optional backend (host filesystem if not provided).
            logger: Optional sink (``shellfs.cursor`` logger if not provided).
            start: Optional starting directory.

        Returns:
            Configured DirectoryCursor.
        """
        from shellfs.filesystem import RealFileSystem
        from shellfs.logger import get_logger

        return cls(
            filesystem=filesystem or RealFileSystem(),
            logger=logger or get_logger("cursor"),
            start=start,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._current!r})"

    @property
    def logger(self) -> DiagnosticSink:
        """The diagnostic sink this cursor writes to."""
        return self._logger

    @property
    def current_directory(self) -> str:
        return self._current

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def resolve(self, path: StrPath) -> str:
        """Return the normalized absolute form of a path.

        Relative paths are anchored at the current directory. ``.`` and
        ``..`` segments are collapsed; ``..`` at the root stays at the root.
        """
        return os.path.normpath(os.path.join(self._current, os.fspath(path)))

    def _resolve_case_insensitive(self, name: str) -> str:
        resolved = self.resolve(name)
        if self.fs.stat(resolved).exists:
            return resolved

        # Only the last segment gets its case corrected
        parent, leaf = os.path.split(resolved)
        if not self.fs.stat(parent).exists:
            raise NoSuchPathError(f"cd: no such file or directory: {parent}")

        folded = leaf.casefold()
        for entry in self.fs.listdir(parent):
            if entry.casefold() == folded:
                return os.path.join(parent, entry)
        raise NoSuchPathError(f"cd: no such file or directory: {name}")

    def _contains_current(self, path: str) -> bool:
        return self._current == path or self._current.startswith(path.rstrip("/") + "/")

    def _initial_directory(self, start: StrPath | None) -> str:
        cwd = os.path.normpath(self.fs.getcwd())
        if start is None:
            return cwd
        path = os.path.normpath(os.path.join(cwd, os.fspath(start)))
        status = self.fs.stat(path)
        if not status.exists:
            raise NoSuchPathError(f"cursor: no such file or directory: {start}")
        if not status.is_dir:
            raise NotDirectoryError(f"cursor: not a directory: {start}")
        return path

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def pwd(self) -> str:
        """Return the current directory."""
        return self._current

    def cd(self, name: StrPath) -> None:
        """Change the current directory.

        The final path segment is matched case-insensitively when the exact
        path does not exist, and the on-disk spelling is kept.

        Raises:
            MissingOperandError: If ``name`` is empty.
            NoSuchPathError: If nothing matches.
            NotDirectoryError: If the target is not a directory.
            BackendError: If the backend fails while looking the target up.
        """
        name = os.fspath(name)
        try:
            if not name:
                raise MissingOperandError("cd: missing operand")
            target = self._resolve_case_insensitive(name)
            if not self.fs.stat(target).is_dir:
                raise NotDirectoryError(f"cd: not a directory: {name}")
        except BackendError as e:
            error = e.rewrap(f"cd: no such file or directory: {name}: {e}")
            self._logger.error("%s", error)
            raise error from e
        except ShellFSError as e:
            self._logger.error("%s", e)
            raise

        self._current = target
        self._logger.debug("Changed directory to: %s", self._current)

    def ls(self, path: StrPath | None = None) -> list[str]:
        """List the direct children of a directory.

        Args:
            path: Directory to list. Defaults to the current directory.

        Returns:
            Entry names in backend order; directories end with ``/``.

        Raises:
            NoSuchPathError: If the directory does not exist.
            NotDirectoryError: If the path is not a directory.
            BackendError: If listing fails, unchanged from the backend.
        """
        directory = self.resolve(path) if path else self._current
        try:
            status = self.fs.stat(directory)
            if not status.exists:
                self._logger.error("Path '%s' does not exist", directory)
                raise NoSuchPathError(f"ls: cannot access '{directory}': No such file or directory")
            if not status.is_dir:
                self._logger.error("Path '%s' is not a directory", directory)
                raise NotDirectoryError(f"ls: cannot access '{directory}': Not a directory")

            return [
                f"{entry}/" if self.fs.stat(os.path.join(directory, entry)).is_dir else entry
                for entry in self.fs.listdir(directory)
            ]
        except BackendError:
            self._logger.error("Failed to list files in: %s", directory)
            raise

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def mkdir(self, name: StrPath, options: MkdirOptions | None = None) -> None:
        """Create one directory level.

        Raises:
            MissingOperandError: If ``name`` is empty.
            AlreadyExistsError: If the target exists and ``silent`` is not set.
            BackendError: If creation fails, e.g. the parent is missing.
        """
        options = options or MkdirOptions()
        name = os.fspath(name)
        if not name:
            raise MissingOperandError("mkdir: missing operand")

        path = self.resolve(name)
        if self.fs.stat(path).exists:
            if options.silent:
                return
            self._logger.debug("Directory already exists: %s", path)
            raise AlreadyExistsError(
                f"mkdir: cannot create directory '{name}': Directory exists"
            )

        self.fs.mkdir(path)
        self._logger.debug("Directory created: %s", path)

    def touch(self, name: StrPath, content: str | bytes = b"") -> None:
        """Create a new file holding ``content``.

        Text is written as UTF-8; bytes are written verbatim.

        Raises:
            AlreadyExistsError: If the target exists. Files are never overwritten.
        """
        path = self.resolve(name)
        if self.fs.stat(path).exists:
            raise AlreadyExistsError(f"touch: cannot create file '{os.fspath(name)}': File exists")

        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        self.fs.create_file(path, data)
        self._logger.info("File created: %s", path)

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def delete(self, target: StrPath, options: DeleteOptions | None = None) -> None:
        """Delete a file, or a directory tree when ``recursive`` is set.

        Children are deleted depth first before their directory. A failure
        partway through leaves the tree partially deleted.

        Args:
            target: Path to delete.
            options: ``recursive`` allows directories, ``force`` ignores a
                missing target and swallows failures, ``silent`` stops logging.

        Raises:
            NoSuchPathError: If the target is missing and ``force`` is not set.
            IsDirectoryError: If the target is a directory and ``recursive``
                is not set (unless ``force``).
            CurrentDirectoryError: If the target directory holds the current
                directory (unless ``force``).
            BackendError: If removal fails (unless ``force``).
        """
        options = options or DeleteOptions()
        target = os.fspath(target)
        try:
            self._delete(target, self.resolve(target), options)
        except ShellFSError as e:
            if not options.silent:
                self._logger.error("%s", e)
            if not options.force:
                raise

    def _delete(self, target: str, path: str, options: DeleteOptions) -> None:
        status = self.fs.stat(path)
        if not status.exists:
            if not options.force:
                raise NoSuchPathError(
                    f"delete: cannot delete '{target}': No such file or directory"
                )
            if not options.silent:
                self._logger.info("delete: '%s' does not exist", target)
            return

        prefix = f"delete: cannot delete '{target}'"
        if status.is_dir:
            if self._contains_current(path):
                raise CurrentDirectoryError(f"{prefix}: current directory is inside it")
            if not options.recursive:
                raise IsDirectoryError(
                    f"delete: '{target}' is a directory (use recursive option to delete)"
                )
            with backend_failure(prefix):
                entries = self.fs.listdir(path)
            for entry in entries:
                self.delete(os.path.join(target, entry), options)
            with backend_failure(prefix):
                self.fs.rmdir(path)
        else:
            with backend_failure(prefix):
                self.fs.unlink(path)

        if not options.silent:
            self._logger.info("Deleted: %s", path)

    # ------------------------------------------------------------------
    # Copy and move
    # ------------------------------------------------------------------

    def copy(
        self,
        source: StrPath,
        destination: StrPath,
        options: CopyOptions | None = None,
    ) -> None:
        """Copy a file, or a directory tree when ``recursive`` is set.

        Nested entries are copied with the same options value, so the
        ``recursive`` check only ever fails at the top level.

        Raises:
            NoSuchPathError: If the source is missing.
            AlreadyExistsError: If the destination exists and neither
                ``overwrite`` nor ``silent`` is set.
            RecursiveRequiredError: If the source is a directory and
                ``recursive`` is not set.
            UnsupportedTypeError: If the source is neither file nor directory.
            BackendError: If a file copy fails and ``silent`` is not set.
        """
        options = options or CopyOptions()
        source, destination = os.fspath(source), os.fspath(destination)
        src = self.resolve(source)
        dst = self.resolve(destination)

        src_status = self.fs.stat(src)
        if not src_status.exists:
            raise NoSuchPathError(f"copy: cannot copy '{source}': No such file or directory")

        if self.fs.stat(dst).exists and not options.overwrite:
            if options.silent:
                return
            raise AlreadyExistsError(f"copy: '{destination}' already exists")

        if src_status.is_file:
            try:
                self.fs.copy_file(src, dst, overwrite=options.overwrite)
            except BackendError as e:
                if options.silent:
                    return
                raise e.rewrap(f"copy: cannot copy '{source}' to '{destination}': {e}") from e
            self._logger.debug("File copied from %s to %s", src, dst)
            return

        if src_status.is_dir:
            if not options.recursive:
                raise RecursiveRequiredError(
                    f"copy: omitting directory '{source}' (use recursive option to copy)"
                )
            # Listed before the destination exists so copying into a
            # subdirectory of the source terminates.
            entries = self.fs.listdir(src)
            if not self.fs.stat(dst).exists:
                self.fs.makedirs(dst)
            for entry in entries:
                self.copy(
                    os.path.join(source, entry),
                    os.path.join(destination, entry),
                    options,
                )
            self._logger.debug("Directory copied from %s to %s", src, dst)
            return

        raise UnsupportedTypeError(f"copy: unsupported file type for '{source}'")

    def move(
        self,
        source: StrPath,
        destination: StrPath,
        options: MoveOptions | None = None,
    ) -> None:
        """Move a file or directory.

        Tries an atomic rename first. When the backend reports a
        cross-device rename, falls back to a recursive copy followed by a
        recursive delete of the source; that path is not atomic and can
        leave both copies behind if the delete fails.

        Raises:
            NoSuchPathError: If the source is missing.
            AlreadyExistsError: If the destination exists and neither
                ``overwrite`` nor ``silent`` is set.
            CurrentDirectoryError: If the source is the current directory or
                one of its ancestors.
            BackendError: If the rename fails for another reason and
                ``silent`` is not set.
        """
        options = options or MoveOptions()
        source, destination = os.fspath(source), os.fspath(destination)
        src = self.resolve(source)
        dst = self.resolve(destination)

        if not self.fs.stat(src).exists:
            raise NoSuchPathError(f"move: cannot move '{source}': No such file or directory")

        if self.fs.stat(dst).exists and not options.overwrite:
            if options.silent:
                return
            raise AlreadyExistsError(f"move: '{destination}' already exists")
        if self._contains_current(src):
            raise CurrentDirectoryError(
                f"move: cannot move '{source}': current directory is inside it"
            )

        try:
            self.fs.rename(src, dst, replace=options.overwrite)
        except BackendError as e:
            if e.reason is FailureReason.CROSS_DEVICE:
                self._logger.debug("%s; copying then deleting instead", e)
                self._move_across_devices(source, destination, options)
                return
            if options.silent:
                return
            raise e.rewrap(f"move: cannot move '{source}' to '{destination}': {e}") from e
        self._logger.debug("Moved from %s to %s", src, dst)

    def _move_across_devices(self, source: str, destination: str, options: MoveOptions) -> None:
        self.copy(
            source,
            destination,
            CopyOptions(
                recursive=True,
                force=options.force,
                overwrite=options.overwrite,
                silent=options.silent,
            ),
        )
        self.delete(
            source,
            DeleteOptions(recursive=True, force=options.force, silent=options.silent),
        )

    def rename(self, old_path: StrPath, new_path: StrPath) -> None:
        """Rename an entry atomically.

        Never overwrites and never falls back to copying.

        Raises:
            NoSuchPathError: If ``old_path`` is missing.
            AlreadyExistsError: If ``new_path`` exists.
            CurrentDirectoryError: If ``old_path`` holds the current directory.
            BackendError: If the backend rename fails.
        """
        old_path, new_path = os.fspath(old_path), os.fspath(new_path)
        old = self.resolve(old_path)
        new = self.resolve(new_path)

        if not self.fs.stat(old).exists:
            raise NoSuchPathError(f"rename: cannot rename '{old_path}': No such file or directory")
        if self.fs.stat(new).exists:
            raise AlreadyExistsError(f"rename: cannot rename to '{new_path}': File exists")
        if self._contains_current(old):
            raise CurrentDirectoryError(
                f"rename: cannot rename '{old_path}': current directory is inside it"
            )

        with backend_failure(f"rename: failed to rename '{old_path}' to '{new_path}'"):
            self.fs.rename(old, new)
        self._logger.debug("Renamed from %s to %s", old, new)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_file(self, path: StrPath, options: ReadOptions | None = None) -> str | bytes:
        """Read a file.

        Args:
            path: File to read.
            options: ``encoding`` returns text decoded with it; otherwise
                bytes are returned. ``flag`` is passed to the backend.

        Raises:
            NoSuchPathError: If the file is missing.
            IsDirectoryError: If the path is not a regular file.
            BackendError: If reading fails.
        """
        options = options or ReadOptions()
        path = os.fspath(path)
        resolved = self.resolve(path)

        status = self.fs.stat(resolved)
        if not status.exists:
            raise NoSuchPathError(f"readFile: cannot read '{path}': No such file or directory")
        if not status.is_file:
            raise IsDirectoryError(f"readFile: cannot read '{path}': Is a directory")

        with backend_failure(f"readFile: failed to read '{path}'"):
            if options.encoding:
                return self.fs.read_text(resolved, options.encoding, options.flag)
            return self.fs.read_bytes(resolved, options.flag)
