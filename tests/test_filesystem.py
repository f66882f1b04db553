"""Tests for the host filesystem backend."""

from __future__ import annotations

import errno
import os
from pathlib import Path

import pytest

from shellfs.errors import BackendError, CrossDeviceError, FailureReason
from shellfs.filesystem import RealFileSystem, reason_for, translate_errors
from shellfs.protocols import FileSystemBackend
from shellfs.types import PathKind


class TestReasonMapping:
    """Tests for errno to FailureReason translation."""

    @pytest.mark.parametrize(
        ("code", "reason"),
        [
            (errno.ENOENT, FailureReason.NOT_FOUND),
            (errno.EEXIST, FailureReason.ALREADY_EXISTS),
            (errno.ENOTDIR, FailureReason.NOT_A_DIRECTORY),
            (errno.EISDIR, FailureReason.IS_A_DIRECTORY),
            (errno.ENOTEMPTY, FailureReason.NOT_EMPTY),
            (errno.EXDEV, FailureReason.CROSS_DEVICE),
            (errno.EACCES, FailureReason.PERMISSION_DENIED),
            (errno.EPERM, FailureReason.PERMISSION_DENIED),
            (errno.EIO, FailureReason.OTHER),
        ],
    )
    def test_reason_for(self, code: int, reason: FailureReason) -> None:
        assert reason_for(OSError(code, os.strerror(code))) is reason

    def test_translate_errors_message(self) -> None:
        """Test the message names the primitive, the cause and the path."""
        with pytest.raises(BackendError) as exc_info:
            with translate_errors("unlink", "/data/x"):
                raise PermissionError(errno.EACCES, "Permission denied")

        assert str(exc_info.value) == "unlink: permission denied: /data/x"
        assert exc_info.value.reason is FailureReason.PERMISSION_DENIED
        assert exc_info.value.path == "/data/x"
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_translate_errors_cross_device(self) -> None:
        with pytest.raises(CrossDeviceError):
            with translate_errors("rename", "/a"):
                raise OSError(errno.EXDEV, "Invalid cross-device link")


class TestRealFileSystem:
    """Tests for RealFileSystem implementation."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(RealFileSystem(), FileSystemBackend)

    def test_getcwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        assert RealFileSystem().getcwd() == os.getcwd()

    def test_stat_file(self, tmp_path: Path) -> None:
        """Test stat reports files with their size."""
        fs = RealFileSystem()
        test_file = tmp_path / "test.txt"
        test_file.write_text("Hello, World!")

        result = fs.stat(str(test_file))

        assert result.kind is PathKind.FILE
        assert result.size == 13
        assert result.is_file

    def test_stat_directory(self, tmp_path: Path) -> None:
        assert RealFileSystem().stat(str(tmp_path)).is_dir

    def test_stat_missing(self, tmp_path: Path) -> None:
        """Test stat returns MISSING instead of raising."""
        result = RealFileSystem().stat(str(tmp_path / "missing.txt"))

        assert result.kind is PathKind.MISSING
        assert not result.exists

    def test_stat_below_file_is_missing(self, tmp_path: Path) -> None:
        """Test a path whose parent is a file counts as missing."""
        (tmp_path / "file.txt").touch()

        assert not RealFileSystem().stat(str(tmp_path / "file.txt" / "child")).exists

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs mkfifo")
    def test_stat_other(self, tmp_path: Path) -> None:
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)

        assert RealFileSystem().stat(str(fifo)).kind is PathKind.OTHER

    def test_listdir(self, tmp_path: Path) -> None:
        (tmp_path / "a").touch()
        (tmp_path / "b").mkdir()

        assert sorted(RealFileSystem().listdir(str(tmp_path))) == ["a", "b"]

    def test_listdir_missing(self, tmp_path: Path) -> None:
        with pytest.raises(BackendError) as exc_info:
            RealFileSystem().listdir(str(tmp_path / "missing"))

        assert exc_info.value.reason is FailureReason.NOT_FOUND

    def test_mkdir_simple(self, tmp_path: Path) -> None:
        """Test creating a simple directory."""
        new_dir = tmp_path / "newdir"

        RealFileSystem().mkdir(str(new_dir))

        assert new_dir.is_dir()

    def test_mkdir_existing_raises(self, tmp_path: Path) -> None:
        existing_dir = tmp_path / "existing"
        existing_dir.mkdir()

        with pytest.raises(BackendError) as exc_info:
            RealFileSystem().mkdir(str(existing_dir))

        assert exc_info.value.reason is FailureReason.ALREADY_EXISTS

    def test_makedirs(self, tmp_path: Path) -> None:
        """Test creating nested directories."""
        nested_dir = tmp_path / "a" / "b" / "c"

        RealFileSystem().makedirs(str(nested_dir))

        assert nested_dir.is_dir()

    def test_create_file(self, tmp_path: Path) -> None:
        target = tmp_path / "new.bin"

        RealFileSystem().create_file(str(target), b"\x00\x01")

        assert target.read_bytes() == b"\x00\x01"

    def test_create_file_is_exclusive(self, tmp_path: Path) -> None:
        """Test an existing file is never overwritten."""
        target = tmp_path / "exists.txt"
        target.write_text("keep")

        with pytest.raises(BackendError) as exc_info:
            RealFileSystem().create_file(str(target), b"replace")

        assert exc_info.value.reason is FailureReason.ALREADY_EXISTS
        assert target.read_text() == "keep"

    def test_read_bytes_and_text(self, tmp_path: Path) -> None:
        target = tmp_path / "note.txt"
        target.write_bytes("añb".encode())
        fs = RealFileSystem()

        assert fs.read_bytes(str(target)) == "añb".encode()
        assert fs.read_text(str(target), "utf-8") == "añb"

    def test_read_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(BackendError) as exc_info:
            RealFileSystem().read_bytes(str(tmp_path))

        assert exc_info.value.reason is FailureReason.IS_A_DIRECTORY

    def test_unlink(self, tmp_path: Path) -> None:
        """Test removing a file."""
        test_file = tmp_path / "to_delete.txt"
        test_file.touch()

        RealFileSystem().unlink(str(test_file))

        assert not test_file.exists()

    def test_unlink_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(BackendError) as exc_info:
            RealFileSystem().unlink(str(tmp_path / "missing.txt"))

        assert exc_info.value.reason is FailureReason.NOT_FOUND

    def test_rmdir_not_empty(self, tmp_path: Path) -> None:
        """Test only empty directories are removed."""
        tree_dir = tmp_path / "tree"
        tree_dir.mkdir()
        (tree_dir / "file1.txt").touch()

        with pytest.raises(BackendError) as exc_info:
            RealFileSystem().rmdir(str(tree_dir))

        assert exc_info.value.reason in (FailureReason.NOT_EMPTY, FailureReason.ALREADY_EXISTS)
        assert tree_dir.exists()

    def test_copy_file(self, tmp_path: Path) -> None:
        src = tmp_path / "source.txt"
        src.write_text("content1")
        dst = tmp_path / "destination.txt"

        RealFileSystem().copy_file(str(src), str(dst))

        assert dst.read_text() == "content1"

    def test_copy_file_exclusive(self, tmp_path: Path) -> None:
        """Test copying onto an existing file requires overwrite."""
        src = tmp_path / "source.txt"
        src.write_text("new")
        dst = tmp_path / "destination.txt"
        dst.write_text("old")
        fs = RealFileSystem()

        with pytest.raises(BackendError) as exc_info:
            fs.copy_file(str(src), str(dst))
        assert exc_info.value.reason is FailureReason.ALREADY_EXISTS
        assert dst.read_text() == "old"

        fs.copy_file(str(src), str(dst), overwrite=True)
        assert dst.read_text() == "new"

    def test_rename(self, tmp_path: Path) -> None:
        src = tmp_path / "a"
        src.write_text("x")

        RealFileSystem().rename(str(src), str(tmp_path / "b"))

        assert not src.exists()
        assert (tmp_path / "b").read_text() == "x"

    def test_rename_replace(self, tmp_path: Path) -> None:
        src = tmp_path / "a"
        src.write_text("new")
        dst = tmp_path / "b"
        dst.write_text("old")

        RealFileSystem().rename(str(src), str(dst), replace=True)

        assert dst.read_text() == "new"
