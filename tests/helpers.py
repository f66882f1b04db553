"""Helpers shared by cursor tests."""

from __future__ import annotations

import posixpath

from shellfs.cursor import DirectoryCursor


def snapshot(cursor: DirectoryCursor, path: str) -> dict[str, bytes | None]:
    """Map every entry below ``path`` to its bytes (None for directories).

    Keys are relative to ``path`` so two trees can be compared directly.
    """
    result: dict[str, bytes | None] = {}

    def walk(relative: str) -> None:
        for entry in cursor.ls(posixpath.join(path, relative) if relative else path):
            name = entry.rstrip("/")
            child = posixpath.join(relative, name) if relative else name
            if entry.endswith("/"):
                result[child] = None
                walk(child)
            else:
                result[child] = cursor.read_file(posixpath.join(path, child))

    walk("")
    return result
