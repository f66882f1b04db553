"""Shell-style filesystem operations relative to a tracked directory."""

__version__ = "0.1.0"

# Export the cursor and its collaborator interfaces for type hints and dependency injection
from shellfs.cursor import DirectoryCursor
from shellfs.protocols import (
    DiagnosticSink,
    FileSystemBackend,
)
from shellfs.types import (
    CopyOptions,
    DeleteOptions,
    MkdirOptions,
    MoveOptions,
    ReadOptions,
)

__all__ = [
    "__version__",
    "CopyOptions",
    "DeleteOptions",
    "DiagnosticSink",
    "DirectoryCursor",
    "FileSystemBackend",
    "MkdirOptions",
    "MoveOptions",
    "ReadOptions",
]
