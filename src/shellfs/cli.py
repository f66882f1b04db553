"""CLI commands using Typer."""

from __future__ import annotations

import shlex
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from shellfs.context import AppContext
    from shellfs.cursor import DirectoryCursor

import typer
from rich.markup import escape
from rich.prompt import Prompt

from shellfs import __version__
from shellfs.console import ShellConsole
from shellfs.context import create_context
from shellfs.errors import MissingOperandError, ShellFSError
from shellfs.types import CopyOptions, DeleteOptions, MkdirOptions, MoveOptions, ReadOptions

app = typer.Typer(
    name="shellfs",
    help="Shell-style file operations relative to a tracked directory",
    no_args_is_help=True,
)

output = ShellConsole()

CwdOption = Annotated[
    Path | None,
    typer.Option("--cwd", "-C", help="Directory to resolve paths against"),
]
SilentOption = Annotated[bool, typer.Option("--silent", help="Do not report skipped targets")]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        output.console.print(f"shellfs v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Shell-style file operations relative to a tracked directory."""
    pass


@contextmanager
def _reported_errors() -> Iterator[None]:
    """Turn cursor errors into an error line and exit code 1."""
    try:
        yield
    except ShellFSError as e:
        output.show_error(str(e))
        raise typer.Exit(1) from e


def _open_cursor(ctx: AppContext, cwd: Path | None) -> DirectoryCursor:
    with _reported_errors():
        return ctx.make_cursor(cwd)


def _exists(cursor: DirectoryCursor, path: str) -> bool:
    return cursor.fs.stat(cursor.resolve(path)).exists


# ============================================================================
# One-shot Commands
# ============================================================================


@app.command("pwd")
def pwd(cwd: CwdOption = None, _context=None) -> None:
    """Print the directory paths are resolved against."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    output.show_path(cursor.pwd())


@app.command("ls")
def ls(
    path: Annotated[str | None, typer.Argument(help="Directory to list")] = None,
    cwd: CwdOption = None,
    _context=None,
) -> None:
    """List a directory."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    with _reported_errors():
        entries = cursor.ls(path)
    output.show_listing(entries)


@app.command("mkdir")
def mkdir(
    name: Annotated[str, typer.Argument(help="Directory to create")],
    silent: SilentOption = False,
    cwd: CwdOption = None,
    _context=None,
) -> None:
    """Create a directory (one level)."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    with _reported_errors():
        existed = bool(name) and _exists(cursor, name)
        cursor.mkdir(name, MkdirOptions(silent=silent))
    if existed:
        output.show_warning(f"'{name}' already exists")
    else:
        output.show_success(f"Created '{name}'")


@app.command("touch")
def touch(
    name: Annotated[str, typer.Argument(help="File to create")],
    content: Annotated[str, typer.Option("--content", "-c", help="Initial text")] = "",
    cwd: CwdOption = None,
    _context=None,
) -> None:
    """Create a new file."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    with _reported_errors():
        cursor.touch(name, content)
    output.show_success(f"Created '{name}'")


@app.command("cat")
def cat(
    path: Annotated[str, typer.Argument(help="File to print")],
    encoding: Annotated[str, typer.Option("--encoding", "-e", help="Text encoding")] = "utf-8",
    cwd: CwdOption = None,
    _context=None,
) -> None:
    """Print a file."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    with _reported_errors():
        content = cursor.read_file(path, ReadOptions(encoding=encoding))
    output.show_text(str(content))


@app.command("rm")
def rm(
    target: Annotated[str, typer.Argument(help="File or directory to delete")],
    recursive: Annotated[bool, typer.Option("--recursive", "-r", help="Delete directories")] = False,
    force: Annotated[bool, typer.Option("--force", "-f", help="Ignore missing targets and errors")] = False,
    silent: SilentOption = False,
    cwd: CwdOption = None,
    _context=None,
) -> None:
    """Delete a file or directory."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    with _reported_errors():
        existed = _exists(cursor, target)
        cursor.delete(target, DeleteOptions(recursive=recursive, force=force, silent=silent))
        remains = existed and _exists(cursor, target)
    if not existed:
        output.show_warning(f"'{target}' does not exist")
    elif remains:
        output.show_warning(f"'{target}' was not fully deleted")
    else:
        output.show_success(f"Deleted '{target}'")


@app.command("cp")
def cp(
    source: Annotated[str, typer.Argument(help="Source path")],
    destination: Annotated[str, typer.Argument(help="Destination path")],
    recursive: Annotated[bool, typer.Option("--recursive", "-r", help="Copy directories")] = False,
    overwrite: Annotated[bool, typer.Option("--overwrite", help="Replace the destination")] = False,
    silent: SilentOption = False,
    cwd: CwdOption = None,
    _context=None,
) -> None:
    """Copy a file or directory."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    with _reported_errors():
        cursor.copy(
            source,
            destination,
            CopyOptions(recursive=recursive, overwrite=overwrite, silent=silent),
        )
    output.show_success(f"Copied '{source}' to '{destination}'")


@app.command("mv")
def mv(
    source: Annotated[str, typer.Argument(help="Source path")],
    destination: Annotated[str, typer.Argument(help="Destination path")],
    overwrite: Annotated[bool, typer.Option("--overwrite", help="Replace the destination")] = False,
    force: Annotated[bool, typer.Option("--force", "-f", help="Ignore cleanup errors")] = False,
    silent: SilentOption = False,
    cwd: CwdOption = None,
    _context=None,
) -> None:
    """Move a file or directory."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    with _reported_errors():
        cursor.move(
            source,
            destination,
            MoveOptions(overwrite=overwrite, force=force, silent=silent),
        )
    output.show_success(f"Moved '{source}' to '{destination}'")


@app.command("rename")
def rename(
    old: Annotated[str, typer.Argument(help="Current path")],
    new: Annotated[str, typer.Argument(help="New path")],
    cwd: CwdOption = None,
    _context=None,
) -> None:
    """Rename a file or directory without overwriting."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    with _reported_errors():
        cursor.rename(old, new)
    output.show_success(f"Renamed '{old}' to '{new}'")


# ============================================================================
# Interactive Shell
# ============================================================================


def _split_flags(args: list[str]) -> tuple[list[str], set[str]]:
    """Separate ``-x``/``--xyz`` flags from positional arguments.

    Everything after a ``--`` word is positional.
    """
    positional: list[str] = []
    flags: set[str] = set()
    for index, arg in enumerate(args):
        if arg == "--":
            positional.extend(args[index + 1:])
            break
        if arg.startswith("-") and arg != "-":
            flags.add(arg)
        else:
            positional.append(arg)
    return positional, flags


def _operand(args: list[str], index: int, command: str) -> str:
    if len(args) <= index:
        raise MissingOperandError(f"{command}: missing operand")
    return args[index]


def _shell_ls(cursor: DirectoryCursor, args: list[str], flags: set[str]) -> None:
    output.show_listing(cursor.ls(args[0] if args else None))


def _shell_cd(cursor: DirectoryCursor, args: list[str], flags: set[str]) -> None:
    cursor.cd(_operand(args, 0, "cd"))


def _shell_mkdir(cursor: DirectoryCursor, args: list[str], flags: set[str]) -> None:
    cursor.mkdir(_operand(args, 0, "mkdir"), MkdirOptions(silent="--silent" in flags))


def _shell_touch(cursor: DirectoryCursor, args: list[str], flags: set[str]) -> None:
    cursor.touch(_operand(args, 0, "touch"), " ".join(args[1:]))


def _shell_cat(cursor: DirectoryCursor, args: list[str], flags: set[str]) -> None:
    content = cursor.read_file(_operand(args, 0, "cat"), ReadOptions(encoding="utf-8"))
    output.show_text(str(content))


def _shell_rm(cursor: DirectoryCursor, args: list[str], flags: set[str]) -> None:
    cursor.delete(
        _operand(args, 0, "rm"),
        DeleteOptions(
            recursive=bool({"-r", "-rf", "-fr", "--recursive"} & flags),
            force=bool({"-f", "-rf", "-fr", "--force"} & flags),
            silent="--silent" in flags,
        ),
    )


def _shell_cp(cursor: DirectoryCursor, args: list[str], flags: set[str]) -> None:
    cursor.copy(
        _operand(args, 0, "cp"),
        _operand(args, 1, "cp"),
        CopyOptions(
            recursive=bool({"-r", "--recursive"} & flags),
            overwrite="--overwrite" in flags,
            silent="--silent" in flags,
        ),
    )


def _shell_mv(cursor: DirectoryCursor, args: list[str], flags: set[str]) -> None:
    cursor.move(
        _operand(args, 0, "mv"),
        _operand(args, 1, "mv"),
        MoveOptions(
            overwrite="--overwrite" in flags,
            force=bool({"-f", "--force"} & flags),
            silent="--silent" in flags,
        ),
    )


def _shell_rename(cursor: DirectoryCursor, args: list[str], flags: set[str]) -> None:
    cursor.rename(_operand(args, 0, "rename"), _operand(args, 1, "rename"))


SHELL_HANDLERS: dict[str, Callable[[DirectoryCursor, list[str], set[str]], None]] = {
    "pwd": lambda cursor, args, flags: output.show_path(cursor.pwd()),
    "ls": _shell_ls,
    "cd": _shell_cd,
    "mkdir": _shell_mkdir,
    "touch": _shell_touch,
    "cat": _shell_cat,
    "rm": _shell_rm,
    "cp": _shell_cp,
    "mv": _shell_mv,
    "rename": _shell_rename,
    "help": lambda cursor, args, flags: output.show_help(),
}


def run_line(cursor: DirectoryCursor, line: str) -> bool:
    """Execute one shell line against a cursor.

    Args:
        cursor: Cursor shared by the whole session.
        line: Raw input line.

    Returns:
        False when the session should end, True otherwise.
    """
    try:
        words = shlex.split(line)
    except ValueError as e:
        output.show_error(f"parse error: {e}")
        return True
    if not words:
        return True

    command, rest = words[0], words[1:]
    if command in ("exit", "quit"):
        return False

    handler = SHELL_HANDLERS.get(command)
    if handler is None:
        output.show_error(f"{command}: command not found")
        return True

    args, flags = _split_flags(rest)
    try:
        handler(cursor, args, flags)
    except ShellFSError as e:
        output.show_error(str(e))
    return True


@app.command("shell")
def shell(cwd: CwdOption = None, _context=None) -> None:
    """Start an interactive session; ``cd`` persists between lines."""
    ctx = _context or create_context()
    cursor = _open_cursor(ctx, cwd)
    output.show_welcome(cursor.pwd())

    while True:
        try:
            line = Prompt.ask(f"[bold green]{escape(cursor.pwd())}[/bold green] $", console=output.console)
        except (EOFError, KeyboardInterrupt):
            output.console.print()
            break
        if not run_line(cursor, line):
            break
