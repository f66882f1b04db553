"""Console output for the shellfs CLI."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shellfs import __version__

SHELL_COMMANDS = {
    "pwd": "Print the current directory",
    "ls [PATH]": "List a directory",
    "cd PATH": "Change directory",
    "mkdir NAME [--silent]": "Create a directory",
    "touch NAME [CONTENT]": "Create a file",
    "cat PATH": "Print a file as UTF-8 text",
    "rm TARGET [-r] [-f] [--silent]": "Delete a file or directory",
    "cp SRC DST [-r] [--overwrite] [--silent]": "Copy a file or directory",
    "mv SRC DST [--overwrite] [-f] [--silent]": "Move a file or directory",
    "rename OLD NEW": "Rename without overwriting",
    "exit": "Leave the shell",
}


class ShellConsole:
    """Text output for commands and the interactive shell."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize output.

        Args:
            console: Console to print to. Defaults to stdout.
        """
        self.console = console or Console()

    def show_welcome(self, cwd: str) -> None:
        """Display the shell banner."""
        self.console.print(
            Panel(
                f"[bold blue]shellfs[/bold blue] v{__version__}\n"
                f"Starting in {escape(cwd)}. Type [bold]help[/bold] for commands.",
                title="Welcome",
                border_style="blue",
            )
        )

    def show_help(self) -> None:
        """Display the shell command table."""
        table = Table(title="Commands", show_header=False, box=None)
        table.add_column("Command", style="cyan")
        table.add_column("Description")
        for command, description in SHELL_COMMANDS.items():
            table.add_row(escape(command), description)
        self.console.print(table)

    def show_listing(self, entries: list[str]) -> None:
        """Display directory entries, directories highlighted.

        Args:
            entries: Names as returned by ``ls``; directories end with ``/``.
        """
        if not entries:
            self.console.print("[dim](empty)[/dim]")
            return
        for entry in entries:
            style = "bold blue" if entry.endswith("/") else None
            self.console.print(Text(entry, style=style or ""))

    def show_text(self, content: str) -> None:
        """Print file content without markup processing."""
        self.console.print(content, markup=False, highlight=False, end="")

    def show_path(self, path: str) -> None:
        """Print a path."""
        self.console.print(Text(path), soft_wrap=True)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True)

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {escape(message)}", soft_wrap=True)

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {escape(message)}", soft_wrap=True)
