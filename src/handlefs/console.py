"""Console output for the CLI."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from handlefs.directory import Directory, Entry


class Output:
    """Rich-based output for CLI commands."""

    def __init__(self, console: Console | None = None, error_console: Console | None = None) -> None:
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

    def show_success(self, message: str) -> None:
        """Show success message."""
        self.console.print(f"[green]✓[/green] {message}", highlight=False)

    def show_error(self, message: str) -> None:
        """Show error message."""
        self.error_console.print(f"[red]✗[/red] {message}", highlight=False)

    def show_text(self, text: str) -> None:
        """Print raw text without markup or highlighting."""
        self.console.print(text, markup=False, highlight=False, end="")

    def show_entries(self, entries: Iterable[Entry], root: str) -> None:
        """Display a listing table.

        Args:
            entries: Handles to list.
            root: Prefix stripped from paths for display.
        """
        table = Table(show_header=True, header_style="bold")
        table.add_column("Type", width=4)
        table.add_column("Path")

        count = 0
        for entry in entries:
            display = escape(entry.path[len(root):] if entry.path.startswith(root) else entry.path)
            if isinstance(entry, Directory):
                table.add_row("dir", f"[blue]{display}/[/blue]")
            else:
                table.add_row("file", display)
            count += 1

        if not count:
            self.console.print("[dim]Directory is empty.[/dim]")
            return
        self.console.print(table)

    def show_aliases(self, aliases: dict[str, str]) -> None:
        """Display the alias table."""
        if not aliases:
            self.console.print("[dim]No aliases configured.[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Alias", style="cyan")
        table.add_column("Target")
        for token, target in sorted(aliases.items()):
            table.add_row(f"{{{token}}}", target)
        self.console.print(table)
