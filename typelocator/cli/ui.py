# typelocator/cli/ui.py
"""
Shared UI helpers for CLI commands.

Usage:
    from typelocator.cli.ui import ui

    ui.header("Namespaces")
    ui.table(["Namespace", "Units"], rows)
"""

from __future__ import annotations

from typing import Iterable, Sequence

import typer
from rich.console import Console
from rich.table import Table

console = Console()


class UI:
    def header(self, title: str) -> None:
        console.print(f"[bold]{title}[/bold]")

    def info(self, message: str) -> None:
        console.print(f"[dim]{message}[/dim]")

    def error(self, message: str) -> None:
        typer.echo(f"Error: {message}", err=True)

    def table(self, columns: Sequence[str], rows: Iterable[Sequence[object]], title: str = "") -> None:
        table = Table(title=title or None)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*(str(cell) for cell in row))
        console.print(table)


ui = UI()
