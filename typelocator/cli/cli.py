# typelocator/cli/cli.py
"""
typelocator CLI - Main application.

Commands:
    typelocator packages    List every namespace found on the search path
    typelocator find        Find the classes implementing a contract
    typelocator index       Namespaces with their number of units
    typelocator registry    Resolve the configured contracts
    typelocator export      Print the registry as configuration YAML

NOTE: Commands use lazy loading - imports only happen when a command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

app = typer.Typer(
    name="typelocator",
    help="typelocator - find the classes implementing a contract on the search path.",
    no_args_is_help=True,
    add_completion=False,
)

PATH_HELP = "Search path entry (repeatable). Replaces sys.path."


@app.command("packages")
def packages(
    path: Optional[List[str]] = typer.Option(None, "--path", "-p", help=PATH_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress logging."),
) -> None:
    """List all discovered namespaces, sorted."""
    from typelocator.cli.commands import packages as mod

    mod.command(path=path, verbose=verbose)


@app.command("find")
def find(
    contract: str = typer.Argument(..., help="Contract class, e.g. myapp.exporters.Exporter."),
    namespaces: str = typer.Argument(..., help="Comma-separated namespaces to search."),
    path: Optional[List[str]] = typer.Option(None, "--path", "-p", help=PATH_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress logging."),
) -> None:
    """Find the classes implementing a contract."""
    from typelocator.cli.commands import find as mod

    mod.command(contract=contract, namespaces=namespaces, path=path, verbose=verbose)


@app.command("index")
def index(
    path: Optional[List[str]] = typer.Option(None, "--path", "-p", help=PATH_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress logging."),
) -> None:
    """Show every namespace with its number of units."""
    from typelocator.cli.commands import index as mod

    mod.command(path=path, verbose=verbose)


@app.command("registry")
def registry(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file."),
    path: Optional[List[str]] = typer.Option(None, "--path", "-p", help=PATH_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress logging."),
) -> None:
    """Resolve the configured contracts and list their classes."""
    from typelocator.cli.commands import registry as mod

    mod.command(config=config, path=path, verbose=verbose)


@app.command("export")
def export(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file."),
    what: str = typer.Option("names", "--what", "-w", help="What to export: names or namespaces."),
    path: Optional[List[str]] = typer.Option(None, "--path", "-p", help=PATH_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress logging."),
) -> None:
    """Print the resolved registry in configuration format (YAML)."""
    from typelocator.cli.commands import export as mod

    mod.command(config=config, what=what, path=path, verbose=verbose)


if __name__ == "__main__":
    app()
