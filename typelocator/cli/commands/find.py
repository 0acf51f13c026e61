# typelocator/cli/commands/find.py
"""
Find command.

Resolves a contract in one or more namespaces and prints the matches,
1-indexed.

Usage:
    typelocator find myapp.exporters.Exporter myapp.exporters,thirdparty
"""

from typing import List, Optional

import typer

from typelocator.cli.common import setup, traversal_for


def command(
    contract: str,
    namespaces: str,
    path: Optional[List[str]] = None,
    verbose: bool = False,
) -> None:
    from typelocator.names import split_list
    from typelocator.resolver.resolver import TypeResolver

    setup(verbose)
    resolver = TypeResolver(traversal=traversal_for(path))

    names = resolver.resolve_names(contract, split_list(namespaces))

    typer.echo(f"Searching for '{contract}' in '{namespaces}':")
    typer.echo(f"  {len(names)} found.")
    for i, name in enumerate(names, 1):
        typer.echo(f"  {i}. {name}")
