# typelocator/cli/commands/packages.py
"""
Packages command.

Lists every namespace that holds at least one type unit.

Usage:
    typelocator packages
    typelocator packages -p ./plugins -p ./vendor/extra.zip
"""

from typing import List, Optional

import typer

from typelocator.cli.common import setup, traversal_for


def command(path: Optional[List[str]] = None, verbose: bool = False) -> None:
    from typelocator.resolver.resolver import TypeResolver

    setup(verbose)
    resolver = TypeResolver(traversal=traversal_for(path))

    for namespace in resolver.find_namespaces():
        typer.echo(namespace)
