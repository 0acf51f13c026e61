# typelocator/cli/commands/registry.py
"""
Registry command.

Resolves every contract from the configuration and lists its classes.

Usage:
    typelocator registry
    typelocator registry --config ./locator.yaml
"""

from pathlib import Path
from typing import List, Optional

import typer

from typelocator.cli.common import registry_for, setup
from typelocator.cli.ui import ui


def command(
    config: Optional[Path] = None,
    path: Optional[List[str]] = None,
    verbose: bool = False,
) -> None:
    setup(verbose)
    registry = registry_for(config, path)
    registry.update_caches()

    contracts = registry.get_contracts()
    if not contracts:
        ui.info("No contracts configured.")
        return

    for contract in contracts:
        names = registry.get_names(contract)
        typer.echo(f"{contract} ({len(names)}):")
        for name in names:
            typer.echo(f"  - {name}")
