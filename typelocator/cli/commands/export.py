# typelocator/cli/commands/export.py
"""
Export command.

Prints the resolved registry in the configuration format, so it can be fed
back in as a namespace configuration or a fixed list of types.

Usage:
    typelocator export > names.yaml
    typelocator export --what namespaces
"""

from pathlib import Path
from typing import List, Optional

import typer
import yaml

from typelocator.cli.common import registry_for, setup
from typelocator.cli.ui import ui

CHOICES = ("names", "namespaces")


def command(
    config: Optional[Path] = None,
    what: str = "names",
    path: Optional[List[str]] = None,
    verbose: bool = False,
) -> None:
    if what not in CHOICES:
        ui.error(f"--what must be one of {', '.join(CHOICES)}, got {what!r}")
        raise typer.Exit(code=2)

    setup(verbose)
    registry = registry_for(config, path)
    registry.update_caches()

    data = registry.export_names() if what == "names" else registry.export_namespaces()
    typer.echo(yaml.safe_dump(data, sort_keys=True, default_flow_style=False), nl=False)
