# typelocator/cli/commands/index.py
"""
Index command.

Shows how many type units every namespace holds.

Usage:
    typelocator index
"""

from typing import List, Optional

from typelocator.cli.common import setup, traversal_for
from typelocator.cli.ui import ui


def command(path: Optional[List[str]] = None, verbose: bool = False) -> None:
    from typelocator.index import TypeIndex

    setup(verbose)
    index = TypeIndex.build(traversal_for(path))

    summary = index.summary()
    if not summary:
        ui.info("No type units found.")
        return

    ui.header(f"{len(index)} unit(s) in {len(summary)} namespace(s)")
    ui.table(["Namespace", "Units"], summary.items())
