# typelocator/cli/common.py
"""Helpers shared by the CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from typelocator.logging.logger import configure_logging, get_logger
from typelocator.logging.tags import CLI
from typelocator.traversal.search_path import SearchPathTraversal

logger = get_logger(__name__)


def setup(verbose: bool) -> None:
    """Install the log handler; -v lowers the threshold to INFO."""
    configure_logging(level=logging.INFO if verbose else logging.WARNING)


def traversal_for(path: Optional[List[str]]) -> SearchPathTraversal:
    """Traversal over the --path entries, or over sys.path when none were given."""
    if path:
        logger.info(f"{CLI} Search path: {path}")
    return SearchPathTraversal(search_path=path or None)


def registry_for(config: Optional[Path], path: Optional[List[str]]):
    from typelocator.config.loader import load_config, registry_from_config

    locator_config = load_config(config)
    traversal = traversal_for(path) if path else None
    return registry_from_config(locator_config, traversal=traversal)
