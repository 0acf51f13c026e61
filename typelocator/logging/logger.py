# typelocator/logging/logger.py
"""
Unified logging setup for typelocator.

All modules use:
    from typelocator.logging.logger import get_logger
    logger = get_logger(__name__)

Verbosity can be raised or lowered per component through the environment,
using the logger name in upper case with dots turned into underscores:

    TYPELOCATOR_RESOLVER_LOGLEVEL=FINE
    TYPELOCATOR_TRAVERSAL_LOGLEVEL=OFF

Accepted values: OFF, SEVERE, WARNING, INFO, CONFIG, FINE, FINER, FINEST, ALL.
The most specific variable along the dotted name wins. Without any override
the package logger sits at WARNING.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional

DEFAULT_FORMAT = "[%(levelname)s] %(name)s - %(message)s"

LOGLEVEL_SUFFIX = "_LOGLEVEL"

PACKAGE_LOGGER = "typelocator"

CONFIG = 15
FINER = 7
FINEST = 5

logging.addLevelName(CONFIG, "CONFIG")
logging.addLevelName(FINER, "FINER")
logging.addLevelName(FINEST, "FINEST")

LEVELS: dict[str, int] = {
    "OFF": logging.CRITICAL + 10,
    "SEVERE": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "CONFIG": CONFIG,
    "FINE": logging.DEBUG,
    "FINER": FINER,
    "FINEST": FINEST,
    "ALL": 1,
}

DEFAULT_LEVEL = logging.WARNING


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream=sys.stderr,
):
    """
    Configure root logging handler.

    Called once early in the application lifecycle (e.g., CLI entrypoint).
    Safe to call multiple times, handler duplication is prevented.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def env_key(name: str) -> str:
    """Environment variable that controls the logger called ``name``."""
    return name.upper().replace(".", "_") + LOGLEVEL_SUFFIX


def parse_level(value: str) -> Optional[int]:
    """Turn a verbosity name (case-insensitive) into a logging level, None if unknown."""
    return LEVELS.get(value.strip().upper())


def level_from_env(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """
    Look up the most specific override for ``name``.

    For "typelocator.traversal.search_path" the variables checked are, in
    order, TYPELOCATOR_TRAVERSAL_SEARCH_PATH_LOGLEVEL,
    TYPELOCATOR_TRAVERSAL_LOGLEVEL and TYPELOCATOR_LOGLEVEL.
    """
    env = os.environ if environ is None else environ
    parts = name.split(".")
    while parts:
        raw = env.get(env_key(".".join(parts)))
        if raw is not None:
            level = parse_level(raw)
            if level is not None:
                return level
        parts.pop()
    return None


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Example:
        logger = get_logger(__name__)

    Handlers are NOT configured here, that happens in configure_logging().
    """
    logger = logging.getLogger(name)

    level = level_from_env(name)
    if level is not None:
        logger.setLevel(level)

    package = logging.getLogger(PACKAGE_LOGGER)
    if package.level == logging.NOTSET:
        package.setLevel(level_from_env(PACKAGE_LOGGER) or DEFAULT_LEVEL)

    return logger
