# typelocator/exceptions.py
"""
Exception hierarchy for type discovery.

Only InvariantViolation is meant to escape the resolver and the registry.
Everything else is raised close to the failing candidate or container and
contained there (logged, skipped, possibly blacklisted).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class TypeLocatorError(Exception):
    """Base error for typelocator."""

    pass


class EnvironmentRestriction(TypeLocatorError):
    """
    Raised when a type cannot be loaded in the current environment.

    Plugin modules raise this at import time when a precondition of the
    host is missing (no display, unsupported platform, ...). The resolver
    drops the candidate with a warning but does not blacklist it.
    """

    pass


class IntrospectionFailure(TypeLocatorError):
    """Raised when a type name cannot be resolved or inspected."""

    def __init__(self, type_name: str, message: Optional[str] = None):
        self.type_name = type_name
        super().__init__(message or f"Failed to load {type_name!r}")


class ContainerReadError(TypeLocatorError):
    """Raised when a directory or archive on the search path cannot be read."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path:
            message = f"{message} (container: {path})"
        super().__init__(message)


class InvariantViolation(TypeLocatorError):
    """Filtered names and filtered types went out of sync."""

    pass


__all__ = [
    "TypeLocatorError",
    "EnvironmentRestriction",
    "IntrospectionFailure",
    "ContainerReadError",
    "InvariantViolation",
]
