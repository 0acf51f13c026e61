# typelocator/traversal/base.py
"""
Traversal contracts.

A traversal walks some source of type units and reports each one to a
listener as a (type name, origin) pair. Origins are the search-path
entries (directories or archives) the unit was found in, or None for
synthetic sources such as fixed lists.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional, Protocol, Tuple, runtime_checkable

from typelocator.logging.logger import get_logger
from typelocator.logging.tags import TRAVERSAL

logger = get_logger(__name__)

Unit = Tuple[str, Optional[Path]]


@runtime_checkable
class TraversalListener(Protocol):
    """Receives every unit a traversal discovers."""

    def visit(self, type_name: str, origin: Optional[Path]) -> None: ...


class TypeTraversal(ABC):
    """
    Base class for traversal strategies.

    Subclasses only implement iter_units(); traverse() drives a listener
    from it. Shared registries and resolvers are keyed by the concrete
    traversal class, so each strategy gets its own instances.
    """

    @abstractmethod
    def iter_units(self) -> Iterator[Unit]:
        """Lazily yield (type name, origin) pairs. Must not raise."""
        ...

    def traverse(self, listener: TraversalListener) -> int:
        """
        Feed every unit to the listener.

        Returns:
            Number of units visited.
        """
        count = 0
        for type_name, origin in self.iter_units():
            listener.visit(type_name, origin)
            count += 1
        logger.debug(f"{TRAVERSAL} {type(self).__name__} visited {count} unit(s)")
        return count

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
