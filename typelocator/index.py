# typelocator/index.py
"""
Name and origin index built from one traversal.

TypeIndex is a passive listener: it files every visited type name under its
namespace and under the origin (directory or archive) it came from. It
cannot tell whether a type is abstract; the resolver writes that flag the
first time it loads the type.

Traversals report dotted unit names; the index only converts path separators
and never strips a suffix, so a module named "py" stays "pkg.py".
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from typelocator.logging.logger import get_logger
from typelocator.logging.tags import INDEX
from typelocator.names import is_anonymous, namespace_of, to_dotted
from typelocator.traversal.base import TypeTraversal

logger = get_logger(__name__)


class TypeIndex:
    """
    Namespace -> names and origin -> names.

    Usage:
        index = TypeIndex.build(SearchPathTraversal())
        index.classnames("myapp.plugins")
        index.origins_for("myapp.plugins.csv")
    """

    def __init__(self) -> None:
        self._by_namespace: Dict[str, Set[str]] = {}
        self._by_origin: Dict[Path, Set[str]] = {}
        self._abstract: Set[str] = set()
        self._lock = threading.RLock()

    @classmethod
    def build(cls, traversal: TypeTraversal) -> "TypeIndex":
        """Run the traversal once and return the filled index."""
        index = cls()
        count = traversal.traverse(index)
        logger.info(
            f"{INDEX} Indexed {count} unit(s) into {len(index._by_namespace)} namespace(s) "
            f"from {traversal!r}"
        )
        return index

    # =========================================================================
    # Listener
    # =========================================================================

    def visit(self, type_name: str, origin: Optional[Path]) -> None:
        name = to_dotted(type_name)
        with self._lock:
            self._by_namespace.setdefault(namespace_of(name), set()).add(name)
            if origin is not None:
                self._by_origin.setdefault(origin, set()).add(name)

    # =========================================================================
    # Queries
    # =========================================================================

    def classnames(self, namespace: str, exclude_abstract: bool = False) -> Set[str]:
        """Names in a namespace (a copy)."""
        with self._lock:
            return self._filtered(self._by_namespace.get(namespace, ()), exclude_abstract)

    def classnames_for_origin(self, origin: Path, exclude_abstract: bool = False) -> Set[str]:
        """Names found in one origin (a copy)."""
        with self._lock:
            return self._filtered(self._by_origin.get(origin, ()), exclude_abstract)

    def origins_for(self, type_name: str) -> List[Path]:
        """Every origin the name was found in, sorted. More than one means conflicting copies."""
        name = to_dotted(type_name)
        with self._lock:
            return sorted(origin for origin, names in self._by_origin.items() if name in names)

    def namespaces(self) -> List[str]:
        with self._lock:
            return sorted(self._by_namespace)

    def origins(self) -> List[Path]:
        with self._lock:
            return list(self._by_origin)

    def summary(self) -> Dict[str, int]:
        """Namespace -> number of names, sorted by namespace."""
        with self._lock:
            return {ns: len(self._by_namespace[ns]) for ns in sorted(self._by_namespace)}

    def __contains__(self, type_name: object) -> bool:
        if not isinstance(type_name, str):
            return False
        name = to_dotted(type_name)
        with self._lock:
            return name in self._by_namespace.get(namespace_of(name), ())

    def __len__(self) -> int:
        with self._lock:
            return sum(len(names) for names in self._by_namespace.values())

    def is_empty(self) -> bool:
        return not self._by_namespace

    # =========================================================================
    # Mutation (resolver only)
    # =========================================================================

    def remove(self, type_name: str) -> bool:
        """
        Purge a name from its namespace bucket and every origin bucket.

        Returns:
            True if the index changed.
        """
        name = to_dotted(type_name)
        changed = False

        with self._lock:
            names = self._by_namespace.get(namespace_of(name))
            if names is not None and name in names:
                names.discard(name)
                changed = True

            for names in self._by_origin.values():
                if name in names:
                    names.discard(name)
                    changed = True

            self._abstract.discard(name)

        if changed:
            logger.debug(f"{INDEX} Removed {name}")
        return changed

    def set_abstract(self, type_name: str, value: bool) -> None:
        name = to_dotted(type_name)
        with self._lock:
            if value:
                self._abstract.add(name)
            else:
                self._abstract.discard(name)

    def is_abstract(self, type_name: str) -> bool:
        return to_dotted(type_name) in self._abstract

    # =========================================================================
    # Helpers
    # =========================================================================

    is_anonymous = staticmethod(is_anonymous)

    def _filtered(self, names: Iterable[str], exclude_abstract: bool) -> Set[str]:
        result = set(names)
        if exclude_abstract:
            result -= self._abstract
        return result
