# typelocator/resolver/loader.py
"""
Loading types by name.

TypeLoader imports the longest importable module prefix of a dotted name
and walks the rest as attributes, so "pkg.plugins.csv" gives the module and
"pkg.plugins.csv.CsvExporter" gives the class.

CatalogLoader is the start-time alternative: callers register their types
under stable names and nothing is imported by name.
"""

from __future__ import annotations

import importlib
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, overload

from typelocator.exceptions import EnvironmentRestriction, IntrospectionFailure
from typelocator.logging.logger import get_logger
from typelocator.logging.tags import RESOLVER
from typelocator.names import qualified_name

logger = get_logger(__name__)


class TypeLoader:
    """
    Imports modules and classes by dotted name.

    Args:
        restriction_types: Exception types that mean "cannot load in this
            environment". If one of them is raised (directly or anywhere in
            the cause/context chain) load() raises EnvironmentRestriction
            instead of IntrospectionFailure.
    """

    def __init__(self, restriction_types: Iterable[Type[BaseException]] = (EnvironmentRestriction,)):
        self.restriction_types: Tuple[Type[BaseException], ...] = tuple(restriction_types)

    def load(self, name: str) -> Any:
        """
        Resolve a dotted name to a module or an object inside one.

        Raises:
            EnvironmentRestriction: If loading hit an environment restriction
            IntrospectionFailure: For every other failure
        """
        try:
            return self._resolve(name)
        except IntrospectionFailure:
            raise
        except Exception as e:
            if self.is_restriction(e):
                raise EnvironmentRestriction(f"{name}: {e}") from e
            raise IntrospectionFailure(name, f"Failed to load {name!r}: {type(e).__name__}: {e}") from e

    def load_class(self, name: str) -> type:
        """Like load() but the result must be a class."""
        obj = self.load(name)
        if not isinstance(obj, type):
            raise IntrospectionFailure(name, f"{name!r} is not a class")
        return obj

    def is_restriction(self, exc: BaseException) -> bool:
        seen = set()
        current: Optional[BaseException] = exc
        while current is not None and id(current) not in seen:
            if isinstance(current, self.restriction_types):
                return True
            seen.add(id(current))
            current = current.__cause__ or current.__context__
        return False

    def _resolve(self, name: str) -> Any:
        parts = name.split(".")
        for i in range(len(parts), 0, -1):
            modname = ".".join(parts[:i])
            try:
                module = importlib.import_module(modname)
            except ModuleNotFoundError as e:
                # the prefix itself is missing: try a shorter one
                if e.name is not None and (modname == e.name or modname.startswith(e.name + ".")):
                    continue
                raise

            obj: Any = module
            for attr in parts[i:]:
                obj = getattr(obj, attr)
            return obj

        raise IntrospectionFailure(name, f"No module found for {name!r}")


class CatalogLoader(TypeLoader):
    """
    Resolves names against types registered up front.

    Usage:
        catalog = CatalogLoader()

        @catalog.register
        class CsvExporter(Exporter): ...

        catalog.add(JsonExporter, name="exporters.JsonExporter")

        resolver = TypeResolver(traversal=catalog.traversal(), loader=catalog)
    """

    def __init__(self, restriction_types: Iterable[Type[BaseException]] = (EnvironmentRestriction,)):
        super().__init__(restriction_types)
        self._types: Dict[str, Any] = {}

    @overload
    def register(self, obj: type) -> type: ...

    @overload
    def register(self, obj: None = None, *, name: str) -> Callable[[type], type]: ...

    def register(self, obj=None, *, name=None):
        """Decorator form of add()."""
        if obj is None:
            return lambda cls: self.add(cls, name=name)
        return self.add(obj, name=name)

    def add(self, obj: Any, name: Optional[str] = None) -> Any:
        key = name or qualified_name(obj)
        existing = self._types.get(key)
        if existing is not None and existing is not obj:
            logger.info(f"{RESOLVER} Overwriting catalog entry {key!r}")
        self._types[key] = obj
        return obj

    def names(self) -> List[str]:
        return sorted(self._types)

    def traversal(self):
        """A FixedListTraversal over the registered names."""
        from typelocator.traversal.fixed import FixedListTraversal

        return FixedListTraversal(self.names())

    def _resolve(self, name: str) -> Any:
        if name not in self._types:
            raise IntrospectionFailure(name, f"{name!r} is not registered in the catalog")
        return self._types[name]
