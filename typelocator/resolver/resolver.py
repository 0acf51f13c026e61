# typelocator/resolver/resolver.py
"""
Contract resolution.

TypeResolver answers "which classes in these namespaces derive from, or
satisfy, this contract?". Candidates come from the TypeIndex; each one goes
through a filter chain (synthetic names, blacklist, loading, abstractness,
optional constructor/serializability requirements, contract match).
Results are cached per (contract, namespace) for the lifetime of the
resolver, even if the index changes afterwards.

Failures are contained per candidate:
- EnvironmentRestriction: warning, candidate dropped, not blacklisted
- any other loading or inspection failure: error, candidate blacklisted
Only InvariantViolation escapes.
"""

from __future__ import annotations

import inspect
import threading
from operator import itemgetter
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple, Union

from typelocator.exceptions import EnvironmentRestriction, IntrospectionFailure, InvariantViolation
from typelocator.index import TypeIndex
from typelocator.instances import InstanceMap, KeyedLocks
from typelocator.logging.logger import get_logger
from typelocator.logging.tags import RESOLVER
from typelocator.names import is_anonymous, qualified_name, split_list
from typelocator.resolver.descriptor import (
    TypeDescriptor,
    has_default_constructor,
    is_capability,
    is_serializable,
)
from typelocator.resolver.loader import TypeLoader
from typelocator.traversal.base import TypeTraversal
from typelocator.traversal.search_path import SearchPathTraversal

logger = get_logger(__name__)

Contract = Union[type, str]
Namespaces = Union[str, Iterable[str]]
Pair = Tuple[str, type]


class TypeResolver:
    """
    Finds classes matching a contract within namespaces.

    Args:
        traversal: Source of type units. Defaults to SearchPathTraversal().
        loader: Turns names into modules/classes. Defaults to TypeLoader().
        index: Pre-built index; skips the traversal entirely.
        only_default_constructor: Drop classes that cannot be called without arguments.
        only_serializable: Drop classes that do not pickle by reference.
        eager: Build the index now instead of on first use.

    Usage:
        resolver = TypeResolver()
        resolver.resolve_names("myapp.exporters.Exporter", ["myapp.exporters", "thirdparty"])
    """

    def __init__(
        self,
        traversal: Optional[TypeTraversal] = None,
        loader: Optional[TypeLoader] = None,
        index: Optional[TypeIndex] = None,
        only_default_constructor: bool = False,
        only_serializable: bool = False,
        eager: bool = False,
    ):
        self.traversal = traversal or SearchPathTraversal()
        self.loader = loader or TypeLoader()
        self.only_default_constructor = only_default_constructor
        self.only_serializable = only_serializable

        self._index = index
        self._index_lock = threading.Lock()

        self._cache: Dict[Tuple[str, str], Tuple[List[str], List[type]]] = {}
        self._key_locks = KeyedLocks()
        self._blacklisted: Set[str] = set()
        self._subtype_memo: Dict[Tuple[type, type], bool] = {}
        self._capability_memo: Dict[Tuple[type, type], bool] = {}
        self._descriptors: Dict[type, TypeDescriptor] = {}

        if eager:
            _ = self.index

    def __repr__(self) -> str:
        return f"TypeResolver(traversal={self.traversal!r})"

    @property
    def index(self) -> TypeIndex:
        """The type index, built from the traversal on first access."""
        if self._index is None:
            with self._index_lock:
                if self._index is None:
                    self._index = TypeIndex.build(self.traversal)
        return self._index

    # =========================================================================
    # Resolution across namespaces
    # =========================================================================

    def resolve_names(self, contract: Contract, namespaces: Namespaces) -> List[str]:
        """Sorted, duplicate-free names of all matches in the namespaces."""
        return [name for name, _ in self.resolve(contract, namespaces)]

    def resolve_types(self, contract: Contract, namespaces: Namespaces) -> List[type]:
        """Classes matching resolve_names(), index for index."""
        return [handle for _, handle in self.resolve(contract, namespaces)]

    def resolve(self, contract: Contract, namespaces: Namespaces) -> List[Pair]:
        """(name, class) pairs of all matches in the namespaces, sorted by name."""
        target = self._load_contract(contract, namespaces)
        if target is None:
            return []

        merged: Dict[str, type] = {}
        for namespace in split_list(namespaces):
            for name, handle in self._resolve_in_namespace(target, namespace):
                merged.setdefault(name, handle)
        return _unique(merged.items())

    # =========================================================================
    # Resolution in one namespace
    # =========================================================================

    def resolve_names_in_namespace(self, contract: Contract, namespace: str) -> List[str]:
        target = self._load_contract(contract, namespace)
        if target is None:
            return []
        return [name for name, _ in self._resolve_in_namespace(target, namespace)]

    def resolve_types_in_namespace(self, contract: Contract, namespace: str) -> List[type]:
        target = self._load_contract(contract, namespace)
        if target is None:
            return []
        return [handle for _, handle in self._resolve_in_namespace(target, namespace)]

    def is_cached(self, contract: Contract, namespace: str) -> bool:
        return (qualified_name(contract), namespace) in self._cache

    def _resolve_in_namespace(self, contract: type, namespace: str) -> List[Pair]:
        key = (qualified_name(contract), namespace)

        cached = self._cache.get(key)
        if cached is None:
            with self._key_locks(key):
                cached = self._cache.get(key)
                if cached is None:
                    cached = self._populate(contract, namespace)
                    self._cache[key] = cached

        names, types = cached
        return list(zip(names, types))

    def _populate(self, contract: type, namespace: str) -> Tuple[List[str], List[type]]:
        logger.info(f"{RESOLVER} Searching for {qualified_name(contract)!r} in {namespace!r}")

        candidates = self.index.classnames(namespace)
        if namespace in self.index:
            # the namespace is itself a module: its own classes belong to it
            candidates.add(namespace)

        names: List[str] = []
        types: List[type] = []
        for candidate in sorted(candidates):
            for name, handle in self._candidates(candidate):
                if self._accept(contract, name, handle):
                    names.append(name)
                    types.append(handle)

        if len(names) != len(types):
            raise InvariantViolation(
                f"Differing number of names and types for {qualified_name(contract)!r} "
                f"in {namespace!r}: {len(names)} != {len(types)}"
            )

        pairs = _unique(zip(names, types))
        logger.debug(f"{RESOLVER} {len(pairs)} match(es) for {qualified_name(contract)!r} in {namespace!r}")
        return [name for name, _ in pairs], [handle for _, handle in pairs]

    def _candidates(self, candidate: str) -> Iterator[Pair]:
        """Load a candidate; modules expand into the public classes they define."""
        if is_anonymous(candidate) or self.is_blacklisted(candidate):
            return

        try:
            obj = self.loader.load(candidate)
        except EnvironmentRestriction as e:
            logger.warning(f"{RESOLVER} Cannot load {candidate!r} in this environment - skipped: {e}")
            return
        except IntrospectionFailure as e:
            logger.error(f"{RESOLVER} {e}", exc_info=e.__cause__ is not None)
            self.blacklist(candidate)
            return

        if isinstance(obj, type):
            yield candidate, obj
        elif inspect.ismodule(obj):
            origins: List[Optional[Path]] = list(self.index.origins_for(candidate)) or [None]
            for attr, handle in module_classes(obj):
                name = f"{candidate}.{attr}"
                for origin in origins:
                    self.index.visit(name, origin)
                if is_anonymous(name) or self.is_blacklisted(name):
                    continue
                yield name, handle
        else:
            logger.debug(f"{RESOLVER} {candidate!r} is neither a class nor a module")

    def _accept(self, contract: type, name: str, handle: type) -> bool:
        """Remaining filters for a loaded class. Never raises."""
        try:
            descriptor = self.describe(handle, name)

            if descriptor.abstract:
                self.index.set_abstract(name, True)
                return False

            if self.only_default_constructor and not has_default_constructor(handle):
                self.index.remove(name)
                return False

            if self.only_serializable and not is_serializable(handle):
                self.index.remove(name)
                return False

            if handle is contract:
                return False

            if is_capability(contract):
                return self.has_capability(contract, handle)
            return self.is_subtype(contract, handle)
        except Exception as e:
            logger.error(f"{RESOLVER} Failed to inspect {name!r}: {type(e).__name__}: {e}", exc_info=True)
            self.blacklist(name)
            return False

    def _load_contract(self, contract: Contract, namespaces: Namespaces) -> Optional[type]:
        if isinstance(contract, type):
            return contract
        try:
            return self.loader.load_class(contract)
        except (EnvironmentRestriction, IntrospectionFailure) as e:
            logger.error(f"{RESOLVER} Failed to load contract {contract!r} for {namespaces!r}: {e}")
            return None

    # =========================================================================
    # Memoized relations
    # =========================================================================

    def describe(self, handle: type, name: str = "") -> TypeDescriptor:
        """Descriptor of a class, built once per class."""
        descriptor = self._descriptors.get(handle)
        if descriptor is None:
            descriptor = self._descriptors.setdefault(handle, TypeDescriptor.of(handle, name))
        return descriptor

    def is_subtype(self, superclass: Contract, candidate: Contract) -> bool:
        """True if ``superclass`` is in the ancestor chain of ``candidate`` (or is candidate)."""
        pair = self._pair(superclass, candidate)
        if pair is None:
            return False
        key = pair

        cached = self._subtype_memo.get(key)
        if cached is not None:
            return cached

        superclass, candidate = pair
        result = False
        for ancestor in self.describe(candidate).ancestors:
            if ancestor is superclass:
                result = True
                break
            if ancestor is object:
                break

        self._subtype_memo[key] = result
        return result

    def has_capability(self, capability: Contract, candidate: Contract) -> bool:
        """True if ``candidate`` implements ``capability`` (nominally, virtually or structurally)."""
        pair = self._pair(capability, candidate)
        if pair is None:
            return False
        key = pair

        cached = self._capability_memo.get(key)
        if cached is not None:
            return cached

        capability, candidate = pair
        try:
            result = issubclass(candidate, capability)
        except TypeError:
            # non runtime-checkable protocols and protocols with data members
            result = capability in self.describe(candidate).capabilities

        self._capability_memo[key] = result
        return result

    def matches(self, contract: Contract, candidate: Contract) -> bool:
        return self.is_subtype(contract, candidate) or self.has_capability(contract, candidate)

    def _pair(self, first: Contract, second: Contract) -> Optional[Tuple[type, type]]:
        try:
            a = first if isinstance(first, type) else self.loader.load_class(first)
            b = second if isinstance(second, type) else self.loader.load_class(second)
        except (EnvironmentRestriction, IntrospectionFailure) as e:
            logger.debug(f"{RESOLVER} Cannot compare {first!r} and {second!r}: {e}")
            return None
        return a, b

    # =========================================================================
    # Blacklist
    # =========================================================================

    def blacklist(self, name: str) -> None:
        self._blacklisted.add(name)

    def is_blacklisted(self, name: str) -> bool:
        return name in self._blacklisted

    def blacklisted(self) -> List[str]:
        return sorted(self._blacklisted)

    # =========================================================================
    # Index passthrough
    # =========================================================================

    def find_namespaces(self) -> List[str]:
        """All namespaces known to the index, sorted."""
        return self.index.namespaces()

    def origins_for(self, type_name: Contract) -> List[Path]:
        """Search-path entries that contain the type."""
        return self.index.origins_for(qualified_name(type_name))


def module_classes(module: Any) -> List[Tuple[str, type]]:
    """Public classes defined in a module (not imported into it), sorted by name."""
    result = []
    for attr, obj in vars(module).items():
        if attr.startswith("_") or not isinstance(obj, type):
            continue
        if obj.__module__ != module.__name__ or obj.__name__ != attr:
            continue
        result.append((attr, obj))
    return sorted(result, key=itemgetter(0))


def _unique(pairs: Iterable[Pair]) -> List[Pair]:
    """Sort by name and keep the first name of each class."""
    seen: Set[int] = set()
    result = []
    for name, handle in sorted(pairs, key=itemgetter(0)):
        if id(handle) in seen:
            continue
        seen.add(id(handle))
        result.append((name, handle))
    return result


# =============================================================================
# Shared instances
# =============================================================================

_RESOLVERS: InstanceMap[TypeResolver] = InstanceMap("resolver")


def get_resolver(traversal: Optional[TypeTraversal] = None) -> TypeResolver:
    """
    Shared resolver for a traversal strategy.

    Instances are keyed by the traversal's class; None means the default
    SearchPathTraversal. The first call for a key decides the traversal
    instance that gets used.
    """
    key = type(traversal) if traversal is not None else SearchPathTraversal
    return _RESOLVERS.get(key, lambda: TypeResolver(traversal=traversal))


def reset_resolvers() -> None:
    """Forget all shared resolvers (for testing)."""
    _RESOLVERS.clear()
