# typelocator/registry.py
"""
Configuration-driven registry of contract hierarchies.

HierarchyRegistry sits on top of a TypeResolver. It is configured with two
mappings, both in the same "contract -> comma-separated values" format:

- namespaces: where to look for implementations of each contract
- blacklist: regular expressions for implementations to leave out

Each contract moves through UNRESOLVED -> RESOLVING -> CACHED. Once cached,
reads are served from the registry's accumulators without resolving again
until initialize() resets everything.

Usage:
    registry = HierarchyRegistry(
        namespaces={"myapp.exporters.Exporter": "myapp.exporters,thirdparty.exporters"},
        blacklist={"myapp.exporters.Exporter": ".*Legacy.*"},
    )
    registry.get_names("myapp.exporters.Exporter")
    registry.contracts_for(CsvExporter)
"""

from __future__ import annotations

import re
import threading
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Set, Union

from typelocator.instances import InstanceMap, KeyedLocks
from typelocator.logging.logger import get_logger
from typelocator.logging.tags import REGISTRY
from typelocator.names import namespace_of, qualified_name, split_list
from typelocator.resolver.resolver import Contract, TypeResolver, get_resolver, reset_resolvers
from typelocator.traversal.base import TypeTraversal
from typelocator.traversal.search_path import SearchPathTraversal

logger = get_logger(__name__)

ConfigMapping = Mapping[str, Union[str, Iterable[str]]]


class ContractState(str, Enum):
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    CACHED = "cached"


class HierarchyRegistry:
    """
    Contracts and the classes resolved for them.

    Args:
        resolver: Resolver to use. Defaults to the shared one for sys.path.
        namespaces: Contract -> namespaces to search (comma string or list).
        blacklist: Contract -> regexes of names to exclude (comma string or list).
    """

    def __init__(
        self,
        resolver: Optional[TypeResolver] = None,
        namespaces: Optional[ConfigMapping] = None,
        blacklist: Optional[ConfigMapping] = None,
    ):
        self.resolver = resolver or get_resolver()
        self._lock = threading.RLock()
        self._contract_locks = KeyedLocks()
        self._populate_lock = threading.Lock()

        self._namespaces: Dict[str, List[str]] = {}
        self._blacklist: Dict[str, List[str]] = {}
        self._patterns: Dict[str, List[Pattern[str]]] = {}

        self.set_namespaces(namespaces or {})
        self.set_blacklist(blacklist or {})
        self.initialize()

    def __repr__(self) -> str:
        return f"HierarchyRegistry(contracts={sorted(self._namespaces)})"

    # =========================================================================
    # Configuration
    # =========================================================================

    def set_namespaces(self, mapping: ConfigMapping) -> None:
        """Replace the contract -> namespaces configuration."""
        with self._lock:
            self._namespaces = {key: split_list(value) for key, value in mapping.items()}
            self._all_cached = False

    def set_blacklist(self, mapping: ConfigMapping) -> None:
        """Replace the contract -> regexes configuration."""
        with self._lock:
            self._blacklist = {key: split_list(value) for key, value in mapping.items()}
            self._patterns = {}

    def initialize(self) -> None:
        """Forget every resolved contract; all of them go back to UNRESOLVED."""
        with self._lock:
            self._states: Dict[str, ContractState] = {}
            self._names: Dict[str, List[str]] = {}
            self._types: Dict[str, List[type]] = {}
            self._searched: Dict[str, List[str]] = {}
            self._managed_names: Set[str] = set()
            self._managed_types: Dict[int, type] = {}
            self._all_cached = False
        logger.debug(f"{REGISTRY} Initialized with {len(self._namespaces)} configured contract(s)")

    # =========================================================================
    # Population
    # =========================================================================

    def add_hierarchy(self, contract: Contract, namespaces: Union[str, Iterable[str]]) -> None:
        """
        Resolve a contract in the namespaces and merge the result.

        Names matching a blacklist regex of the contract are dropped together
        with their classes. Merging keeps the first-seen order and never adds
        a name twice.
        """
        key = qualified_name(contract)
        searched = split_list(namespaces)

        with self._contract_locks(key):
            previous = self._states.get(key)
            self._states[key] = ContractState.RESOLVING
            try:
                pairs = self.resolver.resolve(contract, searched)
                patterns = self._compiled(key)
                kept = [
                    (name, handle)
                    for name, handle in pairs
                    if not any(pattern.fullmatch(name) for pattern in patterns)
                ]
                if len(kept) != len(pairs):
                    logger.debug(f"{REGISTRY} Blacklisted {len(pairs) - len(kept)} class(es) for {key!r}")

                with self._lock:
                    names = self._names.setdefault(key, [])
                    types = self._types.setdefault(key, [])
                    for name, handle in kept:
                        if name in names:
                            continue
                        names.append(name)
                        types.append(handle)
                        self._managed_names.add(name)
                        self._managed_types[id(handle)] = handle

                    used = self._searched.setdefault(key, [])
                    used.extend(ns for ns in searched if ns not in used)
            except BaseException:
                if previous is None:
                    self._states.pop(key, None)
                else:
                    self._states[key] = previous
                raise

            self._states[key] = ContractState.CACHED

        logger.info(f"{REGISTRY} {key}: {len(self._names[key])} class(es) in {searched}")

    def update_caches(self, contract: Optional[Contract] = None) -> None:
        """
        Populate one contract, or every configured contract.

        A single contract is only resolved while it is UNRESOLVED. Without
        explicit configuration it is searched in its own namespace.
        """
        if contract is None:
            if self._all_cached:
                return
            with self._populate_lock:
                if self._all_cached:
                    return
                for key in sorted(self._namespaces):
                    self.update_caches(key)
                self._all_cached = True
            return

        key = qualified_name(contract)
        if self.state(key) is ContractState.CACHED:
            return

        with self._contract_locks(key):
            if self.state(key) is ContractState.CACHED:
                return
            namespaces = self._namespaces.get(key) or [namespace_of(key)]
            self.add_hierarchy(contract, namespaces)

    def state(self, contract: Contract) -> ContractState:
        return self._states.get(qualified_name(contract), ContractState.UNRESOLVED)

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_names(self, contract: Contract) -> List[str]:
        """Names of the classes for a contract, in first-seen order."""
        self.update_caches(contract)
        with self._lock:
            return list(self._names.get(qualified_name(contract), ()))

    def get_types(self, contract: Contract) -> List[type]:
        """Classes for a contract, index for index with get_names()."""
        self.update_caches(contract)
        with self._lock:
            return list(self._types.get(qualified_name(contract), ()))

    def get_namespaces(self, contract: Contract) -> List[str]:
        """Configured namespaces of a contract, or the ones it was searched in."""
        key = qualified_name(contract)
        with self._lock:
            return list(self._namespaces.get(key) or self._searched.get(key, ()))

    def get_contracts(self) -> List[str]:
        """Contracts resolved so far, sorted."""
        with self._lock:
            return sorted(key for key, state in self._states.items() if state is ContractState.CACHED)

    def contracts_for(self, type_: Contract) -> List[str]:
        """Every contract the class (or name) was merged under, sorted."""
        name = qualified_name(type_)
        with self._lock:
            if isinstance(type_, type):
                return sorted(
                    key
                    for key, types in self._types.items()
                    if any(handle is type_ for handle in types)
                )
            return sorted(key for key, names in self._names.items() if name in names)

    def is_managed(self, type_: Contract) -> bool:
        """True if the class (or name) was resolved for any configured contract."""
        self.update_caches()
        with self._lock:
            if isinstance(type_, type):
                return id(type_) in self._managed_types
            return type_ in self._managed_names

    def managed_names(self) -> List[str]:
        self.update_caches()
        with self._lock:
            return sorted(self._managed_names)

    def managed_types(self) -> List[type]:
        self.update_caches()
        with self._lock:
            return sorted(self._managed_types.values(), key=qualified_name)

    # =========================================================================
    # Export
    # =========================================================================

    def export_names(self) -> Dict[str, str]:
        """Contract -> comma-joined class names (the fixed mapping format)."""
        with self._lock:
            return {key: ",".join(self._names[key]) for key in sorted(self._names)}

    def export_namespaces(self) -> Dict[str, str]:
        """Contract -> comma-joined namespaces (the namespace configuration format)."""
        with self._lock:
            keys = set(self._namespaces) | set(self._searched)
            return {key: ",".join(self.get_namespaces(key)) for key in sorted(keys)}

    def render(self) -> str:
        lines = []
        for key, names in self.export_names().items():
            lines.append(f"{key}: {names}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _compiled(self, key: str) -> List[Pattern[str]]:
        with self._lock:
            patterns = self._patterns.get(key)
            if patterns is None:
                patterns = []
                for expr in self._blacklist.get(key, ()):
                    try:
                        patterns.append(re.compile(expr))
                    except re.error as e:
                        logger.error(f"{REGISTRY} Invalid blacklist pattern {expr!r} for {key!r}: {e}")
                self._patterns[key] = patterns
            return patterns


# =============================================================================
# Shared instances
# =============================================================================

_REGISTRIES: InstanceMap[HierarchyRegistry] = InstanceMap("registry")


def get_registry(traversal: Optional[TypeTraversal] = None) -> HierarchyRegistry:
    """
    Shared registry for a traversal strategy, configured from load_config().

    Keyed like get_resolver(): by the traversal's class, None meaning the
    default SearchPathTraversal.
    """
    key = type(traversal) if traversal is not None else SearchPathTraversal

    def _build() -> HierarchyRegistry:
        from typelocator.config.loader import load_config

        config = load_config()
        return HierarchyRegistry(
            resolver=get_resolver(traversal),
            namespaces=config.namespaces,
            blacklist=config.blacklist,
        )

    return _REGISTRIES.get(key, _build)


def reset_instances() -> None:
    """Forget all shared registries and resolvers (for testing)."""
    _REGISTRIES.clear()
    reset_resolvers()
