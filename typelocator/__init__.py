"""
typelocator - find the classes implementing a contract on the search path.

Installing a distribution into the search path makes its plugin classes
discoverable, without the consumer importing them by name.

Quick Start:
    >>> from typelocator import TypeResolver
    >>> resolver = TypeResolver()
    >>> resolver.resolve_names("myapp.exporters.Exporter", "myapp.exporters,thirdparty")

Public API:
    Traversal:
        - SearchPathTraversal: directories and zip archives on sys.path
        - FixedListTraversal / MappingListTraversal: explicit names
        - SimpleBlacklister: directories and files to leave out

    Discovery:
        - TypeIndex: namespace and origin index of one traversal
        - TypeResolver: contract -> matching classes, cached
        - HierarchyRegistry: configured contracts, reverse lookup, export

    Shared instances:
        - get_resolver / get_registry: one per traversal strategy
        - reset_instances: forget them (tests)

Architecture:
    typelocator/
    ├── traversal/     # where type units come from
    ├── index.py       # namespace -> names, origin -> names
    ├── resolver/      # loading, descriptors, contract matching
    ├── registry.py    # configuration-driven facade
    ├── config/        # YAML + pydantic configuration
    └── cli/           # typer commands
"""

__version__ = "0.1.0"

from typelocator.config import LocatorConfig, load_config, registry_from_config
from typelocator.exceptions import (
    ContainerReadError,
    EnvironmentRestriction,
    IntrospectionFailure,
    InvariantViolation,
    TypeLocatorError,
)
from typelocator.index import TypeIndex
from typelocator.registry import ContractState, HierarchyRegistry, get_registry, reset_instances
from typelocator.resolver import CatalogLoader, TypeDescriptor, TypeLoader, TypeResolver, get_resolver
from typelocator.traversal import (
    AllWhitelisted,
    Blacklister,
    FixedListTraversal,
    MappingListTraversal,
    SearchPathTraversal,
    SimpleBlacklister,
    TraversalListener,
    TypeTraversal,
)

__all__ = [
    "__version__",
    # Traversal
    "TypeTraversal",
    "TraversalListener",
    "SearchPathTraversal",
    "FixedListTraversal",
    "MappingListTraversal",
    "Blacklister",
    "AllWhitelisted",
    "SimpleBlacklister",
    # Discovery
    "TypeIndex",
    "TypeLoader",
    "CatalogLoader",
    "TypeDescriptor",
    "TypeResolver",
    "HierarchyRegistry",
    "ContractState",
    # Shared instances
    "get_resolver",
    "get_registry",
    "reset_instances",
    # Configuration
    "LocatorConfig",
    "load_config",
    "registry_from_config",
    # Exceptions
    "TypeLocatorError",
    "EnvironmentRestriction",
    "IntrospectionFailure",
    "ContainerReadError",
    "InvariantViolation",
]
