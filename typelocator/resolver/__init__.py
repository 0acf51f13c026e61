"""
Contract resolution: names to classes, classes to matches.
"""

from typelocator.resolver.descriptor import TypeDescriptor
from typelocator.resolver.loader import CatalogLoader, TypeLoader
from typelocator.resolver.resolver import TypeResolver, get_resolver, module_classes, reset_resolvers

__all__ = [
    "TypeDescriptor",
    "TypeLoader",
    "CatalogLoader",
    "TypeResolver",
    "get_resolver",
    "reset_resolvers",
    "module_classes",
]
