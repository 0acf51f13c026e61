"""
Traversal strategies: where type units come from.

- SearchPathTraversal: directories and zip archives on sys.path (default)
- FixedListTraversal: an explicit list of names
- MappingListTraversal: names grouped under keys of a mapping
"""

from typelocator.traversal.base import TraversalListener, TypeTraversal
from typelocator.traversal.blacklisting import AllWhitelisted, Blacklister, SimpleBlacklister
from typelocator.traversal.fixed import FixedListTraversal, MappingListTraversal
from typelocator.traversal.search_path import SearchPathTraversal

__all__ = [
    "TraversalListener",
    "TypeTraversal",
    "Blacklister",
    "AllWhitelisted",
    "SimpleBlacklister",
    "FixedListTraversal",
    "MappingListTraversal",
    "SearchPathTraversal",
]
