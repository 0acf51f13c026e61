# typelocator/traversal/fixed.py
"""
Traversals over fixed lists of type names.

Both strategies bypass the file system and report every name with no
origin. They are handy for frozen applications and for tests, where the
set of plugin types is known up front.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, Iterable, Iterator, List, Mapping, Union

import yaml

from typelocator.logging.logger import get_logger
from typelocator.logging.tags import TRAVERSAL
from typelocator.names import split_list
from typelocator.traversal.base import TypeTraversal, Unit

logger = get_logger(__name__)

COMMENT = "#"


class FixedListTraversal(TypeTraversal):
    """
    Reports a fixed list of type names.

    Usage:
        traversal = FixedListTraversal(["pkgA.ConcreteClassA", "pkgA.ConcreteClassB"])

        with open("plugins.txt") as f:
            traversal = FixedListTraversal.from_stream(f)
    """

    def __init__(self, type_names: Iterable[str]):
        self.type_names: List[str] = [name.strip() for name in type_names if name.strip()]

    @classmethod
    def from_stream(cls, stream: IO[str]) -> "FixedListTraversal":
        """
        Read one type name per line.

        Blank lines and lines starting with "#" are ignored. A read failure is
        logged and whatever was read so far is kept.
        """
        names: List[str] = []
        try:
            for line in stream:
                line = line.strip()
                if not line or line.startswith(COMMENT):
                    continue
                names.append(line)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"{TRAVERSAL} Failed to read type names from stream: {e}")
        return cls(names)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FixedListTraversal":
        try:
            with Path(path).open("r", encoding="utf-8") as f:
                return cls.from_stream(f)
        except OSError as e:
            logger.error(f"{TRAVERSAL} Failed to read type names from {path}: {e}")
            return cls([])

    def iter_units(self) -> Iterator[Unit]:
        for name in self.type_names:
            yield name, None

    def __repr__(self) -> str:
        return f"FixedListTraversal({len(self.type_names)} names)"


class MappingListTraversal(TypeTraversal):
    """
    Reports the type names listed under the keys of a mapping.

    Each value is a comma-separated string (or a list) of type names; keys
    are only used for grouping and in error messages. This is the same
    shape as the export produced by HierarchyRegistry.export_names().
    """

    def __init__(self, mapping: Mapping[str, Union[str, Iterable[str]]]):
        self.type_names: List[str] = []
        for key, value in mapping.items():
            try:
                self.type_names.extend(split_list(value))
            except TypeError as e:
                logger.error(f"{TRAVERSAL} Failed to process type names from key {key!r}: {e}")

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "MappingListTraversal":
        """Load the mapping from a YAML file; an unreadable file gives an empty traversal."""
        try:
            with Path(path).open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"{TRAVERSAL} Failed to load type names from {path}: {e}")
            return cls({})
        if not isinstance(data, dict):
            logger.error(f"{TRAVERSAL} Type name file must hold a mapping: {path}")
            return cls({})
        return cls(data)

    def iter_units(self) -> Iterator[Unit]:
        for name in self.type_names:
            yield name, None

    def __repr__(self) -> str:
        return f"MappingListTraversal({len(self.type_names)} names)"
