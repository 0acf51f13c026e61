# typelocator/traversal/blacklisting.py
"""
Exclusion hooks for physical traversal.

SearchPathTraversal asks its blacklister before descending into a directory
and before emitting a unit. Excluded directories and files are skipped
silently.
"""

from __future__ import annotations

import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Pattern, Set, Union

from typelocator.logging.logger import get_logger
from typelocator.logging.tags import TRAVERSAL

logger = get_logger(__name__)


class Blacklister(ABC):
    """Decides whether a directory or a unit file is skipped."""

    @abstractmethod
    def is_blacklisted_dir(self, path: Path) -> bool: ...

    @abstractmethod
    def is_blacklisted_file(self, path: Path) -> bool: ...


class AllWhitelisted(Blacklister):
    """Never excludes anything."""

    def is_blacklisted_dir(self, path: Path) -> bool:
        return False

    def is_blacklisted_file(self, path: Path) -> bool:
        return False


class SimpleBlacklister(Blacklister):
    """
    Excludes absolute directories, exact file names and file-name patterns.

    Patterns are regular expressions matched against the whole file name
    (not the path). They are compiled on first use; an invalid pattern is
    logged and ignored.

    Usage:
        blacklister = SimpleBlacklister()
        blacklister.blacklist_dir("/opt/app/vendor")
        blacklister.blacklist_file("conftest.py")
        blacklister.blacklist_file_pattern(r"test_.*\\.py")
    """

    def __init__(self) -> None:
        self._dirs: Set[Path] = set()
        self._files: Set[str] = set()
        self._patterns: Set[str] = set()
        self._compiled: Optional[List[Pattern[str]]] = None
        self._lock = threading.Lock()

    def blacklist_dir(self, path: Union[str, Path]) -> None:
        self._dirs.add(Path(path).absolute())

    def blacklisted_dirs(self) -> List[Path]:
        return sorted(self._dirs)

    def blacklist_file(self, name: str) -> None:
        self._files.add(name)

    def blacklisted_files(self) -> List[str]:
        return sorted(self._files)

    def blacklist_file_pattern(self, pattern: str) -> None:
        with self._lock:
            self._patterns.add(pattern)
            self._compiled = None

    def blacklisted_file_patterns(self) -> List[str]:
        return sorted(self._patterns)

    def is_blacklisted_dir(self, path: Path) -> bool:
        return Path(path).absolute() in self._dirs

    def is_blacklisted_file(self, path: Path) -> bool:
        name = Path(path).name
        if name in self._files:
            return True
        return any(p.fullmatch(name) for p in self._compiled_patterns())

    def _compiled_patterns(self) -> List[Pattern[str]]:
        with self._lock:
            if self._compiled is None:
                compiled = []
                for pattern in sorted(self._patterns):
                    try:
                        compiled.append(re.compile(pattern))
                    except re.error as e:
                        logger.error(f"{TRAVERSAL} Failed to compile file pattern {pattern!r}: {e}")
                self._compiled = compiled
            return self._compiled
