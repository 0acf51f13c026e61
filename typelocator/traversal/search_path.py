# typelocator/traversal/search_path.py
"""
Traversal of the Python search path.

Walks every search-path entry (sys.path unless an explicit list is given):

- directories are walked recursively in sorted order; every module file is
  reported as a dotted unit name ("pkg/plugins/csv.py" -> "pkg.plugins.csv",
  "pkg/__init__.py" -> "pkg").
- zip archives (.zip, .whl, .egg, .pyz) are enumerated once; afterwards any
  "*.pth" entry at the archive root is read as a list of further search-path
  parts, resolved relative to the archive's directory, and traversed too.

Every archive is visited at most once per traversal, so cyclic references
between archives terminate. Missing, unreadable and corrupt containers are
logged and skipped; iter_units() never raises.
"""

from __future__ import annotations

import os
import stat
import sys
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple, Union
from urllib.parse import unquote, urlparse

from typelocator.exceptions import ContainerReadError
from typelocator.logging.logger import get_logger
from typelocator.logging.tags import TRAVERSAL
from typelocator.names import PACKAGE_MARKER, UNIT_SUFFIX, clean_up
from typelocator.traversal.base import TypeTraversal, Unit
from typelocator.traversal.blacklisting import AllWhitelisted, Blacklister

logger = get_logger(__name__)

ARCHIVE_SUFFIXES = (".zip", ".whl", ".egg", ".pyz")

REFERENCE_SUFFIX = ".pth"

SKIPPED_DIRS = frozenset({"__pycache__"})

SKIPPED_UNITS = frozenset({"__main__"})

CORRUPT_ARCHIVE_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError)


class SearchPathTraversal(TypeTraversal):
    """
    Traverses directories and archives on the search path.

    Args:
        search_path: Entries to traverse. None means sys.path, read at
            traversal time. Entries may be plain paths, "file:" URIs or
            "<dir>/*" wildcards that expand to every archive in <dir>.
        blacklister: Exclusion hook for directories and unit files.
        suffixes: File suffixes that mark a type unit.
    """

    def __init__(
        self,
        search_path: Optional[Iterable[Union[str, Path]]] = None,
        blacklister: Optional[Blacklister] = None,
        suffixes: Sequence[str] = (UNIT_SUFFIX,),
    ):
        self._search_path = [str(p) for p in search_path] if search_path is not None else None
        self.blacklister = blacklister or AllWhitelisted()
        self.suffixes = tuple(suffixes)

    @property
    def search_path(self) -> List[str]:
        if self._search_path is None:
            return list(sys.path)
        return list(self._search_path)

    def __repr__(self) -> str:
        return f"SearchPathTraversal(search_path={self._search_path!r})"

    # =========================================================================
    # Entry points
    # =========================================================================

    def iter_units(self) -> Iterator[Unit]:
        visited: Set[Path] = set()
        for part in expand_wildcards(self.search_path):
            logger.info(f"{TRAVERSAL} Search path entry: {part}")
            yield from self._traverse_part(part, visited, referenced=False)

    def _traverse_part(self, part: str, visited: Set[Path], referenced: bool) -> Iterator[Unit]:
        path = to_path(part)
        if path is None:
            logger.info(f"{TRAVERSAL} Skipping: {part!r}")
            return

        try:
            mode = path.stat().st_mode
        except (FileNotFoundError, NotADirectoryError):
            if referenced:
                logger.warning(f"{TRAVERSAL} Archive does not exist: {path}")
            else:
                logger.info(f"{TRAVERSAL} Skipping missing search path entry: {path}")
            return
        except OSError as e:
            logger.warning(f"{TRAVERSAL} Cannot read search path entry: {path}: {e}")
            return

        if stat.S_ISDIR(mode):
            yield from self._traverse_dir(path, visited)
        else:
            yield from self._traverse_archive(path, visited)

    # =========================================================================
    # Directories
    # =========================================================================

    def _traverse_dir(self, root: Path, visited: Set[Path]) -> Iterator[Unit]:
        key = _real(root)
        if key in visited:
            logger.debug(f"{TRAVERSAL} Already traversed: {root}")
            return
        visited.add(key)

        logger.info(f"{TRAVERSAL} Analyzing directory: {root}")
        yield from self._walk(root, root, set())

    def _walk(self, root: Path, directory: Path, seen: Set[Path]) -> Iterator[Unit]:
        real = _real(directory)
        if real in seen:
            return
        seen.add(real)

        try:
            entries = scan_dir(directory)
        except ContainerReadError as e:
            logger.warning(f"{TRAVERSAL} {e}")
            return

        subdirs = []
        for entry in entries:
            try:
                is_dir = entry.is_dir()
            except OSError:
                continue
            if is_dir:
                subdirs.append(entry)
                continue
            unit = self._unit_name(Path(entry.path).relative_to(root).as_posix())
            if unit is None:
                continue
            if self.blacklister.is_blacklisted_file(Path(entry.path)):
                continue
            yield unit, root

        for entry in subdirs:
            if entry.name in SKIPPED_DIRS or not entry.name.isidentifier():
                continue
            path = Path(entry.path)
            if self.blacklister.is_blacklisted_dir(path):
                continue
            yield from self._walk(root, path, seen)

    # =========================================================================
    # Archives
    # =========================================================================

    def _traverse_archive(self, path: Path, visited: Set[Path]) -> Iterator[Unit]:
        key = _real(path)
        if key in visited:
            logger.debug(f"{TRAVERSAL} Already traversed: {path}")
            return
        visited.add(key)

        logger.info(f"{TRAVERSAL} Analyzing archive: {path}")
        try:
            names, references = read_archive(path)
        except CORRUPT_ARCHIVE_ERRORS as e:
            logger.error(f"{TRAVERSAL} Failed to inspect: {path}: {e}")
            return
        except ContainerReadError as e:
            logger.warning(f"{TRAVERSAL} {e}")
            return

        for name in names:
            unit = self._unit_name(name)
            if unit is None:
                continue
            if self.blacklister.is_blacklisted_file(Path(PurePosixPath(name).name)):
                continue
            yield unit, path

        for reference in references:
            yield from self._traverse_part(reference, visited, referenced=True)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _unit_name(self, relative: str) -> Optional[str]:
        """Dotted unit name for a relative file path, None if not an importable unit."""
        if not relative.endswith(self.suffixes):
            return None
        parts = PurePosixPath(relative.replace("\\", "/")).parts
        if not parts:
            return None
        stem = parts[-1]
        for suffix in self.suffixes:
            if stem.endswith(suffix):
                stem = stem[: -len(suffix)]
                break
        if stem in SKIPPED_UNITS or not stem.isidentifier():
            return None
        if any(p in SKIPPED_DIRS or not p.isidentifier() for p in parts[:-1]):
            return None
        if stem == PACKAGE_MARKER and len(parts) == 1:
            return None
        return clean_up(relative, self.suffixes)


def expand_wildcards(parts: Iterable[str]) -> Iterator[str]:
    """Replace "<dir>/*" entries with the archives inside <dir>, sorted by name."""
    for part in parts:
        if not part.endswith("*"):
            yield part
            continue
        directory = Path(part[:-1] or ".")
        try:
            archives = sorted(
                p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in ARCHIVE_SUFFIXES
            )
        except OSError as e:
            logger.warning(f"{TRAVERSAL} Cannot expand {part!r}: {e}")
            continue
        for archive in archives:
            yield str(archive.absolute())


def to_path(part: str) -> Optional[Path]:
    """Turn a search-path part (plain path or file: URI) into a Path."""
    if part.startswith("file:"):
        try:
            parsed = urlparse(part)
        except ValueError as e:
            logger.error(f"{TRAVERSAL} Failed to parse URI {part!r}: {e}")
            return None
        if not parsed.path:
            return None
        return Path(unquote(parsed.path))
    return Path(part) if part else Path(".")


def scan_dir(directory: Path) -> List[os.DirEntry]:
    """Directory entries sorted by name."""
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise ContainerReadError(f"Cannot read directory: {e}", directory) from e


def read_archive(path: Path) -> Tuple[List[str], List[str]]:
    """
    Read entry names and cross references of a zip archive.

    Raises:
        ContainerReadError: If the archive cannot be opened or read
        zipfile.BadZipFile, zlib.error: If the archive is corrupt
    """
    try:
        with zipfile.ZipFile(path) as archive:
            return archive.namelist(), read_references(archive, path.parent)
    except CORRUPT_ARCHIVE_ERRORS:
        raise
    except OSError as e:
        raise ContainerReadError(f"Cannot read archive: {e}", path) from e


def read_references(archive: zipfile.ZipFile, base: Path) -> List[str]:
    """
    Read the cross-reference list of an archive.

    Root-level "*.pth" entries hold one path per line. Blank lines, "#"
    comments and "import" lines are ignored; relative paths are resolved
    against ``base`` (the archive's directory).
    """
    result: List[str] = []
    for name in sorted(archive.namelist()):
        if "/" in name or not name.endswith(REFERENCE_SUFFIX):
            continue
        text = archive.read(name).decode("utf-8", errors="replace")
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith("#") or line.startswith(("import ", "import\t")):
                continue
            if line.startswith("file:") or Path(line).is_absolute():
                result.append(line)
            else:
                result.append(str(base / line))
    return result


def _real(path: Path) -> Path:
    try:
        return path.resolve()
    except OSError:
        return path.absolute()
