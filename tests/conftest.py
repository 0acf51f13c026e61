# tests/conftest.py
"""
Root conftest - shared fixtures.

Most tests work on a small plugin tree written into tmp_path and put at the
front of sys.path:

    tlcontracts/__init__.py   SomeInterface (abstract ABC), Greeter (protocol), ...
    pkgA/__init__.py          ConcreteClassA, ConcreteClassB
    pkgB/__init__.py          ConcreteClassC
    hierarchy/__init__.py     AbstractAncestor with two concrete and one abstract subclass
    greeters/__init__.py      structural and explicit protocol implementations
    faulty/                   modules that fail to import
    ctor/__init__.py          constructor and pickling edge cases

Test Tiers:
- tier1: pure logic, no search path (<1s each)
- tier2: traversal, resolution and CLI over the fixture tree
"""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path
from typing import Dict

import pytest

from typelocator.registry import reset_instances
from typelocator.traversal.search_path import SearchPathTraversal

# =============================================================================
# Fixture Tree
# =============================================================================

PLUGIN_TREE: Dict[str, str] = {
    "tlcontracts/__init__.py": """
        from abc import ABC, abstractmethod
        from typing import Protocol, runtime_checkable


        class SomeInterface(ABC):
            @abstractmethod
            def run(self): ...


        @runtime_checkable
        class Greeter(Protocol):
            def greet(self) -> str: ...


        class Named(Protocol):
            def name(self) -> str: ...


        class Unrelated:
            pass
    """,
    "pkgA/__init__.py": """
        from tlcontracts import SomeInterface


        class ConcreteClassA(SomeInterface):
            def run(self):
                return "A"


        class ConcreteClassB(SomeInterface):
            def run(self):
                return "B"
    """,
    "pkgB/__init__.py": """
        from tlcontracts import SomeInterface


        class ConcreteClassC(SomeInterface):
            def run(self):
                return "C"
    """,
    "hierarchy/__init__.py": """
        from abc import ABC, abstractmethod


        class AbstractAncestor(ABC):
            @abstractmethod
            def value(self): ...


        class FirstChild(AbstractAncestor):
            def value(self):
                return 1


        class SecondChild(AbstractAncestor):
            def value(self):
                return 2


        class AbstractChild(AbstractAncestor):
            @abstractmethod
            def extra(self): ...


        class PlainBase:
            pass


        class PlainChild(PlainBase):
            pass


        class _PrivateChild(PlainBase):
            pass
    """,
    "greeters/__init__.py": """
        from tlcontracts import Named


        class Friendly:
            def greet(self) -> str:
                return "hi"


        class Mute:
            pass


        class ExplicitlyNamed(Named):
            def name(self) -> str:
                return "explicit"


        class ImplicitlyNamed:
            def name(self) -> str:
                return "implicit"
    """,
    "faulty/__init__.py": "",
    "faulty/broken.py": """
        raise RuntimeError("boom")
    """,
    "faulty/restricted.py": """
        from typelocator.exceptions import EnvironmentRestriction

        raise EnvironmentRestriction("no display available")
    """,
    "faulty/ok.py": """
        from tlcontracts import SomeInterface


        class Working(SomeInterface):
            def run(self):
                return "ok"
    """,
    "ctor/__init__.py": """
        from tlcontracts import SomeInterface


        class NoArgs(SomeInterface):
            def __init__(self, label="x"):
                self.label = label

            def run(self):
                return self.label


        class NeedsArg(SomeInterface):
            def __init__(self, label):
                self.label = label

            def run(self):
                return self.label


        def _make():
            class Hidden(SomeInterface):
                def __init__(self):
                    pass

                def run(self):
                    return "hidden"

            return Hidden


        Hidden = _make()
    """,
}

FIXTURE_PACKAGES = ("tlcontracts", "pkgA", "pkgB", "hierarchy", "greeters", "faulty", "ctor")


def write_tree(root: Path, tree: Dict[str, str]) -> Path:
    """Write relative path -> source text under root."""
    for relative, source in tree.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
    return root


def purge_modules(packages=FIXTURE_PACKAGES) -> None:
    """Drop fixture modules so every test imports its own tmp_path copy."""
    for name in list(sys.modules):
        if name.split(".")[0] in packages:
            del sys.modules[name]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _fresh_instances():
    """Shared resolvers and registries never leak between tests."""
    reset_instances()
    yield
    reset_instances()


@pytest.fixture
def plugin_root(tmp_path, monkeypatch):
    """The fixture tree, importable from sys.path."""
    root = write_tree(tmp_path / "plugins", PLUGIN_TREE)
    purge_modules()
    monkeypatch.syspath_prepend(str(root))
    yield root
    purge_modules()


@pytest.fixture
def traversal(plugin_root):
    """Traversal over the fixture tree only."""
    return SearchPathTraversal(search_path=[str(plugin_root)])


@pytest.fixture
def resolver(traversal):
    from typelocator.resolver.resolver import TypeResolver

    return TypeResolver(traversal=traversal)


@pytest.fixture
def no_user_config(tmp_path, monkeypatch):
    """No TYPELOCATOR_CONFIG and no ./.typelocator/config.yaml."""
    monkeypatch.delenv("TYPELOCATOR_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_files():
    """Write a relative path -> source mapping under a root directory."""
    return write_tree
