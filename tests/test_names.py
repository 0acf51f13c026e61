# tests/test_names.py
"""Tests for dotted type name helpers."""

import pytest

from typelocator.names import (
    DEFAULT_NAMESPACE,
    clean_up,
    is_anonymous,
    namespace_of,
    qualified_name,
    split_list,
    to_dotted,
)

pytestmark = pytest.mark.tier1


def test_namespace_is_prefix_before_last_dot():
    assert namespace_of("pkgA.plugins.CsvExporter") == "pkgA.plugins"
    assert namespace_of("pkgA.ConcreteClassA") == "pkgA"


def test_name_without_dot_lives_in_default_namespace():
    assert namespace_of("toplevel") == DEFAULT_NAMESPACE


def test_clean_up_turns_paths_into_dotted_names():
    assert clean_up("pkgA/plugins/csv.py") == "pkgA.plugins.csv"
    assert clean_up("pkgA\\plugins\\csv.py") == "pkgA.plugins.csv"
    assert clean_up("pkgA.plugins.csv") == "pkgA.plugins.csv"


def test_clean_up_collapses_package_marker():
    assert clean_up("pkgA/__init__.py") == "pkgA"
    assert clean_up("pkgA/sub/__init__.py") == "pkgA.sub"


def test_clean_up_only_strips_one_suffix():
    assert clean_up("data.py.py") == "data.py"
    assert clean_up("module.pyi", suffixes=(".pyi",)) == "module"


def test_to_dotted_only_converts_separators():
    assert to_dotted("tools/py") == "tools.py"
    assert to_dotted("pkgA\\plugins\\csv") == "pkgA.plugins.csv"
    assert to_dotted("tools.py") == "tools.py"


@pytest.mark.parametrize(
    "name",
    [
        "pkgA.Outer$1",
        "pkgA.ConcreteClassA$12",
        "Outer$3",
        "pkgA.Outer$Inner",
        "pkgA.Outer$Inner$1",
        "pkgA.price$usd",
        "pkgA.<lambda>",
        "pkgA.factory.<locals>.Made",
    ],
)
def test_nested_and_synthesized_names_are_anonymous(name):
    assert is_anonymous(name)


@pytest.mark.parametrize("name", ["pkgA.ConcreteClassA", "pkgA.Outer", "Plain"])
def test_regular_names_are_not_anonymous(name):
    assert not is_anonymous(name)


def test_qualified_name_of_class_and_string():
    class Local:
        pass

    assert qualified_name(dict) == "builtins.dict"
    assert qualified_name("pkgA.ConcreteClassA") == "pkgA.ConcreteClassA"
    assert qualified_name(Local).endswith("test_qualified_name_of_class_and_string.<locals>.Local")


def test_split_list_handles_strings_and_lists():
    assert split_list("pkgA, pkgB ,,pkgC") == ["pkgA", "pkgB", "pkgC"]
    assert split_list(["pkgA", " pkgB ", ""]) == ["pkgA", "pkgB"]
    assert split_list(None) == []
    assert split_list("") == []
