# typelocator/names.py
"""
Helpers for dotted type names.

A type name is a dotted identifier such as "pkgA.plugins.CsvExporter". Its
namespace is everything before the last dot, or DEFAULT_NAMESPACE for names
without a dot.
"""

from __future__ import annotations

from typing import Iterable, List

DEFAULT_NAMESPACE = "DEFAULT"

SEPARATOR = "."

UNIT_SUFFIX = ".py"

PACKAGE_MARKER = "__init__"

# nested and synthesized classes: Outer$Inner, Outer$1
NESTED_MARKER = "$"

# interpreter synthesized components: <lambda>, f.<locals>.Cls
SYNTHESIZED_MARKER = "<"


def namespace_of(type_name: str) -> str:
    """Return the namespace (prefix before the last dot) of a type name."""
    if SEPARATOR in type_name:
        return type_name.rsplit(SEPARATOR, 1)[0]
    return DEFAULT_NAMESPACE


def clean_up(type_name: str, suffixes: Iterable[str] = (UNIT_SUFFIX,)) -> str:
    """
    Normalize a path-like unit name into a dotted type name.

    Path separators become dots, a trailing unit suffix is removed and a
    trailing "__init__" component collapses into its package:

        >>> clean_up("pkgA/plugins/csv.py")
        'pkgA.plugins.csv'
        >>> clean_up("pkgA\\\\__init__.py")
        'pkgA'
    """
    result = type_name
    for suffix in suffixes:
        if result.endswith(suffix):
            result = result[: -len(suffix)]
            break
    result = to_dotted(result)
    if result == PACKAGE_MARKER:
        return result
    if result.endswith(SEPARATOR + PACKAGE_MARKER):
        result = result[: -len(PACKAGE_MARKER) - 1]
    return result


def to_dotted(type_name: str) -> str:
    """Turn path separators into dots, leaving an already dotted name untouched."""
    return type_name.replace("/", SEPARATOR).replace("\\", SEPARATOR)


def is_anonymous(type_name: str) -> bool:
    """True for nested or synthesized names: "Outer$Inner", "Outer$1", "<lambda>", "<locals>"."""
    return NESTED_MARKER in type_name or SYNTHESIZED_MARKER in type_name


def qualified_name(obj) -> str:
    """Dotted name of a class (module plus qualname) or pass a string through."""
    if isinstance(obj, str):
        return obj
    return f"{obj.__module__}.{obj.__qualname__}"


def split_list(value) -> List[str]:
    """
    Split a comma-separated configuration value.

    Whitespace is removed and empty items dropped. Lists pass through with
    the same cleanup applied to every item.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    return [str(item).replace(" ", "").strip() for item in items if str(item).strip()]
