# typelocator/resolver/descriptor.py
"""
Type descriptors and the structural checks the resolver applies.

A TypeDescriptor is built once per class and carries its ancestor chain
(the MRO) and the capabilities it declares directly or inherits. Subtype and
capability checks walk these instead of re-inspecting the class.
"""

from __future__ import annotations

import inspect
import pickle
from abc import ABCMeta
from dataclasses import dataclass
from typing import FrozenSet, Tuple


def is_protocol(cls: type) -> bool:
    """True for typing.Protocol classes (not for classes implementing one)."""
    return bool(getattr(cls, "_is_protocol", False))


def is_capability(cls: type) -> bool:
    """
    Interface-like contracts.

    A capability is a Protocol or an abstract ABC. Both are checked with
    issubclass() (which honours ABC.register() and runtime-checkable
    protocols); every other class is a plain base type checked by walking
    the ancestor chain.
    """
    return is_protocol(cls) or (isinstance(cls, ABCMeta) and inspect.isabstract(cls))


def is_abstract(cls: type) -> bool:
    """Classes that cannot be instantiated: abstract ABCs and Protocols."""
    return inspect.isabstract(cls) or is_protocol(cls)


def has_default_constructor(cls: type) -> bool:
    """True if cls() can be called without arguments."""
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return False
    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return False
    return True


def is_serializable(cls: type) -> bool:
    """True if the class pickles by reference (importable under its qualified name)."""
    try:
        pickle.dumps(cls)
    except (pickle.PicklingError, AttributeError, TypeError, ImportError):
        return False
    return True


@dataclass(frozen=True)
class TypeDescriptor:
    """Ancestors and capabilities of one class."""

    name: str
    handle: type
    ancestors: Tuple[type, ...]
    capabilities: FrozenSet[type]
    abstract: bool

    @classmethod
    def of(cls, handle: type, name: str = "") -> "TypeDescriptor":
        ancestors = inspect.getmro(handle)
        return cls(
            name=name or f"{handle.__module__}.{handle.__qualname__}",
            handle=handle,
            ancestors=ancestors,
            capabilities=frozenset(a for a in ancestors[1:] if is_capability(a)),
            abstract=is_abstract(handle),
        )
