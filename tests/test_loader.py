# tests/test_loader.py
"""Tests for loading types by name and for type descriptors."""

from __future__ import annotations

import collections.abc
from abc import ABC, abstractmethod
from typing import Protocol

import pytest

from typelocator.exceptions import EnvironmentRestriction, IntrospectionFailure
from typelocator.resolver.descriptor import (
    TypeDescriptor,
    has_default_constructor,
    is_abstract,
    is_capability,
    is_serializable,
)
from typelocator.resolver.loader import CatalogLoader, TypeLoader

# =============================================================================
# Test Data
# =============================================================================


class Capability(ABC):
    @abstractmethod
    def act(self): ...


class Implementation(Capability):
    def act(self):
        return True


class Speaker(Protocol):
    def speak(self) -> str: ...


class Plain:
    pass


class NeedsArgs:
    def __init__(self, a, b=1, *args, **kwargs):
        pass


class OnlyDefaults:
    def __init__(self, a=1, *args, **kwargs):
        pass


def make_local_class():
    class Local:
        pass

    return Local


# =============================================================================
# Tests: TypeLoader
# =============================================================================


@pytest.mark.tier1
class TestTypeLoader:
    def test_loads_modules_and_classes(self):
        loader = TypeLoader()

        assert loader.load("collections.abc") is collections.abc
        assert loader.load("collections.abc.Mapping") is collections.abc.Mapping
        assert loader.load_class("collections.OrderedDict") is collections.OrderedDict

    def test_loads_nested_attributes(self):
        assert TypeLoader().load(f"{__name__}.TestTypeLoader") is TestTypeLoader

    def test_unknown_module_is_introspection_failure(self):
        with pytest.raises(IntrospectionFailure) as exc_info:
            TypeLoader().load("no_such_package_xyz.Thing")

        assert exc_info.value.type_name == "no_such_package_xyz.Thing"

    def test_unknown_attribute_is_introspection_failure(self):
        with pytest.raises(IntrospectionFailure) as exc_info:
            TypeLoader().load("collections.NoSuchClass")

        assert isinstance(exc_info.value.__cause__, AttributeError)

    def test_load_class_rejects_non_classes(self):
        with pytest.raises(IntrospectionFailure):
            TypeLoader().load_class("collections.abc")

    def test_restriction_anywhere_in_the_chain(self):
        loader = TypeLoader(restriction_types=(EnvironmentRestriction, PermissionError))

        try:
            try:
                raise PermissionError("no access")
            except PermissionError as e:
                raise RuntimeError("wrapped") from e
        except RuntimeError as e:
            assert loader.is_restriction(e)

        assert not loader.is_restriction(ValueError("plain"))


@pytest.mark.tier2
def test_import_errors_are_classified(plugin_root):
    loader = TypeLoader()

    with pytest.raises(EnvironmentRestriction):
        loader.load("faulty.restricted")

    with pytest.raises(IntrospectionFailure) as exc_info:
        loader.load("faulty.broken")

    assert isinstance(exc_info.value.__cause__, RuntimeError)


# =============================================================================
# Tests: CatalogLoader
# =============================================================================


@pytest.mark.tier1
class TestCatalogLoader:
    def test_registered_types_resolve_without_import(self):
        catalog = CatalogLoader()

        @catalog.register
        class Registered:
            pass

        catalog.add(Plain, name="plugins.Plain")

        assert catalog.load("plugins.Plain") is Plain
        assert catalog.load_class(f"{__name__}.{Registered.__qualname__}") is Registered

    def test_register_with_name(self):
        catalog = CatalogLoader()

        @catalog.register(name="plugins.Named")
        class Named:
            pass

        assert catalog.names() == ["plugins.Named"]
        assert catalog.traversal().type_names == ["plugins.Named"]

    def test_unregistered_name_fails(self):
        with pytest.raises(IntrospectionFailure):
            CatalogLoader().load("collections.OrderedDict")


# =============================================================================
# Tests: Descriptors
# =============================================================================


@pytest.mark.tier1
class TestDescriptor:
    def test_capabilities(self):
        assert is_capability(Capability)
        assert is_capability(Speaker)
        assert not is_capability(Implementation)
        assert not is_capability(Plain)

    def test_abstractness(self):
        assert is_abstract(Capability)
        assert is_abstract(Speaker)
        assert not is_abstract(Implementation)

    def test_default_constructor(self):
        assert has_default_constructor(OnlyDefaults)
        assert has_default_constructor(Implementation)
        assert not has_default_constructor(NeedsArgs)

    def test_serializable(self):
        assert is_serializable(Plain)
        assert not is_serializable(make_local_class())

    def test_descriptor_carries_ancestors_and_capabilities(self):
        descriptor = TypeDescriptor.of(Implementation)

        assert descriptor.name == f"{__name__}.Implementation"
        assert descriptor.ancestors[0] is Implementation
        assert descriptor.ancestors[-1] is object
        assert Capability in descriptor.capabilities
        assert not descriptor.abstract
