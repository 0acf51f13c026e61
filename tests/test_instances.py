# tests/test_instances.py
"""Tests for shared-instance maps and keyed locks."""

import threading

import pytest

from typelocator.exceptions import ContainerReadError, IntrospectionFailure
from typelocator.instances import InstanceMap, KeyedLocks

pytestmark = pytest.mark.tier1


def test_instance_map_builds_once_per_key():
    instances = InstanceMap("test")
    built = []

    def factory():
        built.append(1)
        return object()

    first = instances.get("a", factory)

    assert instances.get("a", factory) is first
    assert instances.get("b", factory) is not first
    assert len(built) == 2
    assert instances.keys() == ["a", "b"]


def test_instance_map_clear():
    instances = InstanceMap("test")
    instances.get("a", object)

    instances.clear()

    assert len(instances) == 0


def test_instance_map_is_safe_under_contention():
    instances = InstanceMap("test")
    results = []

    def worker():
        results.append(instances.get("shared", object))

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len({id(r) for r in results}) == 1


def test_keyed_locks_are_per_key_and_reentrant():
    locks = KeyedLocks()

    assert locks("a") is locks("a")
    assert locks("a") is not locks("b")
    with locks("a"):
        with locks("a"):
            pass


def test_exception_messages_carry_context(tmp_path):
    assert str(tmp_path) in str(ContainerReadError("Cannot read archive", tmp_path))
    assert IntrospectionFailure("pkgA.Missing").type_name == "pkgA.Missing"
    assert "pkgA.Missing" in str(IntrospectionFailure("pkgA.Missing"))
