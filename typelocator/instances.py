# typelocator/instances.py
"""
Shared-instance maps and per-key locks.

Resolvers and registries are shared per traversal strategy. Instead of a
hidden class attribute, each kind keeps an explicit InstanceMap keyed by the
traversal class; construction happens under a lock, so two threads never
build diverging instances for the same key.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, Hashable, List, TypeVar

T = TypeVar("T")


class InstanceMap(Generic[T]):
    """Key -> lazily constructed instance."""

    def __init__(self, name: str):
        self.name = name
        self._instances: Dict[Hashable, T] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable, factory: Callable[[], T]) -> T:
        with self._lock:
            if key not in self._instances:
                self._instances[key] = factory()
            return self._instances[key]

    def keys(self) -> List[Hashable]:
        with self._lock:
            return list(self._instances)

    def clear(self) -> None:
        """Forget all instances (for testing)."""
        with self._lock:
            self._instances.clear()

    def __len__(self) -> int:
        return len(self._instances)


class KeyedLocks:
    """
    One lock per key, created on demand.

    Used for single-flight population: the first caller for a key computes
    the value while later callers for the same key wait and then read the
    cached result.
    """

    def __init__(self) -> None:
        self._locks: Dict[Hashable, threading.RLock] = {}
        self._guard = threading.Lock()

    def __call__(self, key: Hashable) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock
