# travelplanner/core/locks.py
"""
In-process keyed locks.

Serializes work per key (for example per trip id) inside one process.
Entries are reference counted and dropped once no thread holds or waits
on them.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, List


class KeyedLock:
    """A registry of mutexes, one per key."""

    def __init__(self):
        self._guard = threading.Lock()
        # key -> [lock, number of holders and waiters]
        self._locks: Dict[Hashable, List] = {}

    @contextmanager
    def hold(self, key: Hashable):
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    self._locks.pop(key, None)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


__all__ = ["KeyedLock"]
