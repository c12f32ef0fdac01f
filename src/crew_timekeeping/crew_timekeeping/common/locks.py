from __future__ import annotations

import threading
from collections.abc import Hashable


class KeyedLocks:
    """One ``threading.Lock`` per key (worker id, segment id, ...).

    Locks are created lazily and kept for the life of the registry.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}

    def for_key(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock
