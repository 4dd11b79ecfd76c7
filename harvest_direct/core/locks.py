"""Per-key mutual exclusion"""

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class KeyedLock:
    """
    Registry of locks, one per key.

    Callers holding different keys never block each other. An entry is
    dropped once no caller holds or waits on it, so the registry only
    grows with the number of keys in use at the same time.

    Usage:
        locks = KeyedLock()
        with locks.hold(session_id):
            ...
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Hashable, list] = {}  # key -> [lock, holders]

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._locks[key] = entry
            entry[1] += 1

        lock = entry[0]
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
