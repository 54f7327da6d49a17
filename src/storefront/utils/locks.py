"""Per-key mutual exclusion for read-modify-write sequences."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    """Hands out one re-entrant lock per key.

    Work for different keys proceeds in parallel; work for the same key is
    serialized. Locks are created on first use and kept for the life of the
    process.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, key) -> threading.RLock:
        with self._guard:
            return self._locks.setdefault(str(key), threading.RLock())

    @contextmanager
    def hold(self, key) -> Iterator[None]:
        lock = self._lock_for(key)
        with lock:
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


# Guards every mutation of a single user record (cart, wishlist, profile).
user_locks = KeyedLock()
