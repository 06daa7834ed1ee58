"""
RK Media Server v1.0.0 - Library Locks
Advisory per-library mutual exclusion for scans and uploads
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class LibraryLocks:
    """One lock per library id; work on different libraries is not serialized"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def _lock_for(self, library_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(library_id)
            if lock is None:
                lock = self._locks[library_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, library_id: int) -> Iterator[None]:
        lock = self._lock_for(library_id)
        with lock:
            yield

    def discard(self, library_id: int) -> None:
        """Forget a deleted library's lock"""
        with self._guard:
            self._locks.pop(library_id, None)
