"""Per-bucket mutation locks."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator

from bookings.models import BucketKey


class BucketLocks:
    """Registry of one re-entrant lock per ``(location_id, date, slot_id)``.

    Operations on different buckets proceed in parallel; operations on the
    same bucket run one at a time.
    """

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: Dict[BucketKey, threading.RLock] = {}

    def lock_for(self, bucket: BucketKey) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(bucket)
            if lock is None:
                lock = threading.RLock()
                self._locks[bucket] = lock
            return lock

    @contextmanager
    def hold(self, bucket: BucketKey) -> Iterator[None]:
        with self.lock_for(bucket):
            yield

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)


__all__ = ["BucketLocks"]
