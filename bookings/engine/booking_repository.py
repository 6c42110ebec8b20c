"""Persistence port and reference adapters for the booking set."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional

from bookings.engine.booking_serializer import DEFAULT_SERIALIZER, BookingRecordSerializer
from bookings.models import Booking
from infrastructure.json_store import JsonFileStore, PersistenceError


class BookingRepository(ABC):
    """Full-set read / full-set write access to every booking.

    ``transaction`` is the only path mutations should take: it yields the
    current list, and writes it back when the block exits cleanly. Adapters
    guarantee that two transactions never interleave their read and write.
    """

    def __init__(self) -> None:
        self._write_lock = threading.RLock()

    @abstractmethod
    def load_all(self) -> List[Booking]:
        """Return every stored booking in persisted order."""

    @abstractmethod
    def replace_all(self, bookings: Iterable[Booking]) -> None:
        """Overwrite the stored set with ``bookings``."""

    @contextmanager
    def transaction(self) -> Iterator[List[Booking]]:
        """Atomic read-modify-write over the booking set.

        Raising inside the block discards the changes, and an unchanged list
        is not written back.
        """

        with self._write_lock:
            bookings = self.load_all()
            original = list(bookings)
            yield bookings
            if bookings != original:
                self.replace_all(bookings)

    def get(self, booking_id: str) -> Optional[Booking]:
        for booking in self.load_all():
            if booking.booking_id == booking_id:
                return booking
        return None


class InMemoryBookingRepository(BookingRepository):
    """Keeps bookings in process memory; used by tests and embedded hosts."""

    def __init__(self, bookings: Optional[Iterable[Booking]] = None) -> None:
        super().__init__()
        self._bookings: List[Booking] = list(bookings or ())

    def load_all(self) -> List[Booking]:
        with self._write_lock:
            return list(self._bookings)

    def replace_all(self, bookings: Iterable[Booking]) -> None:
        with self._write_lock:
            self._bookings = list(bookings)


class JsonBookingRepository(BookingRepository):
    """Read/write the booking set to a JSON backing file."""

    def __init__(
        self,
        file_path: str,
        *,
        logger: Optional[Any] = None,
        serializer: BookingRecordSerializer = DEFAULT_SERIALIZER,
    ) -> None:
        super().__init__()
        self._logger = logger or logging.getLogger('BookingRepository')
        self._store = JsonFileStore(file_path, logger=self._logger)
        self._serializer = serializer

    def load_all(self) -> List[Booking]:
        """Load bookings from disk; a missing file is an empty set."""

        with self._write_lock:
            payload = self._store.load(expected=list)
            try:
                bookings = self._serializer.load_all(payload)
            except (KeyError, TypeError, ValueError) as exc:
                self._logger.error("Malformed booking record in %s: %s", self._store.path, exc)
                raise PersistenceError(f"Malformed booking record in {self._store.path}: {exc}") from exc

        self._logger.debug("Loaded %s bookings from %s", len(bookings), self._store.path)
        return bookings

    def replace_all(self, bookings: Iterable[Booking]) -> None:
        with self._write_lock:
            payload = self._serializer.dump_all(bookings)
            self._store.save(payload)
        self._logger.debug("Saved %s bookings to %s", len(payload), self._store.path)


__all__ = [
    "BookingRepository",
    "InMemoryBookingRepository",
    "JsonBookingRepository",
]
