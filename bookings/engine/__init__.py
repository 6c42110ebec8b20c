"""Booking engine services."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .booking_engine import BookingEngine
    from .booking_repository import BookingRepository, InMemoryBookingRepository, JsonBookingRepository
    from .bucket_locks import BucketLocks
    from .notifications import BookingChange, ChangeKind, ChangeNotifier

__all__ = [
    "BookingEngine",
    "BookingRepository",
    "InMemoryBookingRepository",
    "JsonBookingRepository",
    "BucketLocks",
    "BookingChange",
    "ChangeKind",
    "ChangeNotifier",
]

_EXPORTS = {
    "BookingEngine": "bookings.engine.booking_engine",
    "BookingRepository": "bookings.engine.booking_repository",
    "InMemoryBookingRepository": "bookings.engine.booking_repository",
    "JsonBookingRepository": "bookings.engine.booking_repository",
    "BucketLocks": "bookings.engine.bucket_locks",
    "BookingChange": "bookings.engine.notifications",
    "ChangeKind": "bookings.engine.notifications",
    "ChangeNotifier": "bookings.engine.notifications",
}


def __getattr__(name: str):
    if name not in _EXPORTS:
        raise AttributeError(name)
    return getattr(import_module(_EXPORTS[name]), name)
