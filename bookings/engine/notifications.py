"""
Change notifications published after committed booking mutations.

Subscribers receive a :class:`BookingChange` after the repository write has
succeeded. A failing subscriber is logged and skipped; it never undoes the
mutation and never prevents later subscribers from running.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable, List

from bookings.models import Booking


class ChangeKind(Enum):
    BOOKED = "booked"
    CANCELLED = "cancelled"
    CHECKED_IN = "checked_in"
    NO_SHOW = "no_show"
    REMOVED = "removed"


@dataclass(frozen=True)
class BookingChange:
    kind: ChangeKind
    booking_id: str
    volunteer_id: str
    location_id: str
    date: date
    slot_id: str
    occurred_at: datetime

    @classmethod
    def for_booking(cls, kind: ChangeKind, booking: Booking, occurred_at: datetime) -> "BookingChange":
        return cls(
            kind=kind,
            booking_id=booking.booking_id,
            volunteer_id=booking.volunteer_id,
            location_id=booking.location_id,
            date=booking.date,
            slot_id=booking.slot_id,
            occurred_at=occurred_at,
        )


Listener = Callable[[BookingChange], None]


class ChangeNotifier:
    """Fan-out of booking changes to subscribed callbacks."""

    def __init__(self) -> None:
        self.logger = logging.getLogger('ChangeNotifier')
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)
        self.logger.debug("Subscribed %r", listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, change: BookingChange) -> None:
        with self._lock:
            listeners = list(self._listeners)

        self.logger.debug(
            "Publishing %s for booking %s to %s listeners",
            change.kind.value,
            change.booking_id,
            len(listeners),
        )
        for listener in listeners:
            try:
                listener(change)
            except Exception:
                self.logger.error(
                    "Listener %r failed for %s on booking %s",
                    listener,
                    change.kind.value,
                    change.booking_id,
                    exc_info=True,
                )


__all__ = ["BookingChange", "ChangeKind", "ChangeNotifier", "Listener"]
