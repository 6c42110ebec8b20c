"""State transition helpers for bookings."""

from __future__ import annotations

from typing import Dict, FrozenSet

from bookings.models import BookingStatus

STRICT_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.ASSIGNED: frozenset(
        {BookingStatus.CHECKED_IN, BookingStatus.NO_SHOW, BookingStatus.CANCELLED}
    ),
    BookingStatus.CHECKED_IN: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

# Admins may correct attendance after the fact
REVISABLE_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    **STRICT_TRANSITIONS,
    BookingStatus.CHECKED_IN: frozenset({BookingStatus.NO_SHOW}),
    BookingStatus.NO_SHOW: frozenset({BookingStatus.CHECKED_IN}),
}


class BookingTransitions:
    """Explicit table of allowed status changes."""

    def __init__(self, *, allow_attendance_revision: bool = False) -> None:
        self.allow_attendance_revision = allow_attendance_revision
        self._table = REVISABLE_TRANSITIONS if allow_attendance_revision else STRICT_TRANSITIONS

    def allowed_targets(self, current: BookingStatus) -> FrozenSet[BookingStatus]:
        return self._table.get(current, frozenset())

    def can_transition(self, current: BookingStatus, target: BookingStatus) -> bool:
        return target in self.allowed_targets(current)


__all__ = [
    "BookingTransitions",
    "REVISABLE_TRANSITIONS",
    "STRICT_TRANSITIONS",
]
