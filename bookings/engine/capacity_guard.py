"""Hard per-slot capacity check."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from bookings.models import Booking, Location, TimeSlot
from infrastructure.constants import CAPACITY_SOURCE_LOCATION, CAPACITY_SOURCE_SLOT, CAPACITY_SOURCES


class CapacityGuard:
    """Counts active bookings in a bucket against one authoritative ceiling.

    ``capacity_source`` selects the ceiling for the whole deployment:
    ``location`` uses :attr:`Location.capacity`, ``slot`` uses
    :attr:`TimeSlot.max_volunteers` where 0 means unbounded.
    """

    def __init__(self, capacity_source: str = CAPACITY_SOURCE_LOCATION) -> None:
        if capacity_source not in CAPACITY_SOURCES:
            raise ValueError(f"Unknown capacity source: {capacity_source}")
        self.capacity_source = capacity_source

    def occupancy(
        self,
        location_id: str,
        target_date: date,
        slot_id: str,
        *,
        bookings: Iterable[Booking],
    ) -> int:
        bucket = (location_id, target_date, slot_id)
        return sum(1 for booking in bookings if booking.is_active and booking.bucket == bucket)

    def capacity_for(self, location: Location, slot: TimeSlot) -> Optional[int]:
        """The ceiling for a bucket, ``None`` when unbounded."""

        if self.capacity_source == CAPACITY_SOURCE_SLOT:
            return slot.max_volunteers or None
        return location.capacity

    def has_room(
        self,
        location: Location,
        target_date: date,
        slot: TimeSlot,
        *,
        bookings: Iterable[Booking],
    ) -> bool:
        limit = self.capacity_for(location, slot)
        if limit is None:
            return True
        taken = self.occupancy(location.location_id, target_date, slot.slot_id, bookings=bookings)
        return taken < limit


__all__ = ["CapacityGuard"]
