"""Find overlapping active bookings for a volunteer on one date."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from bookings.models import Booking, TimeSlot


class ConflictDetector:
    """Double-booking check across locations.

    Two bookings conflict when their half-open hour ranges intersect, so a
    06-08 and an 08-10 booking on the same date are compatible.
    """

    def find_conflict(
        self,
        volunteer_id: str,
        target_date: date,
        candidate_slot: TimeSlot,
        exclude_booking_id: Optional[str] = None,
        *,
        bookings: Iterable[Booking],
    ) -> Optional[Booking]:
        """Return the first conflicting booking in persisted order."""

        for existing in bookings:
            if existing.booking_id == exclude_booking_id:
                continue
            if existing.volunteer_id != volunteer_id or existing.date != target_date:
                continue
            if not existing.is_active:
                continue
            if existing.overlaps(candidate_slot.start_hour, candidate_slot.end_hour):
                return existing
        return None


__all__ = ["ConflictDetector"]
