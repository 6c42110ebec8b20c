"""Validation helpers for booking engine operations."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from bookings.models import Booking


def find_active_duplicate(
    bookings: Iterable[Booking],
    *,
    volunteer_id: str,
    location_id: str,
    target_date: date,
    slot_id: str,
    logger: Any,
) -> Optional[Booking]:
    """Return the volunteer's active booking for the exact slot, if any."""

    for existing in bookings:
        if existing.volunteer_id != volunteer_id or not existing.is_active:
            continue
        if existing.bucket != (location_id, target_date, slot_id):
            continue

        logger.warning(
            """DUPLICATE BOOKING REJECTED
            Volunteer %s already holds %s at %s on %s
            Existing booking ID: %s
            """,
            volunteer_id,
            slot_id,
            location_id,
            target_date,
            existing.booking_id,
        )
        return existing
    return None


__all__ = ["find_active_duplicate"]
