"""
Read-only queries over the booking set: slot rosters, volunteer history,
attendance totals and service hours.

Queries run against a snapshot from the repository and take no bucket locks.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from bookings.engine.booking_repository import BookingRepository
from bookings.models import Booking, BookingStatus
from infrastructure.constants import SERVICE_HOUR_STATUSES


def slot_duration(booking: Booking) -> int:
    """Hours covered by a booking, never negative."""

    return max(booking.end_hour - booking.start_hour, 0)


@dataclass(frozen=True)
class AttendanceSummary:
    """Totals per status plus service hours for a reporting window."""

    total: int = 0
    status_counts: Dict[str, int] = field(default_factory=dict)
    service_hours: int = 0

    def count(self, status: BookingStatus) -> int:
        return self.status_counts.get(status.value, 0)

    @property
    def attendance_rate(self) -> Optional[float]:
        """Checked-in share of bookings whose attendance is settled."""

        settled = self.count(BookingStatus.CHECKED_IN) + self.count(BookingStatus.NO_SHOW)
        if not settled:
            return None
        return self.count(BookingStatus.CHECKED_IN) / settled


class BookingQueries:
    """Query helpers used by admin screens and volunteer dashboards."""

    def __init__(self, repository: BookingRepository) -> None:
        self.repository = repository

    def bookings_for_slot(
        self,
        location_id: str,
        target_date: date,
        slot_id: str,
        active_only: bool = False,
    ) -> List[Booking]:
        bucket = (location_id, target_date, slot_id)
        return [
            booking
            for booking in self.repository.load_all()
            if booking.bucket == bucket and (booking.is_active or not active_only)
        ]

    def bookings_for_volunteer(
        self,
        volunteer_id: str,
        target_date: Optional[date] = None,
        active_only: bool = False,
    ) -> List[Booking]:
        """A volunteer's bookings ordered by date and start hour."""

        matches = [
            booking
            for booking in self.repository.load_all()
            if booking.volunteer_id == volunteer_id
            and (target_date is None or booking.date == target_date)
            and (booking.is_active or not active_only)
        ]
        return sorted(matches, key=lambda booking: (booking.date, booking.start_hour))

    def attendance_summary(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        location_id: Optional[str] = None,
    ) -> AttendanceSummary:
        counts: Dict[str, int] = OrderedDict((status.value, 0) for status in BookingStatus)
        total = 0
        hours = 0
        for booking in self._in_window(date_from, date_to):
            if location_id is not None and booking.location_id != location_id:
                continue
            total += 1
            counts[booking.status.value] += 1
            if booking.status.value in SERVICE_HOUR_STATUSES:
                hours += slot_duration(booking)
        return AttendanceSummary(total=total, status_counts=dict(counts), service_hours=hours)

    def service_hours_by_volunteer(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Dict[str, int]:
        """Hours per volunteer counting checked-in and assigned bookings."""

        totals: Dict[str, int] = {}
        for booking in self._in_window(date_from, date_to):
            if booking.status.value not in SERVICE_HOUR_STATUSES:
                continue
            totals[booking.volunteer_id] = totals.get(booking.volunteer_id, 0) + slot_duration(booking)
        return totals

    def location_reference_count(self, location_id: str) -> int:
        return sum(1 for booking in self.repository.load_all() if booking.location_id == location_id)

    def _in_window(self, date_from: Optional[date], date_to: Optional[date]) -> List[Booking]:
        return [
            booking
            for booking in self.repository.load_all()
            if (date_from is None or booking.date >= date_from)
            and (date_to is None or booking.date <= date_to)
        ]


__all__ = ["AttendanceSummary", "BookingQueries", "slot_duration"]
