"""Domain dataclasses for bookings and the actors that act on them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Tuple

from infrastructure.constants import (
    ACTIVE_STATUSES,
    STATUS_ASSIGNED,
    STATUS_CANCELLED,
    STATUS_CHECKED_IN,
    STATUS_NO_SHOW,
)


class BookingStatus(Enum):
    """Lifecycle states of a booking."""

    ASSIGNED = STATUS_ASSIGNED
    CHECKED_IN = STATUS_CHECKED_IN
    NO_SHOW = STATUS_NO_SHOW
    CANCELLED = STATUS_CANCELLED

    @property
    def is_active(self) -> bool:
        return self.value in ACTIVE_STATUSES


class ActorRole(Enum):
    """Who is performing an operation."""

    VOLUNTEER = "volunteer"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    """The caller of an engine operation."""

    actor_id: str
    role: ActorRole = ActorRole.VOLUNTEER

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN

    @classmethod
    def admin(cls, actor_id: str = "admin") -> "Actor":
        return cls(actor_id=actor_id, role=ActorRole.ADMIN)

    @classmethod
    def volunteer(cls, volunteer_id: str) -> "Actor":
        return cls(actor_id=volunteer_id, role=ActorRole.VOLUNTEER)


BucketKey = Tuple[str, date, str]


@dataclass(frozen=True)
class Booking:
    """A volunteer placed into one location/date/slot.

    ``start_hour``/``end_hour`` are copied from the slot when the booking is
    created, so later catalog edits never move an existing booking.
    """

    booking_id: str
    volunteer_id: str
    location_id: str
    slot_id: str
    date: date
    start_hour: int
    end_hour: int
    created_at: datetime
    status: BookingStatus = BookingStatus.ASSIGNED
    slot_label: str = ""
    checked_in_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    forced: bool = False

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def bucket(self) -> BucketKey:
        return (self.location_id, self.date, self.slot_id)

    @property
    def duration_hours(self) -> int:
        return max(self.end_hour - self.start_hour, 0)

    def overlaps(self, start_hour: int, end_hour: int) -> bool:
        return start_hour < self.end_hour and self.start_hour < end_hour

    def with_status(self, status: BookingStatus, **updates: Any) -> "Booking":
        return replace(self, status=status, **updates)
