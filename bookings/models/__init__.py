"""Domain model definitions for the booking core."""

from .time_slot import TimeSlot, normalise_slot_id
from .booking import Actor, ActorRole, Booking, BookingStatus, BucketKey
from .directory import Location, Volunteer

__all__ = [
    "TimeSlot",
    "normalise_slot_id",
    "Actor",
    "ActorRole",
    "Booking",
    "BookingStatus",
    "BucketKey",
    "Location",
    "Volunteer",
]
