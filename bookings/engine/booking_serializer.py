"""Serialize and hydrate booking records for storage adapters."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bookings.models import Booking, BookingStatus

REQUIRED_BOOKING_FIELDS = {
    "id",
    "volunteer_id",
    "location_id",
    "slot_id",
    "date",
    "start_hour",
    "end_hour",
    "created_at",
}


class BookingRecordSerializer:
    """Convert :class:`Booking` dataclasses to and from JSON-safe payloads."""

    def to_storage(self, booking: Booking) -> Dict[str, Any]:
        return {
            "id": booking.booking_id,
            "volunteer_id": booking.volunteer_id,
            "location_id": booking.location_id,
            "slot_id": booking.slot_id,
            "slot_label": booking.slot_label,
            "date": booking.date.isoformat(),
            "start_hour": booking.start_hour,
            "end_hour": booking.end_hour,
            "status": booking.status.value,
            "created_at": booking.created_at.isoformat(),
            "checked_in_at": _isoformat(booking.checked_in_at),
            "cancelled_at": _isoformat(booking.cancelled_at),
            "forced": booking.forced,
        }

    def from_storage(self, payload: Mapping[str, Any]) -> Booking:
        """Hydrate a stored payload; raises ``ValueError`` when malformed."""

        missing = [name for name in REQUIRED_BOOKING_FIELDS if payload.get(name) is None]
        if missing:
            raise ValueError(f"Booking record missing required fields: {', '.join(sorted(missing))}")

        return Booking(
            booking_id=str(payload["id"]),
            volunteer_id=str(payload["volunteer_id"]),
            location_id=str(payload["location_id"]),
            slot_id=str(payload["slot_id"]),
            date=parse_date(payload["date"]),
            start_hour=int(payload["start_hour"]),
            end_hour=int(payload["end_hour"]),
            created_at=parse_datetime(payload["created_at"]),
            status=BookingStatus(payload.get("status") or BookingStatus.ASSIGNED.value),
            slot_label=str(payload.get("slot_label") or ""),
            checked_in_at=_optional_datetime(payload.get("checked_in_at")),
            cancelled_at=_optional_datetime(payload.get("cancelled_at")),
            forced=bool(payload.get("forced", False)),
        )

    def dump_all(self, bookings: Iterable[Booking]) -> List[Dict[str, Any]]:
        return [self.to_storage(booking) for booking in bookings]

    def load_all(self, payloads: Iterable[Mapping[str, Any]]) -> List[Booking]:
        return [self.from_storage(payload) for payload in payloads]


def parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    raise ValueError(f"Unsupported date value: {value!r}")


def parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    raise ValueError(f"Unsupported datetime value: {value!r}")


def _optional_datetime(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    return parse_datetime(value)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


DEFAULT_SERIALIZER = BookingRecordSerializer()

__all__ = [
    "BookingRecordSerializer",
    "DEFAULT_SERIALIZER",
    "parse_date",
    "parse_datetime",
]
