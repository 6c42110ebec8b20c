"""
Legacy Booking Importer

Converts the loosely structured booking records of the browser application
into :class:`Booking` values. Volunteers are resolved to a stable id up front;
records that cannot be resolved are reported, never guessed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import pytz

from bookings.engine.booking_repository import BookingRepository
from bookings.engine.booking_serializer import parse_date
from bookings.legacy.time_bounds import resolve_time_bounds
from bookings.models import Booking, BookingStatus, Volunteer, normalise_slot_id
from bookings.schedules import ScheduleCatalog
from directory import VolunteerDirectory
from infrastructure.constants import DEFAULT_TIMEZONE, HOURS_PER_DAY


@dataclass(frozen=True)
class SkippedRecord:
    index: int
    reason: str
    record: Mapping[str, Any]


@dataclass
class ImportReport:
    """What an import produced and what it refused."""

    bookings: List[Booking] = field(default_factory=list)
    skipped: List[SkippedRecord] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.bookings)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class LegacyBookingImporter:
    """Resolve identities and time bounds for legacy booking records."""

    def __init__(
        self,
        volunteers: VolunteerDirectory,
        catalog: Optional[ScheduleCatalog] = None,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        logger: Optional[Any] = None,
    ) -> None:
        self.volunteers = volunteers
        self.catalog = catalog
        self.timezone = pytz.timezone(timezone)
        self.logger = logger or logging.getLogger('LegacyBookingImporter')

    def resolve_volunteer(self, record: Mapping[str, Any]) -> Optional[Volunteer]:
        """``volunteerId`` first, then ``username`` and ``displayName`` as identities."""

        volunteer_id = record.get('volunteerId')
        if volunteer_id:
            volunteer = self.volunteers.get(str(volunteer_id))
            if volunteer is not None:
                return volunteer

        for key in ('username', 'displayName'):
            volunteer = self.volunteers.match_identity(record.get(key))
            if volunteer is not None:
                return volunteer
        return None

    def convert(self, records: Iterable[Mapping[str, Any]]) -> ImportReport:
        report, _ = self._convert_with_sources(records)
        return report

    def _convert_with_sources(
        self,
        records: Iterable[Mapping[str, Any]],
    ) -> Tuple[ImportReport, Dict[str, Tuple[int, Mapping[str, Any]]]]:
        report = ImportReport()
        sources: Dict[str, Tuple[int, Mapping[str, Any]]] = {}
        active_buckets: Dict[Tuple[str, Any], str] = {}

        for index, record in enumerate(records):
            booking, reason = self._convert_record(record)
            if booking is None:
                report.skipped.append(SkippedRecord(index=index, reason=reason, record=record))
                self.logger.warning("Skipped legacy record #%s (%s): %s", index, reason, record.get('id'))
                continue

            if booking.is_active:
                key = (booking.volunteer_id, booking.bucket)
                if key in active_buckets:
                    reason = f"duplicate of active booking {active_buckets[key]}"
                    report.skipped.append(SkippedRecord(index=index, reason=reason, record=record))
                    self.logger.warning("Skipped legacy record #%s (%s)", index, reason)
                    continue
                active_buckets[key] = booking.booking_id

            report.bookings.append(booking)
            sources[booking.booking_id] = (index, record)

        self.logger.info(f"""LEGACY IMPORT CONVERTED
        Imported: {report.imported_count}
        Skipped: {report.skipped_count}
        """)
        return report, sources

    def import_into(
        self,
        repository: BookingRepository,
        records: Iterable[Mapping[str, Any]],
    ) -> ImportReport:
        """
        Convert and append to ``repository``.

        Ids already stored are skipped silently. An active record is refused
        when the stored bookings already hold an active booking for the same
        volunteer, location, slot and date.
        """

        report, sources = self._convert_with_sources(records)
        skipped = list(report.skipped)
        with repository.transaction() as bookings:
            existing = {booking.booking_id for booking in bookings}
            taken = {
                (booking.volunteer_id, booking.bucket): booking.booking_id
                for booking in bookings
                if booking.is_active
            }
            fresh: List[Booking] = []
            for booking in report.bookings:
                if booking.booking_id in existing:
                    self.logger.info("Legacy booking %s already imported", booking.booking_id)
                    continue
                if booking.is_active:
                    key = (booking.volunteer_id, booking.bucket)
                    if key in taken:
                        index, record = sources[booking.booking_id]
                        reason = f"duplicate of active booking {taken[key]}"
                        skipped.append(SkippedRecord(index=index, reason=reason, record=record))
                        self.logger.warning("Skipped legacy record #%s (%s)", index, reason)
                        continue
                    taken[key] = booking.booking_id
                existing.add(booking.booking_id)
                fresh.append(booking)
            bookings.extend(fresh)

        self.logger.info("Stored %s legacy bookings", len(fresh))
        return ImportReport(bookings=fresh, skipped=sorted(skipped, key=lambda skip: skip.index))

    def _convert_record(self, record: Mapping[str, Any]) -> Tuple[Optional[Booking], str]:
        booking_id = record.get('id')
        if not booking_id:
            return None, "missing id"

        location_id = record.get('locationId')
        if not location_id:
            return None, "missing locationId"

        slot_id = normalise_slot_id(record.get('slotId') or record.get('slotLabel'))
        if not slot_id:
            return None, "missing slotId"

        try:
            booking_date = parse_date(record.get('date'))
        except ValueError:
            return None, f"invalid date {record.get('date')!r}"

        try:
            status = BookingStatus(record.get('status') or BookingStatus.ASSIGNED.value)
        except ValueError:
            return None, f"unknown status {record.get('status')!r}"

        volunteer = self.resolve_volunteer(record)
        if volunteer is None:
            return None, "volunteer could not be resolved"

        start_hour, end_hour = resolve_time_bounds(
            {**record, 'slotId': slot_id}, self.catalog
        )
        if not 0 <= start_hour < end_hour <= HOURS_PER_DAY:
            return None, f"time bounds could not be resolved ({start_hour}-{end_hour})"

        try:
            created_at = self._to_local(record.get('createdAt')) or datetime.combine(booking_date, datetime.min.time())
            checked_in_at = self._to_local(record.get('checkedInAt'))
        except (TypeError, ValueError, OverflowError) as exc:
            return None, f"invalid timestamp: {exc}"

        booking = Booking(
            booking_id=str(booking_id),
            volunteer_id=volunteer.volunteer_id,
            location_id=str(location_id),
            slot_id=slot_id,
            date=booking_date,
            start_hour=start_hour,
            end_hour=end_hour,
            created_at=created_at,
            status=status,
            slot_label=str(record.get('slotLabel') or ''),
            checked_in_at=checked_in_at,
        )
        return booking, ""

    def _to_local(self, value: Any) -> Optional[datetime]:
        """Epoch milliseconds or an ISO string as naive local time."""

        if value in (None, ""):
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            aware = datetime.fromtimestamp(value / 1000, tz=pytz.utc).astimezone(self.timezone)
            return aware.replace(tzinfo=None)
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(self.timezone).replace(tzinfo=None)
        return parsed


__all__ = ["ImportReport", "LegacyBookingImporter", "SkippedRecord"]
