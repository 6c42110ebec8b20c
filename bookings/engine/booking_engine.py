"""
Booking Engine - places volunteers into location time slots

Every operation returns a :class:`BookingOutcome`; business rule violations
are typed results on that outcome. Mutations on one
``(location, date, slot)`` bucket are serialised by :class:`BucketLocks`, and
each read-modify-write goes through ``BookingRepository.transaction``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from bookings.contracts import (
    AlreadyBookedError,
    BookingError,
    BookingOutcome,
    CapacityExceededError,
    DirectoryOutcome,
    DoubleBookingWarning,
    NotFoundError,
    TooLateToCancelError,
    ValidationError,
)
from bookings.engine.booking_repository import BookingRepository
from bookings.engine.booking_serializer import parse_date
from bookings.engine.booking_transitions import BookingTransitions
from bookings.engine.booking_validation import find_active_duplicate
from bookings.engine.bucket_locks import BucketLocks
from bookings.engine.cancellation_policy import CancellationPolicy, slot_start_datetime
from bookings.engine.capacity_guard import CapacityGuard
from bookings.engine.conflict_detector import ConflictDetector
from bookings.engine.notifications import BookingChange, ChangeKind, ChangeNotifier
from bookings.models import Actor, Booking, BookingStatus
from bookings.schedules import ScheduleCatalog
from directory import LocationDirectory, VolunteerDirectory
from infrastructure.settings import AppSettings, get_settings, local_now

Clock = Callable[[], datetime]


class BookingEngine:
    """Orchestrates booking, cancellation and attendance for volunteers."""

    def __init__(
        self,
        locations: LocationDirectory,
        volunteers: VolunteerDirectory,
        catalog: ScheduleCatalog,
        repository: BookingRepository,
        *,
        settings: Optional[AppSettings] = None,
        clock: Optional[Clock] = None,
        notifier: Optional[ChangeNotifier] = None,
        locks: Optional[BucketLocks] = None,
        logger: Optional[Any] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.logger = logger or logging.getLogger('BookingEngine')
        self.locations = locations
        self.volunteers = volunteers
        self.catalog = catalog
        self.repository = repository
        self.notifier = notifier or ChangeNotifier()
        self.locks = locks or BucketLocks()
        self._clock = clock or (lambda: local_now(self.settings.timezone))

        self.conflicts = ConflictDetector()
        self.capacity = CapacityGuard(self.settings.capacity_source)
        self.policy = CancellationPolicy(self.settings.cancellation_cutoff_minutes)
        self.transitions = BookingTransitions(
            allow_attendance_revision=self.settings.allow_attendance_revision
        )

        self.logger.info(f"""BOOKING ENGINE INITIALIZED
        Capacity source: {self.capacity.capacity_source}
        Cancellation cutoff: {self.settings.cancellation_cutoff_minutes} minutes
        Attendance revision: {self.transitions.allow_attendance_revision}
        """)

    def now(self) -> datetime:
        return self._clock()

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------
    def book_slot(
        self,
        volunteer_id: str,
        location_id: str,
        slot_id: str,
        target_date: Any,
        actor: Actor,
        force: bool = False,
    ) -> BookingOutcome:
        """
        Place a volunteer into a slot.

        Checks run in order: references and permissions, duplicate, overlap
        with the volunteer's other bookings (skipped when ``force``), then
        capacity. Capacity has no override.
        """
        self.logger.info(f"""NEW BOOKING REQUEST
        Volunteer: {volunteer_id}
        Location: {location_id}
        Slot: {slot_id}
        Date: {target_date}
        Actor: {actor.actor_id} ({actor.role.value})
        Force: {force}
        """)

        if not actor.is_admin and actor.actor_id != volunteer_id:
            return self._reject(
                ValidationError(
                    "Volunteers can only book slots for themselves",
                    {'actor_id': actor.actor_id, 'volunteer_id': volunteer_id},
                )
            )

        try:
            booking_date = parse_date(target_date)
        except ValueError:
            return self._reject(ValidationError(f"Invalid booking date: {target_date!r}"))

        if self.volunteers.get(volunteer_id) is None:
            return self._reject(
                NotFoundError(f"Volunteer {volunteer_id} not found", {'volunteer_id': volunteer_id})
            )

        with self.locks.hold((location_id, booking_date, slot_id)):
            with self.repository.transaction() as bookings:
                location = self.locations.get(location_id)
                if location is None:
                    return self._reject(
                        NotFoundError(f"Location {location_id} not found", {'location_id': location_id})
                    )

                slot = self.catalog.find_slot(location_id, slot_id)
                if slot is None:
                    return self._reject(
                        NotFoundError(
                            f"Slot {slot_id} is not offered at {location.name}",
                            {'location_id': location_id, 'slot_id': slot_id},
                        )
                    )

                duplicate = find_active_duplicate(
                    bookings,
                    volunteer_id=volunteer_id,
                    location_id=location_id,
                    target_date=booking_date,
                    slot_id=slot_id,
                    logger=self.logger,
                )
                if duplicate is not None:
                    return BookingOutcome.failure_result(
                        AlreadyBookedError(
                            f"Already booked for {slot.label} at {location.name} on {booking_date}",
                            {'booking_id': duplicate.booking_id},
                        )
                    )

                conflict = self.conflicts.find_conflict(
                    volunteer_id, booking_date, slot, bookings=bookings
                )
                if conflict is not None and not force:
                    self.logger.info(f"""DOUBLE BOOKING WARNING
        Volunteer: {volunteer_id}
        Requested: {location_id} {slot.slot_id} on {booking_date}
        Conflicts with: {conflict.booking_id} ({conflict.location_id} {conflict.slot_id})
        """)
                    return BookingOutcome.warning_result(
                        DoubleBookingWarning(
                            conflicting=conflict,
                            message=(
                                f"Volunteer already has {conflict.slot_label or conflict.slot_id} "
                                f"at {conflict.location_id} on {booking_date}"
                            ),
                        )
                    )

                if not self.capacity.has_room(location, booking_date, slot, bookings=bookings):
                    return self._reject(
                        CapacityExceededError(
                            f"{slot.label} at {location.name} on {booking_date} is full",
                            {
                                'location_id': location_id,
                                'slot_id': slot_id,
                                'capacity': self.capacity.capacity_for(location, slot),
                            },
                        )
                    )

                booking = Booking(
                    booking_id=uuid.uuid4().hex,
                    volunteer_id=volunteer_id,
                    location_id=location_id,
                    slot_id=slot.slot_id,
                    date=booking_date,
                    start_hour=slot.start_hour,
                    end_hour=slot.end_hour,
                    created_at=self.now(),
                    slot_label=slot.label,
                    forced=conflict is not None,
                )
                bookings.append(booking)

        self.logger.info(f"""BOOKING CREATED
        Booking ID: {booking.booking_id}
        Volunteer: {volunteer_id}
        Time Slot: {booking_date} {slot.label} at {location.name}
        Forced: {booking.forced}
        """)
        self._publish(ChangeKind.BOOKED, booking)
        return BookingOutcome.success_result(booking)

    def assign_many(
        self,
        volunteer_ids: Iterable[str],
        location_id: str,
        slot_id: str,
        target_date: Any,
        actor: Actor,
        force: bool = False,
    ) -> Dict[str, BookingOutcome]:
        """Book several volunteers into one slot, each under the normal rules."""

        outcomes: Dict[str, BookingOutcome] = {}
        for volunteer_id in volunteer_ids:
            if volunteer_id in outcomes:
                continue
            outcomes[volunteer_id] = self.book_slot(
                volunteer_id, location_id, slot_id, target_date, actor, force=force
            )

        booked = sum(1 for outcome in outcomes.values() if outcome.success)
        self.logger.info(
            "Bulk assignment to %s %s on %s: %s of %s booked",
            location_id,
            slot_id,
            target_date,
            booked,
            len(outcomes),
        )
        return outcomes

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------
    def cancel(self, booking_id: str, actor: Actor) -> BookingOutcome:
        """
        Cancel a booking.

        The owning volunteer must respect the cancellation cutoff; admins may
        cancel at any time. Anyone else is rejected.
        """

        def decide(booking: Booking, now: datetime) -> Optional[BookingError]:
            if actor.is_admin:
                return None
            if actor.actor_id != booking.volunteer_id:
                return ValidationError(
                    "Only the booked volunteer or an admin can cancel this booking",
                    {'booking_id': booking.booking_id},
                )
            slot_start = slot_start_datetime(booking.date, booking.start_hour)
            if not self.policy.can_cancel(now, slot_start):
                return TooLateToCancelError(
                    f"Bookings can only be cancelled at least "
                    f"{self.settings.cancellation_cutoff_minutes} minutes before the slot starts",
                    {'booking_id': booking.booking_id, 'slot_start': slot_start.isoformat()},
                )
            return None

        return self._change_status(
            booking_id,
            BookingStatus.CANCELLED,
            ChangeKind.CANCELLED,
            decide,
            lambda now: {'cancelled_at': now},
        )

    def check_in(self, booking_id: str, actor: Actor) -> BookingOutcome:
        return self._change_status(
            booking_id,
            BookingStatus.CHECKED_IN,
            ChangeKind.CHECKED_IN,
            self._admin_only(actor, "check in volunteers"),
            lambda now: {'checked_in_at': now},
        )

    def mark_no_show(self, booking_id: str, actor: Actor) -> BookingOutcome:
        return self._change_status(
            booking_id,
            BookingStatus.NO_SHOW,
            ChangeKind.NO_SHOW,
            self._admin_only(actor, "mark no-shows"),
            lambda now: {'checked_in_at': None},
        )

    def remove(self, booking_id: str, actor: Actor) -> BookingOutcome:
        """Hard-delete a booking regardless of status or time (admin only)."""

        if not actor.is_admin:
            return self._reject(
                ValidationError("Only admins can remove bookings", {'booking_id': booking_id})
            )

        snapshot = self.repository.get(booking_id)
        if snapshot is None:
            return self._missing(booking_id)

        with self.locks.hold(snapshot.bucket):
            with self.repository.transaction() as bookings:
                index, booking = self._locate(bookings, booking_id)
                if booking is None:
                    return self._missing(booking_id)
                del bookings[index]

        self.logger.info(
            f"Removed booking {booking_id} for volunteer {booking.volunteer_id} by {actor.actor_id}"
        )
        self._publish(ChangeKind.REMOVED, booking)
        return BookingOutcome.success_result(booking)

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------
    def delete_location(self, location_id: str, actor: Actor) -> DirectoryOutcome:
        """Delete a location unless any booking, in any status, references it."""

        if not actor.is_admin:
            return DirectoryOutcome.rejected(
                ValidationError("Only admins can delete locations", {'location_id': location_id})
            )

        with self.repository.transaction() as bookings:
            if self.locations.get(location_id) is None:
                return DirectoryOutcome.rejected(
                    NotFoundError(f"Location {location_id} not found", {'location_id': location_id})
                )
            references = sum(1 for booking in bookings if booking.location_id == location_id)
            if references:
                self.logger.warning(
                    "Refusing to delete location %s: %s bookings reference it",
                    location_id,
                    references,
                )
                return DirectoryOutcome.rejected(
                    ValidationError(
                        f"Location {location_id} has {references} bookings and cannot be deleted",
                        {'location_id': location_id, 'references': references},
                    )
                )
            if not self.locations.delete_location(location_id):
                self.logger.warning("Location directory refused to delete %s", location_id)
                return DirectoryOutcome.rejected(
                    ValidationError(
                        f"Location {location_id} could not be deleted",
                        {'location_id': location_id},
                    )
                )

        self.logger.info(f"Deleted location {location_id} by {actor.actor_id}")
        return DirectoryOutcome.ok()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _change_status(
        self,
        booking_id: str,
        target: BookingStatus,
        kind: ChangeKind,
        decide: Callable[[Booking, datetime], Optional[BookingError]],
        updates: Callable[[datetime], Dict[str, Any]],
    ) -> BookingOutcome:
        snapshot = self.repository.get(booking_id)
        if snapshot is None:
            return self._missing(booking_id)

        with self.locks.hold(snapshot.bucket):
            with self.repository.transaction() as bookings:
                index, booking = self._locate(bookings, booking_id)
                if booking is None:
                    return self._missing(booking_id)

                now = self.now()
                error = decide(booking, now)
                if error is not None:
                    return self._reject(error)

                if not self.transitions.can_transition(booking.status, target):
                    return self._reject(
                        ValidationError(
                            f"Cannot change booking from {booking.status.value} to {target.value}",
                            {'booking_id': booking_id, 'status': booking.status.value},
                        )
                    )

                updated = booking.with_status(target, **updates(now))
                bookings[index] = updated

        self.logger.info(f"""BOOKING STATUS UPDATED
        Booking ID: {booking_id}
        Volunteer: {updated.volunteer_id}
        Time Slot: {updated.date} {updated.slot_label or updated.slot_id} at {updated.location_id}
        Status: {booking.status.value} -> {updated.status.value}
        """)
        self._publish(kind, updated)
        return BookingOutcome.success_result(updated)

    @staticmethod
    def _admin_only(actor: Actor, action: str) -> Callable[[Booking, datetime], Optional[BookingError]]:
        def decide(booking: Booking, now: datetime) -> Optional[BookingError]:
            if actor.is_admin:
                return None
            return ValidationError(f"Only admins can {action}", {'booking_id': booking.booking_id})

        return decide

    @staticmethod
    def _locate(bookings: List[Booking], booking_id: str) -> Tuple[int, Optional[Booking]]:
        for index, booking in enumerate(bookings):
            if booking.booking_id == booking_id:
                return index, booking
        return -1, None

    def _missing(self, booking_id: str) -> BookingOutcome:
        return self._reject(NotFoundError(f"Booking {booking_id} not found", {'booking_id': booking_id}))

    def _reject(self, error: BookingError) -> BookingOutcome:
        self.logger.warning("Booking operation rejected (%s): %s", error.code, error.message)
        return BookingOutcome.failure_result(error)

    def _publish(self, kind: ChangeKind, booking: Booking) -> None:
        self.notifier.publish(BookingChange.for_booking(kind, booking, self.now()))


__all__ = ["BookingEngine", "Clock"]
