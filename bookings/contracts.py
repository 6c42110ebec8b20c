"""Typed outcomes shared by the engine, the schedule catalog and the directories.

Every expected business outcome is a value, not an exception: callers inspect
``outcome.error`` (one of the :class:`BookingError` subclasses) or
``outcome.warning`` and decide what to show a human. Only storage failures are
raised, as :class:`infrastructure.json_store.PersistenceError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from bookings.models import Booking, TimeSlot
from infrastructure.json_store import PersistenceError


@dataclass(frozen=True)
class BookingError:
    """Base for business outcomes the caller must react to."""

    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    code = "booking_error"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationError(BookingError):
    """Malformed input or an operation the actor/state does not allow."""

    code = "validation_error"


@dataclass(frozen=True)
class NotFoundError(BookingError):
    """A referenced volunteer, location, slot or booking does not exist."""

    code = "not_found"


@dataclass(frozen=True)
class AlreadyBookedError(BookingError):
    """The volunteer already holds an active booking for the exact slot."""

    code = "already_booked"


@dataclass(frozen=True)
class CapacityExceededError(BookingError):
    """The slot is full. There is no override for this outcome."""

    code = "capacity_exceeded"


@dataclass(frozen=True)
class TooLateToCancelError(BookingError):
    """Self-service cancellation attempted inside the cutoff window."""

    code = "too_late_to_cancel"


@dataclass(frozen=True)
class DoubleBookingWarning:
    """The volunteer has an overlapping active booking on the same date.

    Not a failure: the same call may be repeated with ``force=True``.
    """

    conflicting: Booking
    message: str


class OutcomeStatus(Enum):
    """Overall result of an engine operation."""

    SUCCESS = "success"
    WARNING = "warning"
    FAILURE = "failure"


@dataclass(frozen=True)
class BookingOutcome:
    """Canonical result of a booking engine operation."""

    status: OutcomeStatus
    booking: Optional[Booking] = None
    error: Optional[BookingError] = None
    warning: Optional[DoubleBookingWarning] = None

    @property
    def success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def needs_confirmation(self) -> bool:
        return self.status == OutcomeStatus.WARNING

    @classmethod
    def success_result(cls, booking: Optional[Booking]) -> "BookingOutcome":
        return cls(status=OutcomeStatus.SUCCESS, booking=booking)

    @classmethod
    def failure_result(cls, error: BookingError) -> "BookingOutcome":
        return cls(status=OutcomeStatus.FAILURE, error=error)

    @classmethod
    def warning_result(cls, warning: DoubleBookingWarning) -> "BookingOutcome":
        return cls(status=OutcomeStatus.WARNING, warning=warning)


@dataclass(frozen=True)
class DirectoryOutcome:
    """Result of a catalog or directory mutation."""

    success: bool
    slots: Tuple[TimeSlot, ...] = field(default_factory=tuple)
    error: Optional[BookingError] = None

    @classmethod
    def ok(cls, slots: Tuple[TimeSlot, ...] = ()) -> "DirectoryOutcome":
        return cls(success=True, slots=tuple(slots))

    @classmethod
    def rejected(cls, error: BookingError) -> "DirectoryOutcome":
        return cls(success=False, error=error)


__all__ = [
    "BookingError",
    "ValidationError",
    "NotFoundError",
    "AlreadyBookedError",
    "CapacityExceededError",
    "TooLateToCancelError",
    "DoubleBookingWarning",
    "OutcomeStatus",
    "BookingOutcome",
    "DirectoryOutcome",
    "PersistenceError",
]
