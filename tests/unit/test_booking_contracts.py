from bookings.contracts import (
    AlreadyBookedError,
    BookingOutcome,
    CapacityExceededError,
    DirectoryOutcome,
    DoubleBookingWarning,
    NotFoundError,
    OutcomeStatus,
    TooLateToCancelError,
    ValidationError,
)
from tests.helpers import make_booking, make_slot


def test_error_codes_are_stable():
    assert ValidationError("x").code == "validation_error"
    assert NotFoundError("x").code == "not_found"
    assert AlreadyBookedError("x").code == "already_booked"
    assert CapacityExceededError("x").code == "capacity_exceeded"
    assert TooLateToCancelError("x").code == "too_late_to_cancel"
    assert str(CapacityExceededError("Slot is full")) == "Slot is full"


def test_outcome_constructors():
    booking = make_booking()

    success = BookingOutcome.success_result(booking)
    failure = BookingOutcome.failure_result(NotFoundError("missing"))
    warning = BookingOutcome.warning_result(DoubleBookingWarning(conflicting=booking, message="overlap"))

    assert success.success and success.booking == booking
    assert failure.status == OutcomeStatus.FAILURE and not failure.success
    assert warning.needs_confirmation and not warning.success
    assert warning.warning.conflicting == booking


def test_directory_outcome():
    slots = (make_slot("a", 6, 8),)

    assert DirectoryOutcome.ok(slots).slots == slots
    rejected = DirectoryOutcome.rejected(ValidationError("bad"))
    assert not rejected.success
    assert rejected.slots == ()
