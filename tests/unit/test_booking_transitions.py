from datetime import datetime

from bookings.engine.booking_transitions import BookingTransitions
from bookings.models import BookingStatus
from tests.helpers import make_booking


def test_strict_table_only_moves_out_of_assigned():
    transitions = BookingTransitions()

    assert transitions.can_transition(BookingStatus.ASSIGNED, BookingStatus.CHECKED_IN)
    assert transitions.can_transition(BookingStatus.ASSIGNED, BookingStatus.NO_SHOW)
    assert transitions.can_transition(BookingStatus.ASSIGNED, BookingStatus.CANCELLED)
    assert not transitions.can_transition(BookingStatus.CHECKED_IN, BookingStatus.NO_SHOW)
    assert not transitions.can_transition(BookingStatus.CANCELLED, BookingStatus.ASSIGNED)
    assert not transitions.can_transition(BookingStatus.NO_SHOW, BookingStatus.CANCELLED)


def test_revisable_attendance():
    transitions = BookingTransitions(allow_attendance_revision=True)

    assert transitions.can_transition(BookingStatus.CHECKED_IN, BookingStatus.NO_SHOW)
    assert transitions.can_transition(BookingStatus.NO_SHOW, BookingStatus.CHECKED_IN)
    assert not transitions.can_transition(BookingStatus.CHECKED_IN, BookingStatus.CANCELLED)
    assert not transitions.can_transition(BookingStatus.CANCELLED, BookingStatus.CHECKED_IN)


def test_with_status_returns_new_booking():
    booking = make_booking()
    stamp = datetime(2025, 1, 10, 6, 5)

    updated = booking.with_status(BookingStatus.CHECKED_IN, checked_in_at=stamp)

    assert updated.status == BookingStatus.CHECKED_IN
    assert updated.checked_in_at == stamp
    assert booking.status == BookingStatus.ASSIGNED
