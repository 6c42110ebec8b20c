from datetime import date

import pytest

from bookings.engine.capacity_guard import CapacityGuard
from bookings.models import BookingStatus, Location
from tests.helpers import make_booking, make_slot

DAY = date(2025, 1, 10)
HALL_A = Location(location_id="hall-a", name="Hall A", capacity=2)


def test_location_capacity_counts_only_active_bookings_in_bucket():
    slot = make_slot("6-8am", 6, 8, max_volunteers=10)
    bookings = [
        make_booking("b1", volunteer_id="v1"),
        make_booking("b2", volunteer_id="v2", status=BookingStatus.CANCELLED),
        make_booking("b3", volunteer_id="v3", slot_id="8-10am"),
    ]
    guard = CapacityGuard()

    assert guard.occupancy("hall-a", DAY, "6-8am", bookings=bookings) == 1
    assert guard.has_room(HALL_A, DAY, slot, bookings=bookings)

    bookings.append(make_booking("b4", volunteer_id="v4", status=BookingStatus.CHECKED_IN))
    assert not guard.has_room(HALL_A, DAY, slot, bookings=bookings)


def test_slot_capacity_source_ignores_location_ceiling():
    guard = CapacityGuard("slot")
    bookings = [make_booking("b1", volunteer_id="v1"), make_booking("b2", volunteer_id="v2")]

    assert guard.has_room(HALL_A, DAY, make_slot("6-8am", 6, 8, max_volunteers=3), bookings=bookings)
    assert not guard.has_room(HALL_A, DAY, make_slot("6-8am", 6, 8, max_volunteers=2), bookings=bookings)


def test_slot_capacity_zero_is_unbounded():
    guard = CapacityGuard("slot")
    bookings = [make_booking(f"b{i}", volunteer_id=f"v{i}") for i in range(20)]

    assert guard.capacity_for(HALL_A, make_slot("6-8am", 6, 8)) is None
    assert guard.has_room(HALL_A, DAY, make_slot("6-8am", 6, 8), bookings=bookings)


def test_unknown_capacity_source():
    with pytest.raises(ValueError):
        CapacityGuard("merged")
