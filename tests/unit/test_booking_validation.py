from datetime import date

from bookings.engine.booking_validation import find_active_duplicate
from bookings.models import BookingStatus
from tests.helpers import DummyLogger, make_booking


def test_find_active_duplicate_matches_exact_bucket():
    logger = DummyLogger()
    existing = make_booking("b1")

    duplicate = find_active_duplicate(
        [existing],
        volunteer_id="v1",
        location_id="hall-a",
        target_date=date(2025, 1, 10),
        slot_id="6-8am",
        logger=logger,
    )

    assert duplicate == existing
    assert logger.levels() == ["warning"]


def test_cancelled_booking_is_not_a_duplicate():
    duplicate = find_active_duplicate(
        [make_booking("b1", status=BookingStatus.CANCELLED), make_booking("b2", slot_id="8-10am")],
        volunteer_id="v1",
        location_id="hall-a",
        target_date=date(2025, 1, 10),
        slot_id="6-8am",
        logger=DummyLogger(),
    )

    assert duplicate is None
