from datetime import date, datetime

from bookings.engine.cancellation_policy import CancellationPolicy, slot_start_datetime


def test_slot_start_datetime():
    assert slot_start_datetime(date(2025, 1, 10), 14) == datetime(2025, 1, 10, 14, 0)
    assert slot_start_datetime(date(2025, 1, 10), 0) == datetime(2025, 1, 10, 0, 0)


def test_hour_24_rolls_to_next_midnight():
    assert slot_start_datetime(date(2025, 1, 31), 24) == datetime(2025, 2, 1, 0, 0)


def test_thirty_minute_boundary():
    policy = CancellationPolicy()
    start = datetime(2025, 1, 10, 14, 0)

    assert policy.can_cancel(datetime(2025, 1, 10, 13, 25), start)
    assert policy.can_cancel(datetime(2025, 1, 10, 13, 30), start)
    assert not policy.can_cancel(datetime(2025, 1, 10, 13, 35), start)
    assert not policy.can_cancel(datetime(2025, 1, 10, 15, 0), start)


def test_custom_cutoff():
    policy = CancellationPolicy(cutoff_minutes=120)
    start = datetime(2025, 1, 10, 14, 0)

    assert not policy.can_cancel(datetime(2025, 1, 10, 12, 30), start)
    assert policy.can_cancel(datetime(2025, 1, 10, 11, 0), start)
