from pathlib import Path

import pytest

from infrastructure.settings import load_settings, local_now


def test_load_settings_defaults():
    settings = load_settings({})

    assert settings.production_mode is False
    assert settings.timezone == "Asia/Manila"
    assert settings.cancellation_cutoff_minutes == 30
    assert settings.capacity_source == "location"
    assert settings.allow_attendance_revision is False
    assert settings.bookings_file == "bookings.json"


def test_load_settings_reads_overrides():
    settings = load_settings(
        {
            "PRODUCTION_MODE": "yes",
            "SCHEDULER_TIMEZONE": "Europe/Madrid",
            "CANCELLATION_CUTOFF_MINUTES": "45",
            "CAPACITY_SOURCE": "SLOT",
            "ALLOW_ATTENDANCE_REVISION": "1",
            "DATA_DIRECTORY": "/srv/bookings",
        }
    )

    assert settings.production_mode is True
    assert settings.timezone == "Europe/Madrid"
    assert settings.cancellation_cutoff_minutes == 45
    assert settings.capacity_source == "slot"
    assert settings.allow_attendance_revision is True
    assert settings.data_path("bookings.json") == Path("/srv/bookings") / "bookings.json"


def test_invalid_cutoff_falls_back_to_default():
    assert load_settings({"CANCELLATION_CUTOFF_MINUTES": "soon"}).cancellation_cutoff_minutes == 30
    assert load_settings({"CANCELLATION_CUTOFF_MINUTES": "-5"}).cancellation_cutoff_minutes == 30


def test_unknown_timezone_rejected():
    with pytest.raises(ValueError):
        load_settings({"SCHEDULER_TIMEZONE": "Mars/Olympus"})


def test_unknown_capacity_source_rejected():
    with pytest.raises(ValueError):
        load_settings({"CAPACITY_SOURCE": "both"})


def test_local_now_is_naive():
    assert local_now("Asia/Manila").tzinfo is None
