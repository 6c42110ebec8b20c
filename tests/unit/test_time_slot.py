from bookings.models import TimeSlot, normalise_slot_id


def test_normalise_slot_id_replaces_whitespace():
    assert normalise_slot_id("  early  morning shift ") == "early-morning-shift"
    assert normalise_slot_id(None) == ""


def test_valid_slot_has_no_errors():
    slot = TimeSlot("6-8am", "6:00 AM - 8:00 AM", 6, 8, min_volunteers=1, max_volunteers=4)

    assert slot.validation_errors() == []
    assert slot.duration_hours == 2


def test_slot_invariants_reported():
    assert TimeSlot("x", "", 6, 8).validation_errors()
    assert TimeSlot("x", "Backwards", 10, 8).validation_errors()
    assert TimeSlot("x", "Late", 22, 25).validation_errors()
    assert TimeSlot("x", "Negative", 6, 8, min_volunteers=-1).validation_errors()
    assert TimeSlot("x", "Min over max", 6, 8, min_volunteers=5, max_volunteers=4).validation_errors()


def test_unset_max_allows_any_min():
    assert TimeSlot("x", "Open", 6, 8, min_volunteers=5, max_volunteers=0).validation_errors() == []


def test_overlap_is_half_open():
    slot = TimeSlot("6-8am", "6-8", 6, 8)

    assert slot.overlaps(7, 9)
    assert not slot.overlaps(8, 10)
    assert not slot.overlaps(4, 6)


def test_from_payload_accepts_browser_keys():
    slot = TimeSlot.from_payload(
        {"id": "late shift", "label": "Late", "startHour": 18, "endHour": 20, "minVol": 1, "maxVol": 3}
    )

    assert slot == TimeSlot("late-shift", "Late", 18, 20, 1, 3)
    assert TimeSlot.from_payload(slot.to_payload()) == slot
