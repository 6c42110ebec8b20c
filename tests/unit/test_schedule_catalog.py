from bookings.contracts import NotFoundError, ValidationError
from bookings.schedules import ScheduleCatalog, default_slots
from tests.helpers import make_slot


def test_uncustomised_location_gets_default_copy():
    catalog = ScheduleCatalog()

    slots = catalog.get_slots("hall-a")
    assert [slot.slot_id for slot in slots] == [
        "6-8am", "8-10am", "10-12pm", "12-2pm", "2-4pm", "4-6pm", "6-8pm",
    ]
    assert slots[0].label == "6:00 AM - 8:00 AM"
    assert (slots[0].min_volunteers, slots[0].max_volunteers) == (1, 4)

    slots.clear()
    assert len(catalog.get_slots("hall-a")) == 7
    assert not catalog.has_custom_slots("hall-a")


def test_set_slots_rejects_duplicates_and_bad_hours():
    catalog = ScheduleCatalog()

    outcome = catalog.set_slots("hall-a", [make_slot("a", 6, 8), make_slot("a", 8, 10)])
    assert not outcome.success
    assert isinstance(outcome.error, ValidationError)

    outcome = catalog.set_slots("hall-a", [make_slot("a", 9, 8)])
    assert not outcome.success
    assert not catalog.has_custom_slots("hall-a")


def test_add_update_remove_slot():
    catalog = ScheduleCatalog(custom_slots={"hall-a": [make_slot("early", 6, 8)]})

    assert catalog.add_slot("hall-a", make_slot("late", 18, 20)).success
    assert catalog.update_slot("hall-a", "late", end_hour=21).success
    assert catalog.find_slot("hall-a", "late").end_hour == 21

    assert catalog.remove_slot("hall-a", "early").success
    assert [slot.slot_id for slot in catalog.get_slots("hall-a")] == ["late"]


def test_update_and_remove_unknown_slot():
    catalog = ScheduleCatalog()

    assert isinstance(catalog.update_slot("hall-a", "nope", label="x").error, NotFoundError)
    assert isinstance(catalog.remove_slot("hall-a", "nope").error, NotFoundError)
    assert isinstance(catalog.update_slot("hall-a", "6-8am", colour="red").error, ValidationError)


def test_update_cannot_break_invariants():
    catalog = ScheduleCatalog()

    outcome = catalog.update_slot("hall-a", "6-8am", start_hour=9)

    assert not outcome.success
    assert catalog.find_slot("hall-a", "6-8am").start_hour == 6


def test_reset_replaces_custom_slots_with_defaults():
    catalog = ScheduleCatalog(
        custom_slots={"hall-a": [make_slot("morning", 7, 11), make_slot("evening", 17, 21)]}
    )

    outcome = catalog.reset_to_default("hall-a")

    assert outcome.success
    slots = catalog.get_slots("hall-a")
    assert slots == default_slots()
    assert (slots[0].start_hour, slots[-1].end_hour) == (6, 20)


def test_apply_defaults_to_all():
    catalog = ScheduleCatalog(custom_slots={"hall-a": [make_slot("x", 7, 9)], "hall-b": []})

    catalog.apply_defaults_to_all(["hall-a", "hall-b"])

    assert catalog.get_slots("hall-a") == default_slots()
    assert catalog.get_slots("hall-b") == default_slots()


def test_catalog_persists_to_json(tmp_path):
    path = tmp_path / "schedules.json"
    catalog = ScheduleCatalog(str(path))
    catalog.set_slots("hall-a", [make_slot("x", 7, 9, label="Seven to nine")])

    reloaded = ScheduleCatalog(str(path))

    assert reloaded.find_slot("hall-a", "x").label == "Seven to nine"
    assert not reloaded.has_custom_slots("hall-b")
