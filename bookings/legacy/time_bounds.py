"""Recover slot hours from legacy booking records that may not carry them."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Tuple

from bookings.schedules import ScheduleCatalog

# "6:00 AM - 8:00 AM", "2 PM – 4 PM", "6-8am"
LABEL_PATTERN = re.compile(
    r'(\d{1,2})(?::\d{2})?\s*(AM|PM)?\s*[-–]\s*(\d{1,2})(?::\d{2})?\s*(AM|PM)?',
    re.IGNORECASE,
)
# "6_to_8", "slot6/8"
ID_PATTERN = re.compile(r'(\d+)[^\d]+(\d+)')


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_24h(hour: int, meridiem: Optional[str]) -> int:
    if (meridiem or '').upper() == 'PM' and hour < 12:
        return hour + 12
    return hour


def parse_label_hours(text: str) -> Optional[Tuple[int, int]]:
    match = LABEL_PATTERN.search(text or '')
    if not match:
        return None
    start = _to_24h(int(match.group(1)), match.group(2))
    end = _to_24h(int(match.group(3)), match.group(4))
    return start, end


def parse_id_hours(slot_id: str) -> Optional[Tuple[int, int]]:
    match = ID_PATTERN.search(slot_id or '')
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def resolve_time_bounds(
    record: Mapping[str, Any],
    catalog: Optional[ScheduleCatalog] = None,
) -> Tuple[int, int]:
    """
    Work out ``(start_hour, end_hour)`` for a legacy record.

    Tried in order: explicit numeric ``startHour``/``endHour``, the slot in
    the location's catalog, the label (falling back to the id) as a time
    range, then the first two digit groups of the id. ``(0, 0)`` when nothing
    matches.
    """
    start, end = record.get('startHour'), record.get('endHour')
    if _is_number(start) and _is_number(end):
        return int(start), int(end)

    slot_id = str(record.get('slotId') or '')
    location_id = record.get('locationId')
    if catalog is not None and location_id and slot_id:
        slot = catalog.find_slot(str(location_id), slot_id)
        if slot is not None:
            return slot.start_hour, slot.end_hour

    parsed = parse_label_hours(str(record.get('slotLabel') or slot_id))
    if parsed is not None:
        return parsed

    parsed = parse_id_hours(slot_id)
    if parsed is not None:
        return parsed
    return 0, 0


__all__ = ["parse_id_hours", "parse_label_hours", "resolve_time_bounds"]
