"""
TimeSlot model for the named time-of-day blocks volunteers are booked into
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, List, Mapping

from infrastructure.constants import HOURS_PER_DAY

_WHITESPACE = re.compile(r'\s+')


def normalise_slot_id(raw: Any) -> str:
    """Slot ids never contain whitespace; runs of it become a single dash."""

    return _WHITESPACE.sub('-', str(raw or '').strip())


@dataclass(frozen=True)
class TimeSlot:
    """
    A half-open interval ``[start_hour, end_hour)`` on a 24-hour clock.

    Attributes:
        slot_id: Identifier, unique within one location's catalog
        label: Human readable label (e.g., "6:00 AM - 8:00 AM")
        start_hour: First hour covered by the slot
        end_hour: Hour at which the slot ends (exclusive)
        min_volunteers: Staffing floor, 0 when unset
        max_volunteers: Staffing ceiling, 0 when unset
    """

    slot_id: str
    label: str
    start_hour: int
    end_hour: int
    min_volunteers: int = 0
    max_volunteers: int = 0

    def __str__(self) -> str:
        return f"{self.label} [{self.start_hour}:00-{self.end_hour}:00)"

    @property
    def duration_hours(self) -> int:
        return max(self.end_hour - self.start_hour, 0)

    def overlaps(self, start_hour: int, end_hour: int) -> bool:
        return self.start_hour < end_hour and start_hour < self.end_hour

    def validation_errors(self) -> List[str]:
        """Return every invariant this slot breaks; empty when valid."""

        errors: List[str] = []
        name = self.slot_id or '<unnamed>'
        if not self.slot_id:
            errors.append("slot id required")
        if not self.label.strip():
            errors.append(f"slot {name}: label required")
        if not (isinstance(self.start_hour, int) and isinstance(self.end_hour, int)):
            errors.append(f"slot {name}: hours must be integers")
            return errors
        if not (0 <= self.start_hour <= HOURS_PER_DAY and 0 <= self.end_hour <= HOURS_PER_DAY):
            errors.append(f"slot {name}: hours must be within 0-{HOURS_PER_DAY}")
        if self.start_hour >= self.end_hour:
            errors.append(f"slot {name}: start hour must be before end hour")
        if self.min_volunteers < 0 or self.max_volunteers < 0:
            errors.append(f"slot {name}: min/max volunteers cannot be negative")
        if self.max_volunteers > 0 and self.min_volunteers > self.max_volunteers:
            errors.append(f"slot {name}: min volunteers cannot exceed max")
        return errors

    def with_changes(self, **changes: Any) -> "TimeSlot":
        if 'slot_id' in changes:
            changes['slot_id'] = normalise_slot_id(changes['slot_id'])
        return replace(self, **changes)

    def to_payload(self) -> dict:
        return {
            'id': self.slot_id,
            'label': self.label,
            'start_hour': self.start_hour,
            'end_hour': self.end_hour,
            'min_volunteers': self.min_volunteers,
            'max_volunteers': self.max_volunteers,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TimeSlot":
        """Build a slot from a stored mapping.

        Accepts both the snake_case storage keys and the camelCase keys used by
        the browser application (``startHour``, ``minVol``...).
        """

        def pick(*keys: str, default: Any = 0) -> Any:
            for key in keys:
                if payload.get(key) is not None:
                    return payload[key]
            return default

        label = str(pick('label', default='')).strip()
        return cls(
            slot_id=normalise_slot_id(pick('id', 'slot_id', default='') or label),
            label=label,
            start_hour=int(pick('start_hour', 'startHour')),
            end_hour=int(pick('end_hour', 'endHour')),
            min_volunteers=int(pick('min_volunteers', 'minVolunteers', 'minVol')),
            max_volunteers=int(pick('max_volunteers', 'maxVolunteers', 'maxVol')),
        )
