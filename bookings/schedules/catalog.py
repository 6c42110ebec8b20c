"""
Schedule Catalog Module

Per-location time-slot definitions with a global default set as fallback.
Slot edits never touch existing bookings: a booking copies its slot's hours
when it is created.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence

from bookings.contracts import DirectoryOutcome, NotFoundError, ValidationError
from bookings.models import TimeSlot
from infrastructure.constants import (
    DEFAULT_SLOT_MAX_VOLUNTEERS,
    DEFAULT_SLOT_MIN_VOLUNTEERS,
    DEFAULT_TIME_SLOTS,
)
from infrastructure.json_store import JsonFileStore, PersistenceError


def default_slots() -> List[TimeSlot]:
    """Fresh copies of the seven standard two-hour blocks (06:00-20:00)."""

    return [
        TimeSlot(
            slot_id=entry['id'],
            label=entry['label'],
            start_hour=entry['start_hour'],
            end_hour=entry['end_hour'],
            min_volunteers=DEFAULT_SLOT_MIN_VOLUNTEERS,
            max_volunteers=DEFAULT_SLOT_MAX_VOLUNTEERS,
        )
        for entry in DEFAULT_TIME_SLOTS
    ]


def validate_slots(slots: Sequence[TimeSlot]) -> Optional[ValidationError]:
    """Check every slot invariant plus id uniqueness within one catalog."""

    errors: List[str] = []
    seen: set = set()
    for index, slot in enumerate(slots, start=1):
        for problem in slot.validation_errors():
            errors.append(f"#{index}: {problem}")
        if slot.slot_id in seen:
            errors.append(f"#{index}: duplicate slot id {slot.slot_id}")
        seen.add(slot.slot_id)

    if errors:
        return ValidationError("Invalid time slots: " + "; ".join(errors), {'errors': errors})
    return None


class ScheduleCatalog:
    """
    Resolves and edits the time slots offered at each location.

    Locations without custom slots inherit :func:`default_slots`. Callers
    always receive copies, so mutating a returned list never changes the
    catalog.
    """

    def __init__(
        self,
        file_path: Optional[str] = None,
        *,
        custom_slots: Optional[Dict[str, Iterable[TimeSlot]]] = None,
    ) -> None:
        self.logger = logging.getLogger('ScheduleCatalog')
        self._lock = threading.RLock()
        self._store = JsonFileStore(file_path, logger=self.logger) if file_path else None
        self._custom: Dict[str, List[TimeSlot]] = self._load_catalog()
        for location_id, slots in (custom_slots or {}).items():
            self._custom[location_id] = list(slots)

        self.logger.info(
            "ScheduleCatalog initialized with custom slots for %s locations",
            len(self._custom),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_slots(self, location_id: str) -> List[TimeSlot]:
        """Return the ordered slots for a location, defaults when uncustomised."""

        with self._lock:
            if location_id in self._custom:
                return list(self._custom[location_id])
        return default_slots()

    def find_slot(self, location_id: str, slot_id: str) -> Optional[TimeSlot]:
        for slot in self.get_slots(location_id):
            if slot.slot_id == slot_id:
                return slot
        return None

    def has_custom_slots(self, location_id: str) -> bool:
        with self._lock:
            return location_id in self._custom

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set_slots(self, location_id: str, slots: Sequence[TimeSlot]) -> DirectoryOutcome:
        """Replace a location's slots after validating the whole set."""

        candidate = list(slots)
        error = validate_slots(candidate)
        if error is not None:
            self.logger.warning("Rejected slots for %s: %s", location_id, error.message)
            return DirectoryOutcome.rejected(error)

        with self._lock:
            self._custom[location_id] = candidate
            self._save_catalog()

        self.logger.info("Slots updated for %s: %s", location_id, [slot.slot_id for slot in candidate])
        return DirectoryOutcome.ok(tuple(candidate))

    def add_slot(self, location_id: str, slot: TimeSlot) -> DirectoryOutcome:
        with self._lock:
            return self.set_slots(location_id, [*self.get_slots(location_id), slot])

    def update_slot(self, location_id: str, slot_id: str, **changes: Any) -> DirectoryOutcome:
        """Patch fields of one slot (``label``, ``start_hour``...)."""

        with self._lock:
            current = self.get_slots(location_id)
            if not any(slot.slot_id == slot_id for slot in current):
                return DirectoryOutcome.rejected(
                    NotFoundError(
                        f"Slot {slot_id} not found for location {location_id}",
                        {'location_id': location_id, 'slot_id': slot_id},
                    )
                )
            try:
                updated = [
                    slot.with_changes(**changes) if slot.slot_id == slot_id else slot
                    for slot in current
                ]
            except TypeError as exc:
                return DirectoryOutcome.rejected(ValidationError(f"Unknown slot field: {exc}"))
            return self.set_slots(location_id, updated)

    def remove_slot(self, location_id: str, slot_id: str) -> DirectoryOutcome:
        with self._lock:
            current = self.get_slots(location_id)
            remaining = [slot for slot in current if slot.slot_id != slot_id]
            if len(remaining) == len(current):
                return DirectoryOutcome.rejected(
                    NotFoundError(
                        f"Slot {slot_id} not found for location {location_id}",
                        {'location_id': location_id, 'slot_id': slot_id},
                    )
                )
            return self.set_slots(location_id, remaining)

    def reset_to_default(self, location_id: str) -> DirectoryOutcome:
        """Replace any custom slots with the standard seven blocks."""

        return self.set_slots(location_id, default_slots())

    def apply_defaults_to_all(self, location_ids: Iterable[str]) -> DirectoryOutcome:
        """Overwrite every listed location's customisations with the defaults."""

        defaults = default_slots()
        with self._lock:
            for location_id in location_ids:
                self._custom[location_id] = list(defaults)
            self._save_catalog()
        self.logger.info("Default slots applied to all locations")
        return DirectoryOutcome.ok(tuple(defaults))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _load_catalog(self) -> Dict[str, List[TimeSlot]]:
        if self._store is None:
            return {}
        payload = self._store.load(expected=dict)
        catalog: Dict[str, List[TimeSlot]] = {}
        for location_id, raw_slots in payload.items():
            if not isinstance(raw_slots, list):
                raise PersistenceError(f"Slots for {location_id} must be a list")
            try:
                catalog[location_id] = [TimeSlot.from_payload(item) for item in raw_slots]
            except (TypeError, ValueError) as exc:
                raise PersistenceError(f"Malformed slot for {location_id}: {exc}") from exc
        return catalog

    def _save_catalog(self) -> None:
        if self._store is None:
            return
        self._store.save(
            {
                location_id: [slot.to_payload() for slot in slots]
                for location_id, slots in self._custom.items()
            }
        )


__all__ = ["ScheduleCatalog", "default_slots", "validate_slots"]
