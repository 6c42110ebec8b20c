"""
Location directory for the booking core
Read port plus a JSON-backed manager used by the admin collaborator
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from bookings.contracts import DirectoryOutcome, ValidationError
from bookings.models import Location
from infrastructure.json_store import JsonFileStore, PersistenceError


class LocationDirectory(ABC):
    """Read-only view of the locations volunteers can be booked into."""

    @abstractmethod
    def get(self, location_id: str) -> Optional[Location]:
        """Return the location or ``None`` when unknown."""

    @abstractmethod
    def list(self) -> List[Location]:
        """Return all locations in insertion order."""

    def delete_location(self, location_id: str) -> bool:
        """Remove a location; read-only directories delete nothing."""

        return False


class LocationManager(LocationDirectory):
    """
    Manages locations with optional persistent JSON storage

    Without a ``file_path`` the directory lives in memory only, which is what
    tests and embedded callers use.
    """

    def __init__(
        self,
        file_path: Optional[str] = None,
        *,
        locations: Optional[Iterable[Location]] = None,
    ) -> None:
        self.logger = logging.getLogger('LocationManager')
        self._store = JsonFileStore(file_path, logger=self.logger) if file_path else None
        self._locations: Dict[str, Location] = self._load_locations()
        for location in locations or ():
            self._locations[location.location_id] = location
        if locations and self._store is not None:
            self._save_locations()

        self.logger.info("LocationManager initialized with %s locations", len(self._locations))

    def get(self, location_id: str) -> Optional[Location]:
        return self._locations.get(location_id)

    def list(self) -> List[Location]:
        return list(self._locations.values())

    def save_location(self, location: Location) -> DirectoryOutcome:
        """
        Create or update a location

        Returns:
            DirectoryOutcome rejected with a ValidationError when the name is
            blank or the capacity is below one
        """
        errors = []
        if not location.location_id.strip():
            errors.append("location id required")
        if not location.name.strip():
            errors.append("name is required")
        if location.capacity < 1:
            errors.append("capacity must be a positive number")
        if errors:
            return DirectoryOutcome.rejected(
                ValidationError("; ".join(errors), {'location_id': location.location_id})
            )

        self._locations[location.location_id] = location
        self._save_locations()
        self.logger.info(
            "Saved location %s (%s), capacity %s",
            location.location_id,
            location.name,
            location.capacity,
        )
        return DirectoryOutcome.ok()

    def delete_location(self, location_id: str) -> bool:
        """Remove a location. Reference checks belong to the booking engine."""

        if self._locations.pop(location_id, None) is None:
            self.logger.warning("Location %s not found for removal", location_id)
            return False
        self._save_locations()
        self.logger.info("Removed location %s", location_id)
        return True

    def _load_locations(self) -> Dict[str, Location]:
        if self._store is None:
            return {}
        locations: Dict[str, Location] = {}
        for payload in self._store.load(expected=list):
            try:
                location = Location.from_payload(payload)
            except (KeyError, TypeError, ValueError) as exc:
                raise PersistenceError(f"Malformed location record {payload!r}") from exc
            locations[location.location_id] = location
        return locations

    def _save_locations(self) -> None:
        if self._store is None:
            return
        self._store.save([location.to_payload() for location in self._locations.values()])
