"""
Volunteer directory for the booking core
Handles storage and lookup of volunteers by their stable identifier
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from bookings.contracts import DirectoryOutcome, ValidationError
from bookings.models import Volunteer
from infrastructure.json_store import JsonFileStore, PersistenceError


class VolunteerDirectory(ABC):
    """Read-only view of known volunteers."""

    @abstractmethod
    def get(self, volunteer_id: str) -> Optional[Volunteer]:
        """Return the volunteer or ``None`` when unknown."""

    @abstractmethod
    def list(self) -> List[Volunteer]:
        """Return all volunteers in insertion order."""

    def match_identity(self, token: Optional[str]) -> Optional[Volunteer]:
        """
        Resolve a legacy identity string (id, email, name or alias)

        Matching is case-insensitive and prefers an exact stable-id hit. Only
        the legacy importer should need this; bookings store ``volunteer_id``.

        Returns:
            The single matching volunteer, or None when nothing or more than
            one volunteer matches
        """
        needle = (token or '').strip().lower()
        if not needle:
            return None

        direct = self.get(token.strip())
        if direct is not None:
            return direct

        matches = [volunteer for volunteer in self.list() if needle in volunteer.identities()]
        if len(matches) == 1:
            return matches[0]
        return None


class VolunteerManager(VolunteerDirectory):
    """
    Manages volunteers with optional persistent JSON storage

    Provides functionality to store, retrieve and update volunteers; without a
    ``file_path`` everything stays in memory.
    """

    def __init__(
        self,
        file_path: Optional[str] = None,
        *,
        volunteers: Optional[Iterable[Volunteer]] = None,
    ) -> None:
        self.logger = logging.getLogger('VolunteerManager')
        self._store = JsonFileStore(file_path, logger=self.logger) if file_path else None
        self._volunteers: Dict[str, Volunteer] = self._load_volunteers()
        for volunteer in volunteers or ():
            self._volunteers[volunteer.volunteer_id] = volunteer
        if volunteers and self._store is not None:
            self._save_volunteers()

        self.logger.info("VolunteerManager initialized with %s volunteers", len(self._volunteers))

    def get(self, volunteer_id: str) -> Optional[Volunteer]:
        volunteer = self._volunteers.get(volunteer_id)
        if volunteer is None:
            self.logger.debug("No volunteer found for id: %s", volunteer_id)
        return volunteer

    def list(self) -> List[Volunteer]:
        return list(self._volunteers.values())

    def save_volunteer(self, volunteer: Volunteer) -> DirectoryOutcome:
        """Create or update a volunteer; the id and display name are required."""

        if not volunteer.volunteer_id.strip() or not volunteer.display_name.strip():
            return DirectoryOutcome.rejected(
                ValidationError(
                    "volunteer id and name are required",
                    {'volunteer_id': volunteer.volunteer_id},
                )
            )

        self._volunteers[volunteer.volunteer_id] = volunteer
        self._save_volunteers()
        self.logger.info("Saved volunteer %s (%s)", volunteer.volunteer_id, volunteer.display_name)
        return DirectoryOutcome.ok()

    def _load_volunteers(self) -> Dict[str, Volunteer]:
        if self._store is None:
            return {}
        volunteers: Dict[str, Volunteer] = {}
        for payload in self._store.load(expected=list):
            try:
                volunteer = Volunteer.from_payload(payload)
            except (KeyError, TypeError, ValueError) as exc:
                raise PersistenceError(f"Malformed volunteer record {payload!r}") from exc
            volunteers[volunteer.volunteer_id] = volunteer
        return volunteers

    def _save_volunteers(self) -> None:
        if self._store is None:
            return
        self._store.save([volunteer.to_payload() for volunteer in self._volunteers.values()])
