"""Directory entries: the places volunteers serve at and the volunteers themselves."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from infrastructure.constants import DEFAULT_LOCATION_CAPACITY


@dataclass(frozen=True)
class Location:
    """A place with a per-slot capacity ceiling."""

    location_id: str
    name: str
    address: str = ""
    capacity: int = DEFAULT_LOCATION_CAPACITY
    notes: str = ""

    def to_payload(self) -> dict:
        return {
            'id': self.location_id,
            'name': self.name,
            'address': self.address,
            'capacity': self.capacity,
            'notes': self.notes,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Location":
        capacity = payload.get('capacity', payload.get('slotCapacity', DEFAULT_LOCATION_CAPACITY))
        return cls(
            location_id=str(payload['id']),
            name=str(payload.get('name') or payload['id']),
            address=str(payload.get('address') or ''),
            capacity=int(capacity),
            notes=str(payload.get('notes') or ''),
        )


@dataclass(frozen=True)
class Volunteer:
    """A volunteer keyed by a stable identifier.

    ``email`` and ``aliases`` are only used to recognise legacy records that
    referenced volunteers by name or email.
    """

    volunteer_id: str
    display_name: str
    email: str = ""
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    def identities(self) -> Tuple[str, ...]:
        """Lower-cased identity strings, stable id first."""

        raw = (self.volunteer_id, self.email, self.display_name, *self.aliases)
        seen = []
        for value in raw:
            token = (value or '').strip().lower()
            if token and token not in seen:
                seen.append(token)
        return tuple(seen)

    def to_payload(self) -> dict:
        return {
            'id': self.volunteer_id,
            'name': self.display_name,
            'email': self.email,
            'aliases': list(self.aliases),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Volunteer":
        aliases = payload.get('aliases') or []
        username = payload.get('username')
        if username and username not in aliases:
            aliases = [*aliases, username]
        return cls(
            volunteer_id=str(payload['id']),
            display_name=str(payload.get('name') or payload.get('display_name') or payload['id']),
            email=str(payload.get('email') or ''),
            aliases=tuple(str(alias) for alias in aliases),
        )
