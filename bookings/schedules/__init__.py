"""Time-slot catalog for locations."""

from .catalog import ScheduleCatalog, default_slots, validate_slots

__all__ = ["ScheduleCatalog", "default_slots", "validate_slots"]
