"""One-time import of bookings kept by the browser application."""

from .importer import ImportReport, LegacyBookingImporter, SkippedRecord
from .time_bounds import resolve_time_bounds

__all__ = ["ImportReport", "LegacyBookingImporter", "SkippedRecord", "resolve_time_bounds"]
