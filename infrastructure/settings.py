"""Centralized application settings.

One place to load runtime configuration for the booking core. Host
applications call :func:`get_settings` (cached) or :func:`load_settings` with an
explicit mapping, which is what the tests do.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional

import pytz
from dotenv import load_dotenv

from . import constants as app_constants


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    """Normalize environment strings such as "true"/"1" into booleans."""

    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: Optional[str], default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class AppSettings:
    """Immutable snapshot of high-level configuration values."""

    production_mode: bool
    timezone: str
    data_directory: str
    bookings_file: str
    locations_file: str
    volunteers_file: str
    schedules_file: str
    log_directory: str
    cancellation_cutoff_minutes: int
    capacity_source: str
    allow_attendance_revision: bool

    def data_path(self, filename: str) -> Path:
        """Resolve a storage filename relative to the data directory."""

        path = Path(filename)
        if path.is_absolute():
            return path
        return Path(self.data_directory) / path


def load_settings(env: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Load configuration from the environment and fall back to defaults."""

    if env is None:
        load_dotenv(override=False)
        env = os.environ

    production_mode = _to_bool(env.get("PRODUCTION_MODE", "false"), default=False)

    timezone = env.get("SCHEDULER_TIMEZONE", app_constants.DEFAULT_TIMEZONE)
    try:
        pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError as exc:
        raise ValueError(f"Unknown SCHEDULER_TIMEZONE: {timezone}") from exc

    data_directory = env.get("DATA_DIRECTORY", "data")
    bookings_file = env.get("BOOKINGS_FILE", "bookings.json")
    locations_file = env.get("LOCATIONS_FILE", "locations.json")
    volunteers_file = env.get("VOLUNTEERS_FILE", "volunteers.json")
    schedules_file = env.get("SCHEDULES_FILE", "schedules.json")
    log_directory = env.get("LOG_DIRECTORY", os.path.join("logs", "latest_log"))

    cancellation_cutoff_minutes = _to_int(
        env.get("CANCELLATION_CUTOFF_MINUTES"),
        app_constants.DEFAULT_CANCELLATION_CUTOFF_MINUTES,
    )
    if cancellation_cutoff_minutes < 0:
        cancellation_cutoff_minutes = app_constants.DEFAULT_CANCELLATION_CUTOFF_MINUTES

    capacity_source = env.get(
        "CAPACITY_SOURCE", app_constants.CAPACITY_SOURCE_LOCATION
    ).strip().lower()
    if capacity_source not in app_constants.CAPACITY_SOURCES:
        raise ValueError(
            f"CAPACITY_SOURCE must be one of {', '.join(app_constants.CAPACITY_SOURCES)}; "
            f"received {capacity_source!r}"
        )

    allow_attendance_revision = _to_bool(env.get("ALLOW_ATTENDANCE_REVISION", "false"))

    return AppSettings(
        production_mode=production_mode,
        timezone=timezone,
        data_directory=data_directory,
        bookings_file=bookings_file,
        locations_file=locations_file,
        volunteers_file=volunteers_file,
        schedules_file=schedules_file,
        log_directory=log_directory,
        cancellation_cutoff_minutes=cancellation_cutoff_minutes,
        capacity_source=capacity_source,
        allow_attendance_revision=allow_attendance_revision,
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached :class:`AppSettings` instance."""

    return load_settings()


def local_now(timezone: str) -> datetime:
    """Return the current wall-clock time in ``timezone`` as a naive datetime.

    Booking dates and slot hours carry no zone, so comparisons against them
    must use naive local time.
    """

    tz = pytz.timezone(timezone)
    return datetime.now(tz).replace(tzinfo=None)
