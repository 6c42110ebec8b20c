"""Shared fakes and utilities for unit tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bookings.engine.booking_engine import BookingEngine
from bookings.engine.booking_repository import BookingRepository, InMemoryBookingRepository
from bookings.engine.notifications import BookingChange, ChangeNotifier
from bookings.models import Booking, BookingStatus, Location, TimeSlot, Volunteer
from bookings.schedules import ScheduleCatalog
from directory import LocationManager, VolunteerManager
from infrastructure.settings import AppSettings, load_settings


class DummyLogger:
    """Lightweight stand-in for ``logging.Logger`` that records calls."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, Tuple[Any, ...], Dict[str, Any]]] = []

    def _record(self, level: str, *args: Any, **kwargs: Any) -> None:
        self.records.append((level, args, kwargs))

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self._record("debug", *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self._record("info", *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        self._record("warning", *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self._record("error", *args, **kwargs)

    def exception(self, *args: Any, **kwargs: Any) -> None:
        self._record("exception", *args, **kwargs)

    @property
    def messages(self) -> List[Tuple[str, Any]]:
        """Return formatted messages for quick assertions."""

        formatted: List[Tuple[str, Any]] = []
        for level, args, kwargs in self.records:
            message: Any = kwargs.get("msg")
            if args:
                template = args[0]
                if isinstance(template, str) and len(args) > 1:
                    try:
                        message = template % args[1:]
                    except (TypeError, ValueError):
                        message = template
                else:
                    message = template
            formatted.append((level, message))
        return formatted

    def levels(self) -> List[str]:
        return [level for level, _, _ in self.records]


class FixedClock:
    """Callable clock the tests can move by hand."""

    def __init__(self, current: datetime) -> None:
        self.current = current

    def __call__(self) -> datetime:
        return self.current

    def set(self, current: datetime) -> None:
        self.current = current

    def advance(self, **delta: float) -> None:
        self.current = self.current + timedelta(**delta)


class RecordingListener:
    """Collects every change published to it."""

    def __init__(self) -> None:
        self.changes: List[BookingChange] = []

    def __call__(self, change: BookingChange) -> None:
        self.changes.append(change)

    @property
    def kinds(self) -> List[str]:
        return [change.kind.value for change in self.changes]


def make_settings(**overrides: str) -> AppSettings:
    env = {
        "PRODUCTION_MODE": "false",
        "SCHEDULER_TIMEZONE": "Asia/Manila",
        "CANCELLATION_CUTOFF_MINUTES": "30",
        "CAPACITY_SOURCE": "location",
        "ALLOW_ATTENDANCE_REVISION": "false",
    }
    env.update(overrides)
    return load_settings(env)


def make_slot(slot_id: str, start_hour: int, end_hour: int, **kwargs: Any) -> TimeSlot:
    label = kwargs.pop("label", f"{start_hour}:00 - {end_hour}:00")
    return TimeSlot(slot_id=slot_id, label=label, start_hour=start_hour, end_hour=end_hour, **kwargs)


def make_booking(
    booking_id: str = "b1",
    *,
    volunteer_id: str = "v1",
    location_id: str = "hall-a",
    slot_id: str = "6-8am",
    on: date = date(2025, 1, 10),
    start_hour: int = 6,
    end_hour: int = 8,
    status: BookingStatus = BookingStatus.ASSIGNED,
    **kwargs: Any,
) -> Booking:
    return Booking(
        booking_id=booking_id,
        volunteer_id=volunteer_id,
        location_id=location_id,
        slot_id=slot_id,
        date=on,
        start_hour=start_hour,
        end_hour=end_hour,
        created_at=kwargs.pop("created_at", datetime(2025, 1, 1, 9, 0)),
        status=status,
        **kwargs,
    )


def default_locations() -> List[Location]:
    return [
        Location(location_id="hall-a", name="Hall A", capacity=2),
        Location(location_id="hall-b", name="Hall B", capacity=2),
    ]


def default_volunteers() -> List[Volunteer]:
    return [
        Volunteer(volunteer_id="v1", display_name="Ana Cruz", email="ana@example.org"),
        Volunteer(volunteer_id="v2", display_name="Ben Reyes", email="ben@example.org"),
        Volunteer(volunteer_id="v3", display_name="Cara Lim", email="cara@example.org", aliases=("cara.l",)),
    ]


@dataclass
class EngineFixture:
    engine: BookingEngine
    repository: BookingRepository
    locations: LocationManager
    volunteers: VolunteerManager
    catalog: ScheduleCatalog
    clock: FixedClock
    listener: RecordingListener
    logger: DummyLogger = field(default_factory=DummyLogger)


def build_engine(
    *,
    settings: Optional[AppSettings] = None,
    now: datetime = datetime(2025, 1, 9, 12, 0),
    locations: Optional[Iterable[Location]] = None,
    volunteers: Optional[Iterable[Volunteer]] = None,
    custom_slots: Optional[Dict[str, Iterable[TimeSlot]]] = None,
    bookings: Optional[Iterable[Booking]] = None,
) -> EngineFixture:
    """Wire an in-memory engine with Hall A/Hall B and three volunteers."""

    location_manager = LocationManager(locations=locations if locations is not None else default_locations())
    volunteer_manager = VolunteerManager(
        volunteers=volunteers if volunteers is not None else default_volunteers()
    )
    catalog = ScheduleCatalog(
        custom_slots=custom_slots
        if custom_slots is not None
        else {"hall-b": [make_slot("7-9am", 7, 9, label="7:00 AM - 9:00 AM")]}
    )
    repository = InMemoryBookingRepository(bookings)
    clock = FixedClock(now)
    notifier = ChangeNotifier()
    listener = RecordingListener()
    notifier.subscribe(listener)
    logger = DummyLogger()
    engine = BookingEngine(
        location_manager,
        volunteer_manager,
        catalog,
        repository,
        settings=settings or make_settings(),
        clock=clock,
        notifier=notifier,
        logger=logger,
    )
    return EngineFixture(
        engine=engine,
        repository=repository,
        locations=location_manager,
        volunteers=volunteer_manager,
        catalog=catalog,
        clock=clock,
        listener=listener,
        logger=logger,
    )
