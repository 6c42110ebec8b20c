"""Self-service cancellation window."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from infrastructure.constants import DEFAULT_CANCELLATION_CUTOFF_MINUTES


def slot_start_datetime(target_date: date, start_hour: int) -> datetime:
    """Naive local datetime at which a slot begins."""

    if start_hour >= 24:
        return datetime.combine(target_date + timedelta(days=1), time())
    return datetime.combine(target_date, time(hour=start_hour))


class CancellationPolicy:
    """A volunteer may cancel only while ``cutoff`` or more remains before the slot."""

    def __init__(self, cutoff_minutes: int = DEFAULT_CANCELLATION_CUTOFF_MINUTES) -> None:
        self.cutoff = timedelta(minutes=cutoff_minutes)

    def can_cancel(self, now: datetime, slot_start: datetime) -> bool:
        return slot_start - now >= self.cutoff


__all__ = ["CancellationPolicy", "slot_start_datetime"]
