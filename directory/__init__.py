"""Location and volunteer directories consumed by the booking engine."""

from .locations import LocationDirectory, LocationManager
from .volunteers import VolunteerDirectory, VolunteerManager

__all__ = [
    "LocationDirectory",
    "LocationManager",
    "VolunteerDirectory",
    "VolunteerManager",
]
