"""
Constants Module - Centralized configuration values
===================================================

PURPOSE: Single source of truth for the booking core's fixed values
PATTERN: Modular constants organized by category
SCOPE: Slot defaults, booking status groups, policy defaults

Anything an operator may want to tune per deployment lives in
``infrastructure.settings`` instead.
"""

from typing import Any, Dict, List

# Booking Status Values
STATUS_ASSIGNED = 'assigned'
STATUS_CHECKED_IN = 'checked-in'
STATUS_NO_SHOW = 'no-show'
STATUS_CANCELLED = 'cancelled'

# Statuses that occupy a seat and participate in conflict checks
ACTIVE_STATUSES = frozenset({STATUS_ASSIGNED, STATUS_CHECKED_IN})

# Statuses that count towards service-hour totals
SERVICE_HOUR_STATUSES = frozenset({STATUS_ASSIGNED, STATUS_CHECKED_IN})

# Cancellation Policy
DEFAULT_CANCELLATION_CUTOFF_MINUTES = 30

# Clock Configuration
DEFAULT_TIMEZONE = 'Asia/Manila'
HOURS_PER_DAY = 24

# Capacity source per deployment: location-level ceiling or slot-level maximum
CAPACITY_SOURCE_LOCATION = 'location'
CAPACITY_SOURCE_SLOT = 'slot'
CAPACITY_SOURCES = (CAPACITY_SOURCE_LOCATION, CAPACITY_SOURCE_SLOT)

# Default Location Values
DEFAULT_LOCATION_CAPACITY = 2

# Global Default Time Slots (seven two-hour blocks, 6:00 AM - 8:00 PM)
DEFAULT_SLOT_MIN_VOLUNTEERS = 1
DEFAULT_SLOT_MAX_VOLUNTEERS = 4

DEFAULT_TIME_SLOTS: List[Dict[str, Any]] = [
    {'id': '6-8am', 'label': '6:00 AM - 8:00 AM', 'start_hour': 6, 'end_hour': 8},
    {'id': '8-10am', 'label': '8:00 AM - 10:00 AM', 'start_hour': 8, 'end_hour': 10},
    {'id': '10-12pm', 'label': '10:00 AM - 12:00 PM', 'start_hour': 10, 'end_hour': 12},
    {'id': '12-2pm', 'label': '12:00 PM - 2:00 PM', 'start_hour': 12, 'end_hour': 14},
    {'id': '2-4pm', 'label': '2:00 PM - 4:00 PM', 'start_hour': 14, 'end_hour': 16},
    {'id': '4-6pm', 'label': '4:00 PM - 6:00 PM', 'start_hour': 16, 'end_hour': 18},
    {'id': '6-8pm', 'label': '6:00 PM - 8:00 PM', 'start_hour': 18, 'end_hour': 20},
]

# Logger names that share the dedicated bookings log file
BOOKING_LOGGER_NAMES = (
    'BookingEngine',
    'BookingRepository',
    'ScheduleCatalog',
    'ChangeNotifier',
    'LegacyBookingImporter',
)
