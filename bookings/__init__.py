"""Volunteer booking core: slots, bookings, reports and legacy import."""
