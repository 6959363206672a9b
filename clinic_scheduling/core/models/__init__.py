"""
Core data models for the clinic scheduling service.
"""

from .clinic import AvailabilityWindow, Clinic
from .appointment import (
    Appointment,
    AppointmentFilters,
    AppointmentStats,
    BookingRequest,
    SlotKey,
    SlotOption,
)

__all__ = [
    "AvailabilityWindow",
    "Clinic",
    "Appointment",
    "AppointmentFilters",
    "AppointmentStats",
    "BookingRequest",
    "SlotKey",
    "SlotOption",
]
