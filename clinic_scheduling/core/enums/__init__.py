"""
Enums for the clinic scheduling service.
"""

from .appointment import (
    ACTIVE_STATUSES,
    AppointmentStatus,
    DayPeriod,
    Weekday,
    parse_filter_value,
)

__all__ = [
    "ACTIVE_STATUSES",
    "AppointmentStatus",
    "DayPeriod",
    "Weekday",
    "parse_filter_value",
]
