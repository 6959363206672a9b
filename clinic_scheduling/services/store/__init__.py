"""
Appointment persistence.
"""

from .base import AppointmentStore
from .sqlite import SQLiteAppointmentStore

__all__ = [
    "AppointmentStore",
    "SQLiteAppointmentStore",
]
