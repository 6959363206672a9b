"""
Service layer for the clinic scheduling service.
"""

from .directory import ClinicDirectoryService
from .events import EventPublisher
from .store import AppointmentStore, SQLiteAppointmentStore
from .scheduling import SchedulingService, create_scheduling_service

__all__ = [
    "ClinicDirectoryService",
    "EventPublisher",
    "AppointmentStore",
    "SQLiteAppointmentStore",
    "SchedulingService",
    "create_scheduling_service",
]
