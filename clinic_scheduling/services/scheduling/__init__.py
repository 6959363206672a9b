"""
Appointment scheduling: availability, booking, status lifecycle and queries.
"""

from .availability import AvailabilityModel
from .conflict import ConflictGuard, SlotPartition
from .booking import BookingService
from .status import StatusMachine
from .query import QueryEngine
from .service import SchedulingService, create_scheduling_service

__all__ = [
    "AvailabilityModel",
    "ConflictGuard",
    "SlotPartition",
    "BookingService",
    "StatusMachine",
    "QueryEngine",
    "SchedulingService",
    "create_scheduling_service",
]
