"""
Custom exceptions for the clinic scheduling service.
"""

from .booking import (
    AppointmentNotFoundError,
    BookingDisabledError,
    BookingValidationError,
    ClinicNotFoundError,
    IllegalTransitionError,
    NoAvailabilityConfiguredError,
    NoSlotsSelectedError,
    NotClinicOwnerError,
    SchedulingError,
    SchedulingPermissionError,
    SlotAlreadyBookedError,
    SlotConflictError,
    SlotOutsideAvailabilityError,
    UnknownStatusError,
)
from .store import DirectoryError, ExternalServiceError, SlotConflictStoreError, StoreError

__all__ = [
    "AppointmentNotFoundError",
    "BookingDisabledError",
    "BookingValidationError",
    "ClinicNotFoundError",
    "IllegalTransitionError",
    "NoAvailabilityConfiguredError",
    "NoSlotsSelectedError",
    "NotClinicOwnerError",
    "SchedulingError",
    "SchedulingPermissionError",
    "SlotAlreadyBookedError",
    "SlotConflictError",
    "SlotOutsideAvailabilityError",
    "UnknownStatusError",
    "DirectoryError",
    "ExternalServiceError",
    "SlotConflictStoreError",
    "StoreError",
]
