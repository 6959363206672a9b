"""
Scheduling-related exceptions.
"""

from datetime import time
from typing import Optional


def _fmt_time(value: time) -> str:
    return value.strftime("%H:%M:%S" if value.second else "%H:%M")


class SchedulingError(Exception):
    """Base exception for scheduling errors."""

    code = "scheduling_error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class BookingValidationError(SchedulingError):
    """Booking request failed validation."""

    code = "validation_error"


class NoSlotsSelectedError(BookingValidationError):
    """At least one time slot must be selected."""

    code = "no_slots_selected"


class NoAvailabilityConfiguredError(BookingValidationError):
    """Clinic has no availability configured for in-platform booking."""

    code = "no_availability_configured"

    def __init__(self, clinic_id: str):
        self.clinic_id = clinic_id
        super().__init__(f"Clinic {clinic_id} has no availability configured")


class BookingDisabledError(BookingValidationError):
    """Clinic does not accept in-platform appointments."""

    code = "booking_disabled"

    def __init__(self, clinic_id: str):
        self.clinic_id = clinic_id
        super().__init__(f"Clinic {clinic_id} does not accept in-platform appointments")


class ClinicNotFoundError(BookingValidationError):
    """Clinic does not exist."""

    code = "clinic_not_found"

    def __init__(self, clinic_id: str):
        self.clinic_id = clinic_id
        super().__init__(f"Clinic {clinic_id} not found")


class SlotOutsideAvailabilityError(BookingValidationError):
    """Requested time is outside the clinic's availability."""

    code = "slot_outside_availability"

    def __init__(self, slot_time: time):
        self.time = slot_time
        super().__init__(f"Time {_fmt_time(slot_time)} is outside the clinic's availability")


class UnknownStatusError(BookingValidationError):
    """Requested status is not an appointment status."""

    code = "unknown_status"

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unknown appointment status {value!r}")


class SlotConflictError(SchedulingError):
    """Requested slot conflicts with an existing appointment."""

    code = "conflict"


class SlotAlreadyBookedError(SlotConflictError):
    """Requested time is already booked."""

    code = "slot_already_booked"

    def __init__(self, slot_time: time):
        self.time = slot_time
        super().__init__(f"Time {_fmt_time(slot_time)} is already booked")


class SchedulingPermissionError(SchedulingError):
    """Caller is not allowed to perform this operation."""

    code = "permission_denied"


class NotClinicOwnerError(SchedulingPermissionError):
    """Caller does not own the clinic."""

    code = "not_clinic_owner"

    def __init__(self, clinic_id: str, actor_id: str):
        self.clinic_id = clinic_id
        self.actor_id = actor_id
        super().__init__(f"User {actor_id} is not the owner of clinic {clinic_id}")


class IllegalTransitionError(SchedulingError):
    """Status transition is not allowed."""

    code = "illegal_transition"

    def __init__(self, from_status, to_status):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot change appointment status from "
            f"'{getattr(from_status, 'value', from_status)}' to "
            f"'{getattr(to_status, 'value', to_status)}'"
        )


class AppointmentNotFoundError(SchedulingError):
    """Appointment does not exist."""

    code = "appointment_not_found"

    def __init__(self, appointment_id: str):
        self.appointment_id = appointment_id
        super().__init__(f"Appointment {appointment_id} not found")
