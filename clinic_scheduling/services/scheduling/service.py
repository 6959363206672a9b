"""
Scheduling facade exposing the public operations of the service layer.
"""

from datetime import date, time
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError

from ...config import DatabaseConfig, Settings, get_settings
from ...core.enums import ACTIVE_STATUSES, AppointmentStatus
from ...core.exceptions import BookingValidationError, NoSlotsSelectedError
from ...core.models import (
    Appointment,
    AppointmentFilters,
    AppointmentStats,
    BookingRequest,
    SlotOption,
)
from ...utils.date import DateParser
from ..directory import ClinicDirectoryService
from ..events import EventPublisher
from ..store import AppointmentStore, SQLiteAppointmentStore
from .availability import AvailabilityModel
from .booking import BookingService
from .query import QueryEngine
from .status import StatusMachine


class SchedulingService:
    """Booking, status changes and listings over one appointment store."""

    def __init__(
        self,
        store: AppointmentStore,
        directory: ClinicDirectoryService,
        events: Optional[EventPublisher] = None,
        slot_step_minutes: int = 30,
    ):
        self.store = store
        self.directory = directory
        self.events = events or EventPublisher()
        self.availability = AvailabilityModel(slot_step_minutes)
        self.booking = BookingService(store, directory, self.availability, self.events)
        self.status_machine = StatusMachine(store, directory, self.events)
        self.queries = QueryEngine(store, directory)

    async def create_booking(
        self,
        clinic_id: str,
        user_id: str,
        date: Union[str, date],
        times: Sequence[Union[str, time]],
        notes: Optional[str] = None,
        value_per_slot: Optional[Union[Decimal, str, float, int]] = None,
    ) -> List[Appointment]:
        """Book ``times`` on ``date``; the clinic's price applies when no value is given."""
        if not times:
            raise NoSlotsSelectedError()

        clinic = await self.booking.load_clinic(clinic_id)
        if value_per_slot is None:
            value_per_slot = clinic.price_per_slot

        try:
            request = BookingRequest(
                clinic_id=clinic_id,
                user_id=user_id,
                date=date,
                times=list(times),
                notes=notes,
                value_per_slot=value_per_slot,
            )
        except ValidationError as e:
            raise BookingValidationError(f"Invalid booking request: {e}") from e
        return await self.booking.create_booking(request, clinic=clinic)

    async def list_appointments(
        self,
        principal_id: str,
        clinic_id: Optional[str] = None,
        filters: Optional[AppointmentFilters] = None,
    ) -> List[Appointment]:
        filters = filters or AppointmentFilters()
        if clinic_id:
            filters = filters.model_copy(update={"clinic_id": clinic_id})
        return await self.queries.list(principal_id, filters)

    async def update_status(
        self,
        appointment_id: str,
        new_status: Union[AppointmentStatus, str],
        actor_id: str,
    ) -> Appointment:
        return await self.status_machine.transition(
            appointment_id, new_status, actor_id
        )

    def summarize(self, appointments: Iterable[Appointment]) -> AppointmentStats:
        return QueryEngine.summarize(appointments)

    async def clinic_stats(self, principal_id: str, clinic_id: str) -> AppointmentStats:
        return await self.queries.clinic_stats(principal_id, clinic_id)

    async def available_slots(self, clinic_id: str, day: Union[str, date]) -> List[SlotOption]:
        """
        Candidate times of ``day`` with their current free/taken state.

        A clinic that does not take in-platform bookings offers no slots.
        """
        try:
            day = DateParser.parse(day)
        except ValueError as e:
            raise BookingValidationError(str(e)) from e
        clinic = await self.booking.load_clinic(clinic_id)
        if not clinic.has_appointment_flag:
            return []
        existing = await self.store.query([clinic_id], day=day, statuses=ACTIVE_STATUSES)
        return self.availability.slot_options(clinic, day, existing)


def create_scheduling_service(settings: Optional[Settings] = None) -> SchedulingService:
    """Wire the service from settings."""
    settings = settings or get_settings()
    store = SQLiteAppointmentStore(DatabaseConfig.from_settings(settings))
    directory = ClinicDirectoryService(settings)
    events = EventPublisher(settings.event_log_path)
    return SchedulingService(
        store, directory, events, slot_step_minutes=settings.slot_step_minutes
    )
