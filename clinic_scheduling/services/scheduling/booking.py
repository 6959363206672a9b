"""
Booking service: the single entry point for creating appointments.
"""

import asyncio
import weakref
from datetime import date
from typing import List, Optional, Tuple
from uuid import uuid4

from ...core.enums import ACTIVE_STATUSES, AppointmentStatus
from ...core.exceptions import (
    BookingDisabledError,
    ClinicNotFoundError,
    NoAvailabilityConfiguredError,
    NoSlotsSelectedError,
    SlotAlreadyBookedError,
    SlotConflictStoreError,
    SlotOutsideAvailabilityError,
)
from ...core.models import Appointment, BookingRequest, Clinic
from ...utils.date import DateParser, TimeParser, utc_now
from ...utils.logging import get_logger
from ..directory import ClinicDirectoryService
from ..events import EventPublisher
from ..store import AppointmentStore
from .availability import AvailabilityModel
from .conflict import ConflictGuard

logger = get_logger("clinic.booking")


class BookingService:
    """Validates booking requests and persists them all-or-nothing."""

    def __init__(
        self,
        store: AppointmentStore,
        directory: ClinicDirectoryService,
        availability: AvailabilityModel,
        events: EventPublisher,
    ):
        self.store = store
        self.directory = directory
        self.availability = availability
        self.events = events
        self._locks: "weakref.WeakValueDictionary[Tuple[str, date], asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, clinic_id: str, day: date) -> asyncio.Lock:
        """Lock serializing read-check-insert for one ``(clinic_id, date)``."""
        key = (clinic_id, day)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def load_clinic(self, clinic_id: str) -> Clinic:
        clinic = await self.directory.get_clinic(clinic_id)
        if clinic is None:
            raise ClinicNotFoundError(clinic_id)
        return clinic

    def validate_slots(self, clinic: Clinic, request: BookingRequest) -> None:
        """Raise the first validation error for ``request``; no I/O."""
        if not request.times:
            raise NoSlotsSelectedError()
        if not clinic.has_appointment_flag:
            raise BookingDisabledError(clinic.id)
        if not self.availability.has_any_availability(clinic):
            raise NoAvailabilityConfiguredError(clinic.id)
        for slot_time in request.times:
            if not self.availability.is_within_availability(clinic, request.date, slot_time):
                raise SlotOutsideAvailabilityError(slot_time)

    async def create_booking(
        self, request: BookingRequest, clinic: Optional[Clinic] = None
    ) -> List[Appointment]:
        """
        Create one pending appointment per requested time, or none at all.

        Args:
            request: The booking request.
            clinic: Already loaded clinic record, fetched when omitted.

        Returns:
            The created appointments in request order.

        Raises:
            BookingValidationError: empty request, clinic unknown or not
                bookable, or a time outside availability.
            SlotAlreadyBookedError: some requested time is taken.
            StoreError: persistence failed; nothing was written.
        """
        if not request.times:
            raise NoSlotsSelectedError()

        if clinic is None:
            clinic = await self.load_clinic(request.clinic_id)
        self.validate_slots(clinic, request)

        async with self._lock_for(request.clinic_id, request.date):
            existing = await self.store.query(
                [request.clinic_id], day=request.date, statuses=ACTIVE_STATUSES
            )
            ConflictGuard(request.clinic_id, request.date).ensure_free(request.times, existing)

            now = utc_now()
            appointments = [
                Appointment(
                    id=str(uuid4()),
                    clinic_id=request.clinic_id,
                    user_id=request.user_id,
                    date=request.date,
                    time=slot_time,
                    value=request.value_per_slot,
                    status=AppointmentStatus.PENDING,
                    notes=request.notes,
                    created_at=now,
                    updated_at=now,
                )
                for slot_time in request.times
            ]

            try:
                await self.store.insert_many(appointments)
            except SlotConflictStoreError as e:
                # another process won the slot between our read and insert
                logger.warning("booking rejected by store constraint: %s", e)
                raise SlotAlreadyBookedError(self._conflicting_time(e, request)) from e

        logger.info(
            "booking created: clinic=%s date=%s times=%s user=%s",
            request.clinic_id,
            DateParser.format(request.date),
            ",".join(TimeParser.format(t) for t in request.times),
            request.user_id,
        )
        await self.events.publish(
            "booking_created",
            {
                "clinic_id": request.clinic_id,
                "user_id": request.user_id,
                "date": DateParser.format(request.date),
                "appointment_ids": [a.id for a in appointments],
                "total_value": str(request.total_value),
            },
        )
        return appointments

    @staticmethod
    def _conflicting_time(error: SlotConflictStoreError, request: BookingRequest):
        if error.slot is not None:
            try:
                return TimeParser.parse(error.slot[2])
            except ValueError:
                pass
        return request.times[0]
