"""
Appointment endpoints: booking, listing and status changes.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from ...core.models import AppointmentFilters
from ...services.scheduling import SchedulingService
from ...utils.logging import get_logger
from ..schemas import (
    AppointmentListResponse,
    BookingResponse,
    CreateBookingBody,
    StatusUpdateBody,
)
from .identity import get_current_user_id

logger = get_logger("clinic.api.appointments")


class AppointmentsHandler:
    """Handler for /appointments routes."""

    def __init__(self, service: SchedulingService):
        self.service = service
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        @self.router.post(
            "", response_model=BookingResponse, status_code=status.HTTP_201_CREATED
        )
        async def create_booking(
            body: CreateBookingBody, user_id: str = Depends(get_current_user_id)
        ):
            """Book one or more slots of a clinic on a single date."""
            appointments = await self.service.create_booking(
                clinic_id=body.clinic_id,
                user_id=user_id,
                date=body.date,
                times=body.times,
                notes=body.notes,
                value_per_slot=body.value_per_slot,
            )
            total = sum((a.value for a in appointments), Decimal("0"))
            return BookingResponse(
                appointments=[a.to_record() for a in appointments],
                total_value=str(total),
            )

        @self.router.get("", response_model=AppointmentListResponse)
        async def list_appointments(
            clinic_id: Optional[str] = Query(default=None),
            date_from: Optional[str] = Query(default=None),
            date_to: Optional[str] = Query(default=None),
            period: Optional[str] = Query(default=None),
            weekday: Optional[str] = Query(default=None),
            status_filter: Optional[str] = Query(default=None, alias="status"),
            user_id: str = Depends(get_current_user_id),
        ):
            """Appointments of one owned clinic, or of all owned clinics."""
            try:
                filters = AppointmentFilters(
                    clinic_id=clinic_id,
                    date_from=date_from,
                    date_to=date_to,
                    period=period,
                    weekday=weekday,
                    status=status_filter,
                )
            except ValidationError as e:
                logger.info("rejected appointment filters from %s: %d errors", user_id, e.error_count())
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail=e.errors(include_url=False, include_context=False),
                )

            appointments = await self.service.list_appointments(user_id, filters=filters)
            return AppointmentListResponse(
                appointments=[a.to_record() for a in appointments],
                stats=self.service.summarize(appointments),
            )

        @self.router.patch("/{appointment_id}/status")
        async def update_status(
            appointment_id: str,
            body: StatusUpdateBody,
            user_id: str = Depends(get_current_user_id),
        ):
            """Move an appointment along its lifecycle (clinic owner only)."""
            appointment = await self.service.update_status(appointment_id, body.status, user_id)
            return appointment.to_record()
