"""
Clinic-scoped endpoints: bookable slots and statistics.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from ...core.models import AppointmentStats
from ...services.scheduling import SchedulingService
from ..schemas import SlotResponse
from .identity import get_current_user_id


class ClinicsHandler:
    """Handler for /clinics routes."""

    def __init__(self, service: SchedulingService):
        self.service = service
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        @self.router.get("/{clinic_id}/slots", response_model=List[SlotResponse])
        async def available_slots(clinic_id: str, date: str = Query(...)):
            """Bookable times of a date; taken ones are flagged, not hidden."""
            options = await self.service.available_slots(clinic_id, date)
            return [SlotResponse(**o.to_record()) for o in options]

        @self.router.get("/{clinic_id}/stats", response_model=AppointmentStats)
        async def clinic_stats(clinic_id: str, user_id: str = Depends(get_current_user_id)):
            return await self.service.clinic_stats(user_id, clinic_id)
