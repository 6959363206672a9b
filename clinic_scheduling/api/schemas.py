"""
Request and response bodies of the HTTP API.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import AppointmentStatus
from ..core.models import AppointmentStats


class CreateBookingBody(BaseModel):
    """Booking request as sent by the clinic page."""

    model_config = ConfigDict(extra="forbid")

    clinic_id: str
    date: str = Field(description="YYYY-MM-DD")
    times: List[str] = Field(default_factory=list, description="HH:MM slot times")
    notes: Optional[str] = None
    value_per_slot: Optional[Decimal] = Field(default=None, ge=0)


class BookingResponse(BaseModel):
    appointments: List[Dict[str, Any]]
    total_value: str


class StatusUpdateBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: AppointmentStatus


class AppointmentListResponse(BaseModel):
    appointments: List[Dict[str, Any]]
    stats: AppointmentStats


class SlotResponse(BaseModel):
    time: str
    available: bool
