"""
Clinic and availability models.

Clinics are owned by the clinic directory; this service only reads them.
"""

from datetime import time
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..enums import Weekday
from ...utils.date import TimeParser


class AvailabilityWindow(BaseModel):
    """Recurring weekly interval ``[start, end)`` in which a clinic takes bookings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    weekday: Weekday
    start: time
    end: time

    @field_validator("weekday", mode="before")
    @classmethod
    def _parse_weekday(cls, value: Any) -> Weekday:
        if isinstance(value, Weekday):
            return value
        return Weekday.from_string(value)

    @field_validator("start", "end", mode="before")
    @classmethod
    def _parse_time(cls, value: Any) -> time:
        return TimeParser.parse(value)

    @model_validator(mode="after")
    def _check_order(self) -> "AvailabilityWindow":
        if self.start >= self.end:
            raise ValueError("availability window start must be before end")
        return self

    def contains(self, weekday: Weekday, value: time) -> bool:
        return self.weekday == weekday and self.start <= value < self.end

    @classmethod
    def parse_raw_entry(cls, entry: Dict[str, Any]) -> Optional["AvailabilityWindow"]:
        """
        Build a window from the listing form shape ``{day, startTime, endTime}``.

        Returns None for entries that are not syntactically complete or valid;
        the form lets owners save half-filled rows.
        """
        if not isinstance(entry, dict):
            return None

        day = entry.get("day", entry.get("weekday"))
        start = entry.get("startTime", entry.get("start"))
        end = entry.get("endTime", entry.get("end"))
        if not day or not start or not end:
            return None

        try:
            return cls(weekday=day, start=start, end=end)
        except ValueError:
            return None


class Clinic(BaseModel):
    """Clinic record as far as scheduling is concerned."""

    model_config = ConfigDict(extra="ignore")

    id: str
    owner_id: str
    price_per_slot: Decimal = Decimal("0")
    availability: List[AvailabilityWindow] = Field(default_factory=list)
    has_appointment_flag: bool = True
    title: Optional[str] = None
    raw_availability: List[Dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Clinic":
        """Create Clinic from a directory record."""
        raw_windows = data.get("availability") or []
        windows = [
            w for w in (AvailabilityWindow.parse_raw_entry(e) for e in raw_windows)
            if w is not None
        ]

        # A missing flag means in-platform booking is on
        flag = data.get("hasappointment", data.get("has_appointment"))
        has_appointment = flag is None or str(flag).lower() != "false"

        return cls(
            id=str(data["id"]),
            owner_id=str(data.get("user_id") or ""),
            price_per_slot=Decimal(str(data.get("price") or 0)),
            availability=windows,
            has_appointment_flag=has_appointment,
            title=data.get("title"),
            raw_availability=[e for e in raw_windows if isinstance(e, dict)],
        )
