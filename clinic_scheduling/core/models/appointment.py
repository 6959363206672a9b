"""
Appointment-related data models.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..enums import AppointmentStatus, DayPeriod, Weekday, parse_filter_value
from ...utils.date import DateParser, TimeParser, format_timestamp, parse_timestamp

SlotKey = Tuple[str, date, time]


class Appointment(BaseModel):
    """A single booked slot of a clinic."""

    model_config = ConfigDict(extra="forbid")

    id: str
    clinic_id: str
    user_id: str
    date: date
    time: time
    value: Decimal
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> date:
        return DateParser.parse(value)

    @field_validator("time", mode="before")
    @classmethod
    def _parse_time(cls, value: Any) -> time:
        return TimeParser.parse(value)

    @field_validator("value", mode="before")
    @classmethod
    def _parse_value(cls, value: Any) -> Decimal:
        return value if isinstance(value, Decimal) else Decimal(str(value))

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @property
    def slot_key(self) -> SlotKey:
        return (self.clinic_id, self.date, self.time)

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_date(self.date)

    def to_record(self) -> Dict[str, Any]:
        """JSON-serializable representation used by the store and the API."""
        return {
            "id": self.id,
            "clinic_id": self.clinic_id,
            "user_id": self.user_id,
            "date": DateParser.format(self.date),
            "time": TimeParser.format(self.time),
            "value": str(self.value),
            "status": self.status.value,
            "notes": self.notes,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Appointment":
        return cls(**record)


class BookingRequest(BaseModel):
    """One user-initiated request for one or more slots on a single date."""

    model_config = ConfigDict(extra="forbid")

    clinic_id: str
    user_id: str
    date: date
    times: List[time] = Field(default_factory=list)
    notes: Optional[str] = None
    value_per_slot: Decimal = Field(ge=0)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> date:
        return DateParser.parse(value)

    @field_validator("times", mode="before")
    @classmethod
    def _parse_times(cls, value: Any) -> List[time]:
        if value is None:
            return []
        seen = set()
        times: List[time] = []
        for item in value:
            parsed = TimeParser.parse(item)
            if parsed not in seen:
                seen.add(parsed)
                times.append(parsed)
        return times

    @field_validator("notes", mode="before")
    @classmethod
    def _blank_notes(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def total_value(self) -> Decimal:
        """Total charge for the request; derived, never stored."""
        return self.value_per_slot * len(self.times)


class AppointmentFilters(BaseModel):
    """Listing filters. The literal ``"all"`` is accepted and means no filter."""

    model_config = ConfigDict(extra="forbid")

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    period: Optional[DayPeriod] = None
    weekday: Optional[Weekday] = None
    status: Optional[AppointmentStatus] = None
    clinic_id: Optional[str] = None

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Optional[date]:
        if value is None or value == "":
            return None
        return DateParser.parse(value)

    @field_validator("period", mode="before")
    @classmethod
    def _parse_period(cls, value: Any) -> Optional[DayPeriod]:
        return parse_filter_value(DayPeriod, value)

    @field_validator("weekday", mode="before")
    @classmethod
    def _parse_weekday(cls, value: Any) -> Optional[Weekday]:
        return parse_filter_value(Weekday, value)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> Optional[AppointmentStatus]:
        return parse_filter_value(AppointmentStatus, value)

    @field_validator("clinic_id", mode="before")
    @classmethod
    def _blank_clinic(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AppointmentStats(BaseModel):
    """Per-status counts over a result set."""

    total: int = 0
    pending: int = 0
    confirmed: int = 0
    cancelled: int = 0
    completed: int = 0


class SlotOption(BaseModel):
    """A bookable point time on a given date and whether it is still free."""

    time: time
    available: bool = True

    def to_record(self) -> Dict[str, Any]:
        return {"time": TimeParser.format(self.time), "available": self.available}
