"""
Appointment-related enums.
"""

from datetime import date, time
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class AppointmentStatus(str, Enum):
    """Lifecycle status of a single appointment."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        return self in (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED)

    @property
    def occupies_slot(self) -> bool:
        """Cancelled appointments free their slot; every other status holds it."""
        return self is not AppointmentStatus.CANCELLED


ACTIVE_STATUSES: FrozenSet[AppointmentStatus] = frozenset(
    s for s in AppointmentStatus if s.occupies_slot
)


class Weekday(str, Enum):
    """Day of the week, ordered like ``date.weekday()``."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def index(self) -> int:
        return _WEEKDAY_ORDER.index(self)

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        """Weekday of a calendar date (local, no time zone involved)."""
        return _WEEKDAY_ORDER[value.weekday()]

    @classmethod
    def from_string(cls, value: str) -> "Weekday":
        """Convert a day name to Weekday with English/Portuguese support."""
        if not value or not isinstance(value, str):
            raise ValueError(f"Invalid weekday: {value!r}")

        key = value.strip().lower()
        if key.endswith("-feira"):
            key = key[: -len("-feira")]

        weekday = _WEEKDAY_ALIASES.get(key)
        if weekday is None:
            raise ValueError(f"Invalid weekday: {value!r}")
        return weekday


_WEEKDAY_ORDER: Tuple[Weekday, ...] = tuple(Weekday)

_WEEKDAY_ALIASES = {
    # English
    "monday": Weekday.MONDAY, "mon": Weekday.MONDAY,
    "tuesday": Weekday.TUESDAY, "tue": Weekday.TUESDAY,
    "wednesday": Weekday.WEDNESDAY, "wed": Weekday.WEDNESDAY,
    "thursday": Weekday.THURSDAY, "thu": Weekday.THURSDAY,
    "friday": Weekday.FRIDAY, "fri": Weekday.FRIDAY,
    "saturday": Weekday.SATURDAY, "sat": Weekday.SATURDAY,
    "sunday": Weekday.SUNDAY, "sun": Weekday.SUNDAY,
    # Portuguese, as stored by the clinic listing form
    "segunda": Weekday.MONDAY,
    "terca": Weekday.TUESDAY, "terça": Weekday.TUESDAY,
    "quarta": Weekday.WEDNESDAY,
    "quinta": Weekday.THURSDAY,
    "sexta": Weekday.FRIDAY,
    "sabado": Weekday.SATURDAY, "sábado": Weekday.SATURDAY,
    "domingo": Weekday.SUNDAY,
}


class DayPeriod(str, Enum):
    """Time-of-day bucket used by appointment listings."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ALL = "all"

    def contains(self, value: time) -> bool:
        """Return True if ``value`` falls inside this period."""
        if self is DayPeriod.ALL:
            return True
        start, end, end_inclusive = _PERIOD_BOUNDS[self]
        if value < start:
            return False
        return value <= end if end_inclusive else value < end


# evening ends at 23:59 inclusive, so any second within that minute matches
_PERIOD_BOUNDS = {
    DayPeriod.MORNING: (time(6, 0), time(12, 0), False),
    DayPeriod.AFTERNOON: (time(12, 0), time(18, 0), False),
    DayPeriod.EVENING: (time(18, 0), time(23, 59, 59, 999999), True),
}


def parse_filter_value(enum_cls, value) -> Optional[Enum]:
    """Parse a filter value where the literal ``"all"`` means no filtering."""
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return None if value.value == "all" else value
    if isinstance(value, str):
        text = value.strip().lower()
        if not text or text == "all":
            return None
        if enum_cls is Weekday:
            return Weekday.from_string(text)
        return enum_cls(text)
    raise ValueError(f"Invalid {enum_cls.__name__} value: {value!r}")
