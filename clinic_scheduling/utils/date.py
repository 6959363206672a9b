"""
Date and time parsing utilities.

Calendar dates travel as ``YYYY-MM-DD`` and slot times as ``HH:MM`` or
``HH:MM:SS``; timestamps are always UTC.
"""

from datetime import date, datetime, time
from typing import Union
import pytz


class DateParser:
    """Calendar date parsing and formatting."""

    FORMAT = "%Y-%m-%d"

    @classmethod
    def parse(cls, value: Union[str, date]) -> date:
        """Parse a ``YYYY-MM-DD`` string (or pass a date through)."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid date: {value!r}")
        try:
            return datetime.strptime(value.strip(), cls.FORMAT).date()
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}, expected YYYY-MM-DD")

    @classmethod
    def format(cls, value: date) -> str:
        return value.strftime(cls.FORMAT)

    @classmethod
    def is_valid_iso_date(cls, date_str: str) -> bool:
        """Check if string is a valid ISO date (YYYY-MM-DD)."""
        try:
            cls.parse(date_str)
            return True
        except ValueError:
            return False


class TimeParser:
    """Slot time parsing and formatting."""

    @staticmethod
    def parse(value: Union[str, time]) -> time:
        """
        Parse ``HH:MM`` or ``HH:MM:SS``.

        The store keeps seconds (``10:30:00``) while clients usually send
        ``10:30``; both parse to the same ``time``.
        """
        if isinstance(value, time):
            return value.replace(microsecond=0, tzinfo=None)
        if not isinstance(value, str):
            raise ValueError(f"Invalid time: {value!r}")

        text = value.strip()
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                return datetime.strptime(text, fmt).time()
            except ValueError:
                continue
        raise ValueError(f"Invalid time: {value!r}, expected HH:MM or HH:MM:SS")

    @staticmethod
    def format(value: time) -> str:
        """Format as ``HH:MM``, keeping seconds only when present."""
        return value.strftime("%H:%M:%S" if value.second else "%H:%M")

    @staticmethod
    def is_valid_time_format(time_str: str) -> bool:
        try:
            TimeParser.parse(time_str)
            return True
        except ValueError:
            return False


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(pytz.utc)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC timestamp with a ``Z`` suffix."""
    return to_utc(value).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    if isinstance(value, datetime):
        return to_utc(value)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(text))
