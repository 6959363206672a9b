"""
Utility modules for the clinic scheduling service.
"""

from .date import DateParser, TimeParser, format_timestamp, parse_timestamp, utc_now
from .logging import configure_logging, get_logger

__all__ = [
    "DateParser",
    "TimeParser",
    "format_timestamp",
    "parse_timestamp",
    "utc_now",
    "configure_logging",
    "get_logger",
]
