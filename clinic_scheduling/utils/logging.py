"""
Logging setup.
"""

import logging
from typing import Optional

from ..config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Set the level of the ``clinic`` logger hierarchy and attach one stream handler."""
    level_name = (level or get_settings().log_level).upper()
    root = logging.getLogger("clinic")
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``clinic`` hierarchy, e.g. ``clinic.booking``."""
    return logging.getLogger(name)
