"""
HTTP route handlers.
"""

from .health import HealthHandler
from .appointments import AppointmentsHandler
from .clinics import ClinicsHandler
from .identity import get_current_user_id

__all__ = [
    "HealthHandler",
    "AppointmentsHandler",
    "ClinicsHandler",
    "get_current_user_id",
]
