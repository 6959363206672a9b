"""
HTTP API for the clinic scheduling service.
"""

from .app import create_app
from .middleware import SecurityHeaders, LoggingMiddleware

__all__ = [
    "create_app",
    "SecurityHeaders",
    "LoggingMiddleware",
]
