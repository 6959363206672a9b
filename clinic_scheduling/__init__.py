"""
Clinic scheduling service: availability, bookings and appointment lifecycle.
"""

__version__ = "1.0.0"
