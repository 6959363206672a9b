"""
Persistence and external service exceptions.
"""

from typing import Optional, Tuple


class StoreError(Exception):
    """Appointment store operation failed."""

    code = "store_error"


class SlotConflictStoreError(StoreError):
    """Insert rejected by the store's slot uniqueness constraint."""

    code = "slot_conflict"

    def __init__(self, message: str, slot: Optional[Tuple[str, str, str]] = None):
        super().__init__(message)
        self.slot = slot


class ExternalServiceError(Exception):
    """Base exception for external service errors."""

    code = "external_service_error"


class DirectoryError(ExternalServiceError):
    """Clinic directory request failed."""

    code = "directory_error"
