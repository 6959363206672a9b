"""
Appointment store contract.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from ...core.enums import AppointmentStatus
from ...core.models import Appointment


class AppointmentStore(ABC):
    """
    Persistence boundary for appointments.

    Implementations guarantee that ``insert_many`` is all-or-nothing and that
    ``update_status`` only writes when the stored status still equals
    ``expected``.
    """

    @abstractmethod
    async def ping(self) -> None:
        """Raise StoreError if the store cannot serve requests."""

    @abstractmethod
    async def insert_many(self, appointments: Sequence[Appointment]) -> List[Appointment]:
        """Persist every appointment or none of them.

        Raises:
            SlotConflictStoreError: an active appointment already holds one
                of the slots.
            StoreError: any other persistence failure.
        """

    @abstractmethod
    async def update_status(
        self,
        appointment_id: str,
        expected: AppointmentStatus,
        new_status: AppointmentStatus,
        updated_at: datetime,
    ) -> Optional[Appointment]:
        """Conditionally update status; None when no row matched."""

    @abstractmethod
    async def get(self, appointment_id: str) -> Optional[Appointment]:
        """Fetch one appointment by id."""

    @abstractmethod
    async def query(
        self,
        clinic_ids: Iterable[str],
        status: Optional[AppointmentStatus] = None,
        day: Optional[date] = None,
        statuses: Optional[Iterable[AppointmentStatus]] = None,
    ) -> List[Appointment]:
        """Appointments of the given clinics ordered by ``(date, time)``."""
