"""
Appointment listing and statistics.
"""

from typing import Iterable, List, Optional

from ...core.enums import AppointmentStatus
from ...core.exceptions import NotClinicOwnerError
from ...core.models import Appointment, AppointmentFilters, AppointmentStats
from ...utils.logging import get_logger
from ..directory import ClinicDirectoryService
from ..store import AppointmentStore

logger = get_logger("clinic.query")


class QueryEngine:
    """Lists the appointments a principal may see and summarizes them."""

    def __init__(self, store: AppointmentStore, directory: ClinicDirectoryService):
        self.store = store
        self.directory = directory

    async def resolve_clinic_ids(
        self, principal_id: str, clinic_id: Optional[str] = None
    ) -> List[str]:
        """
        Clinics whose appointments ``principal_id`` may list.

        With an explicit ``clinic_id`` the principal must own it; without one
        every clinic they own is returned ("all my clinics").
        """
        if clinic_id:
            if not await self.directory.is_owner(clinic_id, principal_id):
                raise NotClinicOwnerError(clinic_id, principal_id)
            return [clinic_id]
        return await self.directory.list_owned_clinic_ids(principal_id)

    async def list(
        self, principal_id: str, filters: Optional[AppointmentFilters] = None
    ) -> List[Appointment]:
        filters = filters or AppointmentFilters()
        clinic_ids = await self.resolve_clinic_ids(principal_id, filters.clinic_id)
        if not clinic_ids:
            return []

        # status and clinic are pushed to the store; the rest is filtered here
        appointments = await self.store.query(clinic_ids, status=filters.status)
        result = self.apply_filters(appointments, filters)
        logger.debug(
            "listed %d of %d appointments for %s", len(result), len(appointments), principal_id
        )
        return result

    @staticmethod
    def apply_filters(
        appointments: Iterable[Appointment], filters: AppointmentFilters
    ) -> List[Appointment]:
        """Apply date range, period, weekday, status and clinic filters; sort by slot."""
        result = []
        for a in appointments:
            if filters.clinic_id and a.clinic_id != filters.clinic_id:
                continue
            if filters.status is not None and a.status != filters.status:
                continue
            if filters.date_from is not None and a.date < filters.date_from:
                continue
            if filters.date_to is not None and a.date > filters.date_to:
                continue
            if filters.period is not None and not filters.period.contains(a.time):
                continue
            if filters.weekday is not None and a.weekday != filters.weekday:
                continue
            result.append(a)
        result.sort(key=lambda a: (a.date, a.time))
        return result

    @staticmethod
    def summarize(appointments: Iterable[Appointment]) -> AppointmentStats:
        counts = {status: 0 for status in AppointmentStatus}
        total = 0
        for a in appointments:
            counts[a.status] += 1
            total += 1
        return AppointmentStats(
            total=total,
            pending=counts[AppointmentStatus.PENDING],
            confirmed=counts[AppointmentStatus.CONFIRMED],
            cancelled=counts[AppointmentStatus.CANCELLED],
            completed=counts[AppointmentStatus.COMPLETED],
        )

    async def clinic_stats(self, principal_id: str, clinic_id: str) -> AppointmentStats:
        """Statistics over every appointment of one owned clinic."""
        appointments = await self.list(principal_id, AppointmentFilters(clinic_id=clinic_id))
        return self.summarize(appointments)
