"""
Conflict guard: which requested times are still free on a clinic's date.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Iterable, List, Set

from ...core.enums import ACTIVE_STATUSES
from ...core.exceptions import SlotAlreadyBookedError
from ...core.models import Appointment


@dataclass
class SlotPartition:
    """Requested times split into free and already-occupied."""

    available: List[time] = field(default_factory=list)
    taken: List[time] = field(default_factory=list)

    @property
    def all_free(self) -> bool:
        return not self.taken


class ConflictGuard:
    """
    Partitions candidate times for one ``(clinic_id, date)`` key.

    ``existing`` must be a fresh read of the store taken inside the booking
    critical section; the guard does no I/O of its own.
    """

    def __init__(self, clinic_id: str, day: date):
        self.clinic_id = clinic_id
        self.day = day

    def taken_times(self, existing: Iterable[Appointment]) -> Set[time]:
        return {
            a.time
            for a in existing
            if a.clinic_id == self.clinic_id
            and a.date == self.day
            and a.status in ACTIVE_STATUSES
        }

    def partition(
        self, candidates: Iterable[time], existing: Iterable[Appointment]
    ) -> SlotPartition:
        taken = self.taken_times(existing)
        result = SlotPartition()
        for candidate in candidates:
            if candidate in taken:
                result.taken.append(candidate)
            else:
                result.available.append(candidate)
        return result

    def ensure_free(self, candidates: Iterable[time], existing: Iterable[Appointment]) -> None:
        """Raise SlotAlreadyBookedError for the first taken candidate."""
        partition = self.partition(candidates, existing)
        if partition.taken:
            raise SlotAlreadyBookedError(partition.taken[0])
