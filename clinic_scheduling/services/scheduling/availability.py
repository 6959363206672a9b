"""
Availability model: recurring weekly windows to bookable point times.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List

from ...core.enums import Weekday
from ...core.models import Clinic, SlotOption, Appointment
from .conflict import ConflictGuard


class AvailabilityModel:
    """Answers slot membership questions for a clinic's weekly schedule."""

    def __init__(self, step_minutes: int = 30):
        if step_minutes <= 0:
            raise ValueError("step_minutes must be positive")
        self.step = timedelta(minutes=step_minutes)

    @staticmethod
    def has_any_availability(clinic: Clinic) -> bool:
        """
        True if the clinic has at least one complete availability window.

        Incomplete form rows never become windows (see Clinic.from_api_response).
        """
        return len(clinic.availability) > 0

    @staticmethod
    def is_within_availability(clinic: Clinic, day: date, slot_time: time) -> bool:
        """True if ``slot_time`` on ``day`` falls in some window ``[start, end)``."""
        weekday = Weekday.from_date(day)
        return any(w.contains(weekday, slot_time) for w in clinic.availability)

    def candidate_times(self, clinic: Clinic, day: date) -> List[time]:
        """
        Point times offered on ``day``, stepping through every matching window.

        Overlapping windows are merged; the result is ascending and unique.
        """
        weekday = Weekday.from_date(day)
        found = set()
        for window in clinic.availability:
            if window.weekday != weekday:
                continue
            found.update(self._step_through(window.start, window.end))
        return sorted(found)

    def slot_options(
        self, clinic: Clinic, day: date, existing: Iterable[Appointment]
    ) -> List[SlotOption]:
        """Candidate times for ``day`` flagged free or taken."""
        candidates = self.candidate_times(clinic, day)
        partition = ConflictGuard(clinic.id, day).partition(candidates, existing)
        taken = set(partition.taken)
        return [SlotOption(time=t, available=t not in taken) for t in candidates]

    def _step_through(self, start: time, end: time) -> List[time]:
        anchor = date(2000, 1, 1)
        current = datetime.combine(anchor, start)
        stop = datetime.combine(anchor, end)
        times = []
        while current < stop:
            times.append(current.time())
            current += self.step
        return times
