"""
Appointment status lifecycle.
"""

from typing import Dict, FrozenSet, Union

from ...core.enums import AppointmentStatus
from ...core.exceptions import (
    AppointmentNotFoundError,
    IllegalTransitionError,
    NotClinicOwnerError,
    UnknownStatusError,
)
from ...core.models import Appointment
from ...utils.date import utc_now
from ...utils.logging import get_logger
from ..directory import ClinicDirectoryService
from ..events import EventPublisher
from ..store import AppointmentStore

logger = get_logger("clinic.status")


class StatusMachine:
    """Legal status transitions, restricted to the clinic owner."""

    TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
        AppointmentStatus.PENDING: frozenset(
            {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED}
        ),
        AppointmentStatus.CONFIRMED: frozenset(
            {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
        ),
        AppointmentStatus.COMPLETED: frozenset(),
        AppointmentStatus.CANCELLED: frozenset(),
    }

    def __init__(
        self,
        store: AppointmentStore,
        directory: ClinicDirectoryService,
        events: EventPublisher,
    ):
        self.store = store
        self.directory = directory
        self.events = events

    @classmethod
    def can_transition(cls, from_status: AppointmentStatus, to_status: AppointmentStatus) -> bool:
        return to_status in cls.TRANSITIONS.get(from_status, frozenset())

    @classmethod
    def allowed_targets(cls, from_status: AppointmentStatus) -> FrozenSet[AppointmentStatus]:
        return cls.TRANSITIONS.get(from_status, frozenset())

    async def transition(
        self, appointment_id: str, to_status: Union[AppointmentStatus, str], actor_id: str
    ) -> Appointment:
        """
        Move an appointment to ``to_status`` on behalf of ``actor_id``.

        The write is conditional on the status read here, so a concurrent
        change makes this call fail instead of overwriting it.

        Raises:
            UnknownStatusError: ``to_status`` is not a status value.
            AppointmentNotFoundError: unknown id.
            NotClinicOwnerError: actor does not own the appointment's clinic.
            IllegalTransitionError: edge not in the lifecycle table.
        """
        try:
            to_status = AppointmentStatus(to_status)
        except ValueError as e:
            raise UnknownStatusError(to_status) from e

        appointment = await self.store.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)

        if not await self.directory.is_owner(appointment.clinic_id, actor_id):
            logger.warning(
                "status change denied: appointment=%s actor=%s", appointment_id, actor_id
            )
            raise NotClinicOwnerError(appointment.clinic_id, actor_id)

        from_status = appointment.status
        if not self.can_transition(from_status, to_status):
            raise IllegalTransitionError(from_status, to_status)

        updated = await self.store.update_status(
            appointment_id, from_status, to_status, utc_now()
        )
        if updated is None:
            current = await self.store.get(appointment_id)
            if current is None:
                raise AppointmentNotFoundError(appointment_id)
            raise IllegalTransitionError(current.status, to_status)

        logger.info(
            "appointment %s: %s -> %s by %s",
            appointment_id, from_status.value, to_status.value, actor_id,
        )
        await self.events.publish(
            "appointment_status_changed",
            {
                "appointment_id": appointment_id,
                "clinic_id": updated.clinic_id,
                "from": from_status.value,
                "to": to_status.value,
                "actor_id": actor_id,
            },
        )
        return updated
