"""
Tests for the appointment status lifecycle.
"""

import itertools
import json

import pytest

from clinic_scheduling.core.enums import AppointmentStatus
from clinic_scheduling.core.exceptions import (
    AppointmentNotFoundError,
    BookingValidationError,
    IllegalTransitionError,
    NotClinicOwnerError,
    UnknownStatusError,
)
from clinic_scheduling.services.scheduling import StatusMachine

OWNER = "owner-1"
MONDAY = "2025-01-13"

LEGAL = {
    (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED),
    (AppointmentStatus.PENDING, AppointmentStatus.CANCELLED),
    (AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED),
    (AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED),
}


@pytest.mark.parametrize(
    "from_status, to_status", list(itertools.product(AppointmentStatus, repeat=2))
)
def test_transition_table(from_status, to_status):
    assert StatusMachine.can_transition(from_status, to_status) == ((from_status, to_status) in LEGAL)


def test_terminal_states_have_no_targets():
    assert StatusMachine.allowed_targets(AppointmentStatus.COMPLETED) == frozenset()
    assert StatusMachine.allowed_targets(AppointmentStatus.CANCELLED) == frozenset()


async def _book(scheduling, at="09:00"):
    created = await scheduling.create_booking("clinic-1", "user-9", MONDAY, [at])
    return created[0]


class TestTransition:
    """Status changes through the store."""

    @pytest.mark.asyncio
    async def test_confirm_then_complete(self, scheduling, store):
        appointment = await _book(scheduling)

        confirmed = await scheduling.update_status(appointment.id, "confirmed", OWNER)
        assert confirmed.status == AppointmentStatus.CONFIRMED
        assert confirmed.updated_at >= appointment.updated_at
        assert confirmed.created_at == appointment.created_at

        completed = await scheduling.update_status(appointment.id, AppointmentStatus.COMPLETED, OWNER)
        assert completed.status == AppointmentStatus.COMPLETED
        assert (await store.get(appointment.id)).status == AppointmentStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_pending_to_completed_is_illegal(self, scheduling, store):
        appointment = await _book(scheduling)

        with pytest.raises(IllegalTransitionError) as exc:
            await scheduling.update_status(appointment.id, "completed", OWNER)
        assert exc.value.from_status == AppointmentStatus.PENDING
        assert exc.value.to_status == AppointmentStatus.COMPLETED
        assert (await store.get(appointment.id)).status == AppointmentStatus.PENDING

    @pytest.mark.asyncio
    async def test_cancelled_is_terminal(self, scheduling):
        appointment = await _book(scheduling)
        await scheduling.update_status(appointment.id, "cancelled", OWNER)

        for target in ("pending", "confirmed", "completed", "cancelled"):
            with pytest.raises(IllegalTransitionError):
                await scheduling.update_status(appointment.id, target, OWNER)

    @pytest.mark.asyncio
    async def test_booking_user_cannot_change_status(self, scheduling, store):
        appointment = await _book(scheduling)

        with pytest.raises(NotClinicOwnerError):
            await scheduling.update_status(appointment.id, "cancelled", "user-9")
        assert (await store.get(appointment.id)).status == AppointmentStatus.PENDING

    @pytest.mark.asyncio
    async def test_unknown_appointment(self, scheduling):
        with pytest.raises(AppointmentNotFoundError):
            await scheduling.update_status("missing", "confirmed", OWNER)

    @pytest.mark.asyncio
    async def test_unknown_status_value(self, scheduling, store):
        appointment = await _book(scheduling)

        with pytest.raises(UnknownStatusError) as exc:
            await scheduling.update_status(appointment.id, "archived", OWNER)
        assert isinstance(exc.value, BookingValidationError)
        assert exc.value.code == "unknown_status"
        assert (await store.get(appointment.id)).status == AppointmentStatus.PENDING

    @pytest.mark.asyncio
    async def test_concurrent_change_is_detected(self, scheduling, store):
        appointment = await _book(scheduling)
        # another writer cancels between our read and the conditional update
        real_get = store.get

        async def stale_get(appointment_id):
            current = await real_get(appointment_id)
            if current is not None and current.status == AppointmentStatus.PENDING:
                await store.update_status(
                    appointment_id,
                    AppointmentStatus.PENDING,
                    AppointmentStatus.CANCELLED,
                    current.updated_at,
                )
            return current

        store.get = stale_get
        with pytest.raises(IllegalTransitionError):
            await scheduling.update_status(appointment.id, "confirmed", OWNER)
        store.get = real_get

        assert (await store.get(appointment.id)).status == AppointmentStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_status_change_event_logged(self, scheduling, events):
        appointment = await _book(scheduling)
        await scheduling.update_status(appointment.id, "confirmed", OWNER)

        records = [json.loads(l) for l in events.log_path.read_text(encoding="utf-8").splitlines()]
        last = records[-1]
        assert last["event"] == "appointment_status_changed"
        assert last["from"] == "pending"
        assert last["to"] == "confirmed"
        assert last["actor_id"] == OWNER
