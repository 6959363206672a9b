"""
Pytest configuration and fixtures.
"""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from clinic_scheduling.config import DatabaseConfig, Settings
from clinic_scheduling.core.models import Clinic
from clinic_scheduling.services.directory import ClinicDirectoryService
from clinic_scheduling.services.events import EventPublisher
from clinic_scheduling.services.scheduling import SchedulingService
from clinic_scheduling.services.store import SQLiteAppointmentStore

OWNER_ID = "owner-1"
PATIENT_ID = "user-9"

A_MONDAY = date(2025, 1, 13)
A_TUESDAY = date(2025, 1, 14)
A_WEDNESDAY = date(2025, 1, 15)


def make_clinic(clinic_id="clinic-1", owner_id=OWNER_ID, availability=None, **extra) -> Clinic:
    if availability is None:
        availability = [
            {"day": "segunda", "startTime": "08:00", "endTime": "12:00"},
            {"day": "quarta", "startTime": "14:00", "endTime": "18:00"},
        ]
    record = {
        "id": clinic_id,
        "user_id": owner_id,
        "price": 150,
        "availability": availability,
        **extra,
    }
    return Clinic.from_api_response(record)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        appointments_db_path=str(tmp_path / "appointments.db"),
        event_log_path=str(tmp_path / "events.jsonl"),
        directory_api_base="http://directory.test",
        directory_api_key="test-key",
    )


@pytest.fixture
def clinic():
    return make_clinic()


@pytest.fixture
def mock_directory(clinic):
    """Directory knowing one clinic owned by OWNER_ID."""
    clinics = {clinic.id: clinic}

    async def get_clinic(clinic_id):
        return clinics.get(clinic_id)

    async def is_owner(clinic_id, user_id):
        found = clinics.get(clinic_id)
        return found is not None and found.owner_id == user_id

    async def list_owned(user_id):
        return [c.id for c in clinics.values() if c.owner_id == user_id]

    directory = Mock(spec=ClinicDirectoryService)
    directory.clinics = clinics
    directory.get_clinic = AsyncMock(side_effect=get_clinic)
    directory.is_owner = AsyncMock(side_effect=is_owner)
    directory.list_owned_clinic_ids = AsyncMock(side_effect=list_owned)
    return directory


@pytest.fixture
def store(tmp_path):
    return SQLiteAppointmentStore(
        DatabaseConfig(appointments_db_path=str(tmp_path / "appointments.db"))
    )


@pytest.fixture
def events(tmp_path):
    return EventPublisher(tmp_path / "events.jsonl")


@pytest.fixture
def scheduling(store, mock_directory, events):
    return SchedulingService(store, mock_directory, events, slot_step_minutes=30)


@pytest.fixture
def price():
    return Decimal("150")


@pytest.fixture
def clinic_factory():
    return make_clinic
