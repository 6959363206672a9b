"""
Tests for core models and enums.
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from clinic_scheduling.core.enums import AppointmentStatus, DayPeriod, Weekday
from clinic_scheduling.core.models import (
    Appointment,
    AppointmentFilters,
    AvailabilityWindow,
    BookingRequest,
    Clinic,
)


class TestWeekday:
    """Test Weekday parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("monday", Weekday.MONDAY),
            ("Mon", Weekday.MONDAY),
            ("segunda", Weekday.MONDAY),
            ("Segunda-feira", Weekday.MONDAY),
            ("terça", Weekday.TUESDAY),
            ("terca", Weekday.TUESDAY),
            ("sábado", Weekday.SATURDAY),
            ("domingo", Weekday.SUNDAY),
        ],
    )
    def test_from_string(self, raw, expected):
        assert Weekday.from_string(raw) == expected

    def test_from_string_invalid(self):
        with pytest.raises(ValueError):
            Weekday.from_string("someday")

    def test_from_date(self):
        assert Weekday.from_date(date(2025, 1, 13)) == Weekday.MONDAY
        assert Weekday.from_date(date(2025, 1, 19)) == Weekday.SUNDAY


class TestDayPeriod:
    """Test time-of-day buckets."""

    def test_bounds(self):
        assert DayPeriod.MORNING.contains(time(6, 0))
        assert not DayPeriod.MORNING.contains(time(5, 59))
        assert not DayPeriod.MORNING.contains(time(12, 0))
        assert DayPeriod.AFTERNOON.contains(time(12, 0))
        assert not DayPeriod.AFTERNOON.contains(time(18, 0))
        assert DayPeriod.EVENING.contains(time(18, 0))
        assert DayPeriod.EVENING.contains(time(23, 59, 30))
        assert DayPeriod.ALL.contains(time(3, 0))


class TestAppointmentStatus:
    def test_terminal(self):
        assert AppointmentStatus.COMPLETED.is_terminal
        assert AppointmentStatus.CANCELLED.is_terminal
        assert not AppointmentStatus.PENDING.is_terminal

    def test_cancelled_frees_slot(self):
        assert not AppointmentStatus.CANCELLED.occupies_slot
        assert AppointmentStatus.PENDING.occupies_slot


class TestAvailabilityWindow:
    def test_start_must_precede_end(self):
        with pytest.raises(ValidationError):
            AvailabilityWindow(weekday="monday", start="12:00", end="08:00")

    def test_parse_raw_entry_incomplete(self):
        assert AvailabilityWindow.parse_raw_entry({"day": "segunda", "startTime": "", "endTime": "12:00"}) is None
        assert AvailabilityWindow.parse_raw_entry({"day": "", "startTime": "08:00", "endTime": "12:00"}) is None
        assert AvailabilityWindow.parse_raw_entry({"day": "segunda", "startTime": "13:00", "endTime": "12:00"}) is None

    def test_parse_raw_entry_with_seconds(self):
        window = AvailabilityWindow.parse_raw_entry(
            {"id": "x", "day": "quinta", "startTime": "08:00:00", "endTime": "10:30:00"}
        )
        assert window.weekday == Weekday.THURSDAY
        assert window.start == time(8, 0)
        assert window.end == time(10, 30)


class TestClinic:
    def test_from_api_response(self):
        clinic = Clinic.from_api_response(
            {
                "id": 7,
                "user_id": "owner-1",
                "price": "120.50",
                "availability": [
                    {"day": "segunda", "startTime": "08:00", "endTime": "12:00"},
                    {"day": "", "startTime": "", "endTime": ""},
                ],
                "hasappointment": None,
            }
        )
        assert clinic.id == "7"
        assert clinic.price_per_slot == Decimal("120.50")
        assert len(clinic.availability) == 1
        assert clinic.has_appointment_flag is True
        assert clinic.raw_availability[1] == {"day": "", "startTime": "", "endTime": ""}

    def test_booking_flag_false(self):
        clinic = Clinic.from_api_response({"id": "c", "user_id": "o", "hasappointment": "false"})
        assert clinic.has_appointment_flag is False
        assert clinic.availability == []


class TestAppointment:
    def test_record_format(self):
        ts = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)
        appointment = Appointment(
            id="a1",
            clinic_id="c1",
            user_id="u1",
            date="2025-01-13",
            time="09:00:00",
            value="150",
            status="confirmed",
            created_at=ts,
            updated_at=ts,
        )
        record = appointment.to_record()
        assert record["date"] == "2025-01-13"
        assert record["time"] == "09:00"
        assert record["value"] == "150"
        assert record["status"] == "confirmed"
        assert record["created_at"] == "2025-01-10T12:00:00Z"
        assert Appointment.from_record(record).to_record() == record

    def test_slot_key(self):
        ts = datetime(2025, 1, 10, tzinfo=timezone.utc)
        appointment = Appointment(
            id="a1", clinic_id="c1", user_id="u1", date="2025-01-13", time="09:00",
            value=1, created_at=ts, updated_at=ts,
        )
        assert appointment.slot_key == ("c1", date(2025, 1, 13), time(9, 0))
        assert appointment.weekday == Weekday.MONDAY


class TestBookingRequest:
    def test_times_deduplicated_in_order(self):
        request = BookingRequest(
            clinic_id="c1",
            user_id="u1",
            date="2025-01-13",
            times=["10:00", "09:00", "10:00:00"],
            value_per_slot="100",
        )
        assert request.times == [time(10, 0), time(9, 0)]
        assert request.total_value == Decimal("200")

    def test_negative_value_rejected(self):
        with pytest.raises(ValidationError):
            BookingRequest(clinic_id="c", user_id="u", date="2025-01-13", times=["09:00"], value_per_slot=-1)

    def test_bad_time_rejected(self):
        with pytest.raises(ValidationError):
            BookingRequest(clinic_id="c", user_id="u", date="2025-01-13", times=["9h"], value_per_slot=1)


class TestAppointmentFilters:
    def test_all_is_no_filter(self):
        filters = AppointmentFilters(period="all", weekday="all", status="all", clinic_id="")
        assert filters.period is None
        assert filters.weekday is None
        assert filters.status is None
        assert filters.clinic_id is None

    def test_parsing(self):
        filters = AppointmentFilters(
            date_from="2025-01-01", date_to="2025-01-31", period="afternoon",
            weekday="wednesday", status="pending",
        )
        assert filters.date_from == date(2025, 1, 1)
        assert filters.period == DayPeriod.AFTERNOON
        assert filters.weekday == Weekday.WEDNESDAY
        assert filters.status == AppointmentStatus.PENDING

    def test_inverted_range_kept_as_given(self):
        filters = AppointmentFilters(date_from="2025-02-01", date_to="2025-01-01")
        assert filters.date_from == date(2025, 2, 1)
        assert filters.date_to == date(2025, 1, 1)

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            AppointmentFilters(status="archived")

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            AppointmentFilters(day_of_week="monday")
