"""
Tests for event publication.
"""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from clinic_scheduling.services.events import EventPublisher, log_event


def test_log_event_appends_json_lines(tmp_path):
    path = tmp_path / "nested" / "events.jsonl"
    log_event(path, "booking_created", {"clinic_id": "c1"})
    log_event(path, "appointment_status_changed", {"to": "confirmed"})

    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [r["event"] for r in records] == ["booking_created", "appointment_status_changed"]
    assert records[0]["clinic_id"] == "c1"
    assert records[0]["ts"].endswith("Z")


@pytest.mark.asyncio
async def test_subscribers_receive_events(tmp_path):
    publisher = EventPublisher(tmp_path / "events.jsonl")
    sync_cb = Mock()
    async_cb = AsyncMock()
    publisher.subscribe(sync_cb)
    publisher.subscribe(async_cb)

    await publisher.publish("booking_created", {"clinic_id": "c1"})

    sync_cb.assert_called_once_with("booking_created", {"clinic_id": "c1"})
    async_cb.assert_awaited_once_with("booking_created", {"clinic_id": "c1"})


@pytest.mark.asyncio
async def test_failing_subscriber_does_not_stop_others():
    publisher = EventPublisher()
    after = Mock()
    publisher.subscribe(Mock(side_effect=RuntimeError("smtp down")))
    publisher.subscribe(after)

    await publisher.publish("booking_created", {})

    after.assert_called_once()
