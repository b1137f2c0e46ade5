"""
Unit tests for the in-memory event bus and audit logging.
"""

import logging
import uuid

import pytest

from core.domain.events import EventHandler
from core.infrastructure.event_handlers import AuditLogEventHandler, register_event_handlers
from core.infrastructure.events import InMemoryEventBus, event_bus
from heartbeats.domain.events import HeartbeatRecorded
from licenses.domain.events import LicenseDurationStarted, LicenseIssued


class RecordingHandler(EventHandler):
    """Handler remembering every event it receives."""

    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class FailingHandler(EventHandler):
    """Handler that always raises."""

    async def handle(self, event):
        raise RuntimeError("boom")


def _issued():
    return LicenseIssued.create(license_id=uuid.uuid4(), team_id=uuid.uuid4(), expiration_type="NONE")


class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    @pytest.mark.asyncio
    async def test_publish_to_subscriber(self):
        """Test subscribed handlers receive events of their type only."""
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(LicenseIssued, handler)

        event = _issued()
        await bus.publish(event)
        await bus.publish(HeartbeatRecorded.create(license_id=uuid.uuid4(), client_identifier="device-0001"))

        assert handler.events == [event]

    @pytest.mark.asyncio
    async def test_handler_failure_does_not_propagate(self):
        """Test a failing handler does not stop the others."""
        bus = InMemoryEventBus()
        recorder = RecordingHandler()
        bus.subscribe(LicenseIssued, FailingHandler())
        bus.subscribe(LicenseIssued, recorder)

        await bus.publish(_issued())

        assert len(recorder.events) == 1

    @pytest.mark.asyncio
    async def test_publish_without_handlers(self):
        """Test publishing with no subscribers is a no-op."""
        await InMemoryEventBus().publish(_issued())

    def test_subscribe_is_idempotent_per_handler_type(self):
        """Test subscribing the same handler type twice keeps one."""
        bus = InMemoryEventBus()
        bus.subscribe(LicenseIssued, RecordingHandler())
        bus.subscribe(LicenseIssued, RecordingHandler())
        assert len(bus.handlers_for(LicenseIssued)) == 1


class TestAuditLog:
    """Tests for the audit log handler."""

    @pytest.mark.asyncio
    async def test_logs_event(self, caplog):
        """Test events are written to the log with their payload."""
        event = _issued()
        with caplog.at_level(logging.INFO, logger="core.infrastructure.event_handlers"):
            await AuditLogEventHandler().handle(event)

        record = caplog.records[-1]
        assert "LicenseIssued" in record.getMessage()
        assert record.license_id == str(event.license_id)

    def test_register_event_handlers(self):
        """Test the audit handler is subscribed to every domain event."""
        register_event_handlers()
        for event_type in (LicenseIssued, LicenseDurationStarted, HeartbeatRecorded):
            assert any(
                isinstance(handler, AuditLogEventHandler)
                for handler in event_bus.handlers_for(event_type)
            )


def test_event_to_dict():
    """Test serialization merges the envelope and payload."""
    event = _issued()
    data = event.to_dict()
    assert data["event_type"] == "LicenseIssued"
    assert data["aggregate_id"] == str(event.license_id)
    assert data["expiration_type"] == "NONE"
