"""
Unit tests for the SeatTracker domain service.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from heartbeats.domain.heartbeat import Heartbeat
from heartbeats.domain.services import SeatTracker

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
LICENSE_ID = uuid.uuid4()


def _beat(client, minutes_ago):
    return Heartbeat.create(LICENSE_ID, client, NOW - timedelta(minutes=minutes_ago))


class TestSeatTracker:
    """Tests for SeatTracker."""

    def test_active_within_timeout(self):
        """Test the timeout boundary is inclusive."""
        assert SeatTracker.is_active(_beat("device-x", 60), 60, NOW) is True
        assert SeatTracker.is_active(_beat("device-x", 61), 60, NOW) is False

    def test_active_seats_filters_without_mutation(self):
        """Test stale heartbeats are excluded, not removed."""
        heartbeats = [_beat("device-a", 1), _beat("device-b", 120), _beat("device-c", 30)]
        active = SeatTracker.active_seats(heartbeats, 60, NOW)

        assert [hb.client_identifier for hb in active] == ["device-a", "device-c"]
        assert len(heartbeats) == 3

    def test_renewal_of_active_seat(self):
        """Test a client holding a seat may renew at the limit."""
        assert SeatTracker.can_take_seat([_beat("device-x", 1)], 1, "device-x", 60, NOW)

    def test_new_client_denied_at_limit(self):
        """Test a new client is denied when every seat is taken."""
        assert not SeatTracker.can_take_seat([_beat("device-x", 1)], 1, "device-y", 60, NOW)

    def test_new_client_admitted_after_timeout(self):
        """Test a stale seat is reclaimed."""
        assert SeatTracker.can_take_seat([_beat("device-x", 61)], 1, "device-y", 60, NOW)

    def test_anonymous_client_needs_free_seat(self):
        """Test a missing identifier never counts as an existing seat."""
        assert not SeatTracker.can_take_seat([_beat("device-x", 1)], 1, None, 60, NOW)
        assert SeatTracker.can_take_seat([], 1, None, 60, NOW)


class TestHeartbeatEntity:
    """Tests for Heartbeat entity."""

    def test_beat_refreshes_time(self):
        """Test a check-in refreshes the time and IP."""
        heartbeat = _beat("device-x", 30).beat(NOW, ip_address="10.0.0.1")
        assert heartbeat.last_beat_at == NOW
        assert heartbeat.ip_address == "10.0.0.1"

    def test_client_identifier_required(self):
        """Test an empty identifier is rejected."""
        with pytest.raises(ValueError):
            Heartbeat.create(LICENSE_ID, "", NOW)
