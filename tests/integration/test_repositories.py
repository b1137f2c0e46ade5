"""
Integration tests for repository implementations.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync

from core.domain.exceptions import LicenseConflictError
from core.domain.value_objects import (
    ExpirationStart,
    ExpirationType,
    IpLimitPeriod,
    RequestType,
    VerdictCode,
)
from core.security.crypto import derive_lookup_key, encrypt_license_key
from licenses.domain.license import License, LicenseMetadataEntry
from requestlogs.domain.request_log import RequestLogEntry

LICENSE_KEY = "ABCDE-12345-FGHIJ-67890-KLMNO"


def _license(team_id, key=LICENSE_KEY, **kwargs):
    return License.create(
        team_id=team_id,
        license_key_lookup=derive_lookup_key(key, team_id),
        encrypted_license_key=encrypt_license_key(key),
        **kwargs,
    )


def _log_entry(team_id, license_id, ip_address, created_at, code=VerdictCode.VALID):
    return RequestLogEntry(
        request_type=RequestType.HEARTBEAT,
        code=code,
        status_code=200 if code == VerdictCode.VALID else 403,
        method="POST",
        path="/api/v1/license/heartbeat",
        created_at=created_at,
        team_id=team_id,
        license_id=license_id,
        ip_address=ip_address,
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestTeamRepository:
    """Integration tests for TeamRepository."""

    def test_find_active(self, team_repository, db_team, key_pair):
        """Test loading a team with settings and key pair."""
        team = async_to_sync(team_repository.find_active)(db_team.id)

        assert team is not None
        assert team.id == db_team.id
        assert team.key_pair.public_key == key_pair[0]
        assert team.settings.ip_limit_period == IpLimitPeriod.MONTH
        assert team.settings.strict_customers is False

    def test_settings_are_read(self, team_repository, db_team, update_team_settings):
        """Test stored settings reach the entity."""
        update_team_settings(strict_products=True, heartbeat_timeout=15, ip_limit_period="DAY")

        team = async_to_sync(team_repository.find_active)(db_team.id)

        assert team.settings.strict_products is True
        assert team.settings.heartbeat_timeout == 15
        assert team.settings.ip_limit_period == IpLimitPeriod.DAY

    def test_soft_deleted_team(self, team_repository, db_team):
        """Test a soft-deleted team is not found."""
        db_team.deleted_at = datetime.now(timezone.utc)
        db_team.save()

        assert async_to_sync(team_repository.find_active)(db_team.id) is None
        assert async_to_sync(team_repository.exists)(db_team.id) is False

    def test_team_without_key_pair(self, team_repository, db_team):
        """Test a team without key pair is not usable."""
        db_team.key_pair.delete()
        db_team.refresh_from_db()

        assert async_to_sync(team_repository.find_active)(db_team.id) is None

    def test_unknown_team(self, team_repository, db):
        """Test finding a non-existent team."""
        assert async_to_sync(team_repository.find_active)(uuid.uuid4()) is None

    def test_find_customer_ids_scoped_to_team(self, team_repository, db_team, db_customer):
        """Test customer ids of other teams are not returned."""
        other = uuid.uuid4()

        found = async_to_sync(team_repository.find_customer_ids)(
            db_team.id, [db_customer.id, other]
        )

        assert found == {db_customer.id}
        other_team = async_to_sync(team_repository.find_customer_ids)(uuid.uuid4(), [db_customer.id])
        assert other_team == set()


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseRepository:
    """Integration tests for LicenseRepository."""

    def test_create_and_find(self, license_repository, db_team, db_customer, db_product):
        """Test creating a license with bindings and metadata."""
        license = _license(
            db_team.id,
            seats=3,
            customer_ids=frozenset({db_customer.id}),
            product_ids=frozenset({db_product.id}),
            metadata=(LicenseMetadataEntry("plan", "pro"),),
        )

        created = async_to_sync(license_repository.create)(license)

        assert created.id == license.id
        assert created.metadata == (LicenseMetadataEntry("plan", "pro"),)
        found = async_to_sync(license_repository.find_by_lookup)(
            db_team.id, license.license_key_lookup
        )
        assert found.id == license.id
        assert found.seats == 3
        assert found.customer_ids == frozenset({db_customer.id})
        assert found.product_ids == frozenset({db_product.id})

    def test_duplicate_lookup_conflicts(self, license_repository, db_team):
        """Test a second license with the same key in a team conflicts."""
        async_to_sync(license_repository.create)(_license(db_team.id))

        with pytest.raises(LicenseConflictError):
            async_to_sync(license_repository.create)(_license(db_team.id))

    def test_lookup_is_team_scoped(self, license_repository, db_team):
        """Test a lookup of one team never finds another team's license."""
        license = _license(db_team.id)
        async_to_sync(license_repository.create)(license)

        assert async_to_sync(license_repository.lookup_exists)(
            db_team.id, license.license_key_lookup
        )
        assert (
            async_to_sync(license_repository.find_by_lookup)(
                uuid.uuid4(), license.license_key_lookup
            )
            is None
        )

    def test_activate_duration_once(self, license_repository, db_team):
        """Test the first activation wins and later ones keep its date."""
        license = _license(
            db_team.id,
            expiration_type=ExpirationType.DURATION,
            expiration_days=30,
            expiration_start=ExpirationStart.ACTIVATION,
        )
        async_to_sync(license_repository.create)(license)
        first = datetime.now(timezone.utc) + timedelta(days=30)
        second = first + timedelta(hours=1)

        stored_first = async_to_sync(license_repository.activate_duration)(license.id, first)
        stored_second = async_to_sync(license_repository.activate_duration)(license.id, second)

        assert stored_first == first
        assert stored_second == first
        found = async_to_sync(license_repository.find_by_id)(license.id)
        assert found.expiration_date == first

    def test_touch_last_active(self, license_repository, db_team):
        """Test recording the last activity."""
        license = _license(db_team.id)
        async_to_sync(license_repository.create)(license)
        now = datetime.now(timezone.utc)

        async_to_sync(license_repository.touch_last_active)(license.id, now)

        assert async_to_sync(license_repository.find_by_id)(license.id).last_active_at == now


@pytest.mark.django_db
@pytest.mark.integration
class TestHeartbeatRepository:
    """Integration tests for HeartbeatRepository."""

    def test_upsert_is_idempotent(self, heartbeat_repository, issue_license):
        """Test repeated check-ins keep one row per client."""
        issued = issue_license(seats=2)
        first = datetime.now(timezone.utc)
        later = first + timedelta(seconds=30)

        async_to_sync(heartbeat_repository.upsert)(issued.id, "device-x-0001", "10.0.0.1", first)
        async_to_sync(heartbeat_repository.upsert)(issued.id, "device-x-0001", "10.0.0.2", later)

        heartbeats = async_to_sync(heartbeat_repository.find_by_license)(issued.id)
        assert len(heartbeats) == 1
        assert heartbeats[0].last_beat_at == later
        assert heartbeats[0].ip_address == "10.0.0.2"

    def test_one_row_per_client(self, heartbeat_repository, issue_license):
        """Test different clients get their own rows."""
        issued = issue_license()
        now = datetime.now(timezone.utc)

        async_to_sync(heartbeat_repository.upsert)(issued.id, "device-x-0001", None, now)
        async_to_sync(heartbeat_repository.upsert)(issued.id, "device-y-0001", None, now)

        heartbeats = async_to_sync(heartbeat_repository.find_by_license)(issued.id)
        assert {hb.client_identifier for hb in heartbeats} == {"device-x-0001", "device-y-0001"}
        assert async_to_sync(heartbeat_repository.find)(issued.id, "device-z-0001") is None


@pytest.mark.django_db
@pytest.mark.integration
class TestRequestLogRepository:
    """Integration tests for RequestLogRepository."""

    def test_distinct_ips_since(self, request_log_repository, issue_license, db_team):
        """Test only successful requests inside the window count."""
        issued = issue_license(ip_limit=2)
        now = datetime.now(timezone.utc)
        append = async_to_sync(request_log_repository.append)

        append(_log_entry(db_team.id, issued.id, "10.0.0.1", now - timedelta(hours=1)))
        append(_log_entry(db_team.id, issued.id, "10.0.0.1", now - timedelta(minutes=5)))
        append(_log_entry(db_team.id, issued.id, "10.0.0.2", now - timedelta(days=40)))
        append(
            _log_entry(
                db_team.id,
                issued.id,
                "10.0.0.3",
                now - timedelta(minutes=1),
                code=VerdictCode.IP_LIMIT_REACHED,
            )
        )

        ips = async_to_sync(request_log_repository.distinct_ips_since)(
            issued.id, now - timedelta(days=30)
        )

        assert ips == {"10.0.0.1"}

    def test_append_without_team(self, request_log_repository, db):
        """Test requests for unknown teams are still logged."""
        from requestlogs.infrastructure.models import RequestLog

        entry = replace(
            _log_entry(None, None, "10.0.0.9", datetime.now(timezone.utc)),
            code=VerdictCode.TEAM_NOT_FOUND,
            status_code=404,
        )

        async_to_sync(request_log_repository.append)(entry)

        stored = RequestLog.objects.get(id=entry.id)  # pylint: disable=no-member
        assert stored.team_id is None
        assert stored.code == "TEAM_NOT_FOUND"
