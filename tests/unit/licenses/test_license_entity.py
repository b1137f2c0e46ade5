"""
Unit tests for License domain entity.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.value_objects import LICENSE_KEY_PATTERN, ExpirationStart, ExpirationType
from licenses.domain.license import License, LicenseMetadataEntry
from licenses.domain.license_key import generate_license_key

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _create(**kwargs):
    kwargs.setdefault("team_id", uuid.uuid4())
    kwargs.setdefault("license_key_lookup", "lookup")
    kwargs.setdefault("encrypted_license_key", "iv:ct:tag")
    kwargs.setdefault("now", NOW)
    return License.create(**kwargs)


class TestLicenseCreate:
    """Tests for License.create issuance rules."""

    def test_create_without_expiration(self):
        """Test creating a license that never expires."""
        license = _create(seats=3, ip_limit=2)

        assert license.expiration_type == ExpirationType.NONE
        assert license.expiration_date is None
        assert license.seats == 3
        assert license.ip_limit == 2
        assert license.suspended is False
        assert license.created_at == NOW

    def test_create_date_license(self):
        """Test a DATE license keeps its date."""
        expires = NOW + timedelta(days=10)
        license = _create(expiration_type=ExpirationType.DATE, expiration_date=expires)
        assert license.expiration_date == expires

    def test_date_license_requires_future_date(self):
        """Test a DATE license with a past date is rejected."""
        with pytest.raises(ValueError, match="future"):
            _create(expiration_type=ExpirationType.DATE, expiration_date=NOW - timedelta(days=1))

    def test_date_license_requires_date(self):
        """Test a DATE license needs a date."""
        with pytest.raises(ValueError, match="required"):
            _create(expiration_type=ExpirationType.DATE)

    def test_duration_from_creation_fixes_date(self):
        """Test DURATION + CREATION fixes the date at issuance."""
        license = _create(
            expiration_type=ExpirationType.DURATION,
            expiration_days=30,
            expiration_start=ExpirationStart.CREATION,
        )
        assert license.expiration_date == NOW + timedelta(days=30)
        assert license.awaiting_activation is False

    def test_duration_from_activation_leaves_date_unset(self):
        """Test DURATION + ACTIVATION waits for the first validation."""
        license = _create(
            expiration_type=ExpirationType.DURATION,
            expiration_days=30,
            expiration_start=ExpirationStart.ACTIVATION,
        )
        assert license.expiration_date is None
        assert license.awaiting_activation is True

    def test_duration_requires_days_and_start(self):
        """Test a DURATION license needs days and a start."""
        with pytest.raises(ValueError):
            _create(
                expiration_type=ExpirationType.DURATION,
                expiration_start=ExpirationStart.CREATION,
            )
        with pytest.raises(ValueError):
            _create(expiration_type=ExpirationType.DURATION, expiration_days=5)

    def test_none_rejects_expiration_attributes(self):
        """Test a license without expiration takes no expiration attributes."""
        with pytest.raises(ValueError):
            _create(expiration_days=5)

    @pytest.mark.parametrize("field", ["seats", "ip_limit"])
    def test_limits_must_be_positive(self, field):
        """Test seats and IP limit are at least 1."""
        with pytest.raises(ValueError):
            _create(**{field: 0})

    def test_metadata(self):
        """Test metadata entries are kept."""
        license = _create(metadata=(LicenseMetadataEntry(key="plan", value="pro", locked=True),))
        assert license.metadata[0].key == "plan"
        assert license.metadata[0].locked is True

    def test_metadata_key_required(self):
        """Test empty metadata keys are rejected."""
        with pytest.raises(ValueError):
            LicenseMetadataEntry(key="", value="x")


class TestLicenseExpiration:
    """Tests for expiration checks."""

    def test_none_never_expires(self):
        """Test a license without expiration never expires."""
        assert _create().is_expired(NOW + timedelta(days=10_000)) is False

    def test_date_boundary(self):
        """Test a DATE license expires strictly after its date."""
        expires = NOW + timedelta(days=1)
        license = _create(expiration_type=ExpirationType.DATE, expiration_date=expires)
        assert license.is_expired(expires) is False
        assert license.is_expired(expires + timedelta(seconds=1)) is True

    def test_awaiting_activation_is_not_expired(self):
        """Test a DURATION license before activation is not expired."""
        license = _create(
            expiration_type=ExpirationType.DURATION,
            expiration_days=7,
            expiration_start=ExpirationStart.ACTIVATION,
        )
        assert license.is_expired(NOW + timedelta(days=365)) is False
        assert license.activation_expiration(NOW) == NOW + timedelta(days=7)

    def test_activated_license_expires(self):
        """Test an activated DURATION license expires after its days."""
        license = _create(
            expiration_type=ExpirationType.DURATION,
            expiration_days=7,
            expiration_start=ExpirationStart.ACTIVATION,
        ).with_expiration_date(NOW + timedelta(days=7))

        assert license.awaiting_activation is False
        assert license.activation_expiration(NOW) is None
        assert license.is_expired(NOW + timedelta(days=8)) is True

    def test_date_license_without_date_counts_as_expired(self):
        """Test inconsistent stored data fails closed."""
        license = License(
            id=uuid.uuid4(),
            team_id=uuid.uuid4(),
            license_key_lookup="lookup",
            encrypted_license_key="iv:ct:tag",
            suspended=False,
            expiration_type=ExpirationType.DATE,
            expiration_date=None,
            expiration_days=None,
            expiration_start=ExpirationStart.CREATION,
            ip_limit=None,
            seats=None,
        )
        assert license.is_expired(NOW) is True


class TestLicenseKeyGeneration:
    """Tests for generated license keys."""

    def test_format(self):
        """Test generated keys match the key format."""
        for _ in range(20):
            assert LICENSE_KEY_PATTERN.match(generate_license_key())

    def test_random(self):
        """Test generated keys differ."""
        assert len({generate_license_key() for _ in range(50)}) == 50
