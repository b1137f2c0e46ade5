"""
License domain entity.

This is the core domain entity representing an issued license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import FrozenSet, Optional, Tuple

from core.domain.value_objects import ExpirationStart, ExpirationType


@dataclass(frozen=True)
class LicenseMetadataEntry:
    """Key/value pair attached to a license."""

    key: str
    value: str
    locked: bool = False

    def __post_init__(self):
        """Validate metadata entry."""
        if not self.key or len(self.key) > 255:
            raise ValueError("Metadata key must be between 1 and 255 characters")
        if len(self.value) > 255:
            raise ValueError("Metadata value must be at most 255 characters")


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Identity within a team is ``license_key_lookup``. The encrypted key is
    carried for completeness; validation never needs to decrypt it.
    """

    id: uuid.UUID
    team_id: uuid.UUID
    license_key_lookup: str
    encrypted_license_key: str = field(repr=False)
    suspended: bool
    expiration_type: ExpirationType
    expiration_date: Optional[datetime]
    expiration_days: Optional[int]
    expiration_start: ExpirationStart
    ip_limit: Optional[int]
    seats: Optional[int]
    customer_ids: FrozenSet[uuid.UUID] = frozenset()
    product_ids: FrozenSet[uuid.UUID] = frozenset()
    metadata: Tuple[LicenseMetadataEntry, ...] = ()
    last_active_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key_lookup:
            raise ValueError("License key lookup is required")
        if self.seats is not None and self.seats < 1:
            raise ValueError("Seats must be at least 1")
        if self.ip_limit is not None and self.ip_limit < 1:
            raise ValueError("IP limit must be at least 1")
        if self.expiration_days is not None and self.expiration_days < 1:
            raise ValueError("Expiration days must be at least 1")

    @classmethod
    def create(
        cls,
        team_id: uuid.UUID,
        license_key_lookup: str,
        encrypted_license_key: str,
        expiration_type: ExpirationType = ExpirationType.NONE,
        expiration_date: Optional[datetime] = None,
        expiration_days: Optional[int] = None,
        expiration_start: Optional[ExpirationStart] = None,
        ip_limit: Optional[int] = None,
        seats: Optional[int] = None,
        suspended: bool = False,
        customer_ids: FrozenSet[uuid.UUID] = frozenset(),
        product_ids: FrozenSet[uuid.UUID] = frozenset(),
        metadata: Tuple[LicenseMetadataEntry, ...] = (),
        now: Optional[datetime] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new License entity, enforcing the issuance rules.

        - ``DATE`` needs an expiration date in the future and no days/start.
        - ``DURATION`` needs days and a start; starting at ``CREATION``
          fixes the expiration date now, ``ACTIVATION`` leaves it unset.
        - ``NONE`` accepts neither date, days nor start.

        Args:
            team_id: Owning team
            license_key_lookup: HMAC lookup of the plaintext key
            encrypted_license_key: Ciphertext of the plaintext key
            expiration_type: How the license expires
            expiration_date: Expiration for DATE licenses
            expiration_days: Length of DURATION licenses
            expiration_start: When the DURATION clock starts
            ip_limit: Maximum distinct IPs per period
            seats: Maximum concurrently active clients
            suspended: Issue the license suspended
            customer_ids: Bound customers
            product_ids: Bound products
            metadata: Metadata entries
            now: Issuance time (defaults to now)
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance

        Raises:
            ValueError: If the expiration attributes are inconsistent
        """
        now = now or datetime.now(timezone.utc)

        if expiration_type == ExpirationType.DATE:
            if expiration_date is None:
                raise ValueError("Expiration date is required for DATE licenses")
            if expiration_date <= now:
                raise ValueError("Expiration date must be in the future")
            if expiration_days is not None or expiration_start is not None:
                raise ValueError("DATE licenses do not take expiration days or start")
            start = ExpirationStart.CREATION
        elif expiration_type == ExpirationType.DURATION:
            if expiration_days is None:
                raise ValueError("Expiration days are required for DURATION licenses")
            if expiration_start is None:
                raise ValueError("Expiration start is required for DURATION licenses")
            if expiration_date is not None:
                raise ValueError("DURATION licenses do not take an expiration date")
            start = expiration_start
            if start == ExpirationStart.CREATION:
                expiration_date = now + timedelta(days=expiration_days)
        else:
            if expiration_date is not None or expiration_days is not None or expiration_start is not None:
                raise ValueError("Licenses without expiration take no expiration attributes")
            start = ExpirationStart.CREATION

        return cls(
            id=license_id or uuid.uuid4(),
            team_id=team_id,
            license_key_lookup=license_key_lookup,
            encrypted_license_key=encrypted_license_key,
            suspended=suspended,
            expiration_type=expiration_type,
            expiration_date=expiration_date,
            expiration_days=expiration_days,
            expiration_start=start,
            ip_limit=ip_limit,
            seats=seats,
            customer_ids=frozenset(customer_ids),
            product_ids=frozenset(product_ids),
            metadata=tuple(metadata),
            created_at=now,
        )

    @property
    def awaiting_activation(self) -> bool:
        """True for a DURATION license whose clock has not started yet."""
        return self.expiration_type == ExpirationType.DURATION and self.expiration_date is None

    def activation_expiration(self, now: datetime) -> Optional[datetime]:
        """
        Expiration date fixed by a first activation at ``now``.

        Returns None when the license is not awaiting activation.
        """
        if not self.awaiting_activation or self.expiration_days is None:
            return None
        return now + timedelta(days=self.expiration_days)

    def is_expired(self, now: datetime) -> bool:
        """
        Check whether the license is expired at ``now``.

        A DATE license without a date and a DURATION license without days
        count as expired. A DURATION license awaiting activation is not.
        """
        if self.expiration_type == ExpirationType.NONE:
            return False
        if self.expiration_type == ExpirationType.DURATION and self.expiration_date is None:
            return self.expiration_days is None
        if self.expiration_date is None:
            return True
        return now > self.expiration_date

    def with_expiration_date(self, expiration_date: datetime) -> "License":
        """
        Create a new License instance with a fixed expiration date.

        Args:
            expiration_date: Expiration date to record

        Returns:
            New License instance
        """
        return replace(self, expiration_date=expiration_date)
