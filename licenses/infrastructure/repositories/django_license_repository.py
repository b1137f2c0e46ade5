"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import LicenseConflictError
from core.domain.value_objects import ExpirationStart, ExpirationType
from licenses.domain.license import License, LicenseMetadataEntry
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import LicenseMetadata as LicenseMetadataModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel, with_metadata: bool = False) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model with customers and products prefetched
            with_metadata: Also load metadata entries

        Returns:
            License domain entity
        """
        metadata = ()
        if with_metadata:
            metadata = tuple(
                LicenseMetadataEntry(key=m.key, value=m.value, locked=m.locked)
                for m in model.metadata.all()
            )
        return License(
            id=model.id,
            team_id=model.team_id,
            license_key_lookup=model.license_key_lookup,
            encrypted_license_key=model.license_key,
            suspended=model.suspended,
            expiration_type=ExpirationType(model.expiration_type),
            expiration_date=model.expiration_date,
            expiration_days=model.expiration_days,
            expiration_start=ExpirationStart(model.expiration_start),
            ip_limit=model.ip_limit,
            seats=model.seats,
            customer_ids=frozenset(c.id for c in model.customers.all()),
            product_ids=frozenset(p.id for p in model.products.all()),
            metadata=metadata,
            last_active_at=model.last_active_at,
            created_at=model.created_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to an unsaved Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        return LicenseModel(
            id=license.id,
            team_id=license.team_id,
            license_key=license.encrypted_license_key,
            license_key_lookup=license.license_key_lookup,
            suspended=license.suspended,
            expiration_type=license.expiration_type.value,
            expiration_date=license.expiration_date,
            expiration_days=license.expiration_days,
            expiration_start=license.expiration_start.value,
            ip_limit=license.ip_limit,
            seats=license.seats,
        )

    def _base_queryset(self):
        # pylint: disable=no-member
        return LicenseModel.objects.prefetch_related("customers", "products")

    @sync_to_async
    def create(self, license: License) -> License:
        """
        Persist a new license with its bindings and metadata.

        Args:
            license: License entity to store

        Returns:
            Stored license entity

        Raises:
            LicenseConflictError: If the lookup hash is already used in the team
        """
        model = self._to_model(license)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
                model.customers.set(license.customer_ids)
                model.products.set(license.product_ids)
                LicenseMetadataModel.objects.bulk_create(  # pylint: disable=no-member
                    [
                        LicenseMetadataModel(
                            license=model, key=entry.key, value=entry.value, locked=entry.locked
                        )
                        for entry in license.metadata
                    ]
                )
        except IntegrityError as e:
            raise LicenseConflictError() from e

        stored = self._base_queryset().prefetch_related("metadata").get(id=model.id)
        return self._to_domain(stored, with_metadata=True)

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        model = self._base_queryset().prefetch_related("metadata").filter(id=license_id).first()
        return self._to_domain(model, with_metadata=True) if model else None

    @sync_to_async
    def find_by_lookup(self, team_id: uuid.UUID, lookup: str) -> Optional[License]:
        """
        Find a license of a team by lookup hash.

        Args:
            team_id: Team UUID
            lookup: HMAC lookup hash of the plaintext key

        Returns:
            License entity or None if not found
        """
        model = self._base_queryset().filter(team_id=team_id, license_key_lookup=lookup).first()
        return self._to_domain(model) if model else None

    async def lookup_exists(self, team_id: uuid.UUID, lookup: str) -> bool:
        """
        Check if a team already has a license with this lookup hash.

        Args:
            team_id: Team UUID
            lookup: HMAC lookup hash

        Returns:
            True if a license exists
        """
        # pylint: disable=no-member
        qs = LicenseModel.objects.filter(team_id=team_id, license_key_lookup=lookup)
        return await sync_to_async(qs.exists)()

    @sync_to_async
    def activate_duration(self, license_id: uuid.UUID, expiration_date: datetime) -> datetime:
        """
        Fix the expiration date of a DURATION license on first activation.

        Args:
            license_id: License UUID
            expiration_date: Expiration date computed by this activation

        Returns:
            The expiration date now stored
        """
        # pylint: disable=no-member
        updated = LicenseModel.objects.filter(
            id=license_id,
            expiration_type=ExpirationType.DURATION.value,
            expiration_date__isnull=True,
        ).update(expiration_date=expiration_date)
        if updated:
            return expiration_date
        return (
            LicenseModel.objects.filter(id=license_id)
            .values_list("expiration_date", flat=True)
            .get()
        )

    @sync_to_async
    def touch_last_active(self, license_id: uuid.UUID, now: datetime) -> None:
        """
        Record the time of the latest request on a license.

        Args:
            license_id: License UUID
            now: Request time
        """
        # pylint: disable=no-member
        LicenseModel.objects.filter(id=license_id).update(last_active_at=now)
