"""
IssueLicenseHandler.

Handles the issue license command.
"""

import logging

from core.domain.exceptions import (
    CustomerNotFoundError,
    InvalidLicenseDataError,
    LicenseConflictError,
    LicenseKeyGenerationError,
    ProductNotFoundError,
    TeamNotFoundError,
)
from core.domain.value_objects import PlaintextLicenseKey
from core.infrastructure.events import event_bus
from core.metrics import licenses_issued_total
from core.security.crypto import derive_lookup_key, encrypt_license_key
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.dto.license_dto import IssuedLicenseDTO, LicenseMetadataDTO
from licenses.domain.events import LicenseIssued
from licenses.domain.license import License
from licenses.domain.license_key import MAX_GENERATION_ATTEMPTS, generate_license_key
from licenses.ports.license_repository import LicenseRepository
from teams.ports.team_repository import TeamRepository

logger = logging.getLogger(__name__)


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(
        self,
        team_repository: TeamRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.team_repository = team_repository
        self.license_repository = license_repository

    async def handle(self, command: IssueLicenseCommand) -> IssuedLicenseDTO:
        """
        Handle issue license command.

        Args:
            command: IssueLicenseCommand

        Returns:
            IssuedLicenseDTO carrying the plaintext key

        Raises:
            TeamNotFoundError: If team not found
            CustomerNotFoundError: If a customer id does not belong to the team
            ProductNotFoundError: If a product id does not belong to the team
            InvalidLicenseDataError: If the license attributes are inconsistent
            LicenseConflictError: If the team already has this license key
            LicenseKeyGenerationError: If no free key could be generated
        """
        if not await self.team_repository.exists(command.team_id):
            raise TeamNotFoundError()

        customer_ids = frozenset(command.customer_ids)
        if customer_ids:
            found = await self.team_repository.find_customer_ids(command.team_id, customer_ids)
            if found != customer_ids:
                raise CustomerNotFoundError()

        product_ids = frozenset(command.product_ids)
        if product_ids:
            found = await self.team_repository.find_product_ids(command.team_id, product_ids)
            if found != product_ids:
                raise ProductNotFoundError()

        plaintext_key, lookup = await self._resolve_key(command)

        try:
            license = License.create(
                team_id=command.team_id,
                license_key_lookup=lookup,
                encrypted_license_key=encrypt_license_key(plaintext_key),
                expiration_type=command.expiration_type,
                expiration_date=command.expiration_date,
                expiration_days=command.expiration_days,
                expiration_start=command.expiration_start,
                ip_limit=command.ip_limit,
                seats=command.seats,
                suspended=command.suspended,
                customer_ids=customer_ids,
                product_ids=product_ids,
                metadata=tuple(command.metadata),
            )
        except ValueError as e:
            raise InvalidLicenseDataError(str(e)) from e

        saved = await self.license_repository.create(license)

        await event_bus.publish(
            LicenseIssued.create(
                license_id=saved.id,
                team_id=saved.team_id,
                expiration_type=saved.expiration_type.value,
            )
        )
        licenses_issued_total.labels(team_id=str(saved.team_id)).inc()
        logger.info(
            "License issued",
            extra={"license_id": str(saved.id), "team_id": str(saved.team_id)},
        )

        return IssuedLicenseDTO(
            id=saved.id,
            team_id=saved.team_id,
            license_key=plaintext_key,
            suspended=saved.suspended,
            expiration_type=saved.expiration_type.value,
            expiration_date=saved.expiration_date,
            expiration_days=saved.expiration_days,
            expiration_start=saved.expiration_start.value,
            ip_limit=saved.ip_limit,
            seats=saved.seats,
            customer_ids=sorted(saved.customer_ids, key=str),
            product_ids=sorted(saved.product_ids, key=str),
            metadata=[
                LicenseMetadataDTO(key=m.key, value=m.value, locked=m.locked)
                for m in saved.metadata
            ],
            created_at=saved.created_at,
        )

    async def _resolve_key(self, command: IssueLicenseCommand):
        """Return the plaintext key and its lookup hash, generating a key if none was given."""
        if command.license_key:
            try:
                plaintext_key = str(PlaintextLicenseKey(command.license_key))
            except ValueError as e:
                raise InvalidLicenseDataError(str(e)) from e
            lookup = derive_lookup_key(plaintext_key, command.team_id)
            if await self.license_repository.lookup_exists(command.team_id, lookup):
                raise LicenseConflictError()
            return plaintext_key, lookup

        for _ in range(MAX_GENERATION_ATTEMPTS):
            plaintext_key = generate_license_key()
            lookup = derive_lookup_key(plaintext_key, command.team_id)
            if not await self.license_repository.lookup_exists(command.team_id, lookup):
                return plaintext_key, lookup

        logger.error("License key generation exhausted", extra={"team_id": str(command.team_id)})
        raise LicenseKeyGenerationError()
