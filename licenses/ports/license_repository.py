"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    Licenses are only ever looked up by (team_id, lookup hash); the
    plaintext key is never queried.
    """

    @abstractmethod
    async def create(self, license: License) -> License:
        """
        Persist a new license with its bindings and metadata.

        Args:
            license: License entity to store

        Returns:
            Stored license entity

        Raises:
            LicenseConflictError: If the team already has a license with the
                same lookup hash
        """

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def find_by_lookup(self, team_id: uuid.UUID, lookup: str) -> Optional[License]:
        """
        Find a license of a team by lookup hash.

        Loads the bound customer and product ids with the license.

        Args:
            team_id: Team UUID
            lookup: HMAC lookup hash of the plaintext key

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def lookup_exists(self, team_id: uuid.UUID, lookup: str) -> bool:
        """
        Check if a team already has a license with this lookup hash.

        Args:
            team_id: Team UUID
            lookup: HMAC lookup hash

        Returns:
            True if a license exists
        """

    @abstractmethod
    async def activate_duration(
        self, license_id: uuid.UUID, expiration_date: datetime
    ) -> datetime:
        """
        Fix the expiration date of a DURATION license on first activation.

        Conditional write: only succeeds while the stored date is still
        unset. When another request already fixed it, the stored value is
        returned unchanged.

        Args:
            license_id: License UUID
            expiration_date: Expiration date computed by this activation

        Returns:
            The expiration date now stored
        """

    @abstractmethod
    async def touch_last_active(self, license_id: uuid.UUID, now: datetime) -> None:
        """
        Record the time of the latest request on a license.

        Args:
            license_id: License UUID
            now: Request time
        """
