"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseIssued(DomainEvent):
    """Event raised when a license is issued."""

    license_id: uuid.UUID
    team_id: uuid.UUID
    expiration_type: str

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        team_id: uuid.UUID,
        expiration_type: str,
        occurred_at: Optional[datetime] = None,
    ) -> "LicenseIssued":
        """
        Create LicenseIssued event.

        Args:
            license_id: License UUID
            team_id: Team UUID
            expiration_type: Expiration type of the license
            occurred_at: When the event occurred
        """
        return cls(
            **cls.envelope(license_id, occurred_at),
            license_id=license_id,
            team_id=team_id,
            expiration_type=expiration_type,
        )

    def payload(self) -> Dict[str, Any]:
        """Event specific attributes."""
        return {
            "license_id": str(self.license_id),
            "team_id": str(self.team_id),
            "expiration_type": self.expiration_type,
        }


@dataclass(frozen=True)
class LicenseDurationStarted(DomainEvent):
    """Event raised when the first validation starts a DURATION license."""

    license_id: uuid.UUID
    team_id: uuid.UUID
    expiration_date: datetime

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        team_id: uuid.UUID,
        expiration_date: datetime,
        occurred_at: Optional[datetime] = None,
    ) -> "LicenseDurationStarted":
        """
        Create LicenseDurationStarted event.

        Args:
            license_id: License UUID
            team_id: Team UUID
            expiration_date: Expiration date fixed by the activation
            occurred_at: When the event occurred
        """
        return cls(
            **cls.envelope(license_id, occurred_at),
            license_id=license_id,
            team_id=team_id,
            expiration_date=expiration_date,
        )

    def payload(self) -> Dict[str, Any]:
        """Event specific attributes."""
        return {
            "license_id": str(self.license_id),
            "team_id": str(self.team_id),
            "expiration_date": self.expiration_date.isoformat(),
        }
