"""
Heartbeat domain events.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class HeartbeatRecorded(DomainEvent):
    """Event raised when a client checks in on a license."""

    license_id: uuid.UUID
    client_identifier: str

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        client_identifier: str,
        occurred_at: Optional[datetime] = None,
    ) -> "HeartbeatRecorded":
        """Create HeartbeatRecorded event."""
        return cls(
            **cls.envelope(license_id, occurred_at),
            license_id=license_id,
            client_identifier=client_identifier,
        )

    def payload(self) -> Dict[str, Any]:
        """Event specific attributes."""
        return {
            "license_id": str(self.license_id),
            "client_identifier": self.client_identifier,
        }
