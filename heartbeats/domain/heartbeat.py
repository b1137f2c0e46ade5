"""
Heartbeat domain entity.

A heartbeat is the last check-in of one client device on one license. There
is exactly one per (license, client identifier); check-ins update it.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

MAX_CLIENT_IDENTIFIER_LENGTH = 1000


@dataclass(frozen=True)
class Heartbeat:
    """
    Heartbeat domain entity.

    Staleness is not stored: whether a heartbeat still holds a seat is
    computed from ``last_beat_at`` at read time.
    """

    license_id: uuid.UUID
    client_identifier: str
    last_beat_at: datetime
    ip_address: Optional[str] = None

    def __post_init__(self):
        """Validate heartbeat entity."""
        if not self.client_identifier:
            raise ValueError("Client identifier is required")
        if len(self.client_identifier) > MAX_CLIENT_IDENTIFIER_LENGTH:
            raise ValueError("Client identifier too long")

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        client_identifier: str,
        now: datetime,
        ip_address: Optional[str] = None,
    ) -> "Heartbeat":
        """
        Create a new Heartbeat entity.

        Args:
            license_id: License UUID
            client_identifier: Device or session identifier
            now: Time of the check-in
            ip_address: Caller IP address

        Returns:
            Heartbeat entity instance
        """
        return cls(
            license_id=license_id,
            client_identifier=client_identifier,
            last_beat_at=now,
            ip_address=ip_address,
        )

    def beat(self, now: datetime, ip_address: Optional[str] = None) -> "Heartbeat":
        """
        Create a new Heartbeat instance for a renewed check-in.

        Args:
            now: Time of the check-in
            ip_address: Caller IP address

        Returns:
            New Heartbeat instance
        """
        return replace(self, last_beat_at=now, ip_address=ip_address)
