"""
Heartbeat repository port (interface).

This defines the contract for heartbeat persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from heartbeats.domain.heartbeat import Heartbeat


class HeartbeatRepository(ABC):
    """
    Abstract repository for Heartbeat entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def upsert(
        self,
        license_id: uuid.UUID,
        client_identifier: str,
        ip_address: Optional[str],
        now: datetime,
    ) -> Heartbeat:
        """
        Create or refresh the heartbeat of a client.

        Must be a single atomic statement keyed by
        (license_id, client_identifier); concurrent calls for the same pair
        never create duplicates, the last writer wins.

        Args:
            license_id: License UUID
            client_identifier: Device or session identifier
            ip_address: Caller IP address
            now: Time of the check-in

        Returns:
            Stored heartbeat
        """

    @abstractmethod
    async def find_by_license(self, license_id: uuid.UUID) -> List[Heartbeat]:
        """
        List every heartbeat of a license, stale ones included.

        Args:
            license_id: License UUID

        Returns:
            List of Heartbeat entities
        """

    @abstractmethod
    async def find(self, license_id: uuid.UUID, client_identifier: str) -> Optional[Heartbeat]:
        """
        Find the heartbeat of one client.

        Args:
            license_id: License UUID
            client_identifier: Device or session identifier

        Returns:
            Heartbeat entity or None if not found
        """
