"""
Request log repository port (interface).

This defines the contract for request log persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Set

from requestlogs.domain.request_log import RequestLogEntry


class RequestLogRepository(ABC):
    """
    Abstract repository for request logs.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def append(self, entry: RequestLogEntry) -> RequestLogEntry:
        """
        Append a request log entry.

        Args:
            entry: Entry to store

        Returns:
            Stored entry
        """

    @abstractmethod
    async def distinct_ips_since(self, license_id: uuid.UUID, since: datetime) -> Set[str]:
        """
        Distinct IP addresses of successful requests on a license.

        Only VALID entries created at or after ``since`` count.

        Args:
            license_id: License UUID
            since: Start of the lookback window

        Returns:
            Set of IP addresses
        """
