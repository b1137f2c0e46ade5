"""
Django implementation of RequestLogRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from datetime import datetime
from typing import Set

from asgiref.sync import sync_to_async

from core.domain.value_objects import VerdictCode
from requestlogs.domain.request_log import RequestLogEntry
from requestlogs.infrastructure.models import RequestLog as RequestLogModel
from requestlogs.ports.request_log_repository import RequestLogRepository


class DjangoRequestLogRepository(RequestLogRepository):
    """Django ORM implementation of RequestLogRepository."""

    def _to_model(self, entry: RequestLogEntry) -> RequestLogModel:
        """
        Convert domain entity to Django model.

        Args:
            entry: Request log entry

        Returns:
            Unsaved Django RequestLog model
        """
        return RequestLogModel(
            id=entry.id,
            team_id=entry.team_id,
            license_id=entry.license_id,
            customer_id=entry.customer_id,
            product_id=entry.product_id,
            client_identifier=entry.client_identifier,
            ip_address=entry.ip_address,
            method=entry.method,
            path=entry.path[:500],
            user_agent=entry.user_agent,
            status_code=entry.status_code,
            code=entry.code.value,
            type=entry.request_type.value,
            response_time_ms=entry.response_time_ms,
            created_at=entry.created_at,
        )

    async def append(self, entry: RequestLogEntry) -> RequestLogEntry:
        """
        Append a request log entry.

        Args:
            entry: Entry to store

        Returns:
            Stored entry
        """
        model = self._to_model(entry)
        await sync_to_async(model.save)(force_insert=True)
        return entry

    async def distinct_ips_since(self, license_id: uuid.UUID, since: datetime) -> Set[str]:
        """
        Distinct IP addresses of successful requests on a license.

        Args:
            license_id: License UUID
            since: Start of the lookback window

        Returns:
            Set of IP addresses
        """
        # pylint: disable=no-member
        qs = (
            RequestLogModel.objects.filter(
                license_id=license_id,
                code=VerdictCode.VALID.value,
                created_at__gte=since,
                ip_address__isnull=False,
            )
            .order_by()
            .values_list("ip_address", flat=True)
            .distinct()
        )
        return set(await sync_to_async(list)(qs))
