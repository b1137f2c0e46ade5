"""
Django implementation of HeartbeatRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async

from heartbeats.domain.heartbeat import Heartbeat
from heartbeats.infrastructure.models import Heartbeat as HeartbeatModel
from heartbeats.ports.heartbeat_repository import HeartbeatRepository


class DjangoHeartbeatRepository(HeartbeatRepository):
    """Django ORM implementation of HeartbeatRepository."""

    def _to_domain(self, model: HeartbeatModel) -> Heartbeat:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Heartbeat model

        Returns:
            Heartbeat domain entity
        """
        return Heartbeat(
            license_id=model.license_id,
            client_identifier=model.client_identifier,
            last_beat_at=model.last_beat_at,
            ip_address=model.ip_address,
        )

    async def upsert(
        self,
        license_id: uuid.UUID,
        client_identifier: str,
        ip_address: Optional[str],
        now: datetime,
    ) -> Heartbeat:
        """
        Create or refresh the heartbeat of a client.

        Issues one INSERT ... ON CONFLICT (license_id, client_identifier)
        DO UPDATE statement.
        """
        heartbeat = Heartbeat.create(license_id, client_identifier, now, ip_address)
        model = HeartbeatModel(
            license_id=license_id,
            client_identifier=client_identifier,
            last_beat_at=now,
            ip_address=ip_address,
        )
        # pylint: disable=no-member
        await sync_to_async(HeartbeatModel.objects.bulk_create)(
            [model],
            update_conflicts=True,
            unique_fields=["license", "client_identifier"],
            update_fields=["last_beat_at", "ip_address"],
        )
        return heartbeat

    async def find_by_license(self, license_id: uuid.UUID) -> List[Heartbeat]:
        """
        List every heartbeat of a license.

        Args:
            license_id: License UUID

        Returns:
            List of Heartbeat entities
        """
        # pylint: disable=no-member
        qs = HeartbeatModel.objects.filter(license_id=license_id)
        models = await sync_to_async(list)(qs)
        return [self._to_domain(model) for model in models]

    async def find(self, license_id: uuid.UUID, client_identifier: str) -> Optional[Heartbeat]:
        """
        Find the heartbeat of one client.

        Args:
            license_id: License UUID
            client_identifier: Device or session identifier

        Returns:
            Heartbeat entity or None if not found
        """
        # pylint: disable=no-member
        qs = HeartbeatModel.objects.filter(
            license_id=license_id, client_identifier=client_identifier
        )
        model = await sync_to_async(qs.first)()
        return self._to_domain(model) if model else None
