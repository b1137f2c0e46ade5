"""
Django implementation of TeamRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import Iterable, Optional, Set

from asgiref.sync import sync_to_async
from django.conf import settings

from teams.domain.team import KeyPair, Team, TeamSettings
from teams.infrastructure.models import Customer as CustomerModel
from teams.infrastructure.models import KeyPair as KeyPairModel
from teams.infrastructure.models import Product as ProductModel
from teams.infrastructure.models import Team as TeamModel
from teams.infrastructure.models import TeamSettings as TeamSettingsModel
from teams.ports.team_repository import TeamRepository


class DjangoTeamRepository(TeamRepository):
    """
    Django ORM implementation of TeamRepository.

    Store errors propagate to the caller; only "not found" is mapped to None.
    """

    def _to_domain(self, model: TeamModel) -> Optional[Team]:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Team model with settings and key pair selected

        Returns:
            Team domain entity, or None when the team has no key pair
        """
        try:
            key_pair_model = model.key_pair
        except KeyPairModel.DoesNotExist:  # pylint: disable=no-member
            return None

        try:
            settings_model = model.settings
        except TeamSettingsModel.DoesNotExist:  # pylint: disable=no-member
            settings_model = None

        team_settings = TeamSettings.resolve(
            strict_customers=getattr(settings_model, "strict_customers", None),
            strict_products=getattr(settings_model, "strict_products", None),
            strict_releases=getattr(settings_model, "strict_releases", None),
            heartbeat_timeout=getattr(settings_model, "heartbeat_timeout", None),
            ip_limit_period=getattr(settings_model, "ip_limit_period", None),
            default_heartbeat_timeout=settings.LICENSE_DEFAULT_HEARTBEAT_TIMEOUT_MINUTES,
        )

        return Team(
            id=model.id,
            name=model.name,
            settings=team_settings,
            key_pair=KeyPair(
                public_key=key_pair_model.public_key,
                private_key=key_pair_model.private_key,
            ),
        )

    def _find_active_sync(self, team_id: uuid.UUID) -> Optional[Team]:
        # pylint: disable=no-member
        model = (
            TeamModel.objects.select_related("settings", "key_pair")
            .filter(id=team_id, deleted_at__isnull=True)
            .first()
        )
        if model is None:
            return None
        return self._to_domain(model)

    async def find_active(self, team_id: uuid.UUID) -> Optional[Team]:
        """
        Find a team with its settings and key pair.

        Args:
            team_id: Team UUID

        Returns:
            Team entity or None if not found
        """
        return await sync_to_async(self._find_active_sync)(team_id)

    async def exists(self, team_id: uuid.UUID) -> bool:
        """
        Check if an active team exists.

        Args:
            team_id: Team UUID

        Returns:
            True if the team exists
        """
        # pylint: disable=no-member
        qs = TeamModel.objects.filter(id=team_id, deleted_at__isnull=True)
        return await sync_to_async(qs.exists)()

    async def find_customer_ids(
        self, team_id: uuid.UUID, customer_ids: Iterable[uuid.UUID]
    ) -> Set[uuid.UUID]:
        """Return the customer ids owned by the team."""
        # pylint: disable=no-member
        qs = CustomerModel.objects.filter(team_id=team_id, id__in=list(customer_ids))
        return set(await sync_to_async(list)(qs.values_list("id", flat=True)))

    async def find_product_ids(
        self, team_id: uuid.UUID, product_ids: Iterable[uuid.UUID]
    ) -> Set[uuid.UUID]:
        """Return the product ids owned by the team."""
        # pylint: disable=no-member
        qs = ProductModel.objects.filter(team_id=team_id, id__in=list(product_ids))
        return set(await sync_to_async(list)(qs.values_list("id", flat=True)))
