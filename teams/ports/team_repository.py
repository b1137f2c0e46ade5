"""
Team repository port (interface).

This defines the contract for reading teams and the customers and products
they own. Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Set

from teams.domain.team import Team


class TeamRepository(ABC):
    """
    Abstract repository for Team entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_active(self, team_id: uuid.UUID) -> Optional[Team]:
        """
        Find a team with its settings and key pair.

        A team that is soft deleted or has no key pair is reported as
        missing. Missing settings resolve to defaults.

        Args:
            team_id: Team UUID

        Returns:
            Team entity or None if not found
        """

    @abstractmethod
    async def exists(self, team_id: uuid.UUID) -> bool:
        """
        Check if an active (not deleted) team exists.

        Args:
            team_id: Team UUID

        Returns:
            True if the team exists
        """

    @abstractmethod
    async def find_customer_ids(
        self, team_id: uuid.UUID, customer_ids: Iterable[uuid.UUID]
    ) -> Set[uuid.UUID]:
        """
        Return the subset of customer ids that belong to the team.

        Args:
            team_id: Team UUID
            customer_ids: Candidate customer ids

        Returns:
            Ids owned by the team
        """

    @abstractmethod
    async def find_product_ids(
        self, team_id: uuid.UUID, product_ids: Iterable[uuid.UUID]
    ) -> Set[uuid.UUID]:
        """
        Return the subset of product ids that belong to the team.

        Args:
            team_id: Team UUID
            product_ids: Candidate product ids

        Returns:
            Ids owned by the team
        """
