"""
Team domain entities.

A team is the tenant every license belongs to. Validation consumes a team
together with its settings and signing key pair, resolved once at the
repository boundary.
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional

from core.domain.value_objects import IpLimitPeriod

DEFAULT_HEARTBEAT_TIMEOUT_MINUTES = 60


@dataclass(frozen=True)
class TeamSettings:
    """
    Validation settings of a team with defaults already applied.

    Attributes:
        strict_customers: Require an explicit customer match when a license has customers
        strict_products: Require an explicit product match when a license has products
        strict_releases: Loaded for completeness, gates nothing in validation
        heartbeat_timeout: Minutes of inactivity before a seat is released
        ip_limit_period: Lookback window for distinct IP counting
    """

    strict_customers: bool = False
    strict_products: bool = False
    strict_releases: bool = False
    heartbeat_timeout: int = DEFAULT_HEARTBEAT_TIMEOUT_MINUTES
    ip_limit_period: IpLimitPeriod = IpLimitPeriod.MONTH

    def __post_init__(self):
        """Validate settings."""
        if self.heartbeat_timeout < 1:
            raise ValueError("Heartbeat timeout must be at least 1 minute")

    @classmethod
    def resolve(
        cls,
        strict_customers: Optional[bool] = None,
        strict_products: Optional[bool] = None,
        strict_releases: Optional[bool] = None,
        heartbeat_timeout: Optional[int] = None,
        ip_limit_period: Optional[str] = None,
        default_heartbeat_timeout: int = DEFAULT_HEARTBEAT_TIMEOUT_MINUTES,
    ) -> "TeamSettings":
        """
        Build settings from possibly missing stored values.

        Args:
            strict_customers: Stored value or None
            strict_products: Stored value or None
            strict_releases: Stored value or None
            heartbeat_timeout: Stored value or None
            ip_limit_period: Stored period name or None
            default_heartbeat_timeout: Timeout used when none is stored

        Returns:
            TeamSettings with every field set
        """
        return cls(
            strict_customers=bool(strict_customers),
            strict_products=bool(strict_products),
            strict_releases=bool(strict_releases),
            heartbeat_timeout=heartbeat_timeout or default_heartbeat_timeout,
            ip_limit_period=IpLimitPeriod(ip_limit_period) if ip_limit_period else IpLimitPeriod.MONTH,
        )


@dataclass(frozen=True)
class KeyPair:
    """RSA key pair of a team, PEM encoded."""

    public_key: str
    private_key: str = field(repr=False)


@dataclass(frozen=True)
class Team:
    """
    Team domain entity as consumed by license validation.

    Only active teams (not soft deleted, with a key pair) are ever built.
    """

    id: uuid.UUID
    name: str
    settings: TeamSettings
    key_pair: KeyPair
