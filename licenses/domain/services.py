"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import uuid
from dataclasses import replace
from datetime import datetime, timedelta
from typing import AbstractSet, FrozenSet, Iterable, Optional, Tuple

from core.domain.value_objects import VerdictCode
from heartbeats.domain.heartbeat import Heartbeat
from heartbeats.domain.services import SeatTracker
from licenses.domain.license import License
from licenses.domain.validation import ValidationContext, ValidationOutcome
from teams.domain.team import Team, TeamSettings


class LicenseValidator:
    """
    Domain service deciding whether a license may be used.

    The checks run in a fixed order and the first failing one decides the
    verdict:

    1. team exists (with settings and key pair)
    2. license exists
    3. customer binding
    4. product binding
    5. suspension
    6. expiration (a DURATION license is activated here)
    7. IP limit
    8. seat limit

    Nothing here touches storage. The caller loads the inputs and applies
    the outcome (activation write, heartbeat upsert, challenge signature).
    """

    @staticmethod
    def check_binding(
        bound_ids: FrozenSet[uuid.UUID],
        strict: bool,
        supplied_id: Optional[uuid.UUID],
    ) -> bool:
        """
        Check a customer or product binding.

        A license without bound ids always passes. Otherwise a supplied id
        must be bound, and in strict mode an id must be supplied.

        Args:
            bound_ids: Ids bound to the license
            strict: Team strict mode for this binding
            supplied_id: Id sent by the caller, if any

        Returns:
            True if the binding check passes
        """
        if not bound_ids:
            return True
        if supplied_id is None:
            return not strict
        return supplied_id in bound_ids

    @staticmethod
    def check_expiration(license: License, now: datetime) -> Tuple[bool, Optional[datetime]]:
        """
        Check expiration, activating a DURATION license on first use.

        Args:
            license: License to check
            now: Reference time

        Returns:
            Tuple of (passes, expiration date to persist for an activation)
        """
        activated = license.activation_expiration(now)
        if activated is not None:
            return True, activated
        return not license.is_expired(now), None

    @staticmethod
    def check_ip_limit(
        ip_limit: Optional[int],
        known_ips: AbstractSet[str],
        ip_address: Optional[str],
    ) -> bool:
        """
        Check the distinct IP limit.

        Known IPs always pass; the limit caps new IPs only.

        Args:
            ip_limit: Limit of the license, None for unlimited
            known_ips: Distinct IPs seen in the lookback window
            ip_address: Caller IP

        Returns:
            True if the IP check passes
        """
        if ip_limit is None:
            return True
        if ip_address is not None and ip_address in known_ips:
            return True
        return len(known_ips) < ip_limit

    @staticmethod
    def ip_window_start(settings: TeamSettings, now: datetime) -> datetime:
        """Start of the IP lookback window for a team."""
        return now - timedelta(days=settings.ip_limit_period.days)

    @staticmethod
    def evaluate(
        team: Optional[Team],
        license: Optional[License],
        context: ValidationContext,
        now: datetime,
        heartbeats: Iterable[Heartbeat] = (),
        known_ips: AbstractSet[str] = frozenset(),
    ) -> ValidationOutcome:
        """
        Run the validation pipeline.

        Args:
            team: Resolved team, None if missing
            license: Resolved license, None if missing
            context: Caller context
            now: Reference time
            heartbeats: Heartbeats of the license (needed when it has seats)
            known_ips: Distinct IPs in the window (needed when it has an IP limit)

        Returns:
            ValidationOutcome with the first failing code, or VALID
        """
        if team is None:
            return ValidationOutcome(VerdictCode.TEAM_NOT_FOUND)
        if license is None:
            return ValidationOutcome(VerdictCode.LICENSE_NOT_FOUND)

        settings = team.settings
        outcome = ValidationOutcome(VerdictCode.VALID)

        if not LicenseValidator.check_binding(
            license.customer_ids, settings.strict_customers, context.customer_id
        ):
            return replace(outcome, code=VerdictCode.CUSTOMER_NOT_FOUND)
        if context.customer_id in license.customer_ids:
            outcome = replace(outcome, matched_customer_id=context.customer_id)

        if not LicenseValidator.check_binding(
            license.product_ids, settings.strict_products, context.product_id
        ):
            return replace(outcome, code=VerdictCode.PRODUCT_NOT_FOUND)
        if context.product_id in license.product_ids:
            outcome = replace(outcome, matched_product_id=context.product_id)

        if license.suspended:
            return replace(outcome, code=VerdictCode.LICENSE_SUSPENDED)

        not_expired, activated_expiration = LicenseValidator.check_expiration(license, now)
        if not not_expired:
            return replace(outcome, code=VerdictCode.LICENSE_EXPIRED)
        outcome = replace(outcome, activated_expiration=activated_expiration)

        if not LicenseValidator.check_ip_limit(license.ip_limit, known_ips, context.ip_address):
            return replace(outcome, code=VerdictCode.IP_LIMIT_REACHED)

        if license.seats is not None and not SeatTracker.can_take_seat(
            heartbeats,
            license.seats,
            context.client_identifier,
            settings.heartbeat_timeout,
            now,
        ):
            return replace(outcome, code=VerdictCode.MAXIMUM_CONCURRENT_SEATS)

        return outcome
