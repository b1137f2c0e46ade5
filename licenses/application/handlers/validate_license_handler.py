"""
ValidateLicenseHandler.

Runs the validation pipeline for heartbeat and verify requests and applies
its outcome: the DURATION activation write, the heartbeat upsert, the
challenge signature and the request log entry.
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from django.conf import settings

from core.domain.value_objects import VerdictCode
from core.infrastructure.events import event_bus
from core.metrics import (
    heartbeats_recorded_total,
    license_validation_duration_seconds,
    license_validations_total,
)
from core.security.crypto import derive_lookup_key, sign_challenge
from heartbeats.domain.events import HeartbeatRecorded
from heartbeats.ports.heartbeat_repository import HeartbeatRepository
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import ValidationAttempt, ValidationResultDTO
from licenses.domain.events import LicenseDurationStarted
from licenses.domain.services import LicenseValidator
from licenses.domain.validation import Verdict
from licenses.ports.license_repository import LicenseRepository
from requestlogs.domain.request_log import RequestLogEntry
from requestlogs.ports.request_log_repository import RequestLogRepository
from teams.ports.team_repository import TeamRepository

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """
    Handler for ValidateLicenseCommand.

    Never raises: timeouts and internal failures become an
    INTERNAL_SERVER_ERROR verdict.
    """

    def __init__(
        self,
        team_repository: TeamRepository,
        license_repository: LicenseRepository,
        heartbeat_repository: HeartbeatRepository,
        request_log_repository: RequestLogRepository,
        timeout_seconds: Optional[float] = None,
    ):
        """Initialize handler with repositories."""
        self.team_repository = team_repository
        self.license_repository = license_repository
        self.heartbeat_repository = heartbeat_repository
        self.request_log_repository = request_log_repository
        if timeout_seconds is None:
            timeout_seconds = settings.LICENSE_VALIDATION_TIMEOUT_SECONDS
        self.timeout_seconds = timeout_seconds

    async def handle(self, command: ValidateLicenseCommand) -> ValidationResultDTO:
        """
        Handle validate license command.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResultDTO with the verdict and, for a VALID request
            carrying a challenge, its signature
        """
        started = time.monotonic()
        now = datetime.now(timezone.utc)
        attempt = ValidationAttempt()
        log_extra = {
            "team_id": str(command.team_id),
            "request_type": command.request_type.value,
        }

        try:
            result = await asyncio.wait_for(
                self._validate(command, now, attempt), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.error(
                "License validation timed out after %ss", self.timeout_seconds, extra=log_extra
            )
            result = self._failure(command, now)
        except Exception:  # pylint: disable=broad-except
            logger.error("License validation failed", extra=log_extra, exc_info=True)
            result = self._failure(command, now)

        elapsed = time.monotonic() - started
        await self._record(command, result, attempt, now, elapsed)

        license_validations_total.labels(
            request_type=command.request_type.value, code=result.verdict.code.value
        ).inc()
        license_validation_duration_seconds.labels(
            request_type=command.request_type.value
        ).observe(elapsed)

        return result

    async def _validate(
        self, command: ValidateLicenseCommand, now: datetime, attempt: ValidationAttempt
    ) -> ValidationResultDTO:
        """Load the inputs, evaluate them and apply the outcome."""
        context = command.context

        team = await self.team_repository.find_active(command.team_id)
        license = None
        heartbeats = ()
        known_ips = frozenset()

        if team is not None:
            attempt.team_id = team.id
            lookup = derive_lookup_key(context.license_key, team.id)
            license = await self.license_repository.find_by_lookup(team.id, lookup)

        if license is not None:
            attempt.license_id = license.id
            if license.seats is not None:
                heartbeats = await self.heartbeat_repository.find_by_license(license.id)
            if license.ip_limit is not None:
                since = LicenseValidator.ip_window_start(team.settings, now)
                known_ips = await self.request_log_repository.distinct_ips_since(
                    license.id, since
                )

        outcome = LicenseValidator.evaluate(team, license, context, now, heartbeats, known_ips)
        attempt.customer_id = outcome.matched_customer_id
        attempt.product_id = outcome.matched_product_id

        if outcome.activated_expiration is not None:
            stored = await self.license_repository.activate_duration(
                license.id, outcome.activated_expiration
            )
            if stored == outcome.activated_expiration:
                await event_bus.publish(
                    LicenseDurationStarted.create(
                        license_id=license.id, team_id=team.id, expiration_date=stored
                    )
                )

        verdict = Verdict.of(outcome.code, now, command.request_type)
        if not outcome.valid:
            return ValidationResultDTO(verdict=verdict)

        if context.client_identifier:
            await self.heartbeat_repository.upsert(
                license.id, context.client_identifier, context.ip_address, now
            )
            heartbeats_recorded_total.inc()
            await event_bus.publish(
                HeartbeatRecorded.create(
                    license_id=license.id, client_identifier=context.client_identifier
                )
            )

        challenge_response = None
        if context.challenge:
            challenge_response = sign_challenge(context.challenge, team.key_pair.private_key)

        return ValidationResultDTO(verdict=verdict, challenge_response=challenge_response)

    @staticmethod
    def _failure(command: ValidateLicenseCommand, now: datetime) -> ValidationResultDTO:
        return ValidationResultDTO(
            verdict=Verdict.of(VerdictCode.INTERNAL_SERVER_ERROR, now, command.request_type)
        )

    async def _record(
        self,
        command: ValidateLicenseCommand,
        result: ValidationResultDTO,
        attempt: ValidationAttempt,
        now: datetime,
        elapsed: float,
    ) -> None:
        """Append the request log entry. Failures are logged, never raised."""
        entry = RequestLogEntry(
            request_type=command.request_type,
            code=result.verdict.code,
            status_code=result.verdict.http_status,
            method=command.method,
            path=command.path,
            created_at=now,
            team_id=attempt.team_id,
            license_id=attempt.license_id,
            customer_id=attempt.customer_id,
            product_id=attempt.product_id,
            client_identifier=command.context.client_identifier,
            ip_address=command.context.ip_address,
            user_agent=command.user_agent,
            response_time_ms=int(elapsed * 1000),
        )
        try:
            await self.request_log_repository.append(entry)
            if attempt.license_id is not None:
                await self.license_repository.touch_last_active(attempt.license_id, now)
        except Exception:  # pylint: disable=broad-except
            logger.error(
                "Failed to record request log",
                extra={
                    "team_id": str(command.team_id),
                    "code": result.verdict.code.value,
                },
                exc_info=True,
            )
