"""
License validation API views.

These endpoints are called by licensed software to:
- Send heartbeats that hold a seat on a license
- Verify a license without necessarily holding a seat
"""

import re
import uuid
from datetime import datetime, timezone
from typing import Optional

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.license.serializers import (
    HeartbeatRequestSerializer,
    LicenseValidationRequestSerializer,
    LicenseValidationResponseSerializer,
)
from core.domain.value_objects import RequestType, VerdictCode
from core.instrumentation import Status, StatusCode, get_tracer
from core.request_helpers import get_client_ip, get_user_agent
from heartbeats.application.commands.record_heartbeat import RecordHeartbeatCommand
from heartbeats.application.handlers.heartbeat_handler import RecordHeartbeatHandler
from heartbeats.infrastructure.repositories.django_heartbeat_repository import (
    DjangoHeartbeatRepository,
)
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import ValidationResultDTO
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.domain.validation import ValidationContext, Verdict
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from requestlogs.infrastructure.repositories.django_request_log_repository import (
    DjangoRequestLogRepository,
)
from teams.infrastructure.repositories.django_team_repository import DjangoTeamRepository

# Initialize repositories (in production, use DI container)
_team_repo = DjangoTeamRepository()
_license_repo = DjangoLicenseRepository()
_heartbeat_repo = DjangoHeartbeatRepository()
_request_log_repo = DjangoRequestLogRepository()

tracer = get_tracer(__name__)

UUID_V4 = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE
)

TEAM_ID_PARAMETER = OpenApiParameter(
    name="team_id",
    type=str,
    location=OpenApiParameter.PATH,
    description="Team UUID",
)


def _validate_handler() -> ValidateLicenseHandler:
    return ValidateLicenseHandler(
        team_repository=_team_repo,
        license_repository=_license_repo,
        heartbeat_repository=_heartbeat_repo,
        request_log_repository=_request_log_repo,
    )


def _parse_team_id(team_id: str) -> Optional[uuid.UUID]:
    if not UUID_V4.match(team_id):
        return None
    return uuid.UUID(team_id)


def _request_body(request: Request):
    """Return the parsed body, or None when it cannot be parsed."""
    try:
        return request.data
    except (ParseError, UnsupportedMediaType):
        return None


def _first_error(errors) -> Optional[str]:
    """Return the first message of a DRF error structure."""
    if isinstance(errors, dict):
        for value in errors.values():
            message = _first_error(value)
            if message:
                return message
        return None
    if isinstance(errors, list):
        for value in errors:
            message = _first_error(value)
            if message:
                return message
        return None
    return str(errors) if errors else None


def _verdict_response(result: ValidationResultDTO) -> Response:
    verdict = result.verdict
    payload = {
        "result": {
            "timestamp": verdict.timestamp,
            "valid": verdict.valid,
            "details": verdict.details,
            "code": verdict.code.value,
        }
    }
    if result.challenge_response:
        payload["challengeResponse"] = result.challenge_response
    return Response(
        LicenseValidationResponseSerializer(payload).data, status=verdict.http_status
    )


def _bad_request(request_type: RequestType, details: Optional[str] = None) -> Response:
    verdict = Verdict.of(
        VerdictCode.BAD_REQUEST, datetime.now(timezone.utc), request_type, details=details
    )
    return _verdict_response(ValidationResultDTO(verdict=verdict))


def _set_verdict_status(span, result: ValidationResultDTO) -> None:
    span.set_attribute("code", result.verdict.code.value)
    if result.verdict.code == VerdictCode.INTERNAL_SERVER_ERROR:
        span.set_status(Status(StatusCode.ERROR, "Validation failed"))


class LicenseHeartbeatView(APIView):
    """View for license heartbeats."""

    @extend_schema(
        operation_id="license_heartbeat",
        summary="License Heartbeat",
        description=(
            "Validate a license and hold a seat for the calling client. "
            "When a challenge is supplied on a valid license, the response "
            "carries its signature made with the team's private key."
        ),
        tags=["License API"],
        parameters=[TEAM_ID_PARAMETER],
        request=HeartbeatRequestSerializer,
        responses={
            200: LicenseValidationResponseSerializer,
            400: LicenseValidationResponseSerializer,
            403: LicenseValidationResponseSerializer,
            404: LicenseValidationResponseSerializer,
            500: LicenseValidationResponseSerializer,
        },
    )
    def post(self, request: Request, team_id: str) -> Response:
        """Record a license heartbeat."""
        return async_to_sync(self._handle_heartbeat)(request, team_id)

    async def _handle_heartbeat(self, request: Request, team_id: str) -> Response:
        """Async handler for license heartbeat."""
        with tracer.start_as_current_span("license_heartbeat") as span:
            span.set_attribute("operation", "license_heartbeat")

            parsed_team_id = _parse_team_id(team_id)
            if parsed_team_id is None:
                span.set_attribute("error", "invalid_team_id")
                return _bad_request(RequestType.HEARTBEAT, "Invalid team UUID")

            body = _request_body(request)
            if body is None:
                span.set_attribute("error", "invalid_body")
                return _bad_request(RequestType.HEARTBEAT, "Invalid JSON body")

            serializer = HeartbeatRequestSerializer(data=body)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                return _bad_request(RequestType.HEARTBEAT, _first_error(serializer.errors))

            span.set_attribute("team_id", str(parsed_team_id))
            data = serializer.validated_data

            handler = RecordHeartbeatHandler(_validate_handler())
            result = await handler.handle(
                RecordHeartbeatCommand(
                    team_id=parsed_team_id,
                    license_key=data["license_key"],
                    client_identifier=data["client_identifier"],
                    ip_address=get_client_ip(request),
                    customer_id=data.get("customer_id"),
                    product_id=data.get("product_id"),
                    challenge=data.get("challenge"),
                    method=request.method,
                    path=request.path,
                    user_agent=get_user_agent(request),
                )
            )
            _set_verdict_status(span, result)
            return _verdict_response(result)


class LicenseVerifyView(APIView):
    """View for license verification."""

    @extend_schema(
        operation_id="license_verify",
        summary="Verify License",
        description=(
            "Validate a license. A seat is only taken when a clientIdentifier "
            "is supplied."
        ),
        tags=["License API"],
        parameters=[TEAM_ID_PARAMETER],
        request=LicenseValidationRequestSerializer,
        responses={
            200: LicenseValidationResponseSerializer,
            400: LicenseValidationResponseSerializer,
            403: LicenseValidationResponseSerializer,
            404: LicenseValidationResponseSerializer,
            500: LicenseValidationResponseSerializer,
        },
    )
    def post(self, request: Request, team_id: str) -> Response:
        """Verify a license."""
        return async_to_sync(self._handle_verify)(request, team_id)

    async def _handle_verify(self, request: Request, team_id: str) -> Response:
        """Async handler for license verification."""
        with tracer.start_as_current_span("license_verify") as span:
            span.set_attribute("operation", "license_verify")

            parsed_team_id = _parse_team_id(team_id)
            if parsed_team_id is None:
                span.set_attribute("error", "invalid_team_id")
                return _bad_request(RequestType.VERIFY, "Invalid team UUID")

            body = _request_body(request)
            if body is None:
                span.set_attribute("error", "invalid_body")
                return _bad_request(RequestType.VERIFY, "Invalid JSON body")

            serializer = LicenseValidationRequestSerializer(data=body)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                return _bad_request(RequestType.VERIFY, _first_error(serializer.errors))

            span.set_attribute("team_id", str(parsed_team_id))
            data = serializer.validated_data

            result = await _validate_handler().handle(
                ValidateLicenseCommand(
                    team_id=parsed_team_id,
                    context=ValidationContext(
                        license_key=data["license_key"],
                        client_identifier=data.get("client_identifier"),
                        ip_address=get_client_ip(request),
                        customer_id=data.get("customer_id"),
                        product_id=data.get("product_id"),
                        challenge=data.get("challenge"),
                    ),
                    request_type=RequestType.VERIFY,
                    method=request.method,
                    path=request.path,
                    user_agent=get_user_agent(request),
                )
            )
            _set_verdict_status(span, result)
            return _verdict_response(result)
