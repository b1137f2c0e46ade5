"""
Developer API views.

Endpoints used by a team's own backend, authenticated with a team API key.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.dev.serializers import IssueLicenseRequestSerializer, IssuedLicenseResponseSerializer
from core.domain.value_objects import ExpirationStart, ExpirationType
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.domain.license import LicenseMetadataEntry
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from teams.infrastructure.repositories.django_team_repository import DjangoTeamRepository

# Initialize repositories (in production, use DI container)
_team_repo = DjangoTeamRepository()
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


class IssueLicenseView(APIView):
    """View for issuing licenses."""

    @extend_schema(
        operation_id="issue_license",
        summary="Issue License",
        description=(
            "Create a license for the team. The plaintext license key is "
            "returned in this response only. Requires a team API key via the "
            "X-API-Key header or an Authorization Bearer token."
        ),
        tags=["Developer API"],
        parameters=[
            OpenApiParameter(
                name="X-API-Key",
                type=str,
                location=OpenApiParameter.HEADER,
                required=False,
                description="Team API key",
            ),
        ],
        request=IssueLicenseRequestSerializer,
        responses={
            201: IssuedLicenseResponseSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Unauthorized - Missing or invalid API key"},
            403: {"description": "API key does not belong to this team"},
            404: {"description": "Team not found"},
            409: {"description": "License key already exists"},
        },
    )
    def post(self, request: Request, team_id: uuid.UUID) -> Response:
        """Issue a license."""
        return async_to_sync(self._handle_issue_license)(request, team_id)

    async def _handle_issue_license(self, request: Request, team_id: uuid.UUID) -> Response:
        """Async handler for issue license."""
        with tracer.start_as_current_span("issue_license") as span:
            span.set_attribute("operation", "issue_license")
            span.set_attribute("team.id", str(team_id))

            team = getattr(request, "team", None)
            if team is None:
                span.set_attribute("error", "team_not_authenticated")
                span.set_status(Status(StatusCode.ERROR, "Not authenticated"))
                return Response(
                    {"error": {"code": "MISSING_API_KEY", "message": "API key required"}},
                    status=status.HTTP_401_UNAUTHORIZED,
                )
            if team.id != team_id:
                span.set_attribute("error", "team_mismatch")
                span.set_status(Status(StatusCode.ERROR, "Forbidden"))
                return Response(
                    {
                        "error": {
                            "code": "FORBIDDEN",
                            "message": "API key does not belong to this team",
                        }
                    },
                    status=status.HTTP_403_FORBIDDEN,
                )

            serializer = IssueLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response(
                    {"error": {"code": "VALIDATION_ERROR", "message": serializer.errors}},
                    status=status.HTTP_400_BAD_REQUEST,
                )

            data = serializer.validated_data
            expiration_start = data.get("expiration_start")

            handler = IssueLicenseHandler(
                team_repository=_team_repo,
                license_repository=_license_repo,
            )

            command = IssueLicenseCommand(
                team_id=team_id,
                license_key=data.get("license_key"),
                customer_ids=data["customer_ids"],
                product_ids=data["product_ids"],
                expiration_type=ExpirationType(data["expiration_type"]),
                expiration_date=data.get("expiration_date"),
                expiration_days=data.get("expiration_days"),
                expiration_start=ExpirationStart(expiration_start) if expiration_start else None,
                ip_limit=data.get("ip_limit"),
                seats=data.get("seats"),
                suspended=data["suspended"],
                metadata=[
                    LicenseMetadataEntry(
                        key=entry["key"], value=entry["value"], locked=entry["locked"]
                    )
                    for entry in data["metadata"]
                ],
            )

            result = await handler.handle(command)

            span.set_attribute("license.id", str(result.id))
            span.set_status(Status(StatusCode.OK))

            return Response(
                IssuedLicenseResponseSerializer(result).data, status=status.HTTP_201_CREATED
            )
