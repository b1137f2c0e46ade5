"""
API key authentication middleware.

Team API keys protect the developer API (/api/v1/dev/*). The external
license endpoints are public: the license key in the body is the credential.
"""

import logging
from typing import Optional

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.security.crypto import hash_api_key
from teams.infrastructure.models import ApiKey

logger = logging.getLogger(__name__)

DEV_API_PREFIX = "/api/v1/dev/"


def extract_api_key(request: HttpRequest) -> Optional[str]:
    """Read the API key from ``X-API-Key`` or a bearer ``Authorization`` header."""
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return api_key.strip()
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


def _error(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)


class APIKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for API key authentication.

    Resolves the team owning the presented key and stores it on the request
    as ``request.team`` and ``request.api_key``. Returns 401 when the key is
    missing, unknown, expired or belongs to a deleted team.
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if not request.path.startswith(DEV_API_PREFIX):
            return None

        api_key = extract_api_key(request)
        if not api_key:
            return _error(
                "MISSING_API_KEY", "Missing API key. Provide X-API-Key header.", 401
            )

        try:
            # pylint: disable=no-member
            api_key_obj = (
                ApiKey.objects.select_related("team")
                .filter(key_hash=hash_api_key(api_key))
                .first()
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error authenticating dev API: %s", e, exc_info=True)
            return _error("INTERNAL_ERROR", "Authentication error", 500)

        if not api_key_obj or api_key_obj.team.deleted_at is not None:
            logger.warning("Invalid API key attempted: %s...", api_key[:8])
            return _error("INVALID_API_KEY", "Invalid API key", 401)

        if not api_key_obj.is_valid():
            logger.warning("Expired API key attempted: %s...", api_key[:8])
            return _error("INVALID_API_KEY", "API key expired", 401)

        api_key_obj.mark_used()

        request.team = api_key_obj.team  # type: ignore
        request.api_key = api_key_obj  # type: ignore
        return None
