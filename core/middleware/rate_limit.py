"""
Rate limiting middleware.

Implements a fixed window rate limit per API key on the developer API.
"""

import time
from typing import Callable, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total
from core.middleware.auth import DEV_API_PREFIX, extract_api_key
from core.middleware.metrics import normalize_endpoint
from core.security.crypto import hash_api_key


class RateLimitMiddleware:
    """
    Rate limiting middleware per API key.

    Counters live in the Django cache. The limit is
    ``settings.DEV_API_RATE_LIMIT`` requests per minute per key.
    """

    DEFAULT_RATE_LIMIT = 100
    RATE_LIMIT_WINDOW = 60  # seconds

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def _get_rate_limit_key(self, api_key: str) -> str:
        """Cache key for a given API key (the raw key is never stored)."""
        return f"rate_limit:{hash_api_key(api_key)[:16]}"

    def _get_limit(self) -> int:
        return int(getattr(settings, "DEV_API_RATE_LIMIT", self.DEFAULT_RATE_LIMIT))

    def _check_rate_limit(self, api_key: str, limit: int) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Args:
            api_key: API key string
            limit: Allowed requests per window

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / self.RATE_LIMIT_WINDOW)
        reset_time = (window_start + 1) * self.RATE_LIMIT_WINDOW
        full_key = f"{self._get_rate_limit_key(api_key)}:{window_start}"

        if cache.get(full_key, 0) >= limit:
            return False, 0, reset_time

        try:
            new_count = cache.incr(full_key, 1)
        except ValueError:
            # Key doesn't exist yet
            cache.set(full_key, 1, timeout=self.RATE_LIMIT_WINDOW)
            new_count = 1

        return True, max(0, limit - new_count), reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if not request.path.startswith(DEV_API_PREFIX):
            return self.get_response(request)

        api_key = extract_api_key(request)
        if not api_key:
            # Authentication middleware rejects it
            return self.get_response(request)

        limit = self._get_limit()
        is_allowed, remaining, reset_time = self._check_rate_limit(api_key, limit)

        if not is_allowed:
            errors_total.labels(
                error_type="rate_limit_exceeded", endpoint=normalize_endpoint(request.path)
            ).inc()
            response = JsonResponse(
                {
                    "error": {
                        "code": "RATE_LIMIT_EXCEEDED",
                        "message": "Rate limit exceeded. Please try again later.",
                    }
                },
                status=429,
            )
        else:
            response = self.get_response(request)

        # Rate limit headers (RFC 6585)
        response["X-RateLimit-Limit"] = str(limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        if not is_allowed:
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))

        return response
