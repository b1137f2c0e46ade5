"""
Core views for health checks and system status.
"""

from django.db import connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt


def _database_available() -> bool:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return True
    except Exception:  # pylint: disable=broad-exception-caught
        return False


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Liveness endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "license-validation-service"})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        """Check database connectivity."""
        if _database_available():
            return JsonResponse({"status": "healthy", "database": "connected"})
        return JsonResponse({"status": "unhealthy", "database": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """
    Readiness endpoint.

    The validation path depends only on the relational store, so readiness
    is database connectivity.
    """

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        checks = {"database": _database_available()}
        ready = all(checks.values())
        return JsonResponse(
            {"status": "ready" if ready else "not_ready", "checks": checks},
            status=200 if ready else 503,
        )
