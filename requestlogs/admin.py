"""
Django admin configuration for requestlogs app.
"""

from django.contrib import admin

from requestlogs.infrastructure.models import RequestLog


@admin.register(RequestLog)
class RequestLogAdmin(admin.ModelAdmin):
    """Read-only admin interface for RequestLog model."""

    list_display = ["created_at", "type", "code", "status_code", "ip_address", "team", "license"]
    list_filter = ["type", "code", "created_at"]
    search_fields = ["ip_address", "client_identifier", "license__id"]
    date_hierarchy = "created_at"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("team", "license")

    def has_add_permission(self, request):
        """Request logs are append-only from the API."""
        return False

    def has_change_permission(self, request, obj=None):
        """Request logs are never edited."""
        return False
