"""
Django admin configuration for heartbeats app.
"""

from django.contrib import admin

from heartbeats.infrastructure.models import Heartbeat


@admin.register(Heartbeat)
class HeartbeatAdmin(admin.ModelAdmin):
    """Admin interface for Heartbeat model."""

    list_display = ["client_identifier", "license", "last_beat_at", "ip_address"]
    list_filter = ["last_beat_at"]
    search_fields = ["client_identifier", "ip_address", "license__id"]
    readonly_fields = ["id", "license", "client_identifier", "last_beat_at", "ip_address", "created_at"]

    def has_add_permission(self, request):
        """Heartbeats are created by clients only."""
        return False
