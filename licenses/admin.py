"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License, LicenseMetadata


class LicenseMetadataInline(admin.TabularInline):
    """Inline metadata entries on the license page."""

    model = LicenseMetadata
    extra = 0


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """
    Admin interface for License model.

    Only the encrypted key is shown; licenses are issued through the API,
    which is the single place the plaintext key is returned.
    """

    list_display = [
        "id",
        "team",
        "status_display",
        "expiration_type",
        "expiration_date",
        "seats",
        "ip_limit",
        "last_active_at",
        "created_at",
    ]
    list_filter = ["suspended", "expiration_type", "created_at", "team"]
    search_fields = ["id", "team__name", "license_key_lookup"]
    readonly_fields = [
        "id",
        "license_key",
        "license_key_lookup",
        "last_active_at",
        "created_at",
        "updated_at",
    ]
    filter_horizontal = ["customers", "products"]
    inlines = [LicenseMetadataInline]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "team", "license_key", "license_key_lookup", "suspended"),
            },
        ),
        (
            "Expiration",
            {
                "fields": (
                    "expiration_type",
                    "expiration_date",
                    "expiration_days",
                    "expiration_start",
                ),
            },
        ),
        (
            "Limits",
            {
                "fields": ("seats", "ip_limit"),
            },
        ),
        (
            "Bindings",
            {
                "fields": ("customers", "products"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("last_active_at", "created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display suspension with color coding."""
        if obj.suspended:
            return format_html('<span style="color: orange; font-weight: bold;">SUSPENDED</span>')
        return format_html('<span style="color: green; font-weight: bold;">ACTIVE</span>')

    status_display.short_description = "Status"

    def has_add_permission(self, request):
        """Licenses are issued through the API."""
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("team")
