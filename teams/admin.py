"""
Django admin configuration for teams app.
"""

from django.contrib import admin
from django.utils.html import format_html

from teams.infrastructure.models import ApiKey, Customer, KeyPair, Product, Team, TeamSettings


class TeamSettingsInline(admin.StackedInline):
    """Inline settings on the team page."""

    model = TeamSettings
    can_delete = False


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    """Admin interface for Team model."""

    list_display = ["name", "id", "created_at", "deleted_at"]
    list_filter = ["created_at", "deleted_at"]
    search_fields = ["name", "id"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [TeamSettingsInline]


@admin.register(KeyPair)
class KeyPairAdmin(admin.ModelAdmin):
    """Admin interface for KeyPair model. The private key is never displayed."""

    list_display = ["team", "created_at"]
    search_fields = ["team__name"]
    readonly_fields = ["team", "public_key", "created_at"]
    exclude = ["private_key"]

    def has_add_permission(self, request):
        """Key pairs are generated, not typed in."""
        return False


@admin.register(ApiKey)
class ApiKeyAdmin(admin.ModelAdmin):
    """Admin interface for ApiKey model."""

    list_display = [
        "team",
        "name",
        "key_prefix_display",
        "is_valid_display",
        "expires_at",
        "last_used_at",
        "created_at",
    ]
    list_filter = ["expires_at", "created_at", "team"]
    search_fields = ["key_prefix", "name", "team__name"]
    readonly_fields = ["id", "key_prefix", "key_hash", "created_at", "last_used_at"]

    def key_prefix_display(self, obj):
        """Display key prefix with ellipsis."""
        return f"{obj.key_prefix}..."

    key_prefix_display.short_description = "Key Prefix"

    def is_valid_display(self, obj):
        """Display validity status with color."""
        if obj.is_valid():
            return format_html('<span style="color: green;">Valid</span>')
        return format_html('<span style="color: red;">Expired</span>')

    is_valid_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("team")

    def save_model(self, request, obj, form, change):
        """Save model and show raw key if new."""
        super().save_model(request, obj, form, change)
        if not change and hasattr(obj, "_raw_key"):
            self.message_user(
                request,
                f"API Key created! Raw key: {obj._raw_key} "
                "(Save this - it won't be shown again)",
                level="WARNING",
            )


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin interface for Customer model."""

    list_display = ["full_name", "email", "team", "created_at"]
    list_filter = ["team"]
    search_fields = ["full_name", "email", "id"]
    readonly_fields = ["id", "created_at"]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for Product model."""

    list_display = ["name", "team", "created_at"]
    list_filter = ["team"]
    search_fields = ["name", "id"]
    readonly_fields = ["id", "created_at"]
