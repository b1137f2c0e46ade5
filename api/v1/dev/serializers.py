"""
Serializers for the developer API.
"""

from rest_framework import serializers

from core.domain.value_objects import (
    LICENSE_KEY_PATTERN,
    ExpirationStart,
    ExpirationType,
)


class LicenseMetadataSerializer(serializers.Serializer):
    """Serializer for a license metadata entry."""

    key = serializers.CharField(max_length=255)
    value = serializers.CharField(max_length=255, allow_blank=True)
    locked = serializers.BooleanField(required=False, default=False)


class IssueLicenseRequestSerializer(serializers.Serializer):
    """Serializer for issue license request."""

    licenseKey = serializers.RegexField(
        LICENSE_KEY_PATTERN,
        source="license_key",
        required=False,
        error_messages={
            "invalid": "License key must be in the format of XXXXX-XXXXX-XXXXX-XXXXX-XXXXX",
        },
    )
    customerIds = serializers.ListField(
        child=serializers.UUIDField(), source="customer_ids", required=False, default=list
    )
    productIds = serializers.ListField(
        child=serializers.UUIDField(), source="product_ids", required=False, default=list
    )
    expirationType = serializers.ChoiceField(
        choices=[t.value for t in ExpirationType], source="expiration_type"
    )
    expirationDate = serializers.DateTimeField(
        source="expiration_date", required=False, allow_null=True
    )
    expirationDays = serializers.IntegerField(
        source="expiration_days", required=False, allow_null=True, min_value=1
    )
    expirationStart = serializers.ChoiceField(
        choices=[s.value for s in ExpirationStart],
        source="expiration_start",
        required=False,
        allow_null=True,
    )
    ipLimit = serializers.IntegerField(source="ip_limit", required=False, allow_null=True, min_value=1)
    seats = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    suspended = serializers.BooleanField(required=False, default=False)
    metadata = LicenseMetadataSerializer(many=True, required=False, default=list)


class IssuedLicenseResponseSerializer(serializers.Serializer):
    """Serializer for IssuedLicenseDTO."""

    id = serializers.UUIDField()
    teamId = serializers.UUIDField(source="team_id")
    licenseKey = serializers.CharField(source="license_key")
    suspended = serializers.BooleanField()
    expirationType = serializers.CharField(source="expiration_type")
    expirationDate = serializers.DateTimeField(source="expiration_date", allow_null=True)
    expirationDays = serializers.IntegerField(source="expiration_days", allow_null=True)
    expirationStart = serializers.CharField(source="expiration_start")
    ipLimit = serializers.IntegerField(source="ip_limit", allow_null=True)
    seats = serializers.IntegerField(allow_null=True)
    customerIds = serializers.ListField(child=serializers.UUIDField(), source="customer_ids")
    productIds = serializers.ListField(child=serializers.UUIDField(), source="product_ids")
    metadata = LicenseMetadataSerializer(many=True)
    createdAt = serializers.DateTimeField(source="created_at", allow_null=True)
