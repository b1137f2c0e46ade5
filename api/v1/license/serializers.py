"""
Serializers for the license validation endpoints.

Field names follow the camelCase wire format used by client SDKs.
"""

from rest_framework import serializers

from core.domain.value_objects import LICENSE_KEY_PATTERN
from heartbeats.domain.heartbeat import MAX_CLIENT_IDENTIFIER_LENGTH

NO_SPACES = r"^[^\s]+$"


class LicenseValidationRequestSerializer(serializers.Serializer):
    """Serializer for a verify request; clientIdentifier is optional."""

    licenseKey = serializers.RegexField(
        LICENSE_KEY_PATTERN,
        source="license_key",
        error_messages={
            "invalid": "License key must be in the format of XXXXX-XXXXX-XXXXX-XXXXX-XXXXX",
        },
    )
    clientIdentifier = serializers.RegexField(
        NO_SPACES,
        source="client_identifier",
        required=False,
        min_length=10,
        max_length=MAX_CLIENT_IDENTIFIER_LENGTH,
        error_messages={"invalid": "Client identifier must not contain spaces"},
    )
    customerId = serializers.UUIDField(source="customer_id", required=False)
    productId = serializers.UUIDField(source="product_id", required=False)
    challenge = serializers.RegexField(
        NO_SPACES,
        required=False,
        max_length=1000,
        error_messages={"invalid": "Challenge must not contain spaces"},
    )

    def validate(self, attrs):
        unknown = set(self.initial_data) - set(self.fields)
        if unknown:
            raise serializers.ValidationError("Invalid payload")
        return attrs


class HeartbeatRequestSerializer(LicenseValidationRequestSerializer):
    """Serializer for a heartbeat request; clientIdentifier is required."""

    clientIdentifier = serializers.RegexField(
        NO_SPACES,
        source="client_identifier",
        min_length=10,
        max_length=MAX_CLIENT_IDENTIFIER_LENGTH,
        error_messages={"invalid": "Client identifier must not contain spaces"},
    )
    challenge = serializers.RegexField(
        NO_SPACES,
        required=False,
        min_length=10,
        max_length=1000,
        error_messages={"invalid": "Challenge must not contain spaces"},
    )


class VerdictSerializer(serializers.Serializer):
    """Serializer for the verdict block of a validation response."""

    timestamp = serializers.DateTimeField()
    valid = serializers.BooleanField()
    details = serializers.CharField()
    code = serializers.CharField()


class LicenseValidationResponseSerializer(serializers.Serializer):
    """Serializer for heartbeat and verify responses."""

    result = VerdictSerializer()
    challengeResponse = serializers.CharField(required=False)
