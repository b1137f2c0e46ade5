"""
License and license metadata models.
"""
import uuid

from django.core.validators import MinValueValidator
from django.db import models

from core.domain.value_objects import ExpirationStart, ExpirationType


class License(models.Model):
    """
    A license issued by a team.

    The plaintext key is never stored: ``license_key`` holds the AES-GCM
    ciphertext and ``license_key_lookup`` the HMAC used to find the row.
    """

    EXPIRATION_TYPE_CHOICES = [(t.value, t.value.title()) for t in ExpirationType]
    EXPIRATION_START_CHOICES = [(s.value, s.value.title()) for s in ExpirationStart]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey("teams.Team", on_delete=models.CASCADE, related_name="licenses")
    license_key = models.TextField(help_text="Encrypted license key (iv:ciphertext:tag)")
    license_key_lookup = models.CharField(
        max_length=64, help_text="HMAC-SHA256 of key and team, used for lookup"
    )
    suspended = models.BooleanField(default=False)
    expiration_type = models.CharField(
        max_length=10, choices=EXPIRATION_TYPE_CHOICES, default=ExpirationType.NONE.value
    )
    expiration_date = models.DateTimeField(null=True, blank=True)
    expiration_days = models.PositiveIntegerField(
        null=True, blank=True, validators=[MinValueValidator(1)]
    )
    expiration_start = models.CharField(
        max_length=10, choices=EXPIRATION_START_CHOICES, default=ExpirationStart.CREATION.value
    )
    ip_limit = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    seats = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    customers = models.ManyToManyField("teams.Customer", blank=True, related_name="licenses")
    products = models.ManyToManyField("teams.Product", blank=True, related_name="licenses")
    last_active_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["team", "license_key_lookup"], name="unique_license_lookup_per_team"
            ),
        ]
        indexes = [
            models.Index(fields=["team", "created_at"]),
        ]

    def __str__(self):
        return f"License {self.id}"


class LicenseMetadata(models.Model):
    """Free form key/value pair attached to a license."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(License, on_delete=models.CASCADE, related_name="metadata")
    key = models.CharField(max_length=255)
    value = models.CharField(max_length=255)
    locked = models.BooleanField(default=False)

    class Meta:
        db_table = "license_metadata"
        ordering = ["key"]

    def __str__(self):
        return f"{self.key}={self.value}"
