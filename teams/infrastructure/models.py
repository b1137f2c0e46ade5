"""
Team, settings, key pair, API key, customer and product models.
"""

import secrets
import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from core.domain.value_objects import IpLimitPeriod
from core.security.crypto import hash_api_key


class Team(models.Model):
    """
    A tenant of the license service.

    Teams are soft deleted: a team with ``deleted_at`` set is treated as
    missing by every lookup.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, help_text="Team display name")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        db_table = "teams"
        ordering = ["name"]

    def __str__(self):
        return self.name


class TeamSettings(models.Model):
    """Validation settings of a team."""

    IP_LIMIT_PERIOD_CHOICES = [(period.value, period.value.title()) for period in IpLimitPeriod]

    team = models.OneToOneField(
        Team, on_delete=models.CASCADE, primary_key=True, related_name="settings"
    )
    strict_customers = models.BooleanField(default=False)
    strict_products = models.BooleanField(default=False)
    strict_releases = models.BooleanField(default=False)
    heartbeat_timeout = models.PositiveIntegerField(
        default=60,
        validators=[MinValueValidator(1)],
        help_text="Minutes without a heartbeat before a seat is released",
    )
    ip_limit_period = models.CharField(
        max_length=10,
        choices=IP_LIMIT_PERIOD_CHOICES,
        default=IpLimitPeriod.MONTH.value,
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "team_settings"
        verbose_name_plural = "team settings"

    def __str__(self):
        return f"Settings for {self.team.name}"


class KeyPair(models.Model):
    """RSA key pair used to sign heartbeat challenges."""

    team = models.OneToOneField(
        Team, on_delete=models.CASCADE, primary_key=True, related_name="key_pair"
    )
    public_key = models.TextField(help_text="PEM, SubjectPublicKeyInfo")
    private_key = models.TextField(help_text="PEM, PKCS#8")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "team_key_pairs"

    def __str__(self):
        return f"Key pair for {self.team.name}"


class ApiKey(models.Model):
    """
    API keys for team authentication on the developer API.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="api_keys")
    name = models.CharField(max_length=100, blank=True, default="")
    key_prefix = models.CharField(max_length=8, editable=False)
    key_hash = models.CharField(max_length=64, editable=False, unique=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "team_api_keys"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.team.name} - {self.key_prefix}..."

    def save(self, *args, **kwargs):
        """Generate the key on first save; only its hash is stored."""
        if not self.key_hash:
            raw_key = f"api_{secrets.token_urlsafe(32)}"
            self.key_prefix = raw_key[:8]
            self.key_hash = hash_api_key(raw_key)
            # Available on this instance only, never persisted
            self._raw_key = raw_key
        super().save(*args, **kwargs)

    def verify_key(self, raw_key: str) -> bool:
        """
        Verify a raw API key against the stored hash.

        Args:
            raw_key: The raw API key to verify

        Returns:
            True if key matches, False otherwise
        """
        return secrets.compare_digest(self.key_hash, hash_api_key(raw_key))

    def is_valid(self) -> bool:
        """
        Check if the API key is still valid.

        Returns:
            True if key is valid, False if expired
        """
        return not (self.expires_at and self.expires_at < timezone.now())

    def mark_used(self):
        """Update last_used_at timestamp."""
        self.last_used_at = timezone.now()
        self.save(update_fields=["last_used_at"])


class Customer(models.Model):
    """A customer of a team that licenses can be bound to."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="customers")
    full_name = models.CharField(max_length=255, blank=True, default="")
    email = models.EmailField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["team", "email"])]

    def __str__(self):
        return self.full_name or self.email or str(self.id)


class Product(models.Model):
    """A product of a team that licenses can be bound to."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="products")
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]

    def __str__(self):
        return self.name
