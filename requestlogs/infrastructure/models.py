"""
Request log model.
"""

import uuid

from django.db import models
from django.utils import timezone

from core.domain.value_objects import RequestType, VerdictCode


class RequestLog(models.Model):
    """
    Append-only record of one external license request.

    Distinct ``ip_address`` values of VALID rows are the source of truth
    for IP limits. Rows are never updated by the validation path.
    """

    TYPE_CHOICES = [(t.value, t.value.title()) for t in RequestType]
    CODE_CHOICES = [(c.value, c.value) for c in VerdictCode]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(
        "teams.Team", on_delete=models.CASCADE, null=True, blank=True, related_name="request_logs"
    )
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="request_logs",
    )
    customer = models.ForeignKey(
        "teams.Customer", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    product = models.ForeignKey(
        "teams.Product", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    client_identifier = models.CharField(max_length=1000, null=True, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    method = models.CharField(max_length=10)
    path = models.CharField(max_length=500)
    user_agent = models.CharField(max_length=512, null=True, blank=True)
    status_code = models.PositiveSmallIntegerField()
    code = models.CharField(max_length=32, choices=CODE_CHOICES)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    response_time_ms = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "request_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["license", "code", "created_at"]),
            models.Index(fields=["team", "created_at"]),
        ]

    def __str__(self):
        return f"{self.type} {self.code} {self.created_at:%Y-%m-%d %H:%M:%S}"
