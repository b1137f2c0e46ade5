"""
Heartbeat model.
"""

import uuid

from django.db import models

from heartbeats.domain.heartbeat import MAX_CLIENT_IDENTIFIER_LENGTH


class Heartbeat(models.Model):
    """
    Last check-in of a client device on a license.

    Unique per (license, client_identifier); rows are updated in place and
    never deleted by the validation path.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License", on_delete=models.CASCADE, related_name="heartbeats"
    )
    client_identifier = models.CharField(max_length=MAX_CLIENT_IDENTIFIER_LENGTH)
    last_beat_at = models.DateTimeField()
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "heartbeats"
        ordering = ["-last_beat_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["license", "client_identifier"],
                name="unique_heartbeat_per_client",
            ),
        ]
        indexes = [
            models.Index(fields=["license", "last_beat_at"]),
        ]

    def __str__(self):
        return f"{self.client_identifier} @ {self.last_beat_at}"
