"""
Event handlers for domain events.

These handlers process domain events for side effects like audit logging.
"""

import logging

from core.domain.events import DomainEvent, EventHandler
from heartbeats.domain.events import HeartbeatRecorded
from licenses.domain.events import LicenseDurationStarted, LicenseIssued

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every event it receives to the structured log.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()

    event_bus.subscribe(LicenseIssued, audit_handler)
    event_bus.subscribe(LicenseDurationStarted, audit_handler)
    event_bus.subscribe(HeartbeatRecorded, audit_handler)

    logger.info("Event handlers registered")
