"""
App configuration for License Validation Service.
"""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class LicenseValidationServiceConfig(AppConfig):
    """App configuration for LicenseValidationService."""

    name = "LicenseValidationService"
    verbose_name = "License Validation Service"

    def ready(self):
        """Wire event handlers and tracing once the app registry is loaded."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if settings.OTEL_ENABLED:
            self.setup_observability()

    def setup_observability(self):
        """Setup OpenTelemetry after apps are ready."""
        from core.instrumentation import setup_opentelemetry

        try:
            setup_opentelemetry()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to setup OpenTelemetry: %s", e)
