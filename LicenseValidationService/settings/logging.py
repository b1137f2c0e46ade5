"""
Logging configuration for structured JSON logging.

Every record is rendered as one JSON object on stdout, carrying the active
OpenTelemetry trace and span ids when a span is recording.
"""

import sys

from opentelemetry import trace
from pythonjsonlogger import jsonlogger

LOCAL_APPS = ("core", "api", "teams", "licenses", "heartbeats", "requestlogs")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds trace context."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format(span_context.trace_id, "032x")
            log_record["span_id"] = format(span_context.span_id, "016x")


def get_logging_config(environment: str = "development", log_file: str = None) -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production)
        log_file: Optional path of a rotating JSON log file

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"
    handlers = ["console"]

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d",
            },
            "verbose": {
                "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": handlers,
            "level": log_level,
        },
        "loggers": {
            "django": {
                "handlers": handlers,
                "level": "INFO",
                "propagate": False,
            },
            "django.request": {
                "handlers": handlers,
                "level": "WARNING",
                "propagate": False,
            },
            "django.db.backends": {
                "handlers": handlers,
                "level": "WARNING",
                "propagate": False,
            },
        },
    }

    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json",
            "filename": log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
        }
        handlers.append("file")

    for app in LOCAL_APPS:
        config["loggers"][app] = {
            "handlers": handlers,
            "level": log_level,
            "propagate": False,
        }

    return config
