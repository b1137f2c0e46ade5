"""
Model registry for the requestlogs app.
"""

from requestlogs.infrastructure.models import RequestLog  # noqa: F401
