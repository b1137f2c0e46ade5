"""
Model registry for the licenses app.
"""

from licenses.infrastructure.models import License, LicenseMetadata  # noqa: F401
