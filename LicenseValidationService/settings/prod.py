"""
Production settings for LicenseValidationService.
"""

import os

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = False

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "").split(",")

# Security settings
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# Secrets must be provided by the environment
SECRET_KEY = os.environ["SECRET_KEY"]
LICENSE_HMAC_KEY = os.environ["LICENSE_HMAC_KEY"]
LICENSE_ENCRYPTION_KEY = os.environ["LICENSE_ENCRYPTION_KEY"]

DATABASES["default"]["CONN_MAX_AGE"] = int(os.environ.get("DB_CONN_MAX_AGE", "60"))  # noqa: F405

LOGGING = get_logging_config(
    "production",
    log_file=os.environ.get("LOG_FILE", "/var/log/license_validation/app.log"),
)
