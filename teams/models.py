"""
Model registry for the teams app.
"""

from teams.infrastructure.models import (  # noqa: F401
    ApiKey,
    Customer,
    KeyPair,
    Product,
    Team,
    TeamSettings,
)
