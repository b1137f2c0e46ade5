"""
Model registry for the heartbeats app.
"""

from heartbeats.infrastructure.models import Heartbeat  # noqa: F401
