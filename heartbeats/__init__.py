"""
Heartbeats module - seat tracking.

This module handles:
- Heartbeat entity (last check-in of a client device on a license)
- Seat tracker (which heartbeats count as active seats)
- Heartbeat repository (port) and Django ORM adapter
- Heartbeat command and handler
"""
