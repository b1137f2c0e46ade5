"""
Request logs module - append-only record of license requests.

This module handles:
- RequestLog entity
- Request log repository (port) and Django ORM adapter, including the
  distinct IP query behind IP limits
"""
