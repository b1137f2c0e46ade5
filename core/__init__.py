"""
Core module shared by every app.

This module contains:
- Domain events, exceptions and value objects
- Key derivation, encryption and challenge signing
- The in-process event bus
- Middleware and request helpers
"""
