"""
Licenses module - issuance and validation.

This module handles:
- License entity and its expiration rules
- License key generation
- Issuance through the developer API
- The validation pipeline behind heartbeat and verify requests
"""
