"""
Teams module - tenants of the license service.

This module handles:
- Team entity with its settings and signing key pair
- Customers and products a license can be bound to
- Team API keys for the developer API
- Team repository (port) and Django ORM adapter
"""
