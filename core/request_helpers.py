"""
Helpers for reading caller context from HTTP requests.
"""

import ipaddress
from typing import Optional

from django.conf import settings
from django.http import HttpRequest


def _valid_ip(value: str) -> Optional[str]:
    value = value.strip()
    if not value:
        return None
    try:
        return str(ipaddress.ip_address(value))
    except ValueError:
        return None


def get_client_ip(request: HttpRequest) -> Optional[str]:
    """
    Resolve the caller IP address.

    The header named by ``settings.CLIENT_IP_HEADER`` (set by the reverse
    proxy) wins; its first entry is the original client. Falls back to
    ``REMOTE_ADDR``.

    Args:
        request: HTTP request

    Returns:
        Normalised IP address or None when nothing usable was sent
    """
    header = getattr(settings, "CLIENT_IP_HEADER", "HTTP_X_FORWARDED_FOR")
    forwarded = request.META.get(header, "") if header else ""
    if forwarded:
        ip = _valid_ip(forwarded.split(",")[0])
        if ip:
            return ip
    return _valid_ip(request.META.get("REMOTE_ADDR", "") or "")


def get_user_agent(request: HttpRequest) -> Optional[str]:
    """Return the caller user agent, truncated to fit the log column."""
    user_agent = request.META.get("HTTP_USER_AGENT")
    if not user_agent:
        return None
    return user_agent[:512]
