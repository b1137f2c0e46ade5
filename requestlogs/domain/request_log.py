"""
Request log domain entity.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.domain.value_objects import RequestType, VerdictCode


@dataclass(frozen=True)
class RequestLogEntry:
    """
    One recorded external request.

    ``customer_id`` and ``product_id`` are only set when the request named
    them and they matched the license.
    """

    request_type: RequestType
    code: VerdictCode
    status_code: int
    method: str
    path: str
    created_at: datetime
    team_id: Optional[uuid.UUID] = None
    license_id: Optional[uuid.UUID] = None
    customer_id: Optional[uuid.UUID] = None
    product_id: Optional[uuid.UUID] = None
    client_identifier: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    response_time_ms: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        """Validate request log entry."""
        if self.response_time_ms < 0:
            raise ValueError("Response time cannot be negative")
