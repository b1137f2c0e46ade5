"""
RecordHeartbeatCommand.

Command sent by a running client to validate its license and hold a seat.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class RecordHeartbeatCommand:
    """Command to record a heartbeat of one client."""

    team_id: uuid.UUID
    license_key: str
    client_identifier: str
    ip_address: Optional[str] = None
    customer_id: Optional[uuid.UUID] = None
    product_id: Optional[uuid.UUID] = None
    challenge: Optional[str] = None
    method: str = "POST"
    path: str = ""
    user_agent: Optional[str] = None
