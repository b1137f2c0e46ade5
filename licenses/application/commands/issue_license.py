"""
IssueLicenseCommand.

Command to issue a new license for a team.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from core.domain.value_objects import ExpirationStart, ExpirationType
from licenses.domain.license import LicenseMetadataEntry


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a license.

    When ``license_key`` is omitted a key is generated.
    """

    team_id: uuid.UUID
    license_key: Optional[str] = None
    customer_ids: List[uuid.UUID] = field(default_factory=list)
    product_ids: List[uuid.UUID] = field(default_factory=list)
    expiration_type: ExpirationType = ExpirationType.NONE
    expiration_date: Optional[datetime] = None
    expiration_days: Optional[int] = None
    expiration_start: Optional[ExpirationStart] = None
    ip_limit: Optional[int] = None
    seats: Optional[int] = None
    suspended: bool = False
    metadata: List[LicenseMetadataEntry] = field(default_factory=list)
