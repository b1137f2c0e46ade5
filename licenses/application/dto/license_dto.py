"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from licenses.domain.validation import Verdict


@dataclass
class LicenseMetadataDTO:
    """DTO for a license metadata entry."""

    key: str
    value: str
    locked: bool


@dataclass
class IssuedLicenseDTO:
    """
    DTO for a freshly issued license.

    The only place the plaintext key ever leaves the service.
    """

    id: uuid.UUID
    team_id: uuid.UUID
    license_key: str
    suspended: bool
    expiration_type: str
    expiration_date: Optional[datetime]
    expiration_days: Optional[int]
    expiration_start: str
    ip_limit: Optional[int]
    seats: Optional[int]
    customer_ids: List[uuid.UUID]
    product_ids: List[uuid.UUID]
    metadata: List[LicenseMetadataDTO]
    created_at: Optional[datetime]


@dataclass
class ValidationResultDTO:
    """DTO for the outcome of a heartbeat or verify request."""

    verdict: Verdict
    challenge_response: Optional[str] = None


@dataclass
class ValidationAttempt:
    """What a validation resolved before it finished, kept for the request log."""

    team_id: Optional[uuid.UUID] = None
    license_id: Optional[uuid.UUID] = None
    customer_id: Optional[uuid.UUID] = None
    product_id: Optional[uuid.UUID] = None
