"""
Value types of a license validation: the caller context and the verdict.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import RequestType, VerdictCode

VERDICT_DETAILS = {
    VerdictCode.BAD_REQUEST: "Invalid request",
    VerdictCode.TEAM_NOT_FOUND: "Team not found",
    VerdictCode.LICENSE_NOT_FOUND: "License not found",
    VerdictCode.CUSTOMER_NOT_FOUND: "Customer not found",
    VerdictCode.PRODUCT_NOT_FOUND: "Product not found",
    VerdictCode.LICENSE_SUSPENDED: "License suspended",
    VerdictCode.LICENSE_EXPIRED: "License expired",
    VerdictCode.IP_LIMIT_REACHED: "IP limit reached",
    VerdictCode.MAXIMUM_CONCURRENT_SEATS: "License seat limit reached",
    VerdictCode.INTERNAL_SERVER_ERROR: "Internal server error",
}

VALID_DETAILS = {
    RequestType.HEARTBEAT: "License heartbeat successful",
    RequestType.VERIFY: "License is valid",
    RequestType.DOWNLOAD: "License is valid",
}

VERDICT_HTTP_STATUS = {
    VerdictCode.VALID: 200,
    VerdictCode.BAD_REQUEST: 400,
    VerdictCode.TEAM_NOT_FOUND: 404,
    VerdictCode.LICENSE_NOT_FOUND: 404,
    VerdictCode.CUSTOMER_NOT_FOUND: 404,
    VerdictCode.PRODUCT_NOT_FOUND: 404,
    VerdictCode.LICENSE_SUSPENDED: 403,
    VerdictCode.LICENSE_EXPIRED: 403,
    VerdictCode.IP_LIMIT_REACHED: 403,
    VerdictCode.MAXIMUM_CONCURRENT_SEATS: 403,
    VerdictCode.INTERNAL_SERVER_ERROR: 500,
}


@dataclass(frozen=True)
class ValidationContext:
    """What the calling software sent, plus where it came from."""

    license_key: str
    client_identifier: Optional[str] = None
    ip_address: Optional[str] = None
    customer_id: Optional[uuid.UUID] = None
    product_id: Optional[uuid.UUID] = None
    challenge: Optional[str] = None


@dataclass(frozen=True)
class Verdict:
    """
    Result of a validation as reported to the caller.

    Attributes:
        code: Outcome code
        details: Human readable message
        timestamp: When the verdict was reached
    """

    code: VerdictCode
    details: str
    timestamp: datetime

    @property
    def valid(self) -> bool:
        """True only for VALID."""
        return self.code == VerdictCode.VALID

    @property
    def http_status(self) -> int:
        """HTTP status code that carries this verdict."""
        return VERDICT_HTTP_STATUS[self.code]

    @classmethod
    def of(
        cls,
        code: VerdictCode,
        timestamp: datetime,
        request_type: RequestType = RequestType.HEARTBEAT,
        details: Optional[str] = None,
    ) -> "Verdict":
        """
        Build a verdict with the standard message for its code.

        Args:
            code: Outcome code
            timestamp: When the verdict was reached
            request_type: Selects the success message
            details: Overrides the standard message

        Returns:
            Verdict instance
        """
        if details is None:
            if code == VerdictCode.VALID:
                details = VALID_DETAILS[request_type]
            else:
                details = VERDICT_DETAILS[code]
        return cls(code=code, details=details, timestamp=timestamp)


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Decision of the validation pipeline.

    Attributes:
        code: First failing check, or VALID
        activated_expiration: Expiration date to persist when a DURATION
            license was activated by this request
        matched_customer_id: Supplied customer id, when it matched the license
        matched_product_id: Supplied product id, when it matched the license
    """

    code: VerdictCode
    activated_expiration: Optional[datetime] = None
    matched_customer_id: Optional[uuid.UUID] = None
    matched_product_id: Optional[uuid.UUID] = None

    @property
    def valid(self) -> bool:
        """True only for VALID."""
        return self.code == VerdictCode.VALID
