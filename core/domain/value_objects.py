"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum

LICENSE_KEY_PATTERN = re.compile(r"^[A-Z0-9]{5}(?:-[A-Z0-9]{5}){4}$")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class PlaintextLicenseKey(ValueObject):
    """License key as handed to customers: XXXXX-XXXXX-XXXXX-XXXXX-XXXXX."""

    value: str

    def __post_init__(self):
        """Validate license key format."""
        if not self.value or not LICENSE_KEY_PATTERN.match(self.value):
            raise ValueError(
                "License key must be in the format of XXXXX-XXXXX-XXXXX-XXXXX-XXXXX"
            )

    def __str__(self) -> str:
        """Return license key as string."""
        return self.value


class VerdictCode(Enum):
    """Closed set of outcomes of a license validation."""

    BAD_REQUEST = "BAD_REQUEST"
    TEAM_NOT_FOUND = "TEAM_NOT_FOUND"
    LICENSE_NOT_FOUND = "LICENSE_NOT_FOUND"
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    LICENSE_SUSPENDED = "LICENSE_SUSPENDED"
    LICENSE_EXPIRED = "LICENSE_EXPIRED"
    IP_LIMIT_REACHED = "IP_LIMIT_REACHED"
    MAXIMUM_CONCURRENT_SEATS = "MAXIMUM_CONCURRENT_SEATS"
    VALID = "VALID"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

    def __str__(self) -> str:
        """Return code as string."""
        return self.value


class ExpirationType(Enum):
    """How a license expires."""

    NONE = "NONE"
    DATE = "DATE"
    DURATION = "DURATION"

    def __str__(self) -> str:
        """Return expiration type as string."""
        return self.value


class ExpirationStart(Enum):
    """When the clock of a DURATION license starts."""

    CREATION = "CREATION"
    ACTIVATION = "ACTIVATION"

    def __str__(self) -> str:
        """Return expiration start as string."""
        return self.value


class IpLimitPeriod(Enum):
    """Lookback window for counting distinct IP addresses."""

    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"

    @property
    def days(self) -> int:
        """Length of the window in days."""
        return {"DAY": 1, "WEEK": 7, "MONTH": 30}[self.value]

    def __str__(self) -> str:
        """Return period as string."""
        return self.value


class RequestType(Enum):
    """Kind of external request recorded in the request log."""

    VERIFY = "VERIFY"
    HEARTBEAT = "HEARTBEAT"
    DOWNLOAD = "DOWNLOAD"

    def __str__(self) -> str:
        """Return request type as string."""
        return self.value
