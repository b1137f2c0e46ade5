"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class TeamException(DomainException):
    """Base exception for team-related errors."""

    pass


class TeamNotFoundError(TeamException):
    """Raised when a team is not found."""

    def __init__(self, message: str = "Team not found"):
        super().__init__(message, code="TEAM_NOT_FOUND")


class InvalidAPIKeyError(TeamException):
    """Raised when an API key is invalid."""

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message, code="INVALID_API_KEY")


class CustomerNotFoundError(TeamException):
    """Raised when referenced customers do not belong to the team."""

    def __init__(self, message: str = "Invalid customerIds"):
        super().__init__(message, code="CUSTOMER_NOT_FOUND")


class ProductNotFoundError(TeamException):
    """Raised when referenced products do not belong to the team."""

    def __init__(self, message: str = "Invalid productIds"):
        super().__init__(message, code="PRODUCT_NOT_FOUND")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseConflictError(LicenseException):
    """Raised when a license key already exists within a team."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="CONFLICT")


class InvalidLicenseDataError(LicenseException):
    """Raised when license attributes are inconsistent."""

    def __init__(self, message: str = "Invalid license data"):
        super().__init__(message, code="INVALID_LICENSE_DATA")


class LicenseKeyGenerationError(LicenseException):
    """Raised when no unique license key could be generated."""

    def __init__(self, message: str = "Failed to generate license key"):
        super().__init__(message, code="LICENSE_KEY_GENERATION_FAILED")


class CryptoError(DomainException):
    """Base exception for cryptographic failures."""

    pass


class EncryptionError(CryptoError):
    """Raised when a license key cannot be encrypted."""

    def __init__(self, message: str = "Encryption failed"):
        super().__init__(message, code="ENCRYPTION_FAILED")


class DecryptionError(CryptoError):
    """Raised when ciphertext is malformed or fails authentication."""

    def __init__(self, message: str = "Decryption failed"):
        super().__init__(message, code="DECRYPTION_FAILED")


class SigningError(CryptoError):
    """Raised when a challenge cannot be signed."""

    def __init__(self, message: str = "Signing failed"):
        super().__init__(message, code="SIGNING_FAILED")
