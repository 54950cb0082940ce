"""
Shared error handling for the token issuer.
"""

from typing import Dict, Any, Optional


class TokenServiceException(Exception):
    """Base exception for token issuing components."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Render the error as a plain mapping, suitable for structured logs."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(TokenServiceException):
    """Validation-related errors."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class InvalidJTIError(ValidationError):
    """JWT ID is not a UUIDv4 string."""

    def __init__(self, message: str = "JTI must be a UUIDv4 string", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.code = "INVALID_JTI"


class NotConfiguredError(TokenServiceException):
    """An optional claim was read before being set."""

    def __init__(self, message: str = "Value has not been set", details: Optional[Dict[str, Any]] = None):
        super().__init__("NOT_CONFIGURED", message, details)


class SigningError(TokenServiceException):
    """Signing the token could not complete."""

    def __init__(self, message: str = "Token signing failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("SIGNING_ERROR", message, details)
