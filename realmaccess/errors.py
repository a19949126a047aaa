"""
Error types and error codes for the realm access engine.

Authorization decisions never raise: every unresolved case is a deny.
These errors are reserved for programmer and configuration mistakes,
such as an invalid configuration or a malformed record handed to a
deserializer.
"""

from enum import Enum
from typing import Dict, Any, Optional


class ErrorCode(str, Enum):
    """Standard error codes used across realmaccess."""
    CONFIGURATION_ERROR = "configuration_error"
    INVALID_SESSION = "invalid_session"
    INVALID_ITEM = "invalid_item"
    INTERNAL_ERROR = "internal_error"

    def __str__(self) -> str:
        return self.value


CONFIGURATION_ERROR = ErrorCode.CONFIGURATION_ERROR
INVALID_SESSION = ErrorCode.INVALID_SESSION
INVALID_ITEM = ErrorCode.INVALID_ITEM
INTERNAL_ERROR = ErrorCode.INTERNAL_ERROR


class RealmAccessError(Exception):
    """Base exception for all realmaccess errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "error": str(self.error_code),
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(RealmAccessError):
    """Raised when the access configuration is invalid."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {}) or {}
        if field:
            details["field"] = field
        super().__init__(message, CONFIGURATION_ERROR, details, **kwargs)
        self.field = field


class SessionFormatError(RealmAccessError):
    """Raised when a session or content record cannot be deserialized."""

    def __init__(self, message: str, error_code: ErrorCode = INVALID_SESSION, **kwargs):
        super().__init__(message, error_code, **kwargs)
