"""
Guardian SDK exceptions.
"""

from typing import Any

ERROR_INVALID_OTP = "invalid_otp"
ERROR_INVALID_TOKEN = "invalid_token"
ERROR_DEVICE_ACCOUNT_NOT_FOUND = "device_account_not_found"
ERROR_ENROLLMENT_NOT_FOUND = "enrollment_not_found"
ERROR_LOGIN_TRANSACTION_NOT_FOUND = "login_transaction_not_found"
ERROR_ALREADY_ENROLLED = "already_enrolled"


class GuardianError(Exception):
    """Base exception for all Guardian SDK errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(GuardianError):
    """Raised when SDK is misconfigured."""
    pass


class InvalidArgumentError(GuardianError, ValueError):
    """Raised when an operation is called with missing or invalid arguments."""
    pass


class InvalidStateError(GuardianError, RuntimeError):
    """Raised when an operation is not valid for the object's current state."""
    pass


class SerializationError(GuardianError, ValueError):
    """Raised when a value cannot be converted to JSON."""
    pass


class ParseError(GuardianError, ValueError):
    """Raised when a JSON payload is malformed or does not match the expected shape."""
    pass


class GuardianException(GuardianError):
    """
    Error reported by the Guardian service, or a response that could not be decoded.

    When built from a server error body, ``error_response`` holds the raw map and
    ``error_code`` its ``errorCode`` entry. Decode failures carry no error map;
    the underlying failure is chained as ``__cause__``.
    """

    def __init__(self, message: str, error_response: dict[str, Any] | None = None):
        super().__init__(message, details=error_response)
        self.error_response = error_response
        self.error_code = None
        if error_response is not None:
            code = error_response.get("errorCode")
            self.error_code = code if isinstance(code, str) else None

    @classmethod
    def from_error_response(cls, error_response: dict[str, Any]) -> "GuardianException":
        """Build an exception from a decoded ``{"error": ..., "errorCode": ...}`` body."""
        message = error_response.get("error")
        if not isinstance(message, str):
            message = f"Server error ({error_response.get('errorCode', 'unknown')})"
        return cls(message, error_response=error_response)

    @classmethod
    def already_enrolled(cls) -> "GuardianException":
        return cls.from_error_response({
            "error": "Account already has an enrollment",
            "errorCode": ERROR_ALREADY_ENROLLED,
        })

    def is_invalid_otp(self) -> bool:
        """Check if the OTP code was rejected."""
        return self.error_code == ERROR_INVALID_OTP

    def is_invalid_token(self) -> bool:
        """Check if the ticket or transaction token was rejected."""
        return self.error_code == ERROR_INVALID_TOKEN

    def is_enrollment_not_found(self) -> bool:
        """Check if the device account or enrollment no longer exists."""
        return self.error_code in (ERROR_DEVICE_ACCOUNT_NOT_FOUND, ERROR_ENROLLMENT_NOT_FOUND)

    def is_login_transaction_not_found(self) -> bool:
        """Check if the login transaction is unknown or expired."""
        return self.error_code == ERROR_LOGIN_TRANSACTION_NOT_FOUND

    def is_already_enrolled(self) -> bool:
        """Check if the account already has a confirmed enrollment."""
        return self.error_code == ERROR_ALREADY_ENROLLED

    def __repr__(self) -> str:
        if self.error_response is not None:
            return f"GuardianException({self.error_response!r})"
        return f"GuardianException({self.message!r})"
