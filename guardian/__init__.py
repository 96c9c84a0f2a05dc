"""
Guardian: client SDK for enrolling a second authentication factor.

Supports authenticator-app (TOTP) and SMS enrollments against a Guardian
service: start an enrollment transaction, show the TOTP QR code or send the
SMS, then confirm with the one-time code to obtain a recovery code.
"""

__version__ = "0.1.0"

from guardian.config import GuardianSettings, get_settings
from guardian.enrollment_session import EnrollmentSession
from guardian.enrollment_type import SMS, TOTP, EnrollmentType
from guardian.exceptions import (
    ConfigurationError,
    GuardianError,
    GuardianException,
    InvalidArgumentError,
    InvalidStateError,
    ParseError,
    SerializationError,
)
from guardian.guardian import Guardian
from guardian.models import DeviceAccountStatus, Enrollment, TOTPData
from guardian.transaction import PersistedTransaction, Transaction

__all__ = [
    # Client
    "Guardian",
    "EnrollmentSession",
    # Models
    "Transaction",
    "PersistedTransaction",
    "Enrollment",
    "TOTPData",
    "DeviceAccountStatus",
    "EnrollmentType",
    "TOTP",
    "SMS",
    # Exceptions
    "GuardianError",
    "GuardianException",
    "InvalidArgumentError",
    "InvalidStateError",
    "ConfigurationError",
    "SerializationError",
    "ParseError",
    # Config
    "GuardianSettings",
    "get_settings",
]
