"""
Guardian SDK models for service responses and enrollment results.
"""

from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


class DeviceAccountStatus(str, Enum):
    """Known states of a server-side enrollment record."""
    CONFIRMATION_PENDING = "confirmation_pending"
    CONFIRMED = "confirmed"


class DeviceAccount(BaseModel):
    """Server-side enrollment record returned by start-flow."""
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    # Unknown statuses are kept as plain strings
    status: DeviceAccountStatus | str | None = None
    otp_secret: str | None = None
    recovery_code: str | None = None

    def is_confirmation_pending(self) -> bool:
        """Check if the record still awaits OTP confirmation."""
        return self.status == DeviceAccountStatus.CONFIRMATION_PENDING


class StartFlowResponse(BaseModel):
    """Response envelope of the start-flow call."""
    model_config = ConfigDict(extra="ignore")

    transaction_token: str | None = None
    device_account: DeviceAccount


class Enrollment(BaseModel):
    """Result of a confirmed enrollment."""
    model_config = ConfigDict(frozen=True)

    recovery_code: str | None = Field(
        None, description="One-time fallback credential for the enrolled account"
    )


def build_totp_uri(secret: str, user: str, issuer: str) -> str:
    """
    Build an ``otpauth://totp`` URI for authenticator apps.

    ``issuer`` and ``user`` are percent-encoded as path segments of the label.
    The query values (``secret`` and ``issuer``) are written as-is.
    """
    label = f"{quote(issuer, safe='')}:{quote(user, safe='')}"
    return f"otpauth://totp/{label}?secret={secret}&issuer={issuer}"


class TOTPData(BaseModel):
    """Parameters an authenticator app needs to generate codes."""
    model_config = ConfigDict(frozen=True)

    secret: str
    algorithm: str = "sha1"
    digits: int = 6
    period: int = 30

    def uri(self, user: str, issuer: str) -> str:
        return build_totp_uri(self.secret, user, issuer)
