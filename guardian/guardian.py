"""
Guardian enrollment client.

Example Usage:
    ```python
    from guardian import Guardian, SMS, TOTP

    guardian = Guardian("https://tenant.guardian.auth0.com/")

    # Start the enrollment with the ticket issued to the user
    transaction = guardian.request_enroll(ticket, TOTP())
    qr_code_uri = transaction.totp_uri("john@example.com", "Example App")

    # ... the user scans the QR code and types the generated code ...
    enrollment = guardian.confirm_enroll(transaction, otp)
    print(enrollment.recovery_code)
    ```
"""

from urllib.parse import urlsplit

import requests
from loguru import logger

from guardian.api_client import APIClient
from guardian.config.settings import GuardianSettings, get_settings
from guardian.enrollment_type import EnrollmentType
from guardian.exceptions import ConfigurationError, GuardianException, InvalidArgumentError
from guardian.models import Enrollment
from guardian.networking import RequestFactory
from guardian.transaction import Transaction

SUPPORTED_KINDS = ("totp", "sms")


def is_valid_base_url(base_url: str | None) -> bool:
    """Check that ``base_url`` is an absolute http(s) URL."""
    if not isinstance(base_url, str):
        return False
    try:
        parts = urlsplit(base_url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


class Guardian:
    """
    Entry point for enrolling a second factor.

    The client keeps no enrollment state between calls. The order of the
    protocol calls is carried by the values it returns: ``request_enroll``
    produces a :class:`Transaction`, which ``confirm_enroll`` consumes.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
        request_factory: RequestFactory | None = None,
    ):
        """
        Initialize Guardian client.

        Args:
            base_url: Base URL of the Guardian service
            session: Transport session shared by every call
            timeout: Transport timeout in seconds for every call
            request_factory: Factory to build requests with, overrides session and timeout

        Raises:
            InvalidArgumentError: If ``base_url`` is not an absolute http(s) URL
        """
        if not is_valid_base_url(base_url):
            raise InvalidArgumentError(f"Invalid base URL: {base_url}")
        if request_factory is None:
            request_factory = RequestFactory(session, timeout=timeout)
        self.api_client = APIClient(base_url, request_factory=request_factory)

    @classmethod
    def from_settings(
        cls,
        settings: GuardianSettings | None = None,
        session: requests.Session | None = None,
    ) -> "Guardian":
        """Create a client from :class:`GuardianSettings` (environment by default)."""
        settings = settings or get_settings()
        if not settings.base_url:
            raise ConfigurationError("GUARDIAN_BASE_URL is not set")
        factory = RequestFactory(
            session,
            timeout=settings.timeout_seconds,
            user_agent=settings.user_agent,
            log_bodies=settings.log_http_bodies,
        )
        return cls(settings.base_url, request_factory=factory)

    def request_enroll(self, ticket: str, enrollment_type: EnrollmentType) -> Transaction:
        """
        Start an enrollment.

        For SMS enrollments the verification code is sent right away.

        Args:
            ticket: Enrollment ticket issued for the user
            enrollment_type: ``TOTP()`` or ``SMS(phone_number)``

        Returns:
            The transaction needed to confirm the enrollment

        Raises:
            InvalidArgumentError: If ticket or enrollment type are missing
            GuardianException: If the account is already enrolled (``already_enrolled``)
                or the service returned an error
        """
        if ticket is None:
            raise InvalidArgumentError("Invalid enrollment ticket")
        kind = getattr(enrollment_type, "kind", None)
        if kind not in SUPPORTED_KINDS:
            raise InvalidArgumentError(f"Unsupported enrollment type: {enrollment_type!r}")

        start_flow = self.api_client.start_flow(ticket).execute()
        device_account = start_flow.device_account
        logger.debug(f"Enrollment started, device account status: {device_account.status}")

        if not device_account.is_confirmation_pending():
            raise GuardianException.already_enrolled()

        if kind == "sms":
            self.api_client.send_enroll_sms(
                start_flow.transaction_token,
                device_account.id,
                enrollment_type.phone_number,
            ).execute()
            logger.debug(f"Enrollment code sent by SMS for device account {device_account.id}")

        return Transaction(
            transaction_token=start_flow.transaction_token,
            recovery_code=device_account.recovery_code,
            otp_secret=device_account.otp_secret,
        )

    def confirm_enroll(self, transaction: Transaction | None, otp: str | None) -> Enrollment:
        """
        Confirm an enrollment with a code generated by the app or received by SMS.

        Args:
            transaction: Transaction returned by :meth:`request_enroll`, possibly restored
            otp: One-time code

        Returns:
            The enrollment, with the recovery code for the account

        Raises:
            InvalidArgumentError: If the transaction, its token or the otp are missing
            GuardianException: If the service rejected the code or the transaction
        """
        if transaction is None or transaction.transaction_token is None:
            raise InvalidArgumentError("Invalid enrollment transaction")
        self.confirm_enroll_with_token(transaction.transaction_token, otp)
        return Enrollment(recovery_code=transaction.recovery_code)

    def confirm_enroll_with_token(self, transaction_token: str | None, otp: str | None) -> None:
        """Confirm an enrollment when only the transaction token was kept."""
        if transaction_token is None:
            raise InvalidArgumentError("Invalid enrollment transaction")
        if otp is None:
            raise InvalidArgumentError("Invalid OTP")

        self.api_client.verify_otp(transaction_token, otp).execute()
        logger.debug("Enrollment confirmed")

    @staticmethod
    def totp_uri(transaction: Transaction, user: str, issuer: str) -> str:
        """Shortcut for :meth:`Transaction.totp_uri`. No network call."""
        return transaction.totp_uri(user, issuer)
