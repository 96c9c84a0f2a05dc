"""
Single-ticket enrollment session.
"""

import requests
from loguru import logger

from guardian.api_client import APIClient
from guardian.enrollment_type import EnrollmentType
from guardian.exceptions import GuardianException, InvalidArgumentError, InvalidStateError
from guardian.guardian import is_valid_base_url
from guardian.models import StartFlowResponse, TOTPData
from guardian.transaction import Transaction


class EnrollmentSession:
    """
    Enrollment bound to one ticket, keeping the start-flow result in memory.

    Unlike :class:`guardian.Guardian`, the session itself carries the state
    between ``request_enroll`` and ``confirm_enroll``, so it must live as long
    as the enrollment does. The start-flow call is issued at most once per
    session; asking again (e.g. switching from TOTP to SMS) reuses it.
    """

    def __init__(self, base_url: str, ticket: str, session: requests.Session | None = None):
        if not is_valid_base_url(base_url):
            raise InvalidArgumentError(f"Invalid base URL: {base_url}")
        self.ticket = ticket
        self.api_client = APIClient(base_url, session=session)
        self._start_flow: StartFlowResponse | None = None

    @property
    def transaction(self) -> Transaction | None:
        """Transaction equivalent to this session, once started."""
        if self._start_flow is None:
            return None
        return Transaction(
            transaction_token=self._start_flow.transaction_token,
            recovery_code=self._start_flow.device_account.recovery_code,
            otp_secret=self._start_flow.device_account.otp_secret,
        )

    def request_enroll(self, enrollment_type: EnrollmentType) -> TOTPData | None:
        """
        Start the enrollment, or reuse the one already started.

        Returns:
            The TOTP parameters for ``TOTP()``, None for ``SMS(...)``

        Raises:
            GuardianException: If the account is already enrolled or the service
                returned an error
        """
        if self._start_flow is None:
            self._start_flow = self.api_client.start_flow(self.ticket).execute()
        device_account = self._ensure_valid_transaction()

        if enrollment_type.kind == "sms":
            self.api_client.send_enroll_sms(
                self._start_flow.transaction_token,
                device_account.id,
                enrollment_type.phone_number,
            ).execute()
            logger.debug(f"Enrollment code sent by SMS for device account {device_account.id}")
            return None
        if enrollment_type.kind == "totp":
            if device_account.otp_secret is None:
                raise InvalidStateError("There is no OTP Secret for this transaction")
            return TOTPData(secret=device_account.otp_secret)
        raise InvalidArgumentError(f"Unsupported enrollment type: {enrollment_type!r}")

    def confirm_enroll(self, otp: str) -> str | None:
        """
        Confirm the enrollment.

        Returns:
            The recovery code for the account

        Raises:
            InvalidStateError: If ``request_enroll`` was not called first
        """
        device_account = self._ensure_valid_transaction()
        if otp is None:
            raise InvalidArgumentError("Invalid OTP")
        self.api_client.verify_otp(self._start_flow.transaction_token, otp).execute()
        return device_account.recovery_code

    def _ensure_valid_transaction(self):
        if self._start_flow is None:
            raise InvalidStateError("Enrollment transaction has not been started")
        device_account = self._start_flow.device_account
        if not device_account.is_confirmation_pending():
            raise GuardianException.already_enrolled()
        return device_account
