"""
Endpoint calls of the Guardian enrollment API.
"""

from urllib.parse import quote, urljoin

import requests

from guardian.models import StartFlowResponse
from guardian.networking import NO_CONTENT, Request, RequestFactory, ResponseShape


class APIClient:
    """
    Builds the requests for the three enrollment endpoints.

    The client holds no per-enrollment state; every method returns a new,
    not yet executed :class:`~guardian.networking.Request`.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        request_factory: RequestFactory | None = None,
    ):
        self.base_url = base_url
        self.request_factory = request_factory or RequestFactory(session)

    def _resolve(self, path: str) -> str:
        return urljoin(self.base_url, path)

    def start_flow(self, ticket: str) -> Request[StartFlowResponse]:
        """Start an enrollment transaction with an enrollment ticket."""
        return (
            self.request_factory
            .new_request("POST", self._resolve("api/start-flow"), ResponseShape.of(StartFlowResponse))
            .set_header("Authorization", f'Ticket id="{ticket}"')
            .set_parameter("state_transport", "polling")
        )

    def send_enroll_sms(
        self, transaction_token: str, device_account_id: str, phone_number: str
    ) -> Request[None]:
        """Ask the service to text a verification code to ``phone_number``."""
        path = f"api/device-accounts/{quote(device_account_id, safe='')}/sms-enroll"
        return (
            self.request_factory
            .new_request("POST", self._resolve(path), NO_CONTENT)
            .set_header("Authorization", f"Bearer {transaction_token}")
            .set_parameter("phone_number", phone_number)
        )

    def verify_otp(self, transaction_token: str, otp: str) -> Request[None]:
        """Confirm the enrollment with a code typed by the user."""
        return (
            self.request_factory
            .new_request("POST", self._resolve("api/verify-otp"), NO_CONTENT)
            .set_header("Authorization", f"Bearer {transaction_token}")
            .set_parameter("type", "manual_input")
            .set_parameter("code", otp)
        )
