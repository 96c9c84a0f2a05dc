"""Tests for the enrollment endpoint requests."""

from guardian.api_client import APIClient
from guardian.models import StartFlowResponse
from guardian.networking import NO_CONTENT, RequestFactory


class TestAPIClient:
    """Test APIClient request building."""

    def setup_method(self):
        self.client = APIClient(
            "https://tenant.guardian.example.com/",
            request_factory=RequestFactory(session=object()),
        )

    def test_start_flow(self):
        """Test start-flow request shape."""
        request = self.client.start_flow("THE_TICKET")

        assert request.method == "POST"
        assert request.url == "https://tenant.guardian.example.com/api/start-flow"
        assert request.headers["Authorization"] == 'Ticket id="THE_TICKET"'
        assert dict(request.parameters) == {"state_transport": "polling"}
        assert request.response_shape.model is StartFlowResponse

    def test_send_enroll_sms(self):
        """Test sms-enroll request shape."""
        request = self.client.send_enroll_sms("TOKEN", "DEVICE_ID", "+15551234")

        assert request.method == "POST"
        assert request.url == "https://tenant.guardian.example.com/api/device-accounts/DEVICE_ID/sms-enroll"
        assert request.headers["Authorization"] == "Bearer TOKEN"
        assert dict(request.parameters) == {"phone_number": "+15551234"}
        assert request.response_shape is NO_CONTENT

    def test_send_enroll_sms_encodes_device_id(self):
        """Test the device account id cannot escape its path segment."""
        request = self.client.send_enroll_sms("TOKEN", "a/b", "+1")

        assert request.url.endswith("/api/device-accounts/a%2Fb/sms-enroll")

    def test_verify_otp(self):
        """Test verify-otp request shape."""
        request = self.client.verify_otp("TOKEN", "123456")

        assert request.method == "POST"
        assert request.url == "https://tenant.guardian.example.com/api/verify-otp"
        assert request.headers["Authorization"] == "Bearer TOKEN"
        assert dict(request.parameters) == {"type": "manual_input", "code": "123456"}
        assert request.response_shape is NO_CONTENT

    def test_paths_resolved_against_base_without_slash(self):
        """Test a base URL without trailing slash resolves to the host root."""
        client = APIClient("https://tenant.guardian.example.com", request_factory=RequestFactory(session=object()))

        assert client.verify_otp("T", "1").url == "https://tenant.guardian.example.com/api/verify-otp"

    def test_execute_uses_session(self, fake_session, start_flow_valid):
        """Test built requests go through the injected session."""
        fake_session.queue_json(201, start_flow_valid)
        client = APIClient("https://tenant.guardian.example.com/", session=fake_session)

        result = client.start_flow("THE_TICKET").execute()

        assert result.transaction_token == "THE_TRANSACTION_TOKEN"
        assert fake_session.calls[0].json() == {"state_transport": "polling"}
