"""
Shared fixtures for Guardian SDK tests.
"""

import json
from collections import deque
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest
import requests
from requests.structures import CaseInsensitiveDict

BASE_URL = "https://tenant.guardian.example.com/"

START_FLOW_VALID = {
    "transaction_token": "THE_TRANSACTION_TOKEN",
    "device_account": {
        "id": "THE_ENROLLMENT_ID",
        "status": "confirmation_pending",
        "otp_secret": "THE_OTP_SECRET",
        "recovery_code": "THE_RECOVERY_CODE",
    },
}

START_FLOW_CONFIRMED = {
    "transaction_token": "THE_TRANSACTION_TOKEN",
    "device_account": {
        "id": "THE_ENROLLMENT_ID",
        "status": "confirmed",
    },
}


@dataclass
class RecordedCall:
    """One request seen by the fake transport."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    data: bytes | None = None
    timeout: float | None = None

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def query(self) -> dict[str, list[str]]:
        return parse_qs(urlsplit(self.url).query)

    def json(self) -> Any:
        return json.loads(self.data)


class FakeSession:
    """
    Stands in for ``requests.Session``.

    Responses are served in the order they were queued; every call is recorded.
    """

    def __init__(self):
        self.headers = CaseInsensitiveDict()
        self.calls: list[RecordedCall] = []
        self._responses: deque = deque()

    def queue_response(self, status: int, content: bytes | str = b"") -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        response = requests.Response()
        response.status_code = status
        response._content = content
        response.encoding = "utf-8"
        self._responses.append(response)

    def queue_json(self, status: int, payload: Any) -> None:
        self.queue_response(status, json.dumps(payload))

    def queue_empty(self, status: int = 204) -> None:
        self.queue_response(status, b"")

    def queue_error(self, error: Exception) -> None:
        self._responses.append(error)

    def request(self, method, url, headers=None, data=None, timeout=None, **kwargs):
        self.calls.append(RecordedCall(method, url, dict(headers or {}), data, timeout))
        if not self._responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self._responses.popleft()
        if isinstance(response, Exception):
            raise response
        response.url = url
        return response


@pytest.fixture
def fake_session() -> FakeSession:
    """Fake transport session."""
    return FakeSession()


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def start_flow_valid() -> dict:
    return json.loads(json.dumps(START_FLOW_VALID))


@pytest.fixture
def start_flow_confirmed() -> dict:
    return json.loads(json.dumps(START_FLOW_CONFIRMED))
