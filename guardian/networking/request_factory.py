"""
Creates requests bound to a shared transport session.
"""

from typing import TypeVar

import requests

from guardian.networking.json_converter import JsonConverter
from guardian.networking.request import Request, ResponseShape

T = TypeVar("T")

DEFAULT_USER_AGENT = "Guardian-Python-SDK/0.1.0"


class RequestFactory:
    """
    Builds :class:`Request` objects that share one JSON converter and one
    ``requests.Session``.

    The session is the only state shared between requests; it must be safe for
    the caller's concurrency model. No locking is done here.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        log_bodies: bool = False,
    ):
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": user_agent})
        self.session = session
        self.timeout = timeout
        self.log_bodies = log_bodies
        self.converter = JsonConverter()

    def new_request(self, method: str, url: str, response_shape: ResponseShape[T]) -> Request[T]:
        return Request(
            method,
            url,
            response_shape,
            converter=self.converter,
            session=self.session,
            timeout=self.timeout,
            log_bodies=self.log_bodies,
        )
