"""
A single HTTP call to the Guardian service.
"""

import time
from typing import Any, Generic, Mapping, TypeVar
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests
from loguru import logger

from guardian.exceptions import GuardianException, InvalidArgumentError, ParseError
from guardian.networking.json_converter import JsonConverter

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
HTTP_NO_CONTENT = 204


class ResponseShape(Generic[T]):
    """
    Declares how a successful response body is decoded.

    ``ResponseShape.of(Model)`` parses the body into ``Model``;
    ``NO_CONTENT`` discards the body whatever it contains.
    """

    def __init__(self, model: type[T] | None):
        self.model = model

    @classmethod
    def of(cls, model: type[T]) -> "ResponseShape[T]":
        return cls(model)

    @property
    def discards_body(self) -> bool:
        return self.model is None

    def __repr__(self) -> str:
        if self.discards_body:
            return "ResponseShape(NO_CONTENT)"
        return f"ResponseShape({getattr(self.model, '__name__', self.model)})"


NO_CONTENT: ResponseShape[None] = ResponseShape(None)


def _upsert(target: dict, name: str, value: Any | None) -> None:
    if value is None:
        target.pop(name, None)
    else:
        target[name] = value


class Request(Generic[T]):
    """
    One pending HTTP call: method, URL, headers and either a structured body
    or body parameters.

    All setters return the request itself so calls can be chained::

        request.set_header("Authorization", "Bearer ...").set_parameter("code", otp)

    Passing ``None`` as a value removes the entry.
    """

    def __init__(
        self,
        method: str,
        url: str,
        response_shape: ResponseShape[T],
        converter: JsonConverter,
        session: requests.Session,
        timeout: float | None = None,
        log_bodies: bool = False,
    ):
        self.method = method
        self.url = url
        self.response_shape = response_shape
        self.timeout = timeout
        self._converter = converter
        self._session = session
        self._log_bodies = log_bodies
        self._body: Any | None = None
        self._headers: dict[str, str] = {}
        self._body_parameters: dict[str, Any] = {}
        self._query_parameters: dict[str, str] = {}

    @property
    def headers(self) -> Mapping[str, str]:
        return dict(self._headers)

    @property
    def parameters(self) -> Mapping[str, Any]:
        return dict(self._body_parameters)

    @property
    def query_parameters(self) -> Mapping[str, str]:
        return dict(self._query_parameters)

    @property
    def body(self) -> Any | None:
        return self._body

    def set_header(self, name: str, value: str | None) -> "Request[T]":
        _upsert(self._headers, name, value)
        return self

    def set_query_parameter(self, name: str, value: str | None) -> "Request[T]":
        _upsert(self._query_parameters, name, value)
        return self

    def set_parameter(self, name: str, value: Any | None) -> "Request[T]":
        """
        Set a body parameter.

        Raises:
            InvalidArgumentError: If a structured body was already set
        """
        if self._body is not None:
            raise InvalidArgumentError("Cannot set body and parameters at the same time")
        _upsert(self._body_parameters, name, value)
        return self

    def set_body(self, body: Any) -> "Request[T]":
        """Set a structured body, serialized whole. Takes precedence over parameters."""
        self._body = body
        return self

    def build_url(self) -> str:
        """Target URL with the query parameters appended."""
        if not self._query_parameters:
            return self.url
        scheme, netloc, path, query, fragment = urlsplit(self.url)
        extra = urlencode(self._query_parameters)
        query = f"{query}&{extra}" if query else extra
        return urlunsplit((scheme, netloc, path, query, fragment))

    def _outgoing_body(self) -> bytes | None:
        if self._body is not None:
            return self._converter.serialize(self._body)
        if self._body_parameters:
            return self._converter.serialize(self._body_parameters)
        return None

    def execute(self) -> T | None:
        """
        Send the request and decode the response.

        Returns:
            The decoded body, or None for 204 responses and ``NO_CONTENT`` requests

        Raises:
            GuardianException: If the service returned an error or an undecodable body
            requests.RequestException: If the transport failed, unchanged
        """
        url = self.build_url()
        data = self._outgoing_body()
        headers = dict(self._headers)
        if data is not None and not any(k.lower() == "content-type" for k in headers):
            headers["Content-Type"] = JSON_CONTENT_TYPE

        started = time.monotonic()
        response = self._session.request(
            self.method,
            url,
            headers=headers,
            data=data,
            timeout=self.timeout,
        )
        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.debug(f"{self.method} {url} -> {response.status_code} ({elapsed_ms}ms)")
        if self._log_bodies:
            logger.debug(f"Response body: {response.text[:500]}")

        if 200 <= response.status_code < 300:
            return self._payload_from_response(response)

        raise self._exception_from_error_response(response)

    def _payload_from_response(self, response: requests.Response) -> T | None:
        if response.status_code == HTTP_NO_CONTENT or self.response_shape.discards_body:
            return None
        try:
            return self._converter.parse(self.response_shape.model, response.content)
        except ParseError as e:
            raise GuardianException("Error parsing server response") from e

    def _exception_from_error_response(self, response: requests.Response) -> GuardianException:
        try:
            error = self._converter.parse_map(response.content)
        except ParseError as e:
            exc = GuardianException("Error parsing server error response")
            exc.__cause__ = e
            return exc
        logger.debug(f"Guardian error {response.status_code}: {error.get('errorCode')}")
        return GuardianException.from_error_response(error)
