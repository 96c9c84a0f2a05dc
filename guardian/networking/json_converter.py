"""
JSON conversion for request bodies and service responses.
"""

from functools import lru_cache
from typing import IO, Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from guardian.exceptions import ParseError, SerializationError

T = TypeVar("T")

MAP_SHAPE = dict[str, Any]


@lru_cache(maxsize=64)
def _adapter_for(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


class JsonConverter:
    """
    Converts values to JSON payloads and JSON payloads to typed values.

    Typed parsing goes through pydantic, so ``shape`` may be a model class,
    a generic alias such as ``dict[str, Any]``, or any other type pydantic
    can validate.
    """

    def serialize(self, value: Any) -> bytes:
        """
        Serialize a model, mapping or plain value to compact JSON.

        Raises:
            SerializationError: If the value has no JSON representation
        """
        try:
            return to_json(value)
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise SerializationError(
                f"Couldn't create request body for data: {value!r}"
            ) from e

    def parse(self, shape: type[T] | Any, source: str | bytes | IO) -> T:
        """
        Parse a JSON payload into ``shape``.

        Raises:
            ParseError: If the payload is not valid JSON or does not match ``shape``
        """
        if hasattr(source, "read"):
            source = source.read()
        try:
            return _adapter_for(shape).validate_json(source)
        except ValidationError as e:
            raise ParseError(f"Couldn't parse JSON payload as {shape!r}: {e}") from e

    def parse_map(self, source: str | bytes | IO) -> dict[str, Any]:
        """Parse a JSON object into a plain string-keyed dict."""
        return self.parse(MAP_SHAPE, source)
