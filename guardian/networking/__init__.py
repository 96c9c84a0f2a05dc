"""
Guardian networking layer.
"""

from guardian.networking.json_converter import JsonConverter
from guardian.networking.request import NO_CONTENT, Request, ResponseShape
from guardian.networking.request_factory import RequestFactory

__all__ = ["JsonConverter", "Request", "ResponseShape", "NO_CONTENT", "RequestFactory"]
