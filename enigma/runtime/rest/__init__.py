"""REST runtime abstractions."""

from .dispatcher import RequestDispatcher, Transport, build_url
from .http_client import HTTPClient, HTTPResponse

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "RequestDispatcher",
    "Transport",
    "build_url",
]
