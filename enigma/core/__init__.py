"""Core components."""

from .config import (
    API_VERSION,
    POLL_INTERVAL,
    POLL_TIMEOUT,
    ROOT_URL,
    ClientConfig,
    build_base_uri,
    redact_url,
)
from .enums import Conjunction, Endpoint, Operation, SortDirection
from .exceptions import (
    APIError,
    ConfigurationError,
    DecodeError,
    EnigmaError,
    ExportCancelledError,
    ExportError,
    ExportNotReadyError,
    QueryConsumedError,
    TransportError,
)
from .params import ParameterSet

__all__ = [
    "API_VERSION",
    "POLL_INTERVAL",
    "POLL_TIMEOUT",
    "ROOT_URL",
    "ClientConfig",
    "build_base_uri",
    "redact_url",
    "Conjunction",
    "Endpoint",
    "Operation",
    "SortDirection",
    "APIError",
    "ConfigurationError",
    "DecodeError",
    "EnigmaError",
    "ExportCancelledError",
    "ExportError",
    "ExportNotReadyError",
    "QueryConsumedError",
    "TransportError",
    "ParameterSet",
]
