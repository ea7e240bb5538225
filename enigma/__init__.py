"""Enigma Data - async client for a hosted tabular-data query service."""

from .api import DataQuery, ExportJob, ExportQuery, MetaQuery, ParameterSet, StatsQuery
from .client import EnigmaClient
from .core import (
    APIError,
    ClientConfig,
    ConfigurationError,
    Conjunction,
    DecodeError,
    EnigmaError,
    ExportCancelledError,
    ExportError,
    ExportNotReadyError,
    Operation,
    QueryConsumedError,
    SortDirection,
    TransportError,
)
from .models import (
    DataResponse,
    ExportResponse,
    MetaParentNodeResponse,
    MetaTableNodeResponse,
    StatsResponse,
)
from .runtime import ExportPoller, HTTPClient, PollState

__version__ = "0.1.0"

__all__ = [
    "EnigmaClient",
    "ClientConfig",
    # Queries
    "DataQuery",
    "ExportJob",
    "ExportQuery",
    "MetaQuery",
    "ParameterSet",
    "StatsQuery",
    # Enums
    "Conjunction",
    "Operation",
    "SortDirection",
    "PollState",
    # Responses
    "DataResponse",
    "ExportResponse",
    "MetaParentNodeResponse",
    "MetaTableNodeResponse",
    "StatsResponse",
    # Runtime
    "ExportPoller",
    "HTTPClient",
    # Exceptions
    "APIError",
    "ConfigurationError",
    "DecodeError",
    "EnigmaError",
    "ExportCancelledError",
    "ExportError",
    "ExportNotReadyError",
    "QueryConsumedError",
    "TransportError",
]
