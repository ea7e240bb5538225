"""Runtime: request dispatch and export polling."""

from .export_poller import ExportPoller, PollState, backoff_intervals
from .rest import HTTPClient, HTTPResponse, RequestDispatcher, Transport, build_url

__all__ = [
    "ExportPoller",
    "HTTPClient",
    "HTTPResponse",
    "PollState",
    "RequestDispatcher",
    "Transport",
    "backoff_intervals",
    "build_url",
]
