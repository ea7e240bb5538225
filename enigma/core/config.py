"""Shared client constants and configuration.

This module centralizes the service root, API version and export polling
policy so the query builders and the poller stay small and focused.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from .enums import Endpoint
from .exceptions import ConfigurationError

# <root>/<version>/<endpoint>/<api key>/<datapath>?<parameters>
ROOT_URL = "https://api.enigma.io"
API_VERSION = "v2"

# Export readiness polling: first wait, doubled after every probe while below the ceiling
POLL_INTERVAL = 10.0
POLL_TIMEOUT = 120.0

ENV_API_KEY = "ENIGMA_API_KEY"
ENV_ROOT_URL = "ENIGMA_ROOT_URL"
ENV_API_VERSION = "ENIGMA_API_VERSION"
ENV_REQUEST_TIMEOUT = "ENIGMA_REQUEST_TIMEOUT"


@dataclass(frozen=True)
class ClientConfig:
    """Connection and polling settings for an EnigmaClient.

    ``request_timeout`` is ``None`` by default: requests are not bounded by a
    client-side deadline unless one is configured.
    """

    root_url: str = ROOT_URL
    version: str = API_VERSION
    request_timeout: float | None = None
    poll_interval: float = POLL_INTERVAL
    poll_timeout: float = POLL_TIMEOUT

    def __post_init__(self) -> None:
        if self.poll_interval <= 0 or self.poll_timeout <= 0:
            raise ConfigurationError(
                "poll_interval and poll_timeout must be positive, "
                f"got {self.poll_interval!r} and {self.poll_timeout!r}"
            )
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigurationError(f"request_timeout must be positive, got {self.request_timeout!r}")

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from ``ENIGMA_*`` environment variables, falling back to defaults."""
        timeout = os.environ.get(ENV_REQUEST_TIMEOUT)
        return cls(
            root_url=os.environ.get(ENV_ROOT_URL, ROOT_URL).rstrip("/"),
            version=os.environ.get(ENV_API_VERSION, API_VERSION),
            request_timeout=float(timeout) if timeout else None,
        )


def build_base_uri(config: ClientConfig, endpoint: Endpoint, key: str) -> str:
    """Assemble the base URI that queries for an endpoint kind are sent to.

    Examples:
        >>> build_base_uri(ClientConfig(), Endpoint.DATA, "secret")
        'https://api.enigma.io/v2/data/secret'
    """
    return "/".join([config.root_url, config.version, endpoint.value, key])


_KEY_SEGMENT = re.compile(r"/(meta|data|stats|export)/[^/?]+")


def redact_url(url: str) -> str:
    """Replace the API key path segment of a request address for logging.

    Examples:
        >>> redact_url("https://api.enigma.io/v2/data/secret/us.gov?limit=1")
        'https://api.enigma.io/v2/data/***/us.gov?limit=1'
    """
    return _KEY_SEGMENT.sub(lambda m: f"/{m.group(1)}/***", url, count=1)
