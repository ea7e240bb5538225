"""Top-level client: one entry point per endpoint kind.

Every factory method returns a fresh builder bound to the endpoint base URI
``<root>/<version>/<endpoint>/<api key>``. The client owns a single HTTPClient
(one aiohttp session) shared by all the queries and export pollers it creates.
Closing the client stops the export pollers it started, then closes that
session.
"""

from __future__ import annotations

import asyncio
import logging
import os
import weakref

from .api import DataQuery, ExportJob, ExportQuery, MetaQuery, StatsQuery
from .core.config import ENV_API_KEY, ClientConfig, build_base_uri
from .core.enums import Endpoint
from .core.exceptions import ConfigurationError
from .runtime import ExportPoller
from .runtime.rest import HTTPClient, RequestDispatcher, Transport

logger = logging.getLogger(__name__)


class EnigmaClient:
    """Client of the tabular-data query service.

    Example:
        >>> async with EnigmaClient("some_api_key") as client:
        ...     page = await client.data("us.gov.whitehouse.visitor-list").limit(10).execute()
        ...     stats = await (
        ...         client.stats("us.gov.whitehouse.visitor-list", "total_people")
        ...         .operation(Operation.SUM)
        ...         .execute()
        ...     )
    """

    def __init__(
        self,
        key: str,
        *,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            key: API key embedded verbatim in every request path
            config: Connection and polling settings (defaults to ClientConfig())
            transport: Optional transport; an HTTPClient is created when omitted
        """
        if not key:
            raise ConfigurationError("An API key is required")
        self._key = key
        self.config = config or ClientConfig()
        self._owns_transport = transport is None
        self._transport: Transport = transport or HTTPClient(timeout=self.config.request_timeout)
        self._dispatcher = RequestDispatcher(self._transport)
        self._pollers: weakref.WeakSet[ExportPoller] = weakref.WeakSet()

    @classmethod
    def from_env(cls, *, transport: Transport | None = None) -> EnigmaClient:
        """Create a client from ``ENIGMA_API_KEY`` and the other ``ENIGMA_*`` variables."""
        key = os.environ.get(ENV_API_KEY)
        if not key:
            raise ConfigurationError(f"{ENV_API_KEY} is not set")
        return cls(key, config=ClientConfig.from_env(), transport=transport)

    def _base_uri(self, endpoint: Endpoint) -> str:
        return build_base_uri(self.config, endpoint, self._key)

    def meta(self) -> MetaQuery:
        """Metadata queries for any datapath."""
        return MetaQuery(self._dispatcher, self._base_uri(Endpoint.META))

    def data(self, datapath: str) -> DataQuery:
        """Row data of a table datapath.

        Large tables may take a while; prefer ``select()`` and ``limit()``.
        """
        return DataQuery(self._dispatcher, self._base_uri(Endpoint.DATA), datapath)

    def stats(self, datapath: str, column: str) -> StatsQuery:
        """Statistics on ``column`` of a table datapath."""
        return StatsQuery(self._dispatcher, self._base_uri(Endpoint.STATS), datapath, column)

    def export(self, datapath: str) -> ExportQuery:
        """Queue an export of a table datapath as a gzip file."""
        return ExportQuery(
            self._dispatcher,
            self._base_uri(Endpoint.EXPORT),
            datapath,
            poll_interval=self.config.poll_interval,
            poll_timeout=self.config.poll_timeout,
            on_job=self._track,
        )

    def _track(self, job: ExportJob) -> None:
        self._pollers.add(job.poller)

    async def close(self) -> None:
        """Stop running export pollers and close the HTTP session if the client created it."""
        pollers = list(self._pollers)
        if pollers:
            logger.debug("Stopping export pollers", extra={"count": len(pollers)})
            await asyncio.gather(*(poller.stop() for poller in pollers))
        if self._owns_transport and isinstance(self._transport, HTTPClient):
            await self._transport.close()

    async def __aenter__(self) -> EnigmaClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"EnigmaClient(root_url={self.config.root_url!r}, version={self.config.version!r})"
