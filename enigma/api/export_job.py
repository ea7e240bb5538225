"""Handle for a queued export."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import aiohttp

from ..core.config import POLL_INTERVAL, POLL_TIMEOUT, redact_url
from ..core.exceptions import APIError, TransportError
from ..models import ExportResponse
from ..runtime.export_poller import ExportPoller, PollState
from ..runtime.rest.dispatcher import Transport

logger = logging.getLogger(__name__)


class ExportJob:
    """Status and download addresses of an export, plus its readiness poller.

    The poller is created with the job but only runs once ``start_polling()``,
    ``wait_ready()`` or ``download()`` is called (or the export was executed
    with a ready queue).
    """

    def __init__(
        self,
        response: ExportResponse,
        transport: Transport,
        *,
        interval: float = POLL_INTERVAL,
        timeout: float = POLL_TIMEOUT,
        ready: asyncio.Queue[str | None] | None = None,
    ) -> None:
        self.response = response
        self._t = transport
        self._poller = ExportPoller(
            transport,
            response.head_url,
            response.export_url,
            interval=interval,
            timeout=timeout,
            ready=ready,
        )

    @property
    def data_path(self) -> str:
        return self.response.data_path

    @property
    def export_url(self) -> str:
        """Future location of the exported file."""
        return self.response.export_url

    @property
    def head_url(self) -> str:
        """Status URL answering 200 once the file is ready."""
        return self.response.head_url

    @property
    def poller(self) -> ExportPoller:
        return self._poller

    @property
    def state(self) -> PollState:
        return self._poller.state

    def start_polling(self) -> ExportPoller:
        self._poller.start()
        return self._poller

    def cancel(self) -> None:
        self._poller.cancel()

    async def wait_ready(self) -> str:
        """Wait until the file is ready and return its download URL.

        Raises:
            ExportNotReadyError: Polling ceiling reached
            ExportCancelledError: Polling was cancelled
        """
        return await self._poller.wait_ready()

    async def download(self, destination: str | Path, *, wait: bool = True) -> Path:
        """Save the exported gzip file to ``destination``.

        Args:
            destination: Target file path
            wait: Poll for readiness first (default); pass False when the file
                is already known to be ready

        Raises:
            APIError: Download answered with a non-success status
            TransportError: Connection failure during the download
        """
        url = await self.wait_ready() if wait else self.export_url
        logger.debug("Downloading export", extra={"url": redact_url(url), "path": str(destination)})
        try:
            return await self._t.download(url, destination)
        except aiohttp.ClientResponseError as e:
            raise APIError(f"{e.status} {e.message}".strip(), status_code=e.status) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise TransportError(f"Download of {redact_url(url)} failed: {e}", cause=e) from e

    def __repr__(self) -> str:
        return f"ExportJob(export_url={self.export_url!r}, state={self.state.value!r})"
