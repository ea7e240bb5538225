"""Export readiness poller.

When an export is queued the service immediately answers with two
addresses: a status URL that starts answering HEAD requests with 200 once the
file is materialized, and the download URL of the file itself. The poller
probes the status URL in a background task on an exponentially growing
schedule and reports the download URL exactly once when it is ready.

Architecture:
    State machine ``IDLE -> POLLING -> READY | EXHAUSTED | CANCELLED | FAILED``.
    The task never raises for the expected outcomes: it resolves to the
    download URL or ``None``, and ``wait_ready()`` turns ``None`` into the
    matching exception. This keeps a fire-and-forget poller (channel only)
    from leaving unretrieved task exceptions behind. An unexpected error
    from the transport ends in ``FAILED`` and is re-raised to whoever awaits
    the task. Every terminal state pushes exactly one item to the ready queue.

Schedule:
    ``backoff_intervals(base, ceiling)`` yields ``base, 2*base, 4*base, ...``
    while the value is below the ceiling. One probe is made per interval and
    the interval is waited between consecutive probes; no wait follows the
    final probe. With base 10s and ceiling 120s probes run at offsets 0, 10,
    30 and 70 seconds, then the poller is exhausted.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from enum import Enum

import aiohttp

from ..core.config import POLL_INTERVAL, POLL_TIMEOUT, redact_url
from ..core.exceptions import ConfigurationError, ExportCancelledError, ExportNotReadyError
from .rest.dispatcher import Transport

logger = logging.getLogger(__name__)


class PollState(str, Enum):
    """Lifecycle of an export poller."""

    IDLE = "idle"
    POLLING = "polling"
    READY = "ready"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"
    FAILED = "failed"


def backoff_intervals(base: float, ceiling: float) -> Iterator[float]:
    """Yield doubling wait intervals, starting at ``base``, while below ``ceiling``.

    Raises:
        ConfigurationError: ``base`` is not positive (the schedule would never end)

    Examples:
        >>> list(backoff_intervals(10, 120))
        [10, 20, 40, 80]
    """
    if base <= 0:
        raise ConfigurationError(f"Poll interval must be positive, got {base!r}")
    interval = base
    while interval < ceiling:
        yield interval
        interval *= 2


class ExportPoller:
    """Background task waiting for an export file to become downloadable.

    Args:
        transport: Object exposing ``head(url) -> int``
        head_url: Status URL probed with HEAD requests
        export_url: Download URL reported once the probe succeeds
        interval: First wait between probes (seconds, positive)
        timeout: Ceiling the doubling interval is checked against (seconds, positive)
        ready: Optional single-consumer queue; receives the download URL on
            success, or ``None`` when polling ends any other way
    """

    def __init__(
        self,
        transport: Transport,
        head_url: str,
        export_url: str,
        *,
        interval: float = POLL_INTERVAL,
        timeout: float = POLL_TIMEOUT,
        ready: asyncio.Queue[str | None] | None = None,
    ) -> None:
        if interval <= 0 or timeout <= 0:
            raise ConfigurationError(
                f"Poll interval and timeout must be positive, got {interval!r} and {timeout!r}"
            )
        self._t = transport
        self.head_url = head_url
        self.export_url = export_url
        self._interval = interval
        self._timeout = timeout
        self._ready = ready
        self._state = PollState.IDLE
        self._cancel = asyncio.Event()
        self._task: asyncio.Task[str | None] | None = None
        self._probes = 0

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def probes(self) -> int:
        """Number of status probes issued so far."""
        return self._probes

    @property
    def done(self) -> bool:
        return self._state not in (PollState.IDLE, PollState.POLLING)

    def start(self) -> asyncio.Task[str | None]:
        """Start polling in the background (idempotent) and return the task."""
        if self._task is None:
            self._task = asyncio.create_task(self._run(), name=f"export-poller:{self.export_url}")
        return self._task

    def cancel(self) -> None:
        """Ask the poller to stop at its next wait step."""
        self._cancel.set()

    async def stop(self) -> None:
        """Cancel polling and wait for the task to settle."""
        self.cancel()
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def wait_ready(self) -> str:
        """Start polling if needed and wait for the download URL.

        Cancelling the caller does not cancel the poller itself.

        Raises:
            ExportNotReadyError: The ceiling was reached without a ready probe
            ExportCancelledError: ``cancel()`` was called first, or the
                polling task itself was cancelled
        """
        task = self.start()
        try:
            url = await asyncio.shield(task)
        except asyncio.CancelledError:
            # only the poller's own cancellation is reported as an export outcome
            if not task.cancelled():
                raise
            if not self.done:
                # cancelled before its first step ran
                self._finish(PollState.CANCELLED, None)
            url = None
        if url is not None:
            return url
        if self._state == PollState.CANCELLED:
            raise ExportCancelledError("Export polling was cancelled", export_url=self.export_url)
        raise ExportNotReadyError(
            f"Export not ready after {self._probes} probe(s)", export_url=self.export_url
        )

    async def _run(self) -> str | None:
        self._state = PollState.POLLING
        logger.debug("Export polling started", extra={"head_url": redact_url(self.head_url)})
        outcome, url = PollState.FAILED, None
        try:
            previous: float | None = None
            for interval in backoff_intervals(self._interval, self._timeout):
                if previous is not None and await self._wait(previous):
                    outcome = PollState.CANCELLED
                    return None
                if self._cancel.is_set():
                    outcome = PollState.CANCELLED
                    return None
                if await self._probe():
                    outcome, url = PollState.READY, self.export_url
                    return url
                previous = interval
            outcome = PollState.EXHAUSTED
            return None
        except asyncio.CancelledError:
            outcome = PollState.CANCELLED
            raise
        finally:
            self._finish(outcome, url)

    async def _probe(self) -> bool:
        self._probes += 1
        try:
            status = await self._t.head(self.head_url)
        except (aiohttp.ClientError, TimeoutError, OSError) as e:
            logger.debug("Export probe failed", extra={"probe": self._probes, "error": str(e)})
            return False
        logger.debug("Export probe", extra={"probe": self._probes, "status": status})
        return status == 200

    async def _wait(self, interval: float) -> bool:
        """Sleep for ``interval`` unless cancelled first; True means cancelled."""
        try:
            await asyncio.wait_for(self._cancel.wait(), timeout=interval)
        except TimeoutError:
            return False
        return True

    def _finish(self, state: PollState, url: str | None) -> None:
        self._state = state
        if state == PollState.READY:
            logger.info("Export ready", extra={"probes": self._probes})
        elif state == PollState.EXHAUSTED:
            logger.warning(
                "Export polling exhausted before file was ready",
                extra={"probes": self._probes, "ceiling": self._timeout},
            )
        elif state == PollState.CANCELLED:
            logger.info("Export polling cancelled", extra={"probes": self._probes})
        else:
            logger.error("Export polling failed", extra={"probes": self._probes}, exc_info=True)
        if self._ready is None:
            return
        try:
            self._ready.put_nowait(url)
        except asyncio.QueueFull:
            logger.warning(
                "Ready queue is full, export outcome not delivered",
                extra={"state": state.value},
            )
