"""HTTP client helper."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import aiohttp
from yarl import URL


@dataclass(frozen=True)
class HTTPResponse:
    """Status line and raw body of a completed request."""

    status: int
    reason: str
    body: bytes

    @property
    def status_line(self) -> str:
        """Status code and reason phrase, e.g. ``"404 Not Found"``."""
        return f"{self.status} {self.reason}".strip()


class HTTPClient:
    """Async HTTP client wrapper.

    Addresses are passed pre-encoded; they are handed to aiohttp with
    ``encoded=True`` so the query string goes out exactly as built.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def get(self, url: str) -> HTTPResponse:
        """GET request returning status and body without raising on HTTP errors."""
        async with self.session.get(URL(url, encoded=True)) as response:
            body = await response.read()
            return HTTPResponse(status=response.status, reason=response.reason or "", body=body)

    async def head(self, url: str) -> int:
        """HEAD request returning the status code."""
        async with self.session.head(URL(url, encoded=True), allow_redirects=True) as response:
            return response.status

    async def download(self, url: str, destination: str | Path, chunk_size: int = 64 * 1024) -> Path:
        """Stream a file to ``destination`` and return its path.

        The body is written to a sibling ``.part`` file that only replaces
        ``destination`` once the transfer completes; a failed or interrupted
        download leaves nothing behind.
        """
        path = Path(destination)
        partial = path.with_name(f"{path.name}.part")
        try:
            async with self.session.get(URL(url, encoded=True)) as response:
                response.raise_for_status()
                with partial.open("wb") as fh:
                    async for chunk in response.content.iter_chunked(chunk_size):
                        fh.write(chunk)
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
        partial.replace(path)
        return path

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
