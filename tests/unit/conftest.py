"""Shared fixtures for unit tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from enigma.runtime.rest import HTTPResponse

_REASONS = {200: "OK", 404: "Not Found", 500: "Internal Server Error"}


class FakeTransport:
    """In-memory transport recording every request."""

    def __init__(self) -> None:
        self.responses: list[HTTPResponse | BaseException] = []
        self.head_statuses: list[int | BaseException] = []
        self.get_calls: list[str] = []
        self.head_calls: list[str] = []
        self.downloads: list[tuple[str, Path]] = []

    def reply(self, status: int, body: Any, reason: str | None = None) -> None:
        raw = body if isinstance(body, bytes) else json.dumps(body).encode()
        self.responses.append(HTTPResponse(status, reason or _REASONS.get(status, ""), raw))

    def fail(self, error: BaseException) -> None:
        self.responses.append(error)

    async def get(self, url: str) -> HTTPResponse:
        self.get_calls.append(url)
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def head(self, url: str) -> int:
        self.head_calls.append(url)
        item = self.head_statuses.pop(0) if self.head_statuses else 404
        if isinstance(item, BaseException):
            raise item
        return item

    async def download(self, url: str, destination: str | Path) -> Path:
        path = Path(destination)
        path.write_bytes(b"\x1f\x8b")
        self.downloads.append((url, path))
        return path


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def data_page() -> dict[str, Any]:
    return {
        "data_path": "us.gov.whitehouse.visitor-list",
        "result": [{"namefull": "DOE JOHN", "appt_made_date": "2014-01-02"}],
        "info": {"rows_limit": 10, "current_page": 1, "total_pages": 42, "total_results": 420},
    }


@pytest.fixture
def stats_page() -> dict[str, Any]:
    return {
        "data_path": "us.gov.whitehouse.visitor-list",
        "result": {"sum": 1234},
        "info": {
            "column": {"id": "total_people", "type": "int"},
            "operations": ["sum"],
            "rows_limit": 500,
            "current_page": 1,
            "total_pages": 1,
            "total_results": 1,
        },
    }


@pytest.fixture
def export_locator() -> dict[str, Any]:
    return {
        "data_path": "us.gov.whitehouse.visitor-list",
        "export_url": "https://files.example.com/exports/visitor-list.csv.gz",
        "head_url": "https://api.example.com/v2/export/status/abc123",
    }
