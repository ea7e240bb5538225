"""Row data, statistics and export response models.

Row and statistic payloads vary per dataset and are kept as opaque JSON;
only the pagination counters in ``info`` are typed.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import Operation


class PageInfo(BaseModel):
    """Pagination and result counters shared by data and stats pages."""

    rows_limit: int = 0
    current_page: int = 0
    total_pages: int = 0
    total_results: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages


class DataResponse(BaseModel):
    """One page of table rows."""

    data_path: str = ""
    result: Any
    info: PageInfo

    model_config = ConfigDict(frozen=True)


class StatsInfo(PageInfo):
    """Page counters plus the statistics that were computed.

    ``column`` is whatever descriptor the server echoes back; its shape is not
    modeled.
    """

    column: Any = None
    operations: list[Operation | str] = Field(default_factory=list)


class StatsResponse(BaseModel):
    """One page of column statistics."""

    data_path: str = ""
    result: Any
    info: StatsInfo

    model_config = ConfigDict(frozen=True)


class ExportResponse(BaseModel):
    """Locator returned when an export is queued."""

    data_path: str = ""
    export_url: str
    head_url: str

    model_config = ConfigDict(frozen=True)


class ErrorInfo(BaseModel):
    additional: str


class ErrorEnvelope(BaseModel):
    """Error body returned with non-success statuses."""

    info: ErrorInfo
