"""Fluent query builders for the four endpoint kinds.

Architecture:
    Every builder wraps the same private storage (dispatcher, endpoint base
    URI, datapath, ParameterSet) but exposes only the setters its endpoint
    understands. Shared setters live in small mixins so each public class
    composes exactly the surface it needs:

    - MetaQuery: no setters, datapath supplied per call
    - DataQuery: select, search, where, conjunction, sort(column, direction), page, limit
    - StatsQuery: limit, search, where, conjunction, operation, by, of, sort(direction), page
    - ExportQuery: select, search, where, conjunction, sort(column, direction), page

Design Decisions:
    - Setters only append to the ParameterSet and return ``self``
    - Nothing is validated locally; operators, columns and page ranges are
      checked by the server and surface as APIError
    - Data, Stats and Export queries are one-shot: the terminal call consumes
      the query and a second call raises QueryConsumedError

Example:
    >>> async with EnigmaClient("key") as client:
    ...     page = await (
    ...         client.data("us.gov.whitehouse.visitor-list")
    ...         .select("namefull", "appt_made_date")
    ...         .sort("namefirst", SortDirection.DESC)
    ...         .limit(10)
    ...         .execute()
    ...     )
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Self, TypeVar

from multidict import MultiDictProxy
from pydantic import BaseModel

from ..core.config import POLL_INTERVAL, POLL_TIMEOUT
from ..core.enums import Conjunction, Operation, SortDirection, wire_value
from ..core.exceptions import QueryConsumedError
from ..core.params import ParameterSet
from ..models import (
    DataResponse,
    ExportResponse,
    MetaParentNodeResponse,
    MetaTableNodeResponse,
    StatsResponse,
)
from ..runtime.rest.dispatcher import RequestDispatcher, build_url
from .export_job import ExportJob

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class _Query:
    """Storage shared by every query kind."""

    def __init__(self, dispatcher: RequestDispatcher, base_uri: str, datapath: str) -> None:
        self._dispatcher = dispatcher
        self._base_uri = base_uri
        self._datapath = datapath
        self._params = ParameterSet()
        self._consumed = False

    @property
    def datapath(self) -> str:
        return self._datapath

    @property
    def params(self) -> MultiDictProxy[str]:
        """Read-only view of the accumulated parameters."""
        return self._params.view()

    @property
    def url(self) -> str:
        """Address the terminal call will request."""
        return build_url(self._base_uri, self._datapath, self._params)

    def _add(self, key: str, value: str) -> Self:
        self._params.add(key, value)
        return self

    async def _execute(self, model: type[ModelT]) -> ModelT:
        if self._consumed:
            raise QueryConsumedError(
                f"{type(self).__name__} for {self._datapath!r} has already been executed"
            )
        self._consumed = True
        return await self._dispatcher.dispatch(self._base_uri, self._datapath, self._params, model)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(datapath={self._datapath!r}, params={self._params!r})"


class _FilterMixin:
    """search / where / conjunction / page, shared by data, stats and export."""

    def search(self, query: str) -> Self:
        """Only return rows that match a search query.

        Searches the whole table by default. Use ``"@fieldname query"`` to
        search particular fields, and ``"query1|query2"`` to match either query
        within a single parameter. May be called several times.
        """
        return self._add("search", query)

    def where(self, clause: str) -> Self:
        """Filter with a SQL-style clause on numerical or date columns.

        Formats: ``<column><operator><value>`` with ``>=, >, =, !=, <, <=``;
        ``<column> [not] in (<value>,...)``;
        ``<column> [not] between <value> and <value>``. May be called several
        times.
        """
        return self._add("where", clause)

    def conjunction(self, conjunction: Conjunction | str) -> Self:
        """How several search or where clauses combine. Server default is AND."""
        return self._add("conjunction", wire_value(conjunction))

    def page(self, number: int) -> Self:
        """Return the nth page of results, sized by the current limit (server default 500)."""
        return self._add("page", str(number))


class _ColumnsMixin:
    """select(*columns) / sort(column, direction), shared by data and export."""

    def select(self, *columns: str) -> Self:
        """Columns returned with each row, sent as one comma-joined value."""
        return self._add("select", ",".join(columns))

    def sort(self, column: str, direction: SortDirection | str = SortDirection.ASC) -> Self:
        """Sort rows by ``column`` in ``direction``."""
        return self._add("sort", column + wire_value(direction))


class MetaQuery:
    """Metadata requests for any datapath.

    Unlike the other kinds this query has no setters and no datapath of its
    own: each fetch names the datapath it describes, and the query can be
    reused for any number of fetches.
    """

    def __init__(self, dispatcher: RequestDispatcher, base_uri: str) -> None:
        self._dispatcher = dispatcher
        self._base_uri = base_uri
        self._params = ParameterSet()

    def url_for(self, datapath: str) -> str:
        """Address a fetch for ``datapath`` will request."""
        return build_url(self._base_uri, datapath, self._params)

    async def fetch_parent_node(self, datapath: str) -> MetaParentNodeResponse:
        """Metadata of an intermediate catalog node."""
        return await self._dispatcher.dispatch(
            self._base_uri, datapath, self._params, MetaParentNodeResponse
        )

    async def fetch_table_node(self, datapath: str) -> MetaTableNodeResponse:
        """Metadata (columns, documents, boundary) of a table."""
        return await self._dispatcher.dispatch(
            self._base_uri, datapath, self._params, MetaTableNodeResponse
        )

    def __repr__(self) -> str:
        return "MetaQuery()"


class DataQuery(_ColumnsMixin, _FilterMixin, _Query):
    """Row data from a table datapath, filtered, sorted and paginated."""

    def limit(self, number: int) -> Self:
        """Maximum rows returned (server max and default 500)."""
        return self._add("limit", str(number))

    async def execute(self) -> DataResponse:
        return await self._execute(DataResponse)


class StatsQuery(_FilterMixin, _Query):
    """Statistics on one column of a table datapath.

    The column is mandatory and selected when the query is created.
    """

    def __init__(
        self, dispatcher: RequestDispatcher, base_uri: str, datapath: str, column: str
    ) -> None:
        super().__init__(dispatcher, base_uri, datapath)
        self._add("select", column)

    def limit(self, number: int) -> Self:
        """Maximum frequency, compound sum or compound average results (server max 500)."""
        return self._add("limit", str(number))

    def operation(self, operation: Operation | str) -> Self:
        """Statistic to compute. Defaults to every operation valid for the column type."""
        return self._add("operation", wire_value(operation))

    def by(self, operation: Operation | str) -> Self:
        """Compound operation (sum or avg) run against the column given to ``of``."""
        return self._add("by", wire_value(operation))

    def of(self, column: str) -> Self:
        """Numerical column compared against when running a compound operation."""
        return self._add("of", column)

    def sort(self, direction: SortDirection | str) -> Self:
        """Sort the calculation results; the column is the selected one."""
        return self._add("sort", wire_value(direction))

    async def execute(self) -> StatsResponse:
        return await self._execute(StatsResponse)


class ExportQuery(_ColumnsMixin, _FilterMixin, _Query):
    """Queue an export of a table datapath as a downloadable gzip file."""

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        base_uri: str,
        datapath: str,
        *,
        poll_interval: float = POLL_INTERVAL,
        poll_timeout: float = POLL_TIMEOUT,
        on_job: Callable[[ExportJob], None] | None = None,
    ) -> None:
        super().__init__(dispatcher, base_uri, datapath)
        self._poll_interval = poll_interval
        self._poll_timeout = poll_timeout
        self._on_job = on_job

    async def execute(
        self,
        ready: asyncio.Queue[str | None] | None = None,
        *,
        poll: bool = False,
    ) -> ExportJob:
        """Queue the export and return its job handle.

        The download URL is available on the handle immediately; the file
        itself may not exist yet. Passing a ``ready`` queue (or ``poll=True``)
        starts the readiness poller in the background: the queue later
        receives the download URL once, or ``None`` if polling ends without
        the file being ready.

        Example:
            >>> ready = asyncio.Queue()
            >>> job = await client.export("us.gov.whitehouse.visitor-list").execute(ready)
            >>> download_url = await ready.get()
        """
        response = await self._execute(ExportResponse)
        job = ExportJob(
            response,
            self._dispatcher.transport,
            interval=self._poll_interval,
            timeout=self._poll_timeout,
            ready=ready,
        )
        logger.debug("Export queued", extra={"datapath": self._datapath})
        if self._on_job is not None:
            self._on_job(job)
        if ready is not None or poll:
            job.start_polling()
        return job
