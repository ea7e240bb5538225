"""Unit tests for EnigmaClient factories and lifecycle."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from enigma import (
    ClientConfig,
    ConfigurationError,
    DataQuery,
    EnigmaClient,
    ExportCancelledError,
    ExportQuery,
    HTTPClient,
    MetaQuery,
    PollState,
    SortDirection,
    StatsQuery,
)
from enigma.runtime.rest import HTTPResponse

VISITORS = "us.gov.whitehouse.visitor-list"


class TestFactories:
    """Test builder factories and base URIs."""

    def test_requires_key(self):
        with pytest.raises(ConfigurationError):
            EnigmaClient("")

    def test_meta(self, transport):
        client = EnigmaClient("k", transport=transport)
        meta = client.meta()
        assert isinstance(meta, MetaQuery)
        assert meta.url_for(VISITORS) == f"https://api.enigma.io/v2/meta/k/{VISITORS}"
        assert not hasattr(meta, "params")

    def test_data(self, transport):
        query = EnigmaClient("k", transport=transport).data(VISITORS)
        assert isinstance(query, DataQuery)
        assert query.url == f"https://api.enigma.io/v2/data/k/{VISITORS}"

    def test_stats_selects_column(self, transport):
        query = EnigmaClient("k", transport=transport).stats(VISITORS, "total_people")
        assert isinstance(query, StatsQuery)
        assert query.url == f"https://api.enigma.io/v2/stats/k/{VISITORS}?select=total_people"

    def test_export_uses_config_polling(self, transport):
        config = ClientConfig(poll_interval=1.0, poll_timeout=4.0)
        query = EnigmaClient("k", config=config, transport=transport).export(VISITORS)
        assert isinstance(query, ExportQuery)
        assert query._poll_interval == 1.0
        assert query._poll_timeout == 4.0

    def test_custom_root(self, transport):
        config = ClientConfig(root_url="http://localhost:9000", version="v3")
        query = EnigmaClient("k", config=config, transport=transport).data("t")
        assert query.url == "http://localhost:9000/v3/data/k/t"

    def test_builders_are_independent(self, transport):
        client = EnigmaClient("k", transport=transport)
        first = client.data(VISITORS).limit(1)
        second = client.data(VISITORS)
        assert first.params.getall("limit") == ["1"]
        assert second.params.getall("limit") == []

    def test_repr_hides_key(self, transport):
        assert "secret" not in repr(EnigmaClient("secret", transport=transport))


class TestFromEnv:
    def test_reads_key(self, monkeypatch, transport):
        monkeypatch.setenv("ENIGMA_API_KEY", "envkey")
        client = EnigmaClient.from_env(transport=transport)
        assert client.data("t").url.startswith("https://api.enigma.io/v2/data/envkey/")

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("ENIGMA_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            EnigmaClient.from_env()


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_owned_http_client_closed(self):
        client = EnigmaClient("k")
        assert isinstance(client._transport, HTTPClient)
        client._transport.close = AsyncMock()

        async with client:
            pass

        client._transport.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_injected_transport_not_closed(self):
        http = HTTPClient()
        http.close = AsyncMock()

        async with EnigmaClient("k", transport=http):
            pass

        http.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_stops_running_export_pollers(self, transport, export_locator):
        transport.reply(200, export_locator)

        async with EnigmaClient("k", transport=transport) as client:
            job = await client.export(VISITORS).execute(poll=True)
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            assert job.state == PollState.POLLING

        assert job.state == PollState.CANCELLED
        assert job.poller.probes == 1
        await asyncio.sleep(0.05)
        assert len(transport.head_calls) == 1

    @pytest.mark.asyncio
    async def test_close_stops_pollers_before_closing_session(self, export_locator):
        client = EnigmaClient("k")
        http = client._transport
        states = []

        async def fake_get(url):
            return HTTPResponse(200, "OK", json.dumps(export_locator).encode())

        async def fake_head(url):
            return 404

        async def record_close():
            states.append(job.state)

        http.get = fake_get
        http.head = fake_head
        http.close = record_close

        job = await client.export(VISITORS).execute(poll=True)
        await asyncio.sleep(0)
        await client.close()

        assert states == [PollState.CANCELLED]

    @pytest.mark.asyncio
    async def test_unstarted_job_is_cancelled_by_close(self, transport, export_locator):
        transport.reply(200, export_locator)

        async with EnigmaClient("k", transport=transport) as client:
            job = await client.export(VISITORS).execute()

        with pytest.raises(ExportCancelledError):
            await job.wait_ready()
        assert transport.head_calls == []


@pytest.mark.asyncio
async def test_end_to_end_data_query(transport, data_page):
    transport.reply(200, data_page)

    async with EnigmaClient("k", transport=transport) as client:
        page = await (
            client.data(VISITORS)
            .select("namefull", "appt_made_date")
            .sort("namefirst", SortDirection.DESC)
            .limit(10)
            .execute()
        )

    assert page.result[0]["namefull"] == "DOE JOHN"
    assert transport.get_calls == [
        f"https://api.enigma.io/v2/data/k/{VISITORS}"
        "?select=namefull%2Cappt_made_date&sort=namefirst-&limit=10"
    ]
