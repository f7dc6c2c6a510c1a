"""Unit tests for TransportAdapter path building and response validation."""

from __future__ import annotations

import pytest
from conftest import BACKEND_URL, INVALID_JSON, FakeTransport, raw_record

from hotzenplotz.services.transport_adapter import TransportAdapter
from hotzenplotz.utils.errors import BackendError, MalformedResponseError, TransportError


class TestBuildPath:
    @pytest.mark.parametrize(
        ("backend_url", "expected"),
        [
            ("https://api.example.com/data", "https://api.example.com/data/venues.json"),
            ("https://api.example.com/data/", "https://api.example.com/data/venues.json"),
            ("", "/venues.json"),
            ("/", "/venues.json"),
            ("/api", "/api/venues.json"),
        ],
    )
    def test_path_is_base_plus_name_json(self, backend_url: str, expected: str) -> None:
        adapter = TransportAdapter(FakeTransport(), backend_url)
        assert adapter.build_path("venues") == expected


class TestFetchRecords:
    @pytest.mark.asyncio
    async def test_returns_raw_records(self, transport: FakeTransport) -> None:
        adapter = TransportAdapter(transport, BACKEND_URL)
        records = await adapter.fetch_records("artists")
        assert records == [raw_record("a1", name="Jeff Mills")]
        assert transport.calls == [f"{BACKEND_URL}artists.json"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [199, 301, 404, 500])
    async def test_non_2xx_raises_backend_error(self, status_code: int) -> None:
        transport = FakeTransport()
        transport.route("venues", [], status_code=status_code)
        adapter = TransportAdapter(transport, BACKEND_URL)

        with pytest.raises(BackendError) as exc_info:
            await adapter.fetch_records("venues")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.path == f"{BACKEND_URL}venues.json"
        assert exc_info.value.collection == "venues"

    @pytest.mark.asyncio
    async def test_any_2xx_is_success(self) -> None:
        transport = FakeTransport()
        transport.route("venues", [], status_code=204)
        adapter = TransportAdapter(transport, BACKEND_URL)
        assert await adapter.fetch_records("venues") == []

    @pytest.mark.asyncio
    async def test_body_not_read_on_error_status(self) -> None:
        transport = FakeTransport()
        transport.route("venues", INVALID_JSON, status_code=500)
        adapter = TransportAdapter(transport, BACKEND_URL)
        with pytest.raises(BackendError):
            await adapter.fetch_records("venues")

    @pytest.mark.asyncio
    async def test_invalid_json_raises_malformed(self) -> None:
        transport = FakeTransport()
        transport.route("venues", INVALID_JSON)
        adapter = TransportAdapter(transport, BACKEND_URL)
        with pytest.raises(MalformedResponseError):
            await adapter.fetch_records("venues")

    @pytest.mark.asyncio
    async def test_non_array_body_raises_malformed(self) -> None:
        transport = FakeTransport()
        transport.route("venues", {"items": []})
        adapter = TransportAdapter(transport, BACKEND_URL)
        with pytest.raises(MalformedResponseError):
            await adapter.fetch_records("venues")

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self) -> None:
        transport = FakeTransport()
        transport.fail("venues")
        adapter = TransportAdapter(transport, BACKEND_URL)
        with pytest.raises(TransportError):
            await adapter.fetch_records("venues")
