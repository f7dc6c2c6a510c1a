"""Integration tests: Store over httpx (mocked server) and an on-disk SQLite file.

Each test simulates one or more process lifetimes by building a fresh Store
against the same database file, the way an application restart would.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from hotzenplotz.config.settings import Settings
from hotzenplotz.main import build_store
from hotzenplotz.models.collection import Item, LoadStrategy
from hotzenplotz.models.config import StoreConfig
from hotzenplotz.models.reconciliation import ReconciliationOutcome
from hotzenplotz.providers.storage.sqlite_store import SQLiteKeyValueStore
from hotzenplotz.providers.transport.httpx_transport import HttpxTransport
from hotzenplotz.store import Store
from hotzenplotz.utils.errors import BackendError


class FakeBackend:
    """Tiny JSON backend served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.revision = 1
        self.collections: dict[str, list[dict[str, Any]]] = {
            "venues": [{"_id": {"$oid": "v1"}, "name": "Berghain", "city": "Berlin"}],
            "artists": [{"_id": {"$oid": "a1"}, "name": "Jeff Mills"}],
        }
        self.requests: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        name = request.url.path.removeprefix("/data/").removesuffix(".json")
        if name == "system":
            return httpx.Response(200, json=[{"_id": {"$oid": "sys"}, "type": "config", "revision": self.revision}])
        if name in self.collections:
            return httpx.Response(200, json=self.collections[name])
        return httpx.Response(404, json={"error": "not found"})

    def hits(self, name: str) -> int:
        return self.requests.count(f"/data/{name}.json")


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "cache.db"


def _start(backend: FakeBackend, db_path: Path, **overrides: Any) -> Store:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(backend.handler),
        base_url="https://api.example.com",
    )
    storage = SQLiteKeyValueStore(db_path=db_path)
    storage.initialize()
    config = StoreConfig(backend_url="/data", persist_locally=True, **overrides)
    return Store(config, transport=HttpxTransport(http_client=client), storage=storage)


@pytest.mark.asyncio
async def test_cold_start_fetches_and_persists(backend: FakeBackend, db_path: Path) -> None:
    store = _start(backend, db_path)
    result = await store.ready
    venues = await store.collection("venues")

    assert result.outcome is ReconciliationOutcome.UNCHANGED
    assert result.persisted_revision is None
    assert venues == (Item(id="v1", name="Berghain", city="Berlin"),)

    storage = SQLiteKeyValueStore(db_path=db_path)
    assert json.loads(storage.read("hotzenplotz")) == ["system", "venues"]
    assert json.loads(storage.read("hotzenplotz_venues")) == [{"id": "v1", "name": "Berghain", "city": "Berlin"}]


@pytest.mark.asyncio
async def test_warm_start_serves_from_disk(backend: FakeBackend, db_path: Path) -> None:
    first = _start(backend, db_path)
    await first.ready
    await first.collection("venues")
    await first.aclose()

    second = _start(backend, db_path)
    result = await second.ready
    venues = await second.collection("venues")

    assert result.outcome is ReconciliationOutcome.UNCHANGED
    assert result.persisted_revision == 1
    assert venues == (Item(id="v1", name="Berghain", city="Berlin"),)
    assert backend.hits("venues") == 1
    # System is always refetched at startup.
    assert backend.hits("system") == 2


@pytest.mark.asyncio
async def test_revision_bump_invalidates_persisted_collections(backend: FakeBackend, db_path: Path) -> None:
    first = _start(backend, db_path)
    await first.ready
    await first.collection("venues")
    await first.collection("artists")
    await first.aclose()

    backend.revision = 2
    backend.collections["venues"] = [{"_id": {"$oid": "v2"}, "name": "Tresor", "city": "Berlin"}]

    second = _start(backend, db_path)
    result = await second.ready

    assert result.outcome is ReconciliationOutcome.EVICTED
    assert set(result.evicted) == {"venues", "artists"}
    storage = SQLiteKeyValueStore(db_path=db_path)
    assert json.loads(storage.read("hotzenplotz")) == ["system"]
    assert storage.read("hotzenplotz_venues") is None

    venues = await second.collection("venues")
    assert venues == (Item(id="v2", name="Tresor", city="Berlin"),)
    assert backend.hits("venues") == 2


@pytest.mark.asyncio
async def test_failed_reconciliation_keeps_stale_state(backend: FakeBackend, db_path: Path) -> None:
    first = _start(backend, db_path)
    await first.ready
    await first.collection("venues")
    await first.aclose()

    def offline(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network down", request=request)

    backend.handler = offline  # type: ignore[method-assign]
    second = _start(backend, db_path)
    result = await second.ready

    assert result.outcome is ReconciliationOutcome.FAILED
    assert await second.collection("venues") == (Item(id="v1", name="Berghain", city="Berlin"),)


@pytest.mark.asyncio
async def test_missing_collection_surfaces_backend_error(backend: FakeBackend, db_path: Path) -> None:
    store = _start(backend, db_path)
    await store.ready
    with pytest.raises(BackendError) as exc_info:
        await store.collection("labels", LoadStrategy.SERVER_FIRST)
    assert exc_info.value.status_code == 404
    assert exc_info.value.path == "/data/labels.json"
    assert "labels" not in store.cached_names()


@pytest.mark.asyncio
async def test_build_store_from_settings(tmp_path: Path) -> None:
    settings = Settings(
        backend_url="/data",
        origin="https://api.example.com",
        persist_locally=True,
        store_db_path=str(tmp_path / "built.db"),
        check_revision=False,
    )
    store = build_store(settings)
    try:
        result = await store.ready
        assert result.outcome is ReconciliationOutcome.DISABLED
        assert store.config.backend_url == "/data/"
        assert (tmp_path / "built.db").exists()
    finally:
        await store.aclose()
