"""Shared pytest fixtures for the hotzenplotz test suite."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import pytest

from hotzenplotz.interfaces.http_transport import IHttpTransport, TransportResponse
from hotzenplotz.models.collection import Item
from hotzenplotz.providers.storage.memory_store import MemoryKeyValueStore
from hotzenplotz.providers.storage.sqlite_store import SQLiteKeyValueStore
from hotzenplotz.utils.errors import TransportError

BACKEND_URL = "https://api.example.com/data/"

# Sentinel body: the loader raises ValueError as a broken JSON payload would.
INVALID_JSON = object()


def raw_record(oid: str, **fields: Any) -> dict[str, Any]:
    """Build a server-shaped record with a nested ``_id.$oid``."""
    return {"_id": {"$oid": oid}, **fields}


def system_records(revision: int) -> list[dict[str, Any]]:
    return [raw_record("sys-1", type="config", revision=revision)]


def persisted_payload(*items: dict[str, Any]) -> str:
    return json.dumps(list(items))


# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


class FakeTransport(IHttpTransport):
    """In-process IHttpTransport keyed by collection name.

    ``calls`` records every requested path.  Set ``gate`` to an unset
    ``asyncio.Event`` to hold all responses until the test releases it.
    """

    def __init__(self, base_url: str = BACKEND_URL) -> None:
        self._base_url = base_url
        self._routes: dict[str, tuple[int, Any]] = {}
        self._failures: set[str] = set()
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    def route(self, name: str, body: Any, status_code: int = 200) -> None:
        self._routes[f"{self._base_url}{name}.json"] = (status_code, body)
        self._failures.discard(name)

    def fail(self, name: str) -> None:
        self._failures.add(f"{self._base_url}{name}.json")

    def calls_for(self, name: str) -> int:
        return self.calls.count(f"{self._base_url}{name}.json")

    async def fetch(self, path: str) -> TransportResponse:
        self.calls.append(path)
        if self.gate is not None:
            await self.gate.wait()
        if path in self._failures:
            raise TransportError(message=f"Connection refused: {path}")
        status_code, body = self._routes.get(path, (404, None))

        def load() -> Any:
            if body is INVALID_JSON:
                raise ValueError("Expecting value: line 1 column 1 (char 0)")
            return json.loads(json.dumps(body))

        return TransportResponse(status_code=status_code, body_loader=load)

    async def aclose(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def transport() -> FakeTransport:
    """Fake transport with a revision-5 system collection and two data collections."""
    fake = FakeTransport()
    fake.route("system", system_records(5))
    fake.route("venues", [raw_record("v1", name="Berghain"), raw_record("v2", name="Tresor")])
    fake.route("artists", [raw_record("a1", name="Jeff Mills")])
    return fake


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def sqlite_store(tmp_path: Path) -> SQLiteKeyValueStore:
    store = SQLiteKeyValueStore(db_path=tmp_path / "cache.db")
    store.initialize()
    return store


@pytest.fixture
def seeded_store() -> MemoryKeyValueStore:
    """Durable store as left by a previous run at system revision 3."""
    return MemoryKeyValueStore(
        {
            "hotzenplotz": json.dumps(["system", "venues", "artists"]),
            "hotzenplotz_system": persisted_payload({"id": "sys-1", "type": "config", "revision": 3}),
            "hotzenplotz_venues": persisted_payload({"id": "v0", "name": "Old Venue"}),
            "hotzenplotz_artists": persisted_payload({"id": "a0", "name": "Old Artist"}),
        }
    )


@pytest.fixture
def sample_items() -> tuple[Item, ...]:
    return (Item(id="v1", name="Berghain"), Item(id="v2", name="Tresor"))
