"""In-memory collection cache with network fallback and durable write-through.

The cache owns the only mutable map from collection name to Items.  Reads
follow the requested :class:`LoadStrategy`:

- ``CACHE_FIRST`` returns the in-memory entry without any I/O when present.
- ``SERVER_FIRST`` (or a miss) fetches ``<backend_url><name>.json``,
  normalizes every record, replaces the entry wholesale and, when a durable
  store is attached, writes the payload and *then* the registry.

Payload-before-registry ordering means a crash between the two writes can
leave an unregistered payload behind, but never a registered collection
whose payload is missing.  Evictions mirror this by rewriting the registry
before removing payloads.  A failing durable store is logged and otherwise
ignored; memory stays authoritative for the life of the process.

Concurrent ``get`` calls for the same uncached name each hit the network
and the last one to complete wins.  Pass ``deduplicate_requests=True`` to
share one in-flight fetch per name instead.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

import structlog

from hotzenplotz.models.collection import Collection, LoadStrategy
from hotzenplotz.services.durable_store_adapter import DurableStoreAdapter
from hotzenplotz.services.item_normalizer import normalize_records
from hotzenplotz.services.transport_adapter import TransportAdapter
from hotzenplotz.utils.errors import StorageWriteError

logger = structlog.get_logger(logger_name=__name__)


class CollectionCache:
    """Name → Collection map that fetches on miss.

    Parameters
    ----------
    transport:
        Adapter used to fetch raw records.
    storage:
        Durable store adapter.  ``None`` disables persistence.
    deduplicate_requests:
        When True, concurrent fetches of one name share a single request.
    """

    def __init__(
        self,
        transport: TransportAdapter,
        storage: DurableStoreAdapter | None = None,
        *,
        deduplicate_requests: bool = False,
    ) -> None:
        self._transport = transport
        self._storage = storage
        self._deduplicate = deduplicate_requests
        self._collections: dict[str, Collection] = {}
        self._inflight: dict[str, asyncio.Future[Collection]] = {}

    @property
    def persistent(self) -> bool:
        return self._storage is not None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(
        self,
        name: str,
        strategy: LoadStrategy = LoadStrategy.CACHE_FIRST,
    ) -> Collection:
        """Return the collection *name*, fetching it when required.

        Raises
        ------
        ValueError
            If *name* is empty.
        BackendError, TransportError, MalformedResponseError
            When the fetch fails.  The previous entry is left untouched.
        """
        if not name:
            raise ValueError("Collection name must be a non-empty string")
        strategy = LoadStrategy(strategy)

        if strategy is LoadStrategy.CACHE_FIRST:
            cached = self._collections.get(name)
            if cached is not None:
                logger.debug("cache_hit", collection=name)
                return cached
            logger.debug("cache_miss", collection=name)

        if self._deduplicate:
            return await self._fetch_shared(name)
        return await self._fetch(name)

    async def refresh(self, name: str, validate: Callable[[Collection], object]) -> Collection:
        """Fetch *name* server-first, committing it only if *validate* accepts it.

        *validate* receives the normalized items and raises a
        :class:`HotzenplotzError` to reject them.  A rejected or failed fetch
        leaves memory and durable storage exactly as they were.  Never
        joins a shared in-flight request.
        """
        if not name:
            raise ValueError("Collection name must be a non-empty string")
        return await self._fetch(name, validate)

    def peek(self, name: str) -> Collection | None:
        """Return the in-memory entry for *name* without any I/O."""
        return self._collections.get(name)

    def names(self) -> list[str]:
        return list(self._collections)

    def __contains__(self, name: object) -> bool:
        return name in self._collections

    def __len__(self) -> int:
        return len(self._collections)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def restore(self, name: str, items: Collection) -> None:
        """Seed the in-memory map from durable storage.  Writes nothing back."""
        self._collections[name] = items

    def evict(self, name: str) -> None:
        """Drop *name* from memory and durable storage.  Idempotent."""
        removed = self._collections.pop(name, None)
        if self._storage is not None:
            try:
                # Registry first, so it never names a payload that is gone.
                self._storage.write_registry(self._collections)
                self._storage.remove_collection(name)
            except StorageWriteError as exc:
                logger.warning("evict_persist_failed", collection=name, error=str(exc))
        if removed is not None:
            logger.info("collection_evicted", collection=name)

    def evict_many(self, names: Iterable[str]) -> list[str]:
        """Drop every name in *names*, rewriting the registry once before removing payloads.

        Returns the names that were actually held in memory.
        """
        names = list(names)
        evicted = [name for name in names if self._collections.pop(name, None) is not None]
        if self._storage is not None:
            try:
                self._storage.write_registry(self._collections)
                for name in names:
                    self._storage.remove_collection(name)
            except StorageWriteError as exc:
                logger.warning("evict_persist_failed", collections=names, error=str(exc))
        logger.info("collections_evicted", collections=evicted)
        return evicted

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch(
        self,
        name: str,
        validate: Callable[[Collection], object] | None = None,
    ) -> Collection:
        records = await self._transport.fetch_records(name)
        # Normalization and validation fail the whole batch before anything is mutated.
        items = normalize_records(records, collection=name)
        if validate is not None:
            validate(items)

        self._collections[name] = items
        if self._storage is not None:
            try:
                self._storage.write_collection(name, items)
                self._storage.write_registry(self._collections)
            except StorageWriteError as exc:
                logger.warning("persist_failed", collection=name, error=str(exc))

        logger.debug("collection_fetched", collection=name, item_count=len(items))
        return items

    async def _fetch_shared(self, name: str) -> Collection:
        future = self._inflight.get(name)
        if future is None:
            future = asyncio.ensure_future(self._fetch(name))
            self._inflight[name] = future
            future.add_done_callback(lambda done, key=name: self._forget_inflight(key, done))
        else:
            logger.debug("fetch_joined", collection=name)
        # One caller being cancelled must not cancel the shared fetch.
        return await asyncio.shield(future)

    def _forget_inflight(self, name: str, future: asyncio.Future[Collection]) -> None:
        if self._inflight.get(name) is future:
            del self._inflight[name]
