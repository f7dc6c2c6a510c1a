"""Public entry point: the :class:`Store` facade.

Wires a :class:`StoreConfig`, an :class:`IHttpTransport` and an optional
:class:`IKeyValueStore` into the collection cache and the revision
reconciler::

    store = Store(StoreConfig(backend_url="https://api.example.com/data",
                              persist_locally=True),
                  transport=HttpxTransport(),
                  storage=SQLiteKeyValueStore("data/cache.db"))
    venues = await store.collection("venues")
    result = await store.ready          # optional: observe reconciliation

Construction never raises because of the network.  The load phase runs
synchronously inside ``__init__``; reconciliation is scheduled as an
asyncio task on the running loop and exposed through :attr:`Store.ready`.
A Store built outside a running loop starts reconciliation the first time
``ready`` or ``collection`` is touched from inside one.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from hotzenplotz.interfaces.http_transport import IHttpTransport
from hotzenplotz.interfaces.key_value_store import IKeyValueStore
from hotzenplotz.models.collection import Collection, LoadStrategy, SystemConfig
from hotzenplotz.models.config import StoreConfig
from hotzenplotz.models.reconciliation import ReconciliationOutcome, ReconciliationResult
from hotzenplotz.services.collection_cache import CollectionCache
from hotzenplotz.services.durable_store_adapter import DurableStoreAdapter
from hotzenplotz.services.revision_reconciler import RevisionReconciler
from hotzenplotz.services.transport_adapter import TransportAdapter
from hotzenplotz.utils.errors import ConfigurationError
from hotzenplotz.utils.logging import enable_debug_logging

logger = structlog.get_logger(logger_name=__name__)


class Store:
    """Read-through cache for named server collections.

    Parameters
    ----------
    config:
        A :class:`StoreConfig` or a plain mapping of its fields.
    transport:
        Network transport used for every fetch.
    storage:
        Durable key-value store.  Required when ``persist_locally`` is set,
        ignored otherwise.
    """

    def __init__(
        self,
        config: StoreConfig | dict[str, Any] | None = None,
        *,
        transport: IHttpTransport,
        storage: IKeyValueStore | None = None,
    ) -> None:
        if not isinstance(config, StoreConfig):
            config = StoreConfig.model_validate(config or {})
        if config.persist_locally and storage is None:
            raise ConfigurationError("persist_locally requires a durable storage adapter")
        if config.debug:
            enable_debug_logging()

        self._config = config
        self._transport = transport
        durable = (
            DurableStoreAdapter(storage, prefix=config.storage_prefix)
            if config.persist_locally and storage is not None
            else None
        )
        self._cache = CollectionCache(
            TransportAdapter(transport, config.backend_url),
            durable,
            deduplicate_requests=config.deduplicate_requests,
        )
        self._reconciler = RevisionReconciler(self._cache, durable, config.system_collection)
        self._ready: asyncio.Task[ReconciliationResult] | None = None

        self._reconciler.load()
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("reconciliation_deferred")
        else:
            self._start_reconciliation()

        logger.debug(
            "store_initialized",
            backend_url=config.backend_url,
            persist_locally=config.persist_locally,
            check_revision=config.check_revision,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def ready(self) -> asyncio.Task[ReconciliationResult]:
        """Handle resolving to the reconciliation result.  Never raises on I/O failure."""
        return self._start_reconciliation()

    @property
    def revision(self) -> int | None:
        """Revision of the ``system`` collection currently held in memory."""
        system = SystemConfig.from_collection(self._cache.peek(self._config.system_collection) or ())
        return system.revision if system else None

    @property
    def persisted_revision(self) -> int | None:
        """Revision found in durable storage at construction time."""
        return self._reconciler.persisted_revision

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def collection(
        self,
        name: str,
        strategy: LoadStrategy = LoadStrategy.CACHE_FIRST,
    ) -> Collection:
        """Return collection *name* according to *strategy*."""
        self._start_reconciliation()
        return await self._cache.get(name, strategy)

    def evict(self, name: str) -> None:
        """Remove *name* from memory and durable storage.  Idempotent."""
        self._cache.evict(name)

    def cached_names(self) -> list[str]:
        return self._cache.names()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        if self._ready is not None and not self._ready.done():
            self._ready.cancel()
        await self._transport.aclose()

    async def __aenter__(self) -> Store:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _start_reconciliation(self) -> asyncio.Task[ReconciliationResult]:
        if self._ready is None:
            self._ready = asyncio.get_running_loop().create_task(self._reconcile())
        return self._ready

    async def _reconcile(self) -> ReconciliationResult:
        if not self._config.check_revision:
            return ReconciliationResult(
                outcome=ReconciliationOutcome.DISABLED,
                persisted_revision=self._reconciler.persisted_revision,
            )
        return await self._reconciler.reconcile()
