"""Startup revision reconciliation.

Runs once per Store, in two phases:

1. :meth:`RevisionReconciler.load` (synchronous, best effort) restores every
   registered collection from durable storage into the cache and captures
   the persisted ``system`` revision as the baseline.  Broken entries are
   logged and skipped; durable storage is advisory, never authoritative.
2. :meth:`RevisionReconciler.reconcile` (asynchronous) fetches ``system``
   server-first and, when a baseline existed and the server revision is
   strictly greater, evicts every other collection.

State machine::

    Uninitialized ─load─▶ LocalStateLoaded | NoLocalState
                  ─reconcile─▶ UNCHANGED | EVICTED | FAILED

Evictions only happen after a successful comparison proves staleness, so a
FAILED run leaves local state exactly as it was.  The fetched ``system``
collection is itself only committed once it carries a usable revision.
"""

from __future__ import annotations

import structlog

from hotzenplotz.models.collection import SYSTEM_COLLECTION, Collection, SystemConfig
from hotzenplotz.models.reconciliation import ReconciliationOutcome, ReconciliationResult
from hotzenplotz.services.collection_cache import CollectionCache
from hotzenplotz.services.durable_store_adapter import DurableStoreAdapter
from hotzenplotz.utils.errors import HotzenplotzError, MalformedResponseError, StorageReadError, StorageWriteError

logger = structlog.get_logger(logger_name=__name__)


class RevisionReconciler:
    """Compares persisted and server ``system`` revisions and evicts stale data."""

    def __init__(
        self,
        cache: CollectionCache,
        storage: DurableStoreAdapter | None = None,
        system_collection: str = SYSTEM_COLLECTION,
    ) -> None:
        self._cache = cache
        self._storage = storage
        self._system_collection = system_collection
        self._persisted_revision: int | None = None

    @property
    def persisted_revision(self) -> int | None:
        return self._persisted_revision

    # ------------------------------------------------------------------
    # Phase 1: load
    # ------------------------------------------------------------------

    def load(self) -> int | None:
        """Restore persisted collections and return the baseline revision."""
        if self._storage is None:
            return None

        try:
            registered = self._storage.read_registry()
        except StorageReadError as exc:
            logger.warning("registry_unreadable", error=str(exc))
            registered = []

        skipped: list[str] = []
        for name in registered:
            try:
                items = self._storage.read_collection(name)
            except StorageReadError as exc:
                logger.warning("persisted_collection_unreadable", collection=name, error=str(exc))
                items = None
            if items is None:
                skipped.append(name)
                continue
            self._cache.restore(name, items)

        if skipped:
            # Keep the registry equal to what is really stored.
            try:
                self._storage.write_registry(self._cache.names())
                for name in skipped:
                    self._storage.remove_collection(name)
            except StorageWriteError as exc:
                logger.warning("registry_repair_failed", skipped=skipped, error=str(exc))

        system = SystemConfig.from_collection(self._cache.peek(self._system_collection) or ())
        self._persisted_revision = system.revision if system else None

        logger.info(
            "local_state_loaded" if self._cache.names() else "no_local_state",
            collections=self._cache.names(),
            skipped=skipped,
            persisted_revision=self._persisted_revision,
        )
        return self._persisted_revision

    # ------------------------------------------------------------------
    # Phase 2: reconcile
    # ------------------------------------------------------------------

    async def reconcile(self) -> ReconciliationResult:
        """Fetch ``system`` server-first and evict stale collections.

        Never raises for fetch failures; they are reported as a FAILED result.
        """
        persisted = self._persisted_revision
        try:
            items = await self._cache.refresh(self._system_collection, self._read_system)
            system = self._read_system(items)
        except HotzenplotzError as exc:
            logger.warning("reconciliation_failed", error=str(exc), persisted_revision=persisted)
            return ReconciliationResult(
                outcome=ReconciliationOutcome.FAILED,
                persisted_revision=persisted,
                error=str(exc),
            )

        current = system.revision
        if persisted is None or current <= persisted:
            logger.info("reconciliation_unchanged", persisted_revision=persisted, current_revision=current)
            return ReconciliationResult(
                outcome=ReconciliationOutcome.UNCHANGED,
                persisted_revision=persisted,
                current_revision=current,
            )

        stale = [name for name in self._cache.names() if name != self._system_collection]
        evicted = self._cache.evict_many(stale)
        logger.info(
            "reconciliation_evicted",
            persisted_revision=persisted,
            current_revision=current,
            evicted=evicted,
        )
        return ReconciliationResult(
            outcome=ReconciliationOutcome.EVICTED,
            persisted_revision=persisted,
            current_revision=current,
            evicted=tuple(evicted),
        )

    def _read_system(self, items: Collection) -> SystemConfig:
        system = SystemConfig.from_collection(items)
        if system is None:
            raise MalformedResponseError(
                message="System collection carries no revision",
                collection=self._system_collection,
            )
        return system
