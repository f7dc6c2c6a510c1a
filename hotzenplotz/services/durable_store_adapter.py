"""Namespacing and serialization on top of an :class:`IKeyValueStore`.

Key layout (``prefix`` defaults to ``"hotzenplotz"``)::

    hotzenplotz              → JSON array of persisted collection names
    hotzenplotz_<name>       → JSON array of normalized Items

The first key is the registry.  It lets a cold start ask "which collections
exist" without enumerating the whole keyspace, so it must always match the
set of collection keys actually written.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

import structlog
from pydantic import ValidationError

from hotzenplotz.interfaces.key_value_store import IKeyValueStore
from hotzenplotz.models.collection import Collection, Item
from hotzenplotz.models.config import DEFAULT_STORAGE_PREFIX
from hotzenplotz.utils.errors import StorageReadError

logger = structlog.get_logger(logger_name=__name__)


class DurableStoreAdapter:
    """Reads and writes collections and the registry under one prefix."""

    def __init__(self, store: IKeyValueStore, prefix: str = DEFAULT_STORAGE_PREFIX) -> None:
        self._store = store
        self._prefix = prefix

    @property
    def registry_key(self) -> str:
        return self._prefix

    def collection_key(self, name: str) -> str:
        return f"{self._prefix}_{name}"

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def read_registry(self) -> list[str]:
        """Return the registered collection names (empty if none).

        Raises
        ------
        StorageReadError
            If the registry entry exists but is not a JSON array of strings.
        """
        raw = self._store.read(self.registry_key)
        if raw is None:
            return []
        try:
            names = json.loads(raw)
        except ValueError as exc:
            raise StorageReadError(message=f"Registry is not valid JSON: {exc}") from exc
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise StorageReadError(message="Registry is not a JSON array of names")
        return names

    def write_registry(self, names: Iterable[str]) -> None:
        names = list(names)
        self._store.write(self.registry_key, json.dumps(names))
        logger.debug("registry_written", names=names)

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def read_collection(self, name: str) -> Collection | None:
        """Return the persisted collection, or ``None`` if it was never written.

        Raises
        ------
        StorageReadError
            If the entry exists but does not parse back into Items.
        """
        raw = self._store.read(self.collection_key(name))
        if raw is None:
            return None
        try:
            records = json.loads(raw)
        except ValueError as exc:
            raise StorageReadError(
                message=f"Persisted payload is not valid JSON: {exc}",
                collection=name,
            ) from exc
        if not isinstance(records, list):
            raise StorageReadError(message="Persisted payload is not a JSON array", collection=name)
        try:
            return tuple(Item.model_validate(record) for record in records)
        except ValidationError as exc:
            raise StorageReadError(
                message=f"Persisted payload holds an invalid item: {exc.error_count()} error(s)",
                collection=name,
            ) from exc

    def write_collection(self, name: str, items: Collection) -> None:
        payload = json.dumps([item.model_dump(mode="json") for item in items])
        self._store.write(self.collection_key(name), payload)
        logger.debug("collection_persisted", collection=name, item_count=len(items))

    def remove_collection(self, name: str) -> None:
        self._store.remove(self.collection_key(name))
        logger.debug("collection_removed", collection=name)
