"""Factory wiring concrete providers into a :class:`Store` from Settings.

Embedders with their own transport or storage construct ``Store`` directly;
this module covers the common case of httpx plus an on-disk SQLite file.
"""

from __future__ import annotations

import structlog

from hotzenplotz.config.settings import Settings
from hotzenplotz.interfaces.key_value_store import IKeyValueStore
from hotzenplotz.providers.storage.sqlite_store import SQLiteKeyValueStore
from hotzenplotz.providers.transport.httpx_transport import HttpxTransport
from hotzenplotz.store import Store
from hotzenplotz.utils.errors import StorageWriteError
from hotzenplotz.utils.logging import configure_logging

logger = structlog.get_logger(logger_name=__name__)


def _build_storage(app_settings: Settings) -> IKeyValueStore | None:
    """Create and initialize the SQLite store, or None when persistence is off.

    An unusable database file is logged and kept; every later read and
    write then fails softly and the cache runs from memory.
    """
    if not app_settings.persist_locally:
        return None
    storage = SQLiteKeyValueStore(db_path=app_settings.store_db_path)
    try:
        storage.initialize()
    except StorageWriteError as exc:
        logger.warning("storage_unavailable", db_path=app_settings.store_db_path, error=str(exc))
    return storage


def build_store(custom_settings: Settings | None = None) -> Store:
    """Build a Store from *custom_settings* (or the environment).

    Must be called from inside a running event loop for reconciliation to
    start immediately; otherwise it starts on first use.
    """
    app_settings = custom_settings or Settings()
    configure_logging(log_level="DEBUG" if app_settings.debug else app_settings.log_level)

    transport = HttpxTransport(
        base_url=app_settings.origin,
        timeout=app_settings.http_timeout_seconds,
    )
    storage = _build_storage(app_settings)

    logger.info(
        "store_components_built",
        backend_url=app_settings.backend_url,
        origin=app_settings.origin or None,
        storage=storage.get_provider_name() if isinstance(storage, SQLiteKeyValueStore) else None,
    )
    return Store(app_settings.to_store_config(), transport=transport, storage=storage)
