"""hotzenplotz: client-side read-through cache for named JSON collections.

Collections are fetched from a backend once, kept in memory, optionally
persisted to a durable key-value store, and invalidated at startup when the
server's ``system`` revision has advanced.
"""

from hotzenplotz.models.collection import Collection, Item, LoadStrategy, SystemConfig
from hotzenplotz.models.config import StoreConfig
from hotzenplotz.models.reconciliation import ReconciliationOutcome, ReconciliationResult
from hotzenplotz.store import Store
from hotzenplotz.utils.errors import (
    BackendError,
    ConfigurationError,
    HotzenplotzError,
    MalformedRecordError,
    MalformedResponseError,
    StorageReadError,
    StorageWriteError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "BackendError",
    "Collection",
    "ConfigurationError",
    "HotzenplotzError",
    "Item",
    "LoadStrategy",
    "MalformedRecordError",
    "MalformedResponseError",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "StorageReadError",
    "StorageWriteError",
    "Store",
    "StoreConfig",
    "SystemConfig",
    "TransportError",
]
