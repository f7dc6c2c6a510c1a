"""Pydantic v2 models shared across hotzenplotz."""

from hotzenplotz.models.collection import (
    SYSTEM_COLLECTION,
    Collection,
    Item,
    LoadStrategy,
    SystemConfig,
)
from hotzenplotz.models.config import DEFAULT_STORAGE_PREFIX, StoreConfig, normalize_backend_url
from hotzenplotz.models.reconciliation import ReconciliationOutcome, ReconciliationResult

__all__ = [
    "Collection",
    "DEFAULT_STORAGE_PREFIX",
    "Item",
    "LoadStrategy",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "SYSTEM_COLLECTION",
    "StoreConfig",
    "SystemConfig",
    "normalize_backend_url",
]
