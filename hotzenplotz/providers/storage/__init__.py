"""Durable key-value stores.

SQLiteKeyValueStore persists to disk and survives restarts.
MemoryKeyValueStore is dict-based and process-local.
"""

from hotzenplotz.providers.storage.memory_store import MemoryKeyValueStore
from hotzenplotz.providers.storage.sqlite_store import SQLiteKeyValueStore

__all__ = ["MemoryKeyValueStore", "SQLiteKeyValueStore"]
