"""Abstract base class for the durable key-value store.

The durable store is a passive string-to-string surface that survives
process restarts.  It offers no transactions; the Durable Store Adapter
orders its writes so that a crash never advertises a collection that was
not fully written.

Operations are synchronous: each one touches a single small JSON string.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IKeyValueStore(ABC):
    """Contract for durable string key-value storage."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` if absent."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete *key*.  No-op if the key does not exist."""
