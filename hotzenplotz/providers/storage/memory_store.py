"""In-memory key-value store.

Dict-backed, lives only as long as the process.  Useful for tests and for
running with persistence wired in but no disk available.
"""

from __future__ import annotations

from collections.abc import Mapping

from hotzenplotz.interfaces.key_value_store import IKeyValueStore


class MemoryKeyValueStore(IKeyValueStore):
    """Plain ``dict`` implementation of :class:`IKeyValueStore`."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def __len__(self) -> int:
        return len(self._data)
