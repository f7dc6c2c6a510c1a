"""Domain models for cached collections.

An :class:`Item` is the canonical, normalized shape of a server record:
a flat string ``id`` plus whatever additional fields the server sent.
A collection is simply an ordered, immutable ``tuple`` of Items and is
always replaced wholesale, never merged.

The ``system`` collection is special: its first item is read through the
narrower :class:`SystemConfig` model, whose ``revision`` drives the
startup invalidation protocol.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

SYSTEM_COLLECTION = "system"


class LoadStrategy(str, Enum):  # noqa: UP042
    """Whether an in-memory hit short-circuits the network fetch."""

    CACHE_FIRST = "CACHE_FIRST"    # Serve from memory when present
    SERVER_FIRST = "SERVER_FIRST"  # Always fetch, overwrite memory on success


class Item(BaseModel):
    """A single normalized record.

    Only ``id`` is declared; every other server field is kept as a pydantic
    extra so it survives serialization to durable storage unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str

    def __getitem__(self, key: str) -> Any:
        if key == "id":
            return self.id
        extra = self.model_extra or {}
        if key not in extra:
            raise KeyError(key)
        return extra[key]

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default


Collection = tuple[Item, ...]


class SystemConfig(BaseModel):
    """The single distinguished item of the ``system`` collection."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    type: str | None = None
    revision: int

    @classmethod
    def from_collection(cls, items: Sequence[Item]) -> SystemConfig | None:
        """Read the first item of *items* as a SystemConfig.

        Returns ``None`` when the collection is empty or its first item has
        no usable ``revision``.
        """
        if not items:
            return None
        try:
            return cls.model_validate(items[0].model_dump())
        except ValidationError:
            return None
