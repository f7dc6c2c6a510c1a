"""Raw server record → canonical :class:`Item`.

The backend embeds each record's identifier in a MongoDB-style wrapper::

    {"_id": {"$oid": "5f1d..."}, "name": "Berghain"}

The cache exposes a flat ``id`` instead::

    {"id": "5f1d...", "name": "Berghain"}

Both functions are pure.  The input mapping is never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from hotzenplotz.models.collection import Collection, Item
from hotzenplotz.utils.errors import MalformedRecordError

_ID_FIELD = "_id"
_OID_FIELD = "$oid"


def normalize_record(raw: Any, collection: str | None = None) -> Item:
    """Return *raw* as an Item with ``id`` lifted out of ``_id.$oid``.

    Raises
    ------
    MalformedRecordError
        If *raw* is not a mapping or the nested identifier is missing or
        not a string.
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(
            message=f"Expected a JSON object, got {type(raw).__name__}",
            collection=collection,
        )

    wrapper = raw.get(_ID_FIELD)
    oid = wrapper.get(_OID_FIELD) if isinstance(wrapper, Mapping) else None
    if not isinstance(oid, str):
        raise MalformedRecordError(
            message=f"Record is missing its {_ID_FIELD}.{_OID_FIELD} identifier",
            collection=collection,
        )

    fields = {key: value for key, value in raw.items() if key != _ID_FIELD}
    fields["id"] = oid
    return Item.model_validate(fields)


def normalize_records(raws: Iterable[Any], collection: str | None = None) -> Collection:
    """Normalize a whole batch.  One malformed record fails the batch."""
    return tuple(normalize_record(raw, collection) for raw in raws)
