"""Initialization record accepted by :class:`hotzenplotz.store.Store`."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hotzenplotz.models.collection import SYSTEM_COLLECTION

DEFAULT_STORAGE_PREFIX = "hotzenplotz"


def normalize_backend_url(value: str | None) -> str:
    """Return *value* with exactly one trailing ``/``; empty becomes ``/``."""
    if not value:
        return "/"
    if not value.endswith("/"):
        return value + "/"
    return value


class StoreConfig(BaseModel):
    """Options recognized by the Store.

    ``backend_url`` may be absolute (``https://api.example.com/data``) or
    relative (``/data``); it is always normalized to end with ``/``.
    ``check_revision=False`` turns off the startup revision check entirely,
    giving a plain read-through cache.
    """

    model_config = ConfigDict(frozen=True)

    backend_url: str = "/"
    persist_locally: bool = False
    debug: bool = False
    check_revision: bool = True
    deduplicate_requests: bool = False
    storage_prefix: str = Field(default=DEFAULT_STORAGE_PREFIX, min_length=1)
    system_collection: str = Field(default=SYSTEM_COLLECTION, min_length=1)

    @field_validator("backend_url", mode="before")
    @classmethod
    def _normalize_backend_url(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return normalize_backend_url(value)
        return value
