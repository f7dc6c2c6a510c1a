"""Utility modules for hotzenplotz.

- **errors** -- Exception hierarchy rooted at HotzenplotzError; each layer
  raises its own subclass so callers can tell a 404 from a broken payload.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

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
from hotzenplotz.utils.logging import configure_logging, enable_debug_logging, get_logger

__all__ = [
    "BackendError",
    "ConfigurationError",
    "HotzenplotzError",
    "MalformedRecordError",
    "MalformedResponseError",
    "StorageReadError",
    "StorageWriteError",
    "TransportError",
    "configure_logging",
    "enable_debug_logging",
    "get_logger",
]
