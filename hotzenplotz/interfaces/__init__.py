"""Public interface definitions for the external collaborators.

The cache never talks to the network or the disk directly.  It goes through
the abstract base classes defined here, and concrete adapters are injected
when the :class:`~hotzenplotz.store.Store` is built.  Unit tests inject fakes.

CONCRETE PROVIDER MAP:
    Interface        →  Concrete implementations (in hotzenplotz/providers/)
    ─────────────────────────────────────────────────────────────────────
    IHttpTransport   →  HttpxTransport
    IKeyValueStore   →  SQLiteKeyValueStore, MemoryKeyValueStore
"""

from hotzenplotz.interfaces.http_transport import IHttpTransport, TransportResponse
from hotzenplotz.interfaces.key_value_store import IKeyValueStore

__all__ = [
    "IHttpTransport",
    "IKeyValueStore",
    "TransportResponse",
]
