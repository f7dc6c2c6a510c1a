"""Custom exception hierarchy for hotzenplotz.

All library exceptions inherit from :class:`HotzenplotzError`, which
carries an optional ``collection`` so error handlers can identify which
named collection was being loaded when the failure happened.

The hierarchy is organized by the layer that raises it:

    HotzenplotzError  (base -- catch-all for any hotzenplotz error)
    +-- BackendError            (server answered with a non-2xx status)
    +-- TransportError          (request could not be completed at all)
    +-- MalformedResponseError  (body is not a JSON array of records)
    |   +-- MalformedRecordError  (a record lacks the ``_id.$oid`` identifier)
    +-- StorageReadError        (persisted entry present but unparsable)
    +-- StorageWriteError       (durable store rejected a write or remove)
    +-- ConfigurationError      (invalid settings at construction time)

Callers of ``Store.collection`` only ever see BackendError, TransportError
and the Malformed* errors.  StorageReadError never leaves the load phase:
durable storage is advisory, so a broken entry is logged and skipped.
StorageWriteError is raised by storage providers and absorbed the same way:
the cache logs it and keeps serving from memory.
"""


class HotzenplotzError(Exception):
    """Base exception for all hotzenplotz errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``collection`` naming the collection involved.  ``__str__`` prefixes
    the collection name in brackets, e.g. ``[artists] HTTP 404 ...``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        collection: str | None = None,
    ) -> None:
        self._message = message
        self._collection = collection
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def collection(self) -> str | None:
        return self._collection

    def __str__(self) -> str:
        if self._collection:
            return f"[{self._collection}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Network errors
# ---------------------------------------------------------------------------

class BackendError(HotzenplotzError):
    """Raised when the backend answers with a status outside [200, 300).

    Never retried automatically; the previous cache state is left intact.
    """

    def __init__(
        self,
        path: str,
        status_code: int,
        collection: str | None = None,
    ) -> None:
        self._path = path
        self._status_code = status_code
        super().__init__(
            message=f"HTTP {status_code} fetching {path}",
            collection=collection,
        )

    @property
    def path(self) -> str:
        return self._path

    @property
    def status_code(self) -> int:
        return self._status_code


class TransportError(HotzenplotzError):
    """Raised when the request could not be completed (DNS, refused, timeout)."""

    def __init__(
        self,
        message: str = "Transport request failed",
        collection: str | None = None,
    ) -> None:
        super().__init__(message=message, collection=collection)


# ---------------------------------------------------------------------------
# Payload errors
# ---------------------------------------------------------------------------

class MalformedResponseError(HotzenplotzError):
    """Raised when a response body is not a JSON array of records."""

    def __init__(
        self,
        message: str = "Malformed response body",
        collection: str | None = None,
    ) -> None:
        super().__init__(message=message, collection=collection)


class MalformedRecordError(MalformedResponseError):
    """Raised when a raw record lacks the nested ``_id.$oid`` identifier.

    A single malformed record invalidates the whole batch.
    """

    def __init__(
        self,
        message: str = "Record is missing its _id.$oid identifier",
        collection: str | None = None,
    ) -> None:
        super().__init__(message=message, collection=collection)


# ---------------------------------------------------------------------------
# Storage / configuration errors
# ---------------------------------------------------------------------------

class StorageReadError(HotzenplotzError):
    """Raised when a persisted entry exists but cannot be parsed."""

    def __init__(
        self,
        message: str = "Persisted entry could not be read",
        collection: str | None = None,
    ) -> None:
        super().__init__(message=message, collection=collection)


class StorageWriteError(HotzenplotzError):
    """Raised when the durable store cannot persist or remove an entry."""

    def __init__(
        self,
        message: str = "Persisted entry could not be written",
        collection: str | None = None,
    ) -> None:
        super().__init__(message=message, collection=collection)


class ConfigurationError(HotzenplotzError):
    """Raised when configuration is invalid or inconsistent."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        collection: str | None = None,
    ) -> None:
        super().__init__(message=message, collection=collection)
