"""SQLite-backed durable key-value store.

Persists string values to a single table on disk.  Uses sync ``sqlite3``
to match the synchronous :class:`IKeyValueStore` contract; every operation
touches one small JSON string, so event-loop blocking is negligible.

A fresh connection is opened per operation so the store can be shared
freely and a crashed process never leaves a connection half-open.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

import structlog

from hotzenplotz.interfaces.key_value_store import IKeyValueStore
from hotzenplotz.utils.errors import StorageReadError, StorageWriteError
from hotzenplotz.utils.logging import get_logger

_DEFAULT_DB_PATH = Path("data/hotzenplotz.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS {table} (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_UPSERT_SQL = """\
INSERT INTO {table} (key, value)
VALUES (?, ?)
ON CONFLICT(key)
DO UPDATE SET value      = excluded.value,
              updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now');
"""

_SELECT_SQL = "SELECT value FROM {table} WHERE key = ?;"

_DELETE_SQL = "DELETE FROM {table} WHERE key = ?;"

_ALL_KEYS_SQL = "SELECT key FROM {table} ORDER BY key;"


class SQLiteKeyValueStore(IKeyValueStore):
    """Durable key-value store backed by a SQLite table.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Parent directories are created
        on :meth:`initialize`.
    table_name:
        Table name to use, allowing several stores in one database.
    """

    def __init__(
        self,
        db_path: str | Path = _DEFAULT_DB_PATH,
        table_name: str = "hotzenplotz_kv",
    ) -> None:
        self._db_path = Path(db_path)
        self._table = table_name
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Create the table if it doesn't exist.

        Must be called once before use.  Raises :class:`StorageWriteError`
        when the file exists but is not a usable SQLite database.
        """
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = self._connect()
            try:
                conn.execute(_CREATE_TABLE_SQL.format(table=self._table))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StorageWriteError(message=f"Cannot initialize {self._db_path}: {exc}") from exc

        self._logger.info(
            "kv_store_initialized",
            db_path=str(self._db_path),
            table=self._table,
        )

    # ------------------------------------------------------------------
    # IKeyValueStore implementation
    # ------------------------------------------------------------------

    def read(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent.

        A database that cannot be opened or queried (corrupt file, missing
        table, locked) raises :class:`StorageReadError`.
        """
        try:
            conn = self._connect()
            try:
                cursor = conn.execute(_SELECT_SQL.format(table=self._table), (key,))
                row = cursor.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            self._logger.warning("kv_read_failed", key=key, error=str(exc))
            raise StorageReadError(message=f"Cannot read {key!r} from {self._db_path}: {exc}") from exc
        return row[0] if row else None

    def write(self, key: str, value: str) -> None:
        try:
            conn = self._connect()
            try:
                conn.execute(_UPSERT_SQL.format(table=self._table), (key, value))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            self._logger.warning("kv_write_failed", key=key, error=str(exc))
            raise StorageWriteError(message=f"Cannot write {key!r} to {self._db_path}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            conn = self._connect()
            try:
                conn.execute(_DELETE_SQL.format(table=self._table), (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            self._logger.warning("kv_remove_failed", key=key, error=str(exc))
            raise StorageWriteError(message=f"Cannot remove {key!r} from {self._db_path}: {exc}") from exc

    def keys(self) -> list[str]:
        """Return every stored key, sorted.  For diagnostics only."""
        conn = self._connect()
        try:
            cursor = conn.execute(_ALL_KEYS_SQL.format(table=self._table))
            return [row[0] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        """Open a new SQLite connection with WAL mode for concurrency."""
        conn = sqlite3.connect(str(self._db_path))
        try:
            conn.execute("PRAGMA journal_mode=WAL")
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
        return f"sqlite_kv_store:{self._table}"
