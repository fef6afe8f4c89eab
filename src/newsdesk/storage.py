"""Durable key-value storage for newsdesk.

Values are opaque strings grouped by a *region* name, the way a mobile app
keeps one preferences file per feature.  The ledger of recent queries uses a
single key inside a single region.

* ``SQLiteKeyValueStore`` keeps every region in one ``kv`` table whose
  primary key is ``(region, key)``; a write replaces the whole value in one
  statement, so readers never observe a partial write.
* ``SQLiteKeyValueStore.update`` runs a read-modify-write inside one
  ``BEGIN IMMEDIATE`` transaction, so writers holding separate store
  instances on the same file are serialized by SQLite itself.
* ``InMemoryKeyValueStore`` is a dict-backed stand-in for tests and
  throwaway sessions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable
import sqlite3
import threading

from .exceptions import StorageError


_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    region TEXT NOT NULL,
    key TEXT NOT NULL,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now')),
    PRIMARY KEY (region, key)
);
"""

_SQL_SELECT = "SELECT value FROM kv WHERE region = ? AND key = ?"
_SQL_UPSERT = (
    "INSERT INTO kv (region, key, value) VALUES (?, ?, ?) "
    "ON CONFLICT(region, key) DO UPDATE SET "
    "value=excluded.value, updated_at=datetime('now')"
)
_SQL_DELETE = "DELETE FROM kv WHERE region = ? AND key = ?"


class SQLiteKeyValueStore:
    """Persists string values for one region in a local SQLite database.

    ``init_db`` must be called once before use; it creates the parent
    directory and the schema and is idempotent.  Every ``sqlite3.Error`` is
    re-raised as ``StorageError``.
    """

    def __init__(self, db_path: str | Path, *, region: str) -> None:
        self._db_path = Path(db_path)
        self.region = region

    def init_db(self) -> None:
        """Create the database schema if it does not already exist."""
        self._ensure_parent_dir()
        try:
            with self._connect() as conn:
                conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise StorageError(f"failed to initialize database: {exc}") from exc

    def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` when absent."""
        try:
            with self._connect() as conn:
                row = conn.execute(_SQL_SELECT, (self.region, key)).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"failed to read {self.region}/{key}: {exc}") from exc
        return None if row is None else str(row[0])

    def put(self, key: str, value: str) -> None:
        """Replace the value stored under *key*."""
        self._write(_SQL_UPSERT, (self.region, key, value), action="write")

    def remove(self, key: str) -> None:
        """Delete *key*; a missing key is not an error."""
        self._write(_SQL_DELETE, (self.region, key), action="remove")

    def update(self, key: str, transform: Callable[[str | None], str | None]) -> None:
        """Atomically replace the value under *key* with ``transform(current)``.

        A ``None`` result leaves the stored value untouched.
        """
        try:
            conn = sqlite3.connect(self._db_path, isolation_level=None)
            try:
                self._update_in_transaction(conn, key, transform)
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StorageError(f"failed to update {self.region}/{key}: {exc}") from exc

    def _update_in_transaction(
        self, conn: sqlite3.Connection, key: str, transform: Callable[[str | None], str | None],
    ) -> None:
        conn.execute("BEGIN IMMEDIATE")
        try:
            row = conn.execute(_SQL_SELECT, (self.region, key)).fetchone()
            value = transform(None if row is None else str(row[0]))
            if value is not None:
                conn.execute(_SQL_UPSERT, (self.region, key, value))
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")

    def _write(self, sql: str, params: tuple[str, ...], *, action: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(sql, params)
                conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"failed to {action} {self.region}/{params[1]}: {exc}") from exc

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_parent_dir(self) -> None:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)


class InMemoryKeyValueStore:
    """Dict-backed key-value store that lives as long as the instance."""

    def __init__(self, *, region: str) -> None:
        self.region = region
        self._values: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def put(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def update(self, key: str, transform: Callable[[str | None], str | None]) -> None:
        with self._lock:
            value = transform(self.get(key))
            if value is not None:
                self.put(key, value)
