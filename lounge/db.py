"""Persistent key-value store and named document collections."""

from __future__ import annotations

import json
import sqlite3
import threading
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from lounge.paths import paths

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS documents (
    collection TEXT NOT NULL,
    id TEXT NOT NULL,
    value TEXT NOT NULL,
    PRIMARY KEY (collection, id)
);
"""


class KeyStatus(Enum):
    """What a write did to a key."""

    INSERTED = "inserted"
    UPDATED = "updated"


def _decode(raw: str, default: Any) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return default


class Db:
    """A small SQLite-backed store holding JSON values."""

    def __init__(self, path: str | Path) -> None:
        if str(path) != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.RLock()
        with self._lock, self._conn:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> Db:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _fetch(self, query: str, params: tuple) -> list[tuple]:
        with self._lock:
            return self._conn.execute(query, params).fetchall()

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""
        rows = self._fetch("SELECT value FROM kv WHERE key = ?", (key,))
        if not rows:
            return default
        return _decode(rows[0][0], default)

    def set(self, key: str, value: Any) -> KeyStatus:
        """Store ``value`` under ``key``."""
        encoded = json.dumps(value)
        with self._lock, self._conn:
            exists = self._conn.execute("SELECT 1 FROM kv WHERE key = ?", (key,)).fetchone()
            self._conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, encoded),
            )
        return KeyStatus.UPDATED if exists else KeyStatus.INSERTED

    def delete(self, key: str) -> bool:
        """Remove ``key``; return whether it existed."""
        with self._lock, self._conn:
            cursor = self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        return cursor.rowcount > 0

    def collection(self, name: str) -> Collection:
        """Return the document collection called ``name``."""
        return Collection(self, name)

    def close(self) -> None:
        with self._lock:
            self._conn.close()


class Collection:
    """Documents keyed by a natural id within one named collection."""

    def __init__(self, db: Db, name: str) -> None:
        self.db = db
        self.name = name

    def get(self, id: str) -> Any:
        """Return the document with ``id``, or None."""
        rows = self.db._fetch(
            "SELECT value FROM documents WHERE collection = ? AND id = ?",
            (self.name, id),
        )
        return _decode(rows[0][0], None) if rows else None

    def put(self, id: str, value: Any) -> None:
        """Insert or overwrite the document with ``id``."""
        encoded = json.dumps(value)
        with self.db._lock, self.db._conn:
            self.db._conn.execute(
                "INSERT INTO documents (collection, id, value) VALUES (?, ?, ?) "
                "ON CONFLICT(collection, id) DO UPDATE SET value = excluded.value",
                (self.name, id, encoded),
            )

    def delete(self, id: str) -> bool:
        """Remove the document with ``id``; return whether it existed."""
        with self.db._lock, self.db._conn:
            cursor = self.db._conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (self.name, id),
            )
        return cursor.rowcount > 0

    def all(self) -> dict[str, Any]:
        """Return every document of the collection, ordered by id."""
        rows = self.db._fetch(
            "SELECT id, value FROM documents WHERE collection = ? ORDER BY id",
            (self.name,),
        )
        return {doc_id: _decode(raw, None) for doc_id, raw in rows}


@lru_cache(maxsize=1)
def db() -> Db:
    """Return the shared store in the user's data directory."""
    return Db(paths().data / "bonsai" / "db.sqlite3")