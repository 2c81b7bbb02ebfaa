"""Key-value repository for dashboard state.

Four flat collections of JSON values keyed by string ids: lists, notes, saved
searches and cached enrichments. No schema enforcement, no migrations, no
expiry: a write simply overwrites the key.
"""

from __future__ import annotations

import json
import os
import sqlite3
import time
from dataclasses import dataclass, field
from typing import Any, Optional

COLLECTIONS = ("lists", "notes", "savedSearches", "enrichmentCache")


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


class KeyValueStore:
    """Storage-medium independent interface."""

    def get(self, collection: str, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, collection: str, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, collection: str, key: str) -> None:
        raise NotImplementedError

    def keys(self, collection: str) -> list[str]:
        """Keys in insertion order."""
        raise NotImplementedError


@dataclass
class InMemoryStore(KeyValueStore):
    data: dict[str, dict[str, Any]] = field(default_factory=dict)

    def get(self, collection: str, key: str) -> Optional[Any]:
        _check_collection(collection)
        value = self.data.get(collection, {}).get(key)
        # Copy through JSON so callers can't mutate stored state in place.
        return None if value is None else json.loads(json.dumps(value))

    def set(self, collection: str, key: str, value: Any) -> None:
        _check_collection(collection)
        self.data.setdefault(collection, {})[key] = json.loads(json.dumps(value))

    def delete(self, collection: str, key: str) -> None:
        _check_collection(collection)
        self.data.get(collection, {}).pop(key, None)

    def keys(self, collection: str) -> list[str]:
        _check_collection(collection)
        return list(self.data.get(collection, {}).keys())


@dataclass
class SqliteStore(KeyValueStore):
    path: str

    def __post_init__(self) -> None:
        _ensure_parent_dir(self.path)
        with self._connect() as con:
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    collection TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL,
                    PRIMARY KEY (collection, key)
                )
                """
            )

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path)

    def get(self, collection: str, key: str) -> Optional[Any]:
        _check_collection(collection)
        with self._connect() as con:
            row = con.execute(
                "SELECT value FROM kv WHERE collection = ? AND key = ?",
                (collection, key),
            ).fetchone()
        if not row:
            return None
        return json.loads(row[0])

    def set(self, collection: str, key: str, value: Any) -> None:
        _check_collection(collection)
        now = time.time()
        value_json = json.dumps(value, ensure_ascii=False)
        with self._connect() as con:
            con.execute(
                """
                INSERT INTO kv (collection, key, value, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(collection, key) DO UPDATE SET
                    value=excluded.value,
                    updated_at=excluded.updated_at
                """,
                (collection, key, value_json, now, now),
            )
            con.commit()

    def delete(self, collection: str, key: str) -> None:
        _check_collection(collection)
        with self._connect() as con:
            con.execute("DELETE FROM kv WHERE collection = ? AND key = ?", (collection, key))
            con.commit()

    def keys(self, collection: str) -> list[str]:
        _check_collection(collection)
        with self._connect() as con:
            rows = con.execute(
                "SELECT key FROM kv WHERE collection = ? ORDER BY rowid",
                (collection,),
            ).fetchall()
        return [r[0] for r in rows]
