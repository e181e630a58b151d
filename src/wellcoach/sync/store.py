"""Local draft snapshots in SQLite.

Each draft is one row of the local_store table keyed by ``draft_<key>``;
the value column holds a JSON document ``{"data", "timestamp", "key"}``.
Every save stamps a fresh revision token so a finished remote write can
clear exactly the snapshot it carried and never a newer one.
"""

from __future__ import annotations

import json
import sqlite3
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from wellcoach.db.connection import DatabaseConnection

DRAFT_PREFIX = "draft_"


def draft_key(key: str) -> str:
    return f"{DRAFT_PREFIX}{key}"


@dataclass(frozen=True)
class StoredValue:
    storage_key: str
    value: str
    saved_at: float
    revision: Optional[str] = None


def _stored(row: sqlite3.Row) -> StoredValue:
    return StoredValue(row["storage_key"], row["value"], row["saved_at"], row["revision"])


class DraftQueries:
    """Raw queries against local_store."""

    @staticmethod
    def upsert(
        conn: sqlite3.Connection,
        storage_key: str,
        value: str,
        saved_at: float,
        revision: Optional[str] = None,
    ) -> None:
        conn.execute(
            """
            INSERT INTO local_store (storage_key, value, saved_at, revision)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(storage_key) DO UPDATE SET
                value = excluded.value,
                saved_at = excluded.saved_at,
                revision = excluded.revision
            """,
            (storage_key, value, saved_at, revision),
        )

    @staticmethod
    def get(conn: sqlite3.Connection, storage_key: str) -> Optional[StoredValue]:
        row = conn.execute(
            "SELECT storage_key, value, saved_at, revision FROM local_store WHERE storage_key = ?",
            (storage_key,),
        ).fetchone()
        if row is None:
            return None
        return _stored(row)

    @staticmethod
    def delete(conn: sqlite3.Connection, storage_key: str) -> bool:
        cursor = conn.execute("DELETE FROM local_store WHERE storage_key = ?", (storage_key,))
        return cursor.rowcount > 0

    @staticmethod
    def delete_revision(conn: sqlite3.Connection, storage_key: str, revision: str) -> bool:
        """Delete the row only if it still holds the given revision."""
        cursor = conn.execute(
            "DELETE FROM local_store WHERE storage_key = ? AND revision = ?",
            (storage_key, revision),
        )
        return cursor.rowcount > 0

    @staticmethod
    def list_with_prefix(conn: sqlite3.Connection, prefix: str) -> list[StoredValue]:
        rows = conn.execute(
            """
            SELECT storage_key, value, saved_at, revision FROM local_store
            WHERE substr(storage_key, 1, ?) = ?
            ORDER BY saved_at
            """,
            (len(prefix), prefix),
        ).fetchall()
        return [_stored(r) for r in rows]

    @staticmethod
    def delete_with_prefix(conn: sqlite3.Connection, prefix: str) -> int:
        cursor = conn.execute(
            "DELETE FROM local_store WHERE substr(storage_key, 1, ?) = ?",
            (len(prefix), prefix),
        )
        return cursor.rowcount


class DraftStore:
    """Draft snapshots keyed by the caller's key (without the prefix)."""

    def __init__(self, db: DatabaseConnection):
        self.db = db
        self.db.initialize_schema()

    def save(self, key: str, data: Any, saved_at: float) -> str:
        """Write a snapshot, replacing any earlier draft for the key.

        Returns:
            The new snapshot's revision token
        """
        value = json.dumps({"data": data, "timestamp": saved_at, "key": key}, default=str)
        revision = uuid.uuid4().hex
        with self.db.get_connection() as conn:
            DraftQueries.upsert(conn, draft_key(key), value, saved_at, revision)
        return revision

    def revision(self, key: str) -> Optional[str]:
        """Revision of the key's current draft, or None if there is none."""
        with self.db.get_connection() as conn:
            stored = DraftQueries.get(conn, draft_key(key))
        return stored.revision if stored is not None else None

    def load(self, key: str) -> Optional[Any]:
        """Return the draft's data, or None if there is no draft."""
        with self.db.get_connection() as conn:
            stored = DraftQueries.get(conn, draft_key(key))
        if stored is None:
            return None
        return json.loads(stored.value)["data"]

    def delete(self, key: str) -> bool:
        with self.db.get_connection() as conn:
            return DraftQueries.delete(conn, draft_key(key))

    def discard(self, key: str, revision: str) -> bool:
        """Delete the key's draft if it is still the given revision.

        A newer snapshot written since that revision is left alone.
        """
        with self.db.get_connection() as conn:
            return DraftQueries.delete_revision(conn, draft_key(key), revision)

    def delete_storage_key(self, storage_key: str) -> bool:
        with self.db.get_connection() as conn:
            return DraftQueries.delete(conn, storage_key)

    def entries(self) -> list[StoredValue]:
        """All raw draft rows, oldest first."""
        with self.db.get_connection() as conn:
            return DraftQueries.list_with_prefix(conn, DRAFT_PREFIX)

    def clear(self) -> int:
        with self.db.get_connection() as conn:
            return DraftQueries.delete_with_prefix(conn, DRAFT_PREFIX)
