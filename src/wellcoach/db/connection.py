"""SQLite access for the on-device draft store."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from wellcoach.db.schema import get_schema_sql


class DatabaseConnection:
    """Opens short-lived connections to the local draft database.

    Every write happens inside ``get_connection`` so a crash mid-save never
    leaves a half-written snapshot behind.
    """

    def __init__(self, db_path: Union[str, Path], initialize: bool = False):
        """
        Args:
            db_path: SQLite file; parent directories are created as needed
            initialize: Create the local_store table immediately
        """
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        if initialize:
            self.initialize_schema()

    @contextmanager
    def get_connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection with Row access; commit on exit, roll back on error."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        with self.get_connection() as conn:
            conn.executescript(get_schema_sql())

    def has_table(self, table_name: str) -> bool:
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (table_name,),
            ).fetchone()
        return row is not None

    def __repr__(self) -> str:
        return f"DatabaseConnection({str(self.db_path)!r})"
