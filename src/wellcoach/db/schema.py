"""SQLite schema for the local draft store."""

SCHEMA_SQL = """
-- Local key-value snapshots written before any remote sync
CREATE TABLE IF NOT EXISTS local_store (
    storage_key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    saved_at REAL NOT NULL,
    -- Changes on every write; a remote sync only clears the revision it sent
    revision TEXT
);

CREATE INDEX IF NOT EXISTS idx_local_store_saved_at ON local_store(saved_at);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
