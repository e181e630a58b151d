"""SQLite persistence for local drafts."""

from __future__ import annotations

from wellcoach.db.connection import DatabaseConnection
from wellcoach.db.schema import get_schema_sql

__all__ = ["DatabaseConnection", "get_schema_sql"]
