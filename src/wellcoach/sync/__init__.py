"""Data accuracy and sync.

Key components:
- Calorie conflict resolution across trusted and untrusted sources
- MET-based exercise estimates and exercise budget policies
- SQLite draft snapshots with debounced, bounded-retry remote sync
"""

from __future__ import annotations

from wellcoach.sync.conflicts import CalorieSource, ConflictResolution, resolve_conflict
from wellcoach.sync.exercise import (
    Exercise,
    ExerciseBudget,
    ExerciseEstimate,
    apply_exercise_calories,
    estimate_exercise_calories,
)
from wellcoach.sync.manager import SyncManager, Transport
from wellcoach.sync.models import (
    DraftPhase,
    RecoveredDraft,
    SyncQueue,
    SyncQueueItem,
    SyncStatus,
    SyncStatusReport,
)
from wellcoach.sync.store import DraftStore, draft_key
from wellcoach.sync.tables import DEFAULT_SYNC_TABLES, MET_VALUES, SOURCE_PRIORITY, SyncTables
from wellcoach.sync.transport import HttpTransport

__all__ = [
    "CalorieSource",
    "ConflictResolution",
    "DEFAULT_SYNC_TABLES",
    "DraftPhase",
    "DraftStore",
    "Exercise",
    "ExerciseBudget",
    "ExerciseEstimate",
    "HttpTransport",
    "MET_VALUES",
    "RecoveredDraft",
    "SOURCE_PRIORITY",
    "SyncManager",
    "SyncQueue",
    "SyncQueueItem",
    "SyncStatus",
    "SyncStatusReport",
    "SyncTables",
    "Transport",
    "apply_exercise_calories",
    "draft_key",
    "estimate_exercise_calories",
    "resolve_conflict",
]
