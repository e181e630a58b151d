"""Sync queue state.

The queue is owned by the caller and passed to every SyncManager operation,
so its lifetime (and any persistence of it) is the caller's decision.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class SyncStatus(Enum):
    PENDING = "pending"
    SYNCED = "synced"
    FAILED = "failed"


class DraftPhase(Enum):
    """Where a draft key is in the save-then-sync pipeline."""

    IDLE = "idle"
    SAVED_LOCALLY = "saved_locally"
    DEBOUNCED = "debounced"
    QUEUED = "queued"
    IN_FLIGHT = "in_flight"
    SYNCED = "synced"
    FAILED = "failed"


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class SyncQueueItem:
    payload: Any
    storage_key: str
    timestamp: float
    id: str = field(default_factory=_new_id)
    attempt_count: int = 0
    status: SyncStatus = SyncStatus.PENDING
    last_error: Optional[str] = None
    # Draft revision this write carries; only that snapshot is cleared on success
    revision: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "storage_key": self.storage_key,
            "timestamp": self.timestamp,
            "attempt_count": self.attempt_count,
            "status": self.status.value,
            "last_error": self.last_error,
        }


@dataclass
class SyncQueue:
    """Pending remote writes plus the single in-flight guard."""

    items: list[SyncQueueItem] = field(default_factory=list)
    is_syncing: bool = False
    phases: dict[str, DraftPhase] = field(default_factory=dict)

    def with_status(self, status: SyncStatus) -> list[SyncQueueItem]:
        return [item for item in self.items if item.status == status]

    @property
    def pending(self) -> list[SyncQueueItem]:
        return self.with_status(SyncStatus.PENDING)

    @property
    def failed(self) -> list[SyncQueueItem]:
        return self.with_status(SyncStatus.FAILED)

    def phase(self, key: str) -> DraftPhase:
        return self.phases.get(key, DraftPhase.IDLE)

    def find(self, key: str) -> list[SyncQueueItem]:
        return [item for item in self.items if item.storage_key == key]


@dataclass(frozen=True)
class RecoveredDraft:
    key: str
    data: Any
    age_minutes: int

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "data": self.data, "age_minutes": self.age_minutes}


@dataclass(frozen=True)
class SyncStatusReport:
    status: str  # "error", "syncing" or "synced"
    message: str
    action: Optional[str] = None
    pending: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "action": self.action,
            "pending": self.pending,
            "failed": self.failed,
        }
