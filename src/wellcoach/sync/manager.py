"""Debounced auto-save and a bounded-retry remote sync queue.

Every auto-save writes a local snapshot first, then starts a per-key
debounce task. When the debounce expires the payload is queued and the
queue drained through the transport. Failed items are retried up to
``max_attempts`` and then left in ``failed`` status until the caller calls
``retry_failed``.

Delivery is at-least-once. Items with different keys may sync in any order.
"""

from __future__ import annotations

import asyncio
import json
import sqlite3
import time
from typing import Any, Awaitable, Callable, Optional

from wellcoach.config.settings import SyncConfig
from wellcoach.logger import get_logger
from wellcoach.sync.models import (
    DraftPhase,
    RecoveredDraft,
    SyncQueue,
    SyncQueueItem,
    SyncStatus,
    SyncStatusReport,
)
from wellcoach.sync.store import DraftStore

logger = get_logger(__name__)

# Performs one remote write: (storage_key, payload) -> None, raising on failure
Transport = Callable[[str, Any], Awaitable[None]]


class SyncManager:
    """Coordinates local drafts and remote writes.

    Args:
        store: Local draft snapshots
        transport: Async callable performing the remote write
        settings: Debounce, retry and draft-age settings
        clock: Returns the current time in seconds since the epoch
    """

    def __init__(
        self,
        store: DraftStore,
        transport: Transport,
        settings: Optional[SyncConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.transport = transport
        self.settings = settings or SyncConfig()
        self.clock = clock
        self._debounce: dict[str, asyncio.Task] = {}
        # Debounced writes past their quiet period; never cancelled by a new save
        self._flushing: set[asyncio.Task] = set()
        self._retry: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def auto_save(self, data: Any, key: str, queue: SyncQueue) -> None:
        """Snapshot locally now and sync once the key has been quiet.

        A later save for the same key cancels this key's pending debounce;
        other keys are unaffected.
        """
        revision: Optional[str] = None
        try:
            revision = self.store.save(key, data, self.clock())
        except sqlite3.Error:
            # The remote write still goes ahead
            logger.exception("Local save for %s could not be written", key)
        else:
            queue.phases[key] = DraftPhase.SAVED_LOCALLY

        previous = self._debounce.pop(key, None)
        if previous is not None and not previous.done():
            previous.cancel()

        queue.phases[key] = DraftPhase.DEBOUNCED
        self._debounce[key] = asyncio.create_task(
            self._debounced_write(data, key, queue, revision)
        )

    async def _debounced_write(
        self, data: Any, key: str, queue: SyncQueue, revision: Optional[str]
    ) -> None:
        await asyncio.sleep(self.settings.debounce_seconds)
        task = asyncio.current_task()
        if self._debounce.get(key) is task:
            del self._debounce[key]
        self._flushing.add(task)
        try:
            await self.queue_write(data, key, queue, revision=revision)
        finally:
            self._flushing.discard(task)

    async def queue_write(
        self,
        data: Any,
        key: str,
        queue: SyncQueue,
        revision: Optional[str] = None,
    ) -> SyncQueueItem:
        """Append a remote write to the queue and drain it.

        Args:
            data: Payload for the transport
            key: Storage key
            queue: Caller-owned sync queue
            revision: Draft revision the payload was saved as. Defaults to
                the key's current draft, which this write supersedes.
        """
        if revision is None:
            try:
                revision = self.store.revision(key)
            except sqlite3.Error:
                logger.exception("Local draft for %s could not be read", key)
        item = SyncQueueItem(
            payload=data, storage_key=key, timestamp=self.clock(), revision=revision
        )
        queue.items.append(item)
        queue.phases[key] = DraftPhase.QUEUED
        await self.drain(queue)
        return item

    async def drain(self, queue: SyncQueue) -> None:
        """Attempt every pending item once.

        Returns immediately when another drain holds the queue. Synced items
        leave the queue and the draft revision each one carried is deleted;
        a newer snapshot of the same key stays.
        """
        if queue.is_syncing:
            return

        queue.is_syncing = True
        try:
            budget = self.settings.max_attempts
            pending = [
                item for item in queue.items
                if item.status == SyncStatus.PENDING and item.attempt_count < budget
            ]
            for item in pending:
                await self._attempt(item, queue)

            queue.items[:] = [item for item in queue.items if item.status != SyncStatus.SYNCED]
        finally:
            queue.is_syncing = False

        if queue.pending:
            self._schedule_retry(queue)

    async def _attempt(self, item: SyncQueueItem, queue: SyncQueue) -> None:
        key = item.storage_key
        queue.phases[key] = DraftPhase.IN_FLIGHT
        try:
            await self.transport(key, item.payload)
        except Exception as exc:  # Any transport error counts against the budget
            item.attempt_count += 1
            item.last_error = str(exc)
            if item.attempt_count >= self.settings.max_attempts:
                item.status = SyncStatus.FAILED
                queue.phases[key] = DraftPhase.FAILED
                logger.error(
                    "Sync for %s gave up after %d attempts: %s", key, item.attempt_count, exc
                )
            else:
                queue.phases[key] = DraftPhase.QUEUED
                logger.warning(
                    "Sync for %s (attempt %d) did not complete: %s", key, item.attempt_count, exc
                )
            return

        item.status = SyncStatus.SYNCED
        if item.revision is not None:
            try:
                self.store.discard(key, item.revision)
            except sqlite3.Error:
                # Left for recover_unsaved; the remote copy is already written
                logger.exception("Synced draft for %s could not be cleared", key)
        if self._superseded(item, queue):
            logger.debug("Synced %s; a newer save is still on its way", key)
        else:
            queue.phases[key] = DraftPhase.SYNCED
            logger.debug("Synced %s", key)

    def _superseded(self, item: SyncQueueItem, queue: SyncQueue) -> bool:
        """True when a later save of the same key is debouncing or queued."""
        key = item.storage_key
        if key in self._debounce:
            return True
        return any(
            other is not item and other.status == SyncStatus.PENDING
            for other in queue.find(key)
        )

    def _schedule_retry(self, queue: SyncQueue) -> None:
        if self._retry is not None and not self._retry.done():
            return
        self._retry = asyncio.create_task(self._retry_later(queue))

    async def _retry_later(self, queue: SyncQueue) -> None:
        await asyncio.sleep(self.settings.retry_delay_seconds)
        self._retry = None
        await self.drain(queue)

    async def retry_failed(self, queue: SyncQueue) -> int:
        """Give failed items a fresh budget and drain.

        Returns:
            Number of items requeued
        """
        failed = queue.failed
        for item in failed:
            item.status = SyncStatus.PENDING
            item.attempt_count = 0
            queue.phases[item.storage_key] = DraftPhase.QUEUED
        if failed:
            logger.info("Retrying %d items", len(failed))
            await self.drain(queue)
        return len(failed)

    # ------------------------------------------------------------------
    # Recovery and status
    # ------------------------------------------------------------------

    def recover_unsaved(self) -> list[RecoveredDraft]:
        """Return drafts younger than the max age and delete older ones.

        Drafts that cannot be parsed are logged and left in place.
        """
        max_age_minutes = self.settings.draft_max_age_hours * 60
        now = self.clock()
        recovered: list[RecoveredDraft] = []

        for entry in self.store.entries():
            try:
                draft = json.loads(entry.value)
                key = draft["key"]
                timestamp = float(draft.get("timestamp", entry.saved_at))
            except (ValueError, KeyError, TypeError) as exc:
                logger.warning("Skipping unreadable draft %s: %s", entry.storage_key, exc)
                continue

            age_minutes = (now - timestamp) / 60
            if age_minutes < max_age_minutes:
                recovered.append(
                    RecoveredDraft(key=key, data=draft.get("data"), age_minutes=round(age_minutes))
                )
            else:
                self.store.delete_storage_key(entry.storage_key)
                logger.info("Discarded expired draft %s", key)

        if recovered:
            logger.info("Recovered %d unsaved drafts", len(recovered))
        return recovered

    def status(self, queue: SyncQueue) -> SyncStatusReport:
        pending = len(queue.pending)
        failed = len(queue.failed)

        if failed:
            return SyncStatusReport(
                status="error",
                message=f"{failed} items could not sync. Check your connection.",
                action="Retry now",
                pending=pending,
                failed=failed,
            )
        if pending:
            return SyncStatusReport(
                status="syncing", message=f"Syncing {pending} items...", pending=pending
            )
        return SyncStatusReport(status="synced", message="All data synced ✓")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _live_tasks(self) -> list[asyncio.Task]:
        tasks = [*self._debounce.values(), *self._flushing]
        if self._retry is not None:
            tasks.append(self._retry)
        return [task for task in tasks if not task.done()]

    async def wait_idle(self) -> None:
        """Wait until no debounce or retry task is outstanding."""
        while True:
            tasks = self._live_tasks()
            if not tasks:
                return
            await asyncio.gather(*tasks)

    async def close(self) -> None:
        """Cancel outstanding debounce, retry and in-flight write tasks.

        Local snapshots stay in the store for recover_unsaved.
        """
        tasks = self._live_tasks()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._debounce.clear()
        self._flushing.clear()
        self._retry = None
