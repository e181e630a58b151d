"""Pytest fixtures for wellcoach tests."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from factories import FakeClock, RecordingTransport

from wellcoach.config.settings import SyncConfig
from wellcoach.db.connection import DatabaseConnection
from wellcoach.profiles.models import UserProfile
from wellcoach.sync.manager import SyncManager
from wellcoach.sync.store import DraftStore


@pytest.fixture
def temp_db():
    """Create a temporary database with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseConnection(db_path)
    db.initialize_schema()

    yield db

    # Cleanup
    db_path.unlink(missing_ok=True)


@pytest.fixture
def draft_store(temp_db):
    return DraftStore(temp_db)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fast_sync_config():
    """No waiting for the debounce or between retries."""
    return SyncConfig(debounce_seconds=0, retry_delay_seconds=0)


@pytest.fixture
def make_manager(draft_store, clock, fast_sync_config):
    """Factory for SyncManagers over the temp draft store."""

    def _make(transport=None, settings=None) -> SyncManager:
        return SyncManager(
            draft_store,
            transport if transport is not None else RecordingTransport(),
            settings=settings or fast_sync_config,
            clock=clock,
        )

    return _make


@pytest.fixture
def male_profile():
    """30 year old, 70 kg, 170 cm, moderately active male with no history."""
    return UserProfile(weight=70, height=170, age=30, gender="male", activity_level="moderate")


@pytest.fixture
def female_profile():
    return UserProfile(weight=70, height=170, age=30, gender="female", activity_level="moderate")
