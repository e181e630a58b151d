"""Configuration loading."""

from __future__ import annotations

from wellcoach.config.settings import (
    DatabaseConfig,
    LoggingConfig,
    Settings,
    SyncConfig,
    get_settings,
    reload_settings,
)

__all__ = [
    "DatabaseConfig",
    "LoggingConfig",
    "Settings",
    "SyncConfig",
    "get_settings",
    "reload_settings",
]
