"""wellcoach settings, read from ~/.wellcoach/config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from wellcoach.exceptions import ConfigurationError


def _default_config_dir() -> Path:
    """~/.wellcoach, home of config.yaml and the draft database."""
    return Path.home() / ".wellcoach"


def _default_db_path() -> Path:
    """Return the default draft database path."""
    return _default_config_dir() / "drafts.db"


@dataclass
class DatabaseConfig:
    """Local draft database configuration."""

    path: Path = field(default_factory=_default_db_path)


@dataclass
class SyncConfig:
    """Draft auto-save and remote sync configuration."""

    debounce_seconds: float = 0.5
    retry_delay_seconds: float = 5.0
    max_attempts: int = 3
    draft_max_age_hours: float = 24.0
    endpoint: Optional[str] = None  # Base URL for HttpTransport
    timeout_seconds: float = 10.0


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class Settings:
    """Database, sync and logging settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Read settings, falling back to defaults for anything missing.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.wellcoach/config.yaml

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If a value has the wrong type or range
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping")

        settings = cls()

        # Sections are optional; unknown keys are ignored
        if "database" in data:
            db_data = data["database"] or {}
            if "path" in db_data:
                settings.database.path = Path(db_data["path"]).expanduser()

        # Parse sync config
        if "sync" in data:
            sync_data = data["sync"] or {}
            if "debounce_seconds" in sync_data:
                settings.sync.debounce_seconds = _non_negative(
                    sync_data["debounce_seconds"], "sync.debounce_seconds"
                )
            if "retry_delay_seconds" in sync_data:
                settings.sync.retry_delay_seconds = _non_negative(
                    sync_data["retry_delay_seconds"], "sync.retry_delay_seconds"
                )
            if "max_attempts" in sync_data:
                attempts = _non_negative(sync_data["max_attempts"], "sync.max_attempts")
                if attempts < 1:
                    raise ConfigurationError(
                        "sync.max_attempts must be at least 1", "sync.max_attempts"
                    )
                settings.sync.max_attempts = int(attempts)
            if "draft_max_age_hours" in sync_data:
                settings.sync.draft_max_age_hours = _non_negative(
                    sync_data["draft_max_age_hours"], "sync.draft_max_age_hours"
                )
            if "endpoint" in sync_data:
                settings.sync.endpoint = sync_data["endpoint"] or None
            if "timeout_seconds" in sync_data:
                settings.sync.timeout_seconds = _non_negative(
                    sync_data["timeout_seconds"], "sync.timeout_seconds"
                )

        # Parse logging config
        if "logging" in data:
            log_data = data["logging"] or {}
            if "level" in log_data:
                level = str(log_data["level"]).upper()
                if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                    raise ConfigurationError(
                        f"Unknown log level '{log_data['level']}'", "logging.level"
                    )
                settings.logging.level = level

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Write these settings as YAML, creating the config directory.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.wellcoach/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict[str, Any]:
        """Return settings as a plain dictionary."""
        return {
            "database": {
                "path": str(self.database.path),
            },
            "sync": {
                "debounce_seconds": self.sync.debounce_seconds,
                "retry_delay_seconds": self.sync.retry_delay_seconds,
                "max_attempts": self.sync.max_attempts,
                "draft_max_age_hours": self.sync.draft_max_age_hours,
                "endpoint": self.sync.endpoint,
                "timeout_seconds": self.sync.timeout_seconds,
            },
            "logging": {
                "level": self.logging.level,
            },
        }


def _non_negative(value: Any, key: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be a number, got {value!r}", key) from e
    if number < 0:
        raise ConfigurationError(f"{key} must not be negative, got {value!r}", key)
    return number


# Process-wide settings, loaded on first access
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading the config file once."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Re-read the config file and replace the process-wide settings."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
