"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from wellcoach.config import settings as settings_module
from wellcoach.config.settings import Settings, reload_settings
from wellcoach.exceptions import ConfigurationError


class TestSettings:
    """Tests for Settings.load and save."""

    def test_defaults_when_file_missing(self, tmp_path: Path) -> None:
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.sync.debounce_seconds == 0.5
        assert settings.sync.retry_delay_seconds == 5.0
        assert settings.sync.max_attempts == 3
        assert settings.sync.draft_max_age_hours == 24.0
        assert settings.logging.level == "INFO"

    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        settings = Settings()
        settings.database.path = tmp_path / "drafts.db"
        settings.sync.max_attempts = 5
        settings.sync.endpoint = "https://sync.example.com"
        settings.logging.level = "DEBUG"
        settings.save(path)

        loaded = Settings.load(path)
        assert loaded.to_dict() == settings.to_dict()

    def test_partial_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("sync:\n  debounce_seconds: 2\n")
        settings = Settings.load(path)
        assert settings.sync.debounce_seconds == 2.0
        assert settings.sync.max_attempts == 3

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Settings.load(path).to_dict() == Settings().to_dict()

    @pytest.mark.parametrize(
        "content,key",
        [
            ("sync:\n  debounce_seconds: -1\n", "sync.debounce_seconds"),
            ("sync:\n  retry_delay_seconds: soon\n", "sync.retry_delay_seconds"),
            ("sync:\n  max_attempts: 0\n", "sync.max_attempts"),
            ("logging:\n  level: chatty\n", "logging.level"),
        ],
    )
    def test_invalid_values(self, tmp_path: Path, content: str, key: str) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(content)
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.load(path)
        assert exc_info.value.details == {"config_key": key}

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            Settings.load(path)

    def test_reload_replaces_global(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setattr(settings_module, "_settings", None)
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: warning\n")
        settings = reload_settings(path)
        assert settings.logging.level == "WARNING"
        assert settings_module.get_settings() is settings
