"""Tests for config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from z_command.config import (
    DEFAULT_EXCLUSIONS,
    ConfigError,
    Settings,
    SettingsManager,
    default_config_dir,
)


@pytest.fixture
def manager(tmp_path: Path) -> SettingsManager:
    """Create a settings manager with temporary directory."""
    return SettingsManager.create(tmp_path / "config")


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self) -> None:
        """Test default values."""
        settings = Settings()
        assert settings.default_target == "all"
        assert settings.exclude == list(DEFAULT_EXCLUSIONS)
        assert settings.templates is None

    def test_alias(self) -> None:
        """Test camelCase keys are accepted."""
        assert Settings.model_validate({"defaultTarget": "cursor"}).default_target == "cursor"

    def test_invalid_target(self) -> None:
        """Test unknown platforms are rejected."""
        with pytest.raises(ValidationError, match="unknown platform"):
            Settings(default_target="vim")

    def test_patterns_are_cleaned(self) -> None:
        """Test blank patterns are dropped."""
        assert Settings(exclude=[" web3 ", "", "  "]).exclude == ["web3"]


class TestSettingsManager:
    """Tests for SettingsManager."""

    def test_missing_file_gives_defaults(self, manager: SettingsManager) -> None:
        """Test defaults when nothing is saved."""
        assert manager.load() == Settings()

    def test_save_and_load(self, manager: SettingsManager, tmp_path: Path) -> None:
        """Test settings survive a save."""
        settings = Settings(default_target="claude", exclude=["web3"], templates=tmp_path / "t")
        manager.save(settings)

        data = json.loads(manager.config_file.read_text())
        assert data["defaultTarget"] == "claude"
        assert manager.load() == settings

    def test_none_fields_are_omitted(self, manager: SettingsManager) -> None:
        """Test unset optional fields are not written."""
        manager.save(Settings())
        assert "templates" not in json.loads(manager.config_file.read_text())

    def test_invalid_json(self, manager: SettingsManager) -> None:
        """Test malformed files raise ConfigError."""
        manager.config_dir.mkdir(parents=True)
        manager.config_file.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid settings file"):
            manager.load()

    def test_invalid_values(self, manager: SettingsManager) -> None:
        """Test invalid values raise ConfigError."""
        manager.config_dir.mkdir(parents=True)
        manager.config_file.write_text(json.dumps({"defaultTarget": "vim"}))
        with pytest.raises(ConfigError):
            manager.load()

    def test_default_dir(self, temp_home: Path) -> None:
        """Test the default settings location."""
        assert default_config_dir() == temp_home / ".z-command"
        assert SettingsManager.create_default().config_file == temp_home / ".z-command" / "config.json"

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test Z_COMMAND_HOME moves the settings."""
        monkeypatch.setenv("Z_COMMAND_HOME", str(tmp_path / "custom"))
        assert default_config_dir() == tmp_path / "custom"
