"""User settings for z-command."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from z_command.platforms import PLATFORMS, is_valid_target

CONFIG_HOME_ENV = "Z_COMMAND_HOME"

# Topics the curated template set does not ship by default
DEFAULT_EXCLUSIONS = (
    "web3",
    "startup",
    "istio",
    "market",
    "k8s",
    "kubernetes",
    "linkerd",
    "airflow",
    "attack-tree",
    "gdpr",
    "game",
    "hybrid-cloud",
    "gitlab",
    "gitops",
    "multi-cloud",
    "on-call",
    "solidity",
    "sol",
    "unity",
    "binary-analysis",
    "billing-automation",
    "anti-reversing",
    "team-composition",
    "screen-reader",
    "postmortem",
    "service-mesh-observability",
    "embedding-strategies",
    "godot",
    "hybrid-search",
    "incident-runbook",
    "kpi-dashboard",
    "memory-safety",
    "mtls",
    "protocol-reverse",
    "spark-optimization",
    "sast",
    "saga",
    "stride-analysis",
    "turborepo",
    "bazel",
    "bats",
    "bash-defensive",
    "backtesting",
    "memory-forensics",
    "ml-pipeline-workflow",
    "nft-standards",
)


class ConfigError(Exception):
    """Settings file cannot be read or holds invalid values."""

    pass


def default_config_dir() -> Path:
    """Settings directory, ``$Z_COMMAND_HOME`` or ``~/.z-command``."""
    override = os.environ.get(CONFIG_HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".z-command"


class Settings(BaseModel):
    """Persisted user settings."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = "1.0"
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUSIONS))
    default_target: str = Field(default="all", alias="defaultTarget")
    templates: Path | None = None

    @field_validator("default_target")
    @classmethod
    def _check_target(cls, value: str) -> str:
        if not is_valid_target(value):
            raise ValueError(f"unknown platform '{value}', expected one of: all, {', '.join(PLATFORMS)}")
        return value

    @field_validator("exclude")
    @classmethod
    def _clean_patterns(cls, value: list[str]) -> list[str]:
        return [p.strip() for p in value if p.strip()]


class SettingsManager:
    """Loads and saves the settings file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the settings manager.

        Args:
            config_dir: Directory for the settings file. Defaults to ~/.z-command.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.config_dir = config_dir or default_config_dir()
        self.config_file = self.config_dir / "config.json"

    @classmethod
    def create(cls, config_dir: Path) -> SettingsManager:
        """Create a settings manager with a custom directory."""
        return cls(config_dir=config_dir)

    @classmethod
    def create_default(cls) -> SettingsManager:
        """Create a settings manager for ``$Z_COMMAND_HOME`` or ~/.z-command."""
        return cls()

    def load(self) -> Settings:
        """Load settings from disk.

        Returns:
            Settings, defaults if no file exists.

        Raises:
            ConfigError: If the file is unreadable or invalid.
        """
        if not self.config_file.exists():
            return Settings()

        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
            return Settings.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid settings file {self.config_file}: {e}") from e

    def save(self, settings: Settings) -> None:
        """Save settings to disk.

        Args:
            settings: Settings to save.
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        data = settings.model_dump(mode="json", by_alias=True, exclude_none=True)
        self.config_file.write_text(json.dumps(data, indent=2), encoding="utf-8")
