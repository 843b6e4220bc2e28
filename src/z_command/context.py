"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

Dependencies are typed using Protocols (abstract interfaces) rather than
concrete implementations, so test doubles can be injected without inheritance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from z_command.config import Settings, SettingsManager
from z_command.protocols import AssetInstaller, AssetSource, FileSystem


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from z_command.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for all services used by CLI commands.
    """

    settings_manager: SettingsManager
    settings: Settings
    bundle: AssetSource
    installer: AssetInstaller
    filesystem: FileSystem = field(default_factory=_default_filesystem)


def create_context(
    config_dir: Path | None = None,
    templates: Path | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        config_dir: Override settings directory (for testing).
        templates: Override template bundle location.

    Returns:
        Configured AppContext with all dependencies.

    Raises:
        ConfigError: If the settings file is invalid.
    """
    from z_command.filesystem import RealFileSystem
    from z_command.install import Installer
    from z_command.sources import TemplateBundle

    manager = (
        SettingsManager.create(config_dir) if config_dir else SettingsManager.create_default()
    )
    settings = manager.load()

    location = templates or settings.templates
    bundle = TemplateBundle.create(location) if location else TemplateBundle.create_default()
    filesystem = RealFileSystem()
    installer = Installer.create(
        bundle=bundle,
        filesystem=filesystem,
        exclusions=settings.exclude,
    )

    return AppContext(
        settings_manager=manager,
        settings=settings,
        bundle=bundle,
        installer=installer,
        filesystem=filesystem,
    )
