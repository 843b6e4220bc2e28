"""Protocol definitions for core abstractions.

This module defines abstract interfaces (Protocols) for the services the CLI
and installer depend on. Concrete implementations satisfy them structurally,
so tests can substitute doubles without inheritance.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from z_command.types import Asset, AssetKind, InstallOptions, InstallSummary


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations."""

    def read_bytes(self, path: Path) -> bytes:
        """Read raw content from a file."""
        ...

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write raw content to a file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        ...


@runtime_checkable
class AssetSource(Protocol):
    """Protocol for template bundles.

    Implementations enumerate skills and agents from a directory or archive.
    """

    location: Path

    def read(self, kinds: Iterable[AssetKind] = tuple(AssetKind)) -> list[Asset]:
        """Read all assets of the given kinds.

        Args:
            kinds: Asset kinds to read.

        Returns:
            Assets, agents and skills each sorted by origin path.

        Raises:
            SourceIntegrityError: If the bundle or a required folder is missing.
        """
        ...


@runtime_checkable
class AssetInstaller(Protocol):
    """Protocol for the install orchestrator."""

    def install(self, options: InstallOptions) -> list[InstallSummary]:
        """Install templates according to options.

        Args:
            options: Parsed user selection.

        Returns:
            One summary per selected platform.
        """
        ...
