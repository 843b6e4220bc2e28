"""Filesystem abstraction for testability.

This module provides a filesystem abstraction so the resolver and installer
can be tested with simulated read and write failures. The RealFileSystem
implementation wraps standard library operations.
"""

from __future__ import annotations

from pathlib import Path


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path operations.
    Satisfies the FileSystem protocol structurally.
    """

    def read_bytes(self, path: Path) -> bytes:
        """Read raw content from a file."""
        return path.read_bytes()

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write raw content to a file."""
        path.write_bytes(content)

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return path.is_dir()

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)
