"""Maintenance of the project's ignore file."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from z_command.protocols import FileSystem

logger = logging.getLogger(__name__)

IGNORE_FILE = ".gitignore"


def _normalize(entry: str) -> str:
    return entry.strip().strip("/")


class IgnoreFileMaintainer:
    """Appends generated directories to an ignore file, once each.

    The file is handled as bytes so existing lines in any encoding are kept
    exactly as they are.
    """

    def __init__(self, filesystem: FileSystem, path: Path) -> None:
        """Initialize maintainer.

        Args:
            filesystem: Filesystem abstraction.
            path: Ignore file to maintain.
        """
        self.fs = filesystem
        self.path = path

    @classmethod
    def for_project(cls, filesystem: FileSystem, project_root: Path) -> IgnoreFileMaintainer:
        """Create a maintainer for ``<project_root>/.gitignore``."""
        return cls(filesystem, project_root / IGNORE_FILE)

    def ensure_entries(self, entries: Iterable[str]) -> list[str]:
        """Append entries that are not present yet.

        ``.shared``, ``.shared/`` and ``/.shared`` count as the same entry.

        Args:
            entries: Ignore patterns to add.

        Returns:
            Entries that were appended.

        Raises:
            OSError: If the file cannot be read or written.
        """
        data = self.fs.read_bytes(self.path) if self.fs.exists(self.path) else b""
        present = {
            _normalize(line.decode("utf-8", errors="replace")) for line in data.splitlines()
        }

        missing: list[str] = []
        for entry in entries:
            key = _normalize(entry)
            if not key or key in present:
                continue
            present.add(key)
            missing.append(entry)

        if not missing:
            return []

        separator = b"" if not data or data.endswith(b"\n") else b"\n"
        addition = ("\n".join(missing) + "\n").encode("utf-8")
        self.fs.write_bytes(self.path, data + separator + addition)
        logger.debug("Added %s to %s", ", ".join(missing), self.path)
        return missing
