"""Reading skills and agents from the template bundle.

A bundle is a directory, or a zip archive optionally wrapped in a top-level
``templates/`` folder, laid out as::

    agents/<name>.agent.md
    skills/[<category>/...]<name>/SKILL.md

Everything is read eagerly into immutable Asset objects, so a bundle that
cannot be read fails before anything is installed.
"""

from __future__ import annotations

import logging
import os
import zipfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from z_command.frontmatter import parse_frontmatter
from z_command.transform import strip_agent_suffix
from z_command.types import Asset, AssetKind

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent
TEMPLATES_ENV = "Z_COMMAND_TEMPLATES"


class SourceIntegrityError(Exception):
    """The template bundle is missing, unreadable or inconsistent."""

    pass


def default_templates_path() -> Path:
    """Locate the bundled templates.

    ``$Z_COMMAND_TEMPLATES`` wins, then a ``templates.zip`` shipped with the
    package, then the ``templates`` directory shipped with the package.
    """
    override = os.environ.get(TEMPLATES_ENV)
    if override:
        return Path(override).expanduser()
    archive = PACKAGE_DIR / "templates.zip"
    if archive.is_file():
        return archive
    return PACKAGE_DIR / "templates"


def describe(asset: Asset, limit: int = 60) -> str:
    """Short description of an asset for listings."""
    description = parse_frontmatter(asset.raw_content).get("description")
    if not description:
        return "No description"
    return " ".join(description.split())[:limit]


class TemplateBundle:
    """Enumerates assets from a template directory or archive."""

    AGENTS_DIR = "agents"
    SKILLS_DIR = "skills"
    SKILL_FILE = "SKILL.md"
    ARCHIVE_ROOT = "templates"
    # Directories to skip while walking
    SKIP_DIRS = {".git", "node_modules", "__pycache__", ".venv", "venv"}
    # Files in agents/ that are not agents
    SKIP_FILES = {"README.md", "CHANGELOG.md", "CONTRIBUTING.md", "LICENSE.md"}

    def __init__(self, location: Path) -> None:
        """Initialize bundle.

        Args:
            location: Template directory or zip archive.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.location = location

    @classmethod
    def create(cls, location: Path) -> TemplateBundle:
        """Create a bundle for an explicit location."""
        return cls(location=location)

    @classmethod
    def create_default(cls) -> TemplateBundle:
        """Create a bundle for the templates shipped with the package."""
        return cls(location=default_templates_path())

    @property
    def is_archive(self) -> bool:
        """True if the bundle is a zip archive."""
        return self.location.is_file() and zipfile.is_zipfile(self.location)

    def read(self, kinds: Iterable[AssetKind] = tuple(AssetKind)) -> list[Asset]:
        """Read all assets of the given kinds.

        Args:
            kinds: Asset kinds to read.

        Returns:
            Agents then skills, each sorted by origin path.

        Raises:
            SourceIntegrityError: If the bundle or a required folder is missing,
                a file cannot be read, or two agents share a name.
        """
        kinds = tuple(kinds)
        if not self.location.exists():
            raise SourceIntegrityError(f"Template bundle not found: {self.location}")

        try:
            if self.is_archive:
                with zipfile.ZipFile(self.location) as archive:
                    return self._read_tree(self._archive_root(archive), kinds)
            if not self.location.is_dir():
                raise SourceIntegrityError(
                    f"Template bundle is neither a directory nor a zip archive: {self.location}"
                )
            return self._read_tree(self.location, kinds)
        except (OSError, zipfile.BadZipFile) as e:
            raise SourceIntegrityError(f"Cannot read template bundle {self.location}: {e}") from e

    def _archive_root(self, archive: zipfile.ZipFile) -> Any:
        root = zipfile.Path(archive)
        wrapped = root / self.ARCHIVE_ROOT
        if wrapped.is_dir() and not (root / self.AGENTS_DIR).is_dir() and not (root / self.SKILLS_DIR).is_dir():
            return wrapped
        return root

    def _read_tree(self, root: Any, kinds: tuple[AssetKind, ...]) -> list[Asset]:
        assets: list[Asset] = []
        if AssetKind.AGENT in kinds:
            assets.extend(self._read_agents(self._require_dir(root, self.AGENTS_DIR)))
        if AssetKind.SKILL in kinds:
            assets.extend(self._read_skills(self._require_dir(root, self.SKILLS_DIR)))
        logger.debug("Read %d assets from %s", len(assets), self.location)
        return assets

    def _require_dir(self, root: Any, name: str) -> Any:
        folder = root / name
        if not folder.is_dir():
            raise SourceIntegrityError(f"Template bundle {self.location} has no '{name}' folder")
        return folder

    def _read_agents(self, folder: Any) -> list[Asset]:
        agents: dict[str, Asset] = {}
        for entry in _sorted_children(folder):
            if not entry.is_file() or not entry.name.endswith(".md") or entry.name in self.SKIP_FILES:
                continue
            name = strip_agent_suffix(entry.name)
            if name in agents:
                raise SourceIntegrityError(
                    f"Duplicate agent '{name}': {agents[name].filename} and {entry.name}"
                )
            agents[name] = Asset(
                kind=AssetKind.AGENT,
                name=name,
                origin_path=f"{self.AGENTS_DIR}/{entry.name}",
                raw_content=self._decode(entry, f"{self.AGENTS_DIR}/{entry.name}"),
            )
        return list(agents.values())

    def _read_skills(self, folder: Any, parents: tuple[str, ...] = ()) -> list[Asset]:
        skills: list[Asset] = []
        for entry in _sorted_children(folder):
            if not entry.is_dir() or entry.name in self.SKIP_DIRS:
                continue
            segments = (*parents, entry.name)
            skill_file = entry / self.SKILL_FILE
            if not skill_file.is_file():
                # Category folder
                skills.extend(self._read_skills(entry, segments))
                continue
            origin = "/".join((self.SKILLS_DIR, *segments))
            resources = tuple(
                item
                for item in self._read_resources(entry)
                if item[0] != self.SKILL_FILE
            )
            skills.append(
                Asset(
                    kind=AssetKind.SKILL,
                    name=entry.name,
                    origin_path=origin,
                    raw_content=self._decode(skill_file, f"{origin}/{self.SKILL_FILE}"),
                    resources=resources,
                )
            )
        return skills

    def _read_resources(self, folder: Any, prefix: str = "") -> list[tuple[str, bytes]]:
        files: list[tuple[str, bytes]] = []
        for entry in _sorted_children(folder):
            relative = f"{prefix}{entry.name}"
            if entry.is_dir():
                if entry.name not in self.SKIP_DIRS:
                    files.extend(self._read_resources(entry, f"{relative}/"))
            elif entry.is_file():
                files.append((relative, entry.read_bytes()))
        return files

    def _decode(self, entry: Any, origin: str) -> str:
        try:
            return entry.read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceIntegrityError(f"{origin} is not valid UTF-8: {e}") from e


def _sorted_children(folder: Any) -> list[Any]:
    """Children of a Path or zipfile.Path, sorted by name."""
    return sorted(folder.iterdir(), key=lambda entry: entry.name)
