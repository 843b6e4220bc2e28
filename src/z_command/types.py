"""Shared data types for z-command."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath

__all__ = [
    "Action",
    "Asset",
    "AssetKind",
    "FileDecision",
    "FileError",
    "InstallOptions",
    "InstallSummary",
    "Scope",
]


class AssetKind(str, Enum):
    """Kind of a bundled template."""

    SKILL = "skill"
    AGENT = "agent"


class Scope(str, Enum):
    """Where templates are installed."""

    PROJECT = "project"
    GLOBAL = "global"


class Action(str, Enum):
    """What the installer does with a single output file."""

    WRITE = "write"
    SKIP = "skip"
    RENAME = "rename"


@dataclass(frozen=True)
class Asset:
    """A skill or agent read from the template bundle.

    Attributes:
        kind: Skill or agent.
        name: Directory name (skills) or file name without the agent suffix.
        origin_path: POSIX path relative to the bundle root,
            e.g. ``skills/backend/api-design``.
        raw_content: Text of the agent file or of the skill's SKILL.md.
        resources: Supporting skill files as (relative path, bytes) pairs.
    """

    kind: AssetKind
    name: str
    origin_path: str
    raw_content: str
    resources: tuple[tuple[str, bytes], ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name:
            raise ValueError("name cannot be empty")
        if not self.origin_path:
            raise ValueError("origin_path cannot be empty")

    @property
    def filename(self) -> str:
        """Last segment of the origin path."""
        return PurePosixPath(self.origin_path).name

    @property
    def category(self) -> tuple[str, ...]:
        """Directories between the kind folder and the asset itself."""
        parts = PurePosixPath(self.origin_path).parts
        return tuple(parts[1:-1])

    @property
    def depth(self) -> int:
        """Nesting depth below the kind folder."""
        return len(self.category)


@dataclass(frozen=True)
class FileDecision:
    """Resolver verdict for one output file.

    Attributes:
        output_path: Destination the decision applies to.
        action: Write, skip or rename.
        reason: Short machine-readable reason (new, unchanged, customized, ...).
    """

    output_path: Path
    action: Action
    reason: str

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.reason:
            raise ValueError("reason cannot be empty")

    @property
    def writes(self) -> bool:
        """True if the file gets written."""
        return self.action is not Action.SKIP


@dataclass(frozen=True)
class FileError:
    """A per-file failure that did not abort the run."""

    path: Path
    error: str


@dataclass
class InstallOptions:
    """Parsed user selection for one install run.

    Attributes:
        target: Platform id or "all".
        skills: Install skills.
        agents: Install agents.
        scope: Project-local or global install.
        category: Only install assets whose name or category contains this text.
        exclude: Exclusion patterns added to the installer's own for this run.
        project_root: Project root for project scope (detected if None).
        home: Home directory for global scope (``Path.home()`` if None).
    """

    target: str = "all"
    skills: bool = True
    agents: bool = True
    scope: Scope = Scope.PROJECT
    category: str | None = None
    exclude: tuple[str, ...] = ()
    project_root: Path | None = None
    home: Path | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.skills and not self.agents:
            raise ValueError("at least one of skills or agents must be selected")

    @property
    def kinds(self) -> tuple[AssetKind, ...]:
        """Selected asset kinds, skills first."""
        kinds = []
        if self.skills:
            kinds.append(AssetKind.SKILL)
        if self.agents:
            kinds.append(AssetKind.AGENT)
        return tuple(kinds)


@dataclass
class InstallSummary:
    """Per-platform result of an install run.

    Counts only include assets that were actually written. Every decision,
    including skips, is kept in ``decisions``.
    """

    platform: str
    location: Path
    skills_count: int = 0
    agents_count: int = 0
    decisions: list[FileDecision] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)

    @property
    def skipped(self) -> list[FileDecision]:
        """Decisions that left the destination untouched."""
        return [d for d in self.decisions if d.action is Action.SKIP]

    @property
    def success(self) -> bool:
        """True if no file failed to write."""
        return not self.errors
