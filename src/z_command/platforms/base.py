"""Platform target definition shared by all platforms.

A platform is plain configuration: directory names, the agent file extension
and optional transform callables. Platform-specific behavior is expressed by
the presence or absence of a transform, not by subclassing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from z_command.types import Scope

AgentTransform = Callable[[str, str], str]
SkillTransform = Callable[[str], str]


@dataclass(frozen=True)
class PlatformTarget:
    """Directory layout and format conventions of one AI assistant.

    Attributes:
        id: Platform identifier used on the command line.
        display_name: Human-readable name.
        project_dir: Directory relative to the project root.
        global_dir: Directory relative to the home directory.
        agents_subdir: Subdirectory for agents (workflows, rules, ...).
        agent_extension: Suffix of installed agent files.
        skills_subdir: Subdirectory for skills, None if unsupported.
        shared_subdir: Top-level directory for shared skill resources.
        global_agents_subdir: Agents subdirectory used in global scope.
        transform_agent: Optional ``(content, filename) -> content``.
        transform_skill: Optional ``(content) -> content`` for SKILL.md.
    """

    id: str
    display_name: str
    project_dir: str
    global_dir: str
    agents_subdir: str
    agent_extension: str
    skills_subdir: str | None = None
    shared_subdir: str | None = None
    global_agents_subdir: str | None = None
    transform_agent: AgentTransform | None = None
    transform_skill: SkillTransform | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.project_dir or not self.global_dir:
            raise ValueError(f"{self.id}: project_dir and global_dir are required")
        if not self.agent_extension.startswith("."):
            raise ValueError(f"{self.id}: agent_extension must start with '.'")

    @property
    def supports_skills(self) -> bool:
        """True if the platform has a skills directory."""
        return self.skills_subdir is not None

    def base_dir(self, scope: Scope, root: Path) -> Path:
        """Platform directory for a scope.

        Args:
            scope: Project or global.
            root: Project root (project scope) or home directory (global scope).
        """
        if scope is Scope.GLOBAL:
            return root / self.global_dir
        return root / self.project_dir

    def agents_dir(self, scope: Scope, root: Path) -> Path:
        """Directory agents are installed to."""
        subdir = self.agents_subdir
        if scope is Scope.GLOBAL and self.global_agents_subdir:
            subdir = self.global_agents_subdir
        return self.base_dir(scope, root) / subdir

    def skills_dir(self, scope: Scope, root: Path) -> Path:
        """Directory skills are installed to.

        Raises:
            ValueError: If the platform does not support skills.
        """
        if self.skills_subdir is None:
            raise ValueError(f"{self.display_name} does not support skills")
        return self.base_dir(scope, root) / self.skills_subdir

    def shared_dir(self, scope: Scope, root: Path) -> Path | None:
        """Directory for shared skill resources, None if unused.

        Project installs put it at the project root so it can be ignored as a
        whole; global installs keep it inside the platform directory.
        """
        if self.shared_subdir is None:
            return None
        if scope is Scope.GLOBAL:
            return self.base_dir(scope, root) / self.shared_subdir
        return root / self.shared_subdir

    def agent_filename(self, name: str) -> str:
        """Installed file name for an agent."""
        return f"{name}{self.agent_extension}"

    def render_agent(self, content: str, filename: str) -> str:
        """Apply the agent transform, if any."""
        if self.transform_agent is None:
            return content
        return self.transform_agent(content, filename)

    def render_skill(self, content: str) -> str:
        """Apply the skill transform, if any."""
        if self.transform_skill is None:
            return content
        return self.transform_skill(content)
