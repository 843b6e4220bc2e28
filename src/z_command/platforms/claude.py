"""Claude Code platform."""

from __future__ import annotations

from z_command.platforms.base import PlatformTarget
from z_command.transform import SkillPathRewriter

# Claude Code reads Copilot-style agents as is; only skill links move.
CLAUDE = PlatformTarget(
    id="claude",
    display_name="Claude Code",
    project_dir=".claude",
    global_dir=".claude",
    agents_subdir="agents",
    skills_subdir="skills",
    agent_extension=".agent.md",
    transform_skill=SkillPathRewriter(".claude/skills"),
)
