"""Antigravity platform.

Agents become workflows with a description-only header. Global workflows live
in a separate directory, and skill data/scripts are mirrored to a shared
directory.
"""

from __future__ import annotations

from z_command.platforms.base import PlatformTarget
from z_command.transform import SkillPathRewriter, to_workflow

ANTIGRAVITY = PlatformTarget(
    id="antigravity",
    display_name="Antigravity",
    project_dir=".agent",
    global_dir=".gemini/antigravity",
    agents_subdir="workflows",
    global_agents_subdir="global_workflows",
    skills_subdir="skills",
    shared_subdir=".shared",
    agent_extension=".md",
    transform_agent=to_workflow,
    transform_skill=SkillPathRewriter(".agent/skills"),
)
