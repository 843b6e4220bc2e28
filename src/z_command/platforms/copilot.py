"""GitHub Copilot platform.

Templates are authored in Copilot format, so nothing is transformed.
"""

from __future__ import annotations

from z_command.platforms.base import PlatformTarget

COPILOT = PlatformTarget(
    id="copilot",
    display_name="GitHub Copilot",
    project_dir=".github",
    global_dir=".copilot",
    agents_subdir="agents",
    skills_subdir="skills",
    agent_extension=".agent.md",
)
