"""Cursor platform.

Cursor has no skills; agents are installed as plain markdown rules.
"""

from __future__ import annotations

from z_command.platforms.base import PlatformTarget
from z_command.transform import to_rule

CURSOR = PlatformTarget(
    id="cursor",
    display_name="Cursor",
    project_dir=".cursor",
    global_dir=".cursor",
    agents_subdir="rules",
    agent_extension=".md",
    transform_agent=to_rule,
)
