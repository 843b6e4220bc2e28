"""Content transforms from the canonical template format to platform formats.

Templates are authored in GitHub Copilot format: agents are ``*.agent.md``
files with YAML front matter, skills are directories with a ``SKILL.md``.
Each platform may declare an agent transform ``(content, filename) -> content``
and a skill transform ``(content) -> content``; the functions here are the
implementations the platform table refers to.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from z_command.frontmatter import parse_frontmatter, render_frontmatter

AGENT_SUFFIXES = (".agent.md", ".md")

# Skills directories of every supported platform, project and global layouts.
SKILL_PATH_ALIASES = (
    ".github/skills",
    ".copilot/skills",
    ".claude/skills",
    ".agent/skills",
    ".gemini/antigravity/skills",
)


def strip_agent_suffix(filename: str) -> str:
    """Remove the agent file suffix (``.agent.md``, else ``.md``)."""
    for suffix in AGENT_SUFFIXES:
        if filename.endswith(suffix) and len(filename) > len(suffix):
            return filename[: -len(suffix)]
    return filename


def title_from_name(name: str) -> str:
    """Format a hyphenated name as a title.

    Example:
        >>> title_from_name("backend-developer")
        'Backend Developer'
    """
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def to_workflow(content: str, filename: str) -> str:
    """Convert an agent into a workflow with a description-only header.

    Content without a metadata block is returned unchanged. Otherwise the
    body is trimmed of surrounding whitespace.

    Args:
        content: Agent file content.
        filename: Source file name, used when no description is declared.

    Returns:
        Workflow document.
    """
    document = parse_frontmatter(content)
    if not document.present:
        return content

    description = document.get("description") or strip_agent_suffix(filename)
    header = render_frontmatter({"description": " ".join(description.split())})
    return f"{header}\n\n{document.body.strip()}"


def to_rule(content: str, filename: str) -> str:
    """Convert an agent into a plain markdown rule.

    The metadata block is dropped; the name becomes a ``#`` heading and the
    description the first paragraph. A body that followed a metadata block is
    trimmed.

    Args:
        content: Agent file content.
        filename: Source file name, used when no name is declared.

    Returns:
        Rule document.
    """
    document = parse_frontmatter(content)
    name = document.get("name") or strip_agent_suffix(filename)
    description = document.get("description")

    sections = [f"# {title_from_name(name)}"]
    if description:
        sections.append(description)
    sections.append(document.body.strip() if document.present else document.body)
    return "\n\n".join(sections)


class SkillPathRewriter:
    """Rewrite references to other platforms' skills directories.

    All aliases are matched in one pass, longest first, so a replacement is
    never matched again by a later alias.
    """

    def __init__(self, target: str, aliases: Iterable[str] = SKILL_PATH_ALIASES) -> None:
        """Initialize rewriter.

        Args:
            target: Skills directory of the installing platform.
            aliases: Directory literals to rewrite.
        """
        self.target = target
        sources = sorted({a for a in aliases if a != target}, key=len, reverse=True)
        alternation = "|".join(re.escape(source) for source in sources)
        self._pattern = re.compile(rf"(?<![\w.-])(?:{alternation})(?![\w-])") if sources else None

    def __call__(self, content: str) -> str:
        """Return content with every alias replaced by the target."""
        if self._pattern is None:
            return content
        return self._pattern.sub(lambda _match: self.target, content)

    def __repr__(self) -> str:
        return f"SkillPathRewriter({self.target!r})"
