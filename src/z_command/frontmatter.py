"""Front matter parsing for template files.

Templates start with an optional ``---`` delimited metadata block. The block is
parsed into a flat ``dict[str, str]`` so transforms work on structured data
instead of re-matching patterns against the raw text.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field

import yaml

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
_LINE_PATTERN = re.compile(r"^([A-Za-z_][\w-]*)\s*:\s*(.*?)\s*$")


@dataclass
class Frontmatter:
    """Parsed template document.

    Attributes:
        metadata: Scalar front matter fields as strings.
        body: Content after the metadata block (the whole content if absent).
        present: True if the content starts with a metadata block.
    """

    metadata: dict[str, str] = field(default_factory=dict)
    body: str = ""
    present: bool = False

    def get(self, key: str, default: str = "") -> str:
        """Return a metadata field, or default when missing or blank."""
        return self.metadata.get(key) or default


def parse_frontmatter(content: str) -> Frontmatter:
    """Split content into metadata and body.

    Args:
        content: Full template text.

    Returns:
        Frontmatter with parsed fields and body. Leading blank lines of the
        body are dropped.

    Example:
        >>> doc = parse_frontmatter("---\\nname: test\\n---\\nBody")
        >>> doc.metadata
        {'name': 'test'}
        >>> doc.body
        'Body'
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return Frontmatter(body=content)

    body = content[match.end():].lstrip("\r\n")
    return Frontmatter(metadata=_parse_block(match.group(1)), body=body, present=True)


def render_frontmatter(metadata: dict[str, str]) -> str:
    """Render a metadata block with delimiters and no trailing newline."""
    lines = ["---"]
    lines.extend(f"{key}: {_render_scalar(value)}" for key, value in metadata.items())
    lines.append("---")
    return "\n".join(lines)


def _parse_block(block: str) -> dict[str, str]:
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        logger.debug("Front matter is not valid YAML, scanning lines: %s", e)
        return _parse_lines(block)

    if data is None:
        return {}
    if not isinstance(data, dict):
        return _parse_lines(block)

    result = {}
    for key, value in data.items():
        if value is None or isinstance(value, (list, dict)):
            continue
        result[str(key)] = str(value).strip()
    return result


def _parse_lines(block: str) -> dict[str, str]:
    """Line-oriented ``key: value`` fallback for hand-written blocks."""
    result = {}
    for line in block.splitlines():
        match = _LINE_PATTERN.match(line)
        if not match:
            continue
        key, value = match.groups()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        if value:
            result[key] = value
    return result


def _render_scalar(value: str) -> str:
    """Emit value bare when YAML reads it back unchanged, else double-quoted."""
    try:
        if yaml.safe_load(f"key: {value}") == {"key": value}:
            return value
    except yaml.YAMLError:
        pass
    return json.dumps(value, ensure_ascii=False)
