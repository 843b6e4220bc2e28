"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from z_command.sources import TemplateBundle


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.delenv("Z_COMMAND_HOME", raising=False)
    monkeypatch.delenv("Z_COMMAND_TEMPLATES", raising=False)
    return home


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create an empty project directory with a .git marker."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    return root


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_dir.return_value = False
    fs.read_bytes.return_value = b""
    return fs


# ============================================================================
# Sample Content Fixtures
# ============================================================================


@pytest.fixture
def sample_agent_content() -> str:
    """Sample agent file content in the canonical format."""
    return """---
name: backend-developer
description: Builds server-side features and APIs
tools: ["read", "edit"]
---

# Backend Developer

You are a backend developer.

Follow `.github/skills/api-design/SKILL.md` when adding endpoints.
"""


@pytest.fixture
def sample_skill_content() -> str:
    """Sample skill SKILL.md content."""
    return """---
name: api-design
description: Conventions for HTTP APIs
---

# API Design

See `.github/skills/api-design/reference.md` for details.
"""


# ============================================================================
# Template Bundle Fixtures
# ============================================================================


BundleFactory = Callable[[dict[str, str | bytes]], Path]


@pytest.fixture
def make_bundle(tmp_path: Path) -> BundleFactory:
    """Return a factory that writes files into a fresh template directory.

    Keys are POSIX paths relative to the bundle root.
    """
    counter = 0

    def factory(files: dict[str, str | bytes]) -> Path:
        nonlocal counter
        counter += 1
        root = tmp_path / f"templates-{counter}"
        (root / "agents").mkdir(parents=True)
        (root / "skills").mkdir(parents=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return factory


@pytest.fixture
def sample_bundle(
    make_bundle: BundleFactory, sample_agent_content: str, sample_skill_content: str
) -> TemplateBundle:
    """A bundle with two agents and two skills, one of them categorized."""
    root = make_bundle(
        {
            "agents/backend-developer.agent.md": sample_agent_content,
            "agents/code-reviewer.agent.md": "---\nname: code-reviewer\ndescription: Reviews code\n---\n\nReview carefully.\n",
            "skills/api-design/SKILL.md": sample_skill_content,
            "skills/api-design/reference.md": "# Reference\n",
            "skills/testing/pytest-patterns/SKILL.md": "---\nname: pytest-patterns\ndescription: Pytest tips\n---\n\nUse fixtures.\n",
            "skills/testing/pytest-patterns/scripts/run.sh": "#!/bin/sh\npytest\n",
            "skills/testing/pytest-patterns/data/cases.json": "[]\n",
        }
    )
    return TemplateBundle.create(root)
