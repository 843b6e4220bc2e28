"""Platform registry.

The table is built once at import time and exposed read-only; every other
component receives PlatformTarget instances from here.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .antigravity import ANTIGRAVITY
from .base import PlatformTarget
from .claude import CLAUDE
from .copilot import COPILOT
from .cursor import CURSOR

__all__ = [
    "ALL_PLATFORMS",
    "PLATFORMS",
    "PlatformTarget",
    "get_all_platforms",
    "get_platform",
    "get_target_platforms",
    "is_valid_target",
]

ALL_PLATFORMS = "all"

PLATFORMS: Mapping[str, PlatformTarget] = MappingProxyType(
    {platform.id: platform for platform in (COPILOT, CLAUDE, ANTIGRAVITY, CURSOR)}
)


def get_platform(platform_id: str) -> PlatformTarget:
    """Get a platform by id.

    Args:
        platform_id: Platform id (copilot, claude, antigravity, cursor).

    Returns:
        Platform target.

    Raises:
        ValueError: If platform is not supported.
    """
    if platform_id not in PLATFORMS:
        raise ValueError(f"Unknown platform: {platform_id}. Supported: {list(PLATFORMS.keys())}")
    return PLATFORMS[platform_id]


def get_all_platforms() -> list[PlatformTarget]:
    """Get every supported platform in registry order."""
    return list(PLATFORMS.values())


def get_target_platforms(selector: str | None = ALL_PLATFORMS) -> list[PlatformTarget]:
    """Resolve a target selector to platforms.

    Args:
        selector: A platform id, or "all"/None for every platform.

    Returns:
        Selected platforms.
    """
    if not selector or selector == ALL_PLATFORMS:
        return get_all_platforms()
    return [get_platform(selector)]


def is_valid_target(selector: str) -> bool:
    """Check a target selector before it reaches the registry."""
    return selector == ALL_PLATFORMS or selector in PLATFORMS
