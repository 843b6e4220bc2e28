"""Collision and customization decisions for installed files.

For every output file the resolver decides whether to write it, leave the
existing copy alone, or write it under a disambiguated name. An existing file
is only ever overwritten when it is byte-identical to what would be generated
now, so local edits survive re-installation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from z_command.protocols import FileSystem
from z_command.sources import SourceIntegrityError
from z_command.types import Action, Asset, FileDecision

logger = logging.getLogger(__name__)

REASON_EXCLUDED = "excluded"
REASON_NEW = "new"
REASON_UNCHANGED = "unchanged"
REASON_CUSTOMIZED = "customized"
REASON_UNVERIFIABLE = "unverifiable"


def disambiguated_name(asset: Asset) -> str:
    """Flat name that includes the asset's category path.

    Example:
        ``skills/backend/api-design`` -> ``backend-api-design``
    """
    return "-".join((*asset.category, asset.name))


class CollisionResolver:
    """Decides write, skip or rename per output file.

    One resolver is used for a whole install run so destinations claimed by
    one asset are visible when a same-named asset from another category
    arrives later.
    """

    def __init__(self, filesystem: FileSystem, exclusions: Iterable[str] = ()) -> None:
        """Initialize resolver.

        Args:
            filesystem: Filesystem used to inspect destinations.
            exclusions: Case-insensitive substrings of excluded asset names.
        """
        self.fs = filesystem
        self.exclusions = tuple(p.lower() for p in exclusions if p)
        self._claims: dict[Path, str] = {}

    def is_excluded(self, name: str) -> bool:
        """Check a name against the exclusion patterns."""
        lowered = name.lower()
        return any(pattern in lowered for pattern in self.exclusions)

    def claim(self, asset: Asset, preferred: Path) -> tuple[Path, bool]:
        """Reserve a destination for an asset.

        Args:
            asset: Asset being installed.
            preferred: Destination derived from the asset's own name.

        Returns:
            Tuple of (destination, renamed). The destination is the preferred
            one unless another asset already holds it.

        Raises:
            SourceIntegrityError: If the disambiguated name is taken as well.
        """
        owner = self._claims.setdefault(preferred, asset.origin_path)
        if owner == asset.origin_path:
            return preferred, False

        alternative = preferred.with_name(disambiguated_name(asset))
        owner = self._claims.setdefault(alternative, asset.origin_path)
        if alternative == preferred or owner != asset.origin_path:
            raise SourceIntegrityError(
                f"Cannot place {asset.origin_path}: {preferred.name} and "
                f"{alternative.name} are taken by {owner}"
            )
        logger.debug("Renamed %s to %s (%s holds %s)", asset.origin_path, alternative, owner, preferred)
        return alternative, True

    def decide(
        self,
        asset: Asset,
        destination: Path,
        candidate: bytes,
        renamed: bool = False,
    ) -> FileDecision:
        """Decide what to do with one output file.

        Args:
            asset: Asset the file belongs to.
            destination: Output path (already claimed).
            candidate: Freshly generated file content.
            renamed: True if the destination was disambiguated by `claim`.

        Returns:
            FileDecision for the destination.
        """
        if self.is_excluded(asset.name):
            return FileDecision(destination, Action.SKIP, REASON_EXCLUDED)

        write = Action.RENAME if renamed else Action.WRITE
        try:
            if not self.fs.exists(destination):
                return FileDecision(destination, write, REASON_NEW)
            existing = self.fs.read_bytes(destination)
        except OSError as e:
            logger.warning("Cannot verify %s, leaving it untouched: %s", destination, e)
            return FileDecision(destination, Action.SKIP, REASON_UNVERIFIABLE)

        if existing == candidate:
            return FileDecision(destination, write, REASON_UNCHANGED)

        logger.info("Keeping customized %s", destination)
        return FileDecision(destination, Action.SKIP, REASON_CUSTOMIZED)
