"""Installation of bundled skills and agents into platform directories."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from z_command.filesystem import RealFileSystem
from z_command.ignore import IgnoreFileMaintainer
from z_command.platforms import PlatformTarget, get_target_platforms
from z_command.protocols import AssetSource, FileSystem
from z_command.resolver import CollisionResolver
from z_command.sources import TemplateBundle
from z_command.types import (
    Asset,
    AssetKind,
    FileDecision,
    FileError,
    InstallOptions,
    InstallSummary,
    Scope,
)

logger = logging.getLogger(__name__)

# Skill subdirectories mirrored into a platform's shared directory
SHARED_RESOURCE_DIRS = ("data", "scripts")


def get_project_root(start_path: Path | None = None) -> Path | None:
    """Find nearest parent directory containing .git.

    Args:
        start_path: Starting directory. Defaults to cwd.

    Returns:
        Path to project root or None if not in a git repo.
    """
    path = start_path or Path.cwd()
    # Resolve to handle symlinks and get absolute path
    path = path.resolve()
    while path != path.parent:
        if (path / ".git").exists():
            return path
        path = path.parent
    # Check root directory as well
    if (path / ".git").exists():
        return path
    return None


def matches_category(asset: Asset, category: str) -> bool:
    """Check whether the asset's name or a category folder contains the text."""
    return any(category in part for part in (*asset.category, asset.name))


class Installer:
    """Installs a template bundle for one or more platforms.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.
    """

    def __init__(
        self,
        bundle: AssetSource,
        filesystem: FileSystem,
        exclusions: Sequence[str],
    ) -> None:
        """Initialize installer with required dependencies.

        Args:
            bundle: Source of skills and agents (required).
            filesystem: Filesystem abstraction (required).
            exclusions: Asset name patterns that are never installed (required).

        Note:
            Use factory method `create()` for production code.
            Direct construction is for testing with explicit dependencies.
        """
        self.bundle = bundle
        self.fs = filesystem
        self.exclusions = tuple(exclusions)

    @classmethod
    def create(
        cls,
        bundle: AssetSource | None = None,
        filesystem: FileSystem | None = None,
        exclusions: Sequence[str] = (),
    ) -> Installer:
        """Factory method for production instantiation.

        Args:
            bundle: Optional bundle (the packaged templates if not provided).
            filesystem: Optional filesystem abstraction (created if not provided).
            exclusions: Asset name patterns to skip.

        Returns:
            Configured Installer instance.
        """
        return cls(
            bundle=bundle or TemplateBundle.create_default(),
            filesystem=filesystem or RealFileSystem(),
            exclusions=exclusions,
        )

    def install(self, options: InstallOptions) -> list[InstallSummary]:
        """Install the selected templates.

        The bundle is read and validated before anything is written. Files
        that fail to write are recorded in the summary and do not stop the run.

        Args:
            options: Parsed user selection.

        Returns:
            One summary per selected platform, in registry order.

        Raises:
            SourceIntegrityError: If the bundle cannot be read or flattened.
            ValueError: If the target platform is unknown.
        """
        platforms = get_target_platforms(options.target)
        assets = self.bundle.read(options.kinds)
        if options.category:
            assets = [a for a in assets if matches_category(a, options.category)]

        agents = [a for a in assets if a.kind is AssetKind.AGENT]
        skills = sorted(
            (a for a in assets if a.kind is AssetKind.SKILL),
            key=lambda a: (a.depth, a.origin_path),
        )
        resolver = CollisionResolver(self.fs, (*self.exclusions, *options.exclude))
        self._check_flattening(skills, resolver)

        root = self._resolve_root(options)
        summaries: list[InstallSummary] = []
        ignore_entries: dict[str, list[InstallSummary]] = {}

        for platform in platforms:
            summary = InstallSummary(
                platform=platform.display_name,
                location=platform.base_dir(options.scope, root),
            )
            if AssetKind.SKILL in options.kinds and platform.supports_skills:
                self._install_skills(platform, skills, options.scope, root, resolver, summary)
            if AssetKind.AGENT in options.kinds:
                self._install_agents(platform, agents, options.scope, root, resolver, summary)

            shared = platform.shared_dir(options.scope, root)
            if shared is not None and any(shared in d.output_path.parents for d in summary.decisions):
                ignore_entries.setdefault(f"{platform.shared_subdir}/", []).append(summary)

            logger.info(
                "%s: %d skills, %d agents, %d skipped, %d failed",
                platform.display_name,
                summary.skills_count,
                summary.agents_count,
                len(summary.skipped),
                len(summary.errors),
            )
            summaries.append(summary)

        if options.scope is Scope.PROJECT and ignore_entries:
            self._update_ignore_file(root, ignore_entries)

        return summaries

    def _resolve_root(self, options: InstallOptions) -> Path:
        if options.scope is Scope.GLOBAL:
            return options.home or Path.home()
        return options.project_root or get_project_root() or Path.cwd()

    def _check_flattening(self, skills: Iterable[Asset], resolver: CollisionResolver) -> None:
        """Fail before any write if flattened skill names cannot be made unique."""
        trial = CollisionResolver(self.fs)
        for asset in skills:
            if not resolver.is_excluded(asset.name):
                trial.claim(asset, Path(asset.name))

    def _destination(
        self, resolver: CollisionResolver, asset: Asset, preferred: Path
    ) -> tuple[Path, bool]:
        if resolver.is_excluded(asset.name):
            return preferred, False
        return resolver.claim(asset, preferred)

    def _install_agents(
        self,
        platform: PlatformTarget,
        agents: list[Asset],
        scope: Scope,
        root: Path,
        resolver: CollisionResolver,
        summary: InstallSummary,
    ) -> None:
        agents_dir = platform.agents_dir(scope, root)
        for asset in agents:
            preferred = agents_dir / platform.agent_filename(asset.name)
            destination, renamed = self._destination(resolver, asset, preferred)
            content = platform.render_agent(asset.raw_content, asset.filename).encode("utf-8")
            if self._write_file(resolver, asset, destination, content, renamed, summary):
                summary.agents_count += 1

    def _install_skills(
        self,
        platform: PlatformTarget,
        skills: list[Asset],
        scope: Scope,
        root: Path,
        resolver: CollisionResolver,
        summary: InstallSummary,
    ) -> None:
        skills_dir = platform.skills_dir(scope, root)
        shared_dir = platform.shared_dir(scope, root)

        for asset in skills:
            target, renamed = self._destination(resolver, asset, skills_dir / asset.name)
            if resolver.is_excluded(asset.name):
                summary.decisions.append(resolver.decide(asset, target, b""))
                continue

            files = [(TemplateBundle.SKILL_FILE, platform.render_skill(asset.raw_content).encode("utf-8"))]
            files.extend(asset.resources)

            written = False
            for relative, content in files:
                if self._write_file(resolver, asset, target / relative, content, renamed, summary):
                    written = True

            if shared_dir is not None:
                for relative, content in asset.resources:
                    if relative.split("/", 1)[0] in SHARED_RESOURCE_DIRS:
                        destination = shared_dir / target.name / relative
                        self._write_file(resolver, asset, destination, content, renamed, summary)

            if written:
                summary.skills_count += 1

    def _write_file(
        self,
        resolver: CollisionResolver,
        asset: Asset,
        destination: Path,
        content: bytes,
        renamed: bool,
        summary: InstallSummary,
    ) -> bool:
        """Resolve and, if allowed, write one file.

        Returns:
            True if the file was written.
        """
        decision: FileDecision = resolver.decide(asset, destination, content, renamed)
        summary.decisions.append(decision)
        logger.debug("%s %s (%s)", decision.action.value, destination, decision.reason)
        if not decision.writes:
            return False

        try:
            self.fs.mkdir(destination.parent, parents=True, exist_ok=True)
            self.fs.write_bytes(destination, content)
        except OSError as e:
            logger.error("Failed to write %s: %s", destination, e)
            summary.errors.append(FileError(path=destination, error=str(e)))
            return False
        return True

    def _update_ignore_file(
        self, root: Path, entries: dict[str, list[InstallSummary]]
    ) -> None:
        maintainer = IgnoreFileMaintainer.for_project(self.fs, root)
        try:
            maintainer.ensure_entries(entries)
        except OSError as e:
            logger.error("Failed to update %s: %s", maintainer.path, e)
            for summaries in entries.values():
                for summary in summaries:
                    summary.errors.append(FileError(path=maintainer.path, error=str(e)))
