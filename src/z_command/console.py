"""Console output for the z-command CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from z_command import __version__
from z_command.sources import describe
from z_command.types import AssetKind

if TYPE_CHECKING:
    from pathlib import Path

    from z_command.config import Settings
    from z_command.platforms import PlatformTarget
    from z_command.types import Asset, InstallSummary


class TUI:
    """Text User Interface for z-command (non-interactive mode)."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize TUI.

        Args:
            console: Console to print to. A new one is created if None.
        """
        self.console = console or Console()

    def show_welcome(self) -> None:
        """Display welcome banner."""
        self.console.print(
            Panel(
                f"[bold cyan]Z-Command[/bold cyan] v{__version__}\n"
                "Installing AI coding assistant skills & agents",
                border_style="cyan",
            )
        )

    def show_platform_result(self, summary: InstallSummary) -> None:
        """Show what was installed for one platform."""
        self.console.print(f"\n[blue]Installed for {summary.platform}[/blue]")
        self.console.print(f"[dim]   Location: {summary.location}[/dim]")
        for decision in summary.skipped:
            self.console.print(f"[dim]   Skipped ({decision.reason}): {decision.output_path}[/dim]")

    def show_summary(self, summaries: list[InstallSummary]) -> None:
        """Display per-platform install counts.

        Args:
            summaries: Results of an install run.
        """
        if all(s.success for s in summaries):
            self.console.print("\n[green]✓ Installation complete![/green]\n")
        else:
            self.console.print("\n[yellow]! Installation finished with errors[/yellow]\n")

        table = Table(title="Summary")
        table.add_column("Platform", style="cyan")
        table.add_column("Skills", justify="right")
        table.add_column("Agents", justify="right")
        table.add_column("Skipped", justify="right")
        table.add_column("Failed", justify="right")
        table.add_column("Location")

        for summary in summaries:
            table.add_row(
                summary.platform,
                str(summary.skills_count),
                str(summary.agents_count),
                str(len(summary.skipped)),
                str(len(summary.errors)),
                str(summary.location),
            )
        self.console.print(table)

        for summary in summaries:
            for error in summary.errors:
                self.show_error(f"{summary.platform}: {error.path}: {error.error}")

    def show_templates(self, assets: list[Asset], kinds: tuple[AssetKind, ...]) -> None:
        """Display available templates grouped by kind.

        Args:
            assets: Assets read from the bundle.
            kinds: Kinds that were requested.
        """
        self.console.print("\n[cyan]Available Templates[/cyan]\n")
        for kind, title in ((AssetKind.SKILL, "Skills"), (AssetKind.AGENT, "Agents")):
            if kind not in kinds:
                continue
            group = [a for a in assets if a.kind is kind]
            if not group:
                self.console.print(f"[yellow]No {title.lower()} found[/yellow]\n")
                continue
            self.console.print(f"[bold]{title}:[/bold]")
            for asset in group:
                self.console.print(f"  [green]• {asset.name}[/green] [dim]- {describe(asset)}[/dim]")
            self.console.print()

    def show_platforms(self, platforms: list[PlatformTarget]) -> None:
        """Display the platform table."""
        table = Table(title="Supported Platforms")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Project")
        table.add_column("Global")
        table.add_column("Agents")
        table.add_column("Skills")

        for platform in platforms:
            table.add_row(
                platform.id,
                platform.display_name,
                platform.project_dir,
                f"~/{platform.global_dir}",
                f"{platform.agents_subdir}/*{platform.agent_extension}",
                platform.skills_subdir or "-",
            )
        self.console.print(table)

    def show_settings(self, settings: Settings, path: Path) -> None:
        """Display current settings."""
        self.console.print("\n[bold]Configuration[/bold]")
        self.console.print(f"  Settings file: {path}")
        self.console.print(f"  Default target: {settings.default_target}")
        self.console.print(f"  Templates: {settings.templates or 'bundled'}")
        self.console.print(f"  Exclusions: {', '.join(settings.exclude) or 'none'}")

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        self.console.print(f"[blue]i[/blue] {message}")
