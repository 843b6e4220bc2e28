"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from z_command.context import AppContext

import typer
from pydantic import ValidationError
from rich.console import Console

from z_command import __version__
from z_command.config import ConfigError, Settings
from z_command.console import TUI
from z_command.context import create_context
from z_command.platforms import PLATFORMS, get_all_platforms, is_valid_target
from z_command.sources import SourceIntegrityError
from z_command.types import InstallOptions, Scope

app = typer.Typer(
    name="z-command",
    help="Install curated AI coding assistant skills and agents for your project",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")

app.add_typer(config_app, name="config")

console = Console()
tui = TUI(console)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"z-command v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log every install decision")
    ] = False,
) -> None:
    """Install curated AI coding assistant skills and agents for your project."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def _load_context(templates: Path | None = None) -> AppContext:
    """Build the application context, exiting on a broken settings file."""
    try:
        return create_context(templates=templates)
    except ConfigError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e


def _check_target(target: str) -> None:
    if not is_valid_target(target):
        tui.show_error(f"Unknown target '{target}'. Supported: all, {', '.join(PLATFORMS)}")
        raise typer.Exit(1)


# ============================================================================
# Install Commands
# ============================================================================


@app.command("init")
def init(
    skills: Annotated[bool, typer.Option("--skills", "-s", help="Install skills only")] = False,
    agents: Annotated[bool, typer.Option("--agents", "-a", help="Install agents only")] = False,
    global_: Annotated[
        bool, typer.Option("--global", "-g", help="Install into the home directory")
    ] = False,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Only install matching templates")
    ] = None,
    target: Annotated[
        str | None,
        typer.Option("--target", "-t", help="Platform id or 'all' (default from config)"),
    ] = None,
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-x", help="Extra name pattern to skip")
    ] = None,
    templates: Annotated[
        Path | None, typer.Option("--templates", help="Template directory or zip archive")
    ] = None,
    _context=None,
) -> None:
    """Install skills and agents for the selected platforms."""
    ctx = _context or _load_context(templates)
    selected = target or ctx.settings.default_target
    _check_target(selected)

    # Neither flag means both kinds
    options = InstallOptions(
        target=selected,
        skills=skills or not agents,
        agents=agents or not skills,
        scope=Scope.GLOBAL if global_ else Scope.PROJECT,
        category=category,
        exclude=tuple(exclude or ()),
    )

    tui.show_welcome()
    try:
        summaries = ctx.installer.install(options)
    except SourceIntegrityError as e:
        tui.show_error(f"Template bundle is invalid: {e}")
        raise typer.Exit(1) from e
    except ValueError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e

    for summary in summaries:
        tui.show_platform_result(summary)
    tui.show_summary(summaries)
    if category and not any(s.skills_count or s.agents_count or s.skipped for s in summaries):
        tui.show_warning(f"No templates match category '{category}'")

    if not all(summary.success for summary in summaries):
        raise typer.Exit(1)


@app.command("list")
def list_templates(
    skills: Annotated[bool, typer.Option("--skills", "-s", help="List skills only")] = False,
    agents: Annotated[bool, typer.Option("--agents", "-a", help="List agents only")] = False,
    templates: Annotated[
        Path | None, typer.Option("--templates", help="Template directory or zip archive")
    ] = None,
    _context=None,
) -> None:
    """List the templates in the bundle."""
    ctx = _context or _load_context(templates)
    options = InstallOptions(skills=skills or not agents, agents=agents or not skills)

    try:
        assets = ctx.bundle.read(options.kinds)
    except SourceIntegrityError as e:
        tui.show_error(f"Template bundle is invalid: {e}")
        raise typer.Exit(1) from e

    tui.show_templates(assets, options.kinds)
    tui.show_info("Run 'z-command init' to install them")


@app.command("platforms")
def platforms() -> None:
    """Show supported platforms and their directories."""
    tui.show_platforms(get_all_platforms())


# ============================================================================
# Config Commands
# ============================================================================

CONFIG_KEYS = ("default-target", "exclude", "templates")


@config_app.command("show")
def config_show(
    _context=None,
) -> None:
    """Show current configuration."""
    ctx = _context or _load_context()
    tui.show_settings(ctx.settings, ctx.settings_manager.config_file)


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help=f"Configuration key ({', '.join(CONFIG_KEYS)})")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
    _context=None,
) -> None:
    """Set a configuration value."""
    ctx = _context or _load_context()
    data = ctx.settings.model_dump(by_alias=True)

    if key == "default-target":
        data["defaultTarget"] = value.strip()
    elif key == "exclude":
        data["exclude"] = value.split(",")
    elif key == "templates":
        data["templates"] = Path(value).expanduser().resolve() if value.strip() else None
    else:
        tui.show_error(f"Unknown configuration key: {key}")
        raise typer.Exit(1)

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        tui.show_error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
        raise typer.Exit(1) from e

    ctx.settings_manager.save(settings)
    ctx.settings = settings
    tui.show_success(f"Set {key} to {value}")


if __name__ == "__main__":
    app()
