"""CLI commands using Typer."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from tlp_switcher_setup.context import AppContext

import typer
from rich.logging import RichHandler

from tlp_switcher_setup import __version__
from tlp_switcher_setup.config import ConfigError
from tlp_switcher_setup.context import create_context
from tlp_switcher_setup.settings import WIDGET_WIDTH_KEY
from tlp_switcher_setup.targets import bundle_sources
from tlp_switcher_setup.tui import TUI, PreferencesApp, console

app = typer.Typer(
    name="tlp-switcher-setup",
    help="Set up the privileged helper for the TLP Profile Switcher extension",
    no_args_is_help=True,
)

tui = TUI(console)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"tlp-switcher-setup v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """Set up the privileged helper for the TLP Profile Switcher extension."""
    configure_logging(verbose)


def _load_context() -> AppContext:
    """Create the production context, exiting on a broken config file."""
    try:
        return create_context()
    except ConfigError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e


def _resolve_sources(
    ctx: AppContext,
    helper: Path | None,
    policy: Path | None,
    extension_dir: Path | None,
) -> tuple[Path, Path]:
    """Pick explicit source paths, falling back to the extension bundle."""
    bundled_helper, bundled_policy = bundle_sources(extension_dir or ctx.config.extension_dir)
    return helper or bundled_helper, policy or bundled_policy


def _show_status(ctx: AppContext) -> None:
    checker = ctx.checker
    tui.show_status(checker.status(), list(checker.targets), checker.missing())


# ============================================================================
# Setup Commands
# ============================================================================


@app.command("status")
def status(
    _context=None,
) -> None:
    """Show whether the helper and policy are installed."""
    ctx = _context or _load_context()
    _show_status(ctx)


@app.command("setup")
def setup(
    helper: Annotated[
        Path | None, typer.Option("--helper", help="Helper executable to install")
    ] = None,
    policy: Annotated[
        Path | None, typer.Option("--policy", help="Polkit policy file to install")
    ] = None,
    extension_dir: Annotated[
        Path | None,
        typer.Option("--extension-dir", "-d", help="Extension directory holding the bundled files"),
    ] = None,
    _context=None,
) -> None:
    """Install the helper and polkit policy (prompts for authentication)."""
    ctx = _context or _load_context()
    helper_source, policy_source = _resolve_sources(ctx, helper, policy, extension_dir)

    # Static line: pkexec may prompt for a password on this terminal
    console.print("Waiting for authorization...")
    try:
        outcome = asyncio.run(ctx.installer.run_setup(helper_source, policy_source))
    except ValueError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e

    _show_status(ctx)
    if outcome.success:
        tui.show_success(outcome.message)
    else:
        tui.show_error(outcome.message)
        raise typer.Exit(1)


# ============================================================================
# Preference Commands
# ============================================================================


@app.command("width")
def width(
    value: Annotated[
        int | None, typer.Argument(help="Widget width in columns (1 or 2)")
    ] = None,
    _context=None,
) -> None:
    """Show or set the Quick Settings widget width."""
    ctx = _context or _load_context()

    if value is None:
        tui.show_width(ctx.settings.get_int(WIDGET_WIDTH_KEY))
        return

    try:
        ctx.settings.set_int(WIDGET_WIDTH_KEY, value)
    except ValueError as e:
        tui.show_error(f"Widget width must be 1 or 2, got {value}")
        raise typer.Exit(1) from e
    tui.show_width(value)


@app.command("prefs")
def prefs(
    extension_dir: Annotated[
        Path | None,
        typer.Option("--extension-dir", "-d", help="Extension directory holding the bundled files"),
    ] = None,
    _context=None,
) -> None:
    """Open the interactive preferences window."""
    ctx = _context or _load_context()
    helper_source, policy_source = _resolve_sources(ctx, None, None, extension_dir)
    PreferencesApp(ctx, helper_source, policy_source).run()


if __name__ == "__main__":
    app()
