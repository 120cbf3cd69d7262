"""TUI class for non-interactive CLI output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from tlp_switcher_setup.settings import WIDTH_CHOICES
from tlp_switcher_setup.types import InstallationStatus

if TYPE_CHECKING:
    from tlp_switcher_setup.types import InstallationTarget


console = Console()


class TUI:
    """Text User Interface for tlp-switcher-setup (non-interactive mode)."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize TUI."""
        self.console = console or Console()

    def show_status(
        self,
        status: InstallationStatus,
        targets: list[InstallationTarget],
        missing: list[InstallationTarget],
    ) -> None:
        """Display installation status as a table.

        Args:
            status: Overall installation status.
            targets: All targets checked.
            missing: Targets whose destination is absent.
        """
        table = Table(title="System helper")
        table.add_column("Component", style="cyan")
        table.add_column("Path")
        table.add_column("Mode")
        table.add_column("Present")

        for target in targets:
            present = target not in missing
            table.add_row(
                target.name,
                str(target.destination),
                target.mode_string,
                "[green]yes[/green]" if present else "[red]no[/red]",
            )

        self.console.print(table)
        if status is InstallationStatus.INSTALLED:
            self.show_success("Helper and policy are installed")
        else:
            self.show_warning("Helper is not installed. Run 'tlp-switcher-setup setup'.")

    def show_width(self, width: int) -> None:
        """Display the configured widget width."""
        label = WIDTH_CHOICES.get(width, str(width))
        self.console.print(f"Widget width: [bold]{width}[/bold] ({label})")

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
