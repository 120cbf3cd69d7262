"""Preferences window for the TLP Profile Switcher extension."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Select, Static

from tlp_switcher_setup.context import AppContext
from tlp_switcher_setup.settings import WIDGET_WIDTH_KEY, WIDTH_CHOICES
from tlp_switcher_setup.types import SetupOutcome

logger = logging.getLogger(__name__)

SUBTITLE_INSTALLED = "Helper and policy are installed"
SUBTITLE_NOT_INSTALLED = "Copies helper to /usr/libexec and installs polkit policy"


class PreferencesApp(App):
    """Preferences window: widget width and one-time helper setup."""

    TITLE = "TLP Profile Switcher"

    CSS = """
    Screen {
        background: $surface;
    }

    #app-title {
        dock: top;
        height: 3;
        padding: 1 2;
        background: $primary-background;
        text-style: bold;
        color: $text;
    }

    .group {
        height: auto;
        margin: 1 2;
        padding: 1 2;
        border: round $primary;
    }

    .group-title {
        text-style: bold;
    }

    .group-description {
        color: $text-muted;
        padding-bottom: 1;
    }

    .row {
        height: auto;
        align: left middle;
    }

    .row-text {
        width: 1fr;
        height: auto;
    }

    #width-select {
        width: 32;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("s", "run_setup", "Run Setup"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(
        self,
        context: AppContext,
        helper_source: Path | str,
        policy_source: Path | str,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.context = context
        self.helper_source = helper_source
        self.policy_source = policy_source
        self.installed = False
        self.setup_running = False
        self.last_outcome: SetupOutcome | None = None

    def compose(self) -> ComposeResult:
        yield Static("TLP Profile Switcher", id="app-title")
        with Vertical(classes="group", id="appearance-group"):
            yield Static("Appearance Settings", classes="group-title")
            yield Static(
                "Configure how TLP Profile Switcher appears in Quick Settings",
                classes="group-description",
            )
            with Horizontal(classes="row"):
                with Vertical(classes="row-text"):
                    yield Static("Widget Width")
                    yield Static(
                        "Choose how wide the widget should be in Quick Settings",
                        classes="group-description",
                    )
                yield Select(
                    [(label, width) for width, label in WIDTH_CHOICES.items()],
                    value=self.context.settings.get_int(WIDGET_WIDTH_KEY),
                    allow_blank=False,
                    id="width-select",
                )
        with Vertical(classes="group", id="setup-group"):
            yield Static("One-time Setup", classes="group-title")
            yield Static(
                "Install the privileged helper and PolicyKit rule so switching works smoothly.",
                classes="group-description",
            )
            with Horizontal(classes="row"):
                with Vertical(classes="row-text"):
                    yield Static("Install system helper")
                    yield Static(SUBTITLE_NOT_INSTALLED, id="setup-subtitle")
                yield Button("Run Setup", id="run-setup", variant="primary")
        yield Footer()

    def on_mount(self) -> None:
        """Show the current installation state."""
        self.refresh_status()

    def refresh_status(self) -> None:
        """Re-query the file system and update the setup row."""
        self.installed = self.context.checker.is_installed()
        subtitle = self.query_one("#setup-subtitle", Static)
        subtitle.update(SUBTITLE_INSTALLED if self.installed else SUBTITLE_NOT_INSTALLED)
        button = self.query_one("#run-setup", Button)
        button.label = "Repair" if self.installed else "Run Setup"
        button.disabled = self.setup_running

    @on(Select.Changed, "#width-select")
    def on_width_changed(self, event: Select.Changed) -> None:
        if not isinstance(event.value, int):
            return
        if event.value == self.context.settings.get_int(WIDGET_WIDTH_KEY):
            return
        self.context.settings.set_int(WIDGET_WIDTH_KEY, event.value)

    @on(Button.Pressed, "#run-setup")
    def on_run_setup_pressed(self) -> None:
        self.action_run_setup()

    def action_refresh(self) -> None:
        self.refresh_status()

    def action_run_setup(self) -> None:
        """Start setup in a worker unless one is already running."""
        if self.setup_running:
            return
        self.setup_running = True
        self.query_one("#run-setup", Button).disabled = True
        self.run_worker(self._run_setup(), group="setup", exclusive=True)

    async def _run_setup(self) -> None:
        try:
            outcome = await self.context.installer.run_setup(
                self.helper_source, self.policy_source
            )
        except ValueError as e:
            logger.error("Setup not started: %s", e)
            self.notify(str(e), severity="error", timeout=3)
            return
        finally:
            self.setup_running = False
            self.refresh_status()

        self.last_outcome = outcome
        if outcome.success:
            self.notify(outcome.message, timeout=3)
        else:
            self.notify(outcome.message, severity="error", timeout=3)
