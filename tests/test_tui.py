"""Tests for the preferences window and console output."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console
from textual.widgets import Button, Select

from tlp_switcher_setup.context import AppContext
from tlp_switcher_setup.targets import HELPER_TARGET, POLICY_TARGET
from tlp_switcher_setup.tui import TUI, PreferencesApp
from tlp_switcher_setup.types import FailureCategory, InstallationStatus, SetupOutcome

HELPER_SRC = Path("/ext/tool/tlp-switcher-helper")
POLICY_SRC = Path("/ext/polkit/org.mahaon.tlp-switcher.policy")


@pytest.fixture
def context() -> AppContext:
    checker = MagicMock()
    checker.is_installed.return_value = False
    installer = MagicMock()
    installer.run_setup = AsyncMock(return_value=SetupOutcome.succeeded())
    settings = MagicMock()
    settings.get_int.return_value = 1
    return AppContext(checker=checker, installer=installer, settings=settings)


def make_app(context: AppContext) -> PreferencesApp:
    return PreferencesApp(context, HELPER_SRC, POLICY_SRC)


class TestPreferencesApp:
    """Tests for PreferencesApp."""

    @pytest.mark.asyncio
    async def test_initial_state_not_installed(self, context: AppContext) -> None:
        app = make_app(context)
        async with app.run_test(size=(120, 50)) as pilot:
            await pilot.pause()
            button = app.query_one("#run-setup", Button)
            assert app.installed is False
            assert button.disabled is False
            assert str(button.label) == "Run Setup"
            assert app.query_one("#width-select", Select).value == 1

    @pytest.mark.asyncio
    async def test_initial_state_installed(self, context: AppContext) -> None:
        context.checker.is_installed.return_value = True
        app = make_app(context)
        async with app.run_test(size=(120, 50)) as pilot:
            await pilot.pause()
            button = app.query_one("#run-setup", Button)
            assert app.installed is True
            assert str(button.label) == "Repair"
            assert button.disabled is False

    @pytest.mark.asyncio
    async def test_run_setup_success(self, context: AppContext) -> None:
        app = make_app(context)
        async with app.run_test(size=(120, 50)) as pilot:
            await pilot.pause()
            context.checker.is_installed.return_value = True

            await pilot.click("#run-setup")
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            context.installer.run_setup.assert_awaited_once_with(HELPER_SRC, POLICY_SRC)
            assert app.last_outcome is not None
            assert app.last_outcome.success is True
            assert app.installed is True
            assert app.setup_running is False
            assert str(app.query_one("#run-setup", Button).label) == "Repair"

    @pytest.mark.asyncio
    async def test_run_setup_failure_reenables_button(self, context: AppContext) -> None:
        context.installer.run_setup.return_value = SetupOutcome.failed(
            FailureCategory.PRIVILEGE_DENIED, exit_code=126
        )
        app = make_app(context)
        async with app.run_test(size=(120, 50)) as pilot:
            await pilot.pause()
            await pilot.click("#run-setup")
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert app.last_outcome is not None
            assert app.last_outcome.category is FailureCategory.PRIVILEGE_DENIED
            assert app.installed is False
            assert app.query_one("#run-setup", Button).disabled is False

    @pytest.mark.asyncio
    async def test_button_disabled_while_running(self, context: AppContext) -> None:
        gate = asyncio.Event()

        async def slow_setup(helper: Path, policy: Path) -> SetupOutcome:
            await gate.wait()
            return SetupOutcome.succeeded()

        context.installer.run_setup = AsyncMock(side_effect=slow_setup)
        app = make_app(context)
        async with app.run_test(size=(120, 50)) as pilot:
            await pilot.pause()
            app.action_run_setup()
            await pilot.pause()

            assert app.setup_running is True
            assert app.query_one("#run-setup", Button).disabled is True

            app.action_run_setup()
            await pilot.pause()
            assert context.installer.run_setup.await_count == 1

            gate.set()
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert app.setup_running is False
            assert app.query_one("#run-setup", Button).disabled is False

    @pytest.mark.asyncio
    async def test_invalid_sources_reported(self, context: AppContext) -> None:
        context.installer.run_setup.side_effect = ValueError("Helper source path cannot be empty")
        app = make_app(context)
        async with app.run_test(size=(120, 50)) as pilot:
            await pilot.pause()
            app.action_run_setup()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert app.last_outcome is None
            assert app.setup_running is False

    @pytest.mark.asyncio
    async def test_width_change_saved(self, context: AppContext) -> None:
        app = make_app(context)
        async with app.run_test(size=(120, 50)) as pilot:
            await pilot.pause()
            app.query_one("#width-select", Select).value = 2
            await pilot.pause()

            context.settings.set_int.assert_called_once_with("widget-width", 2)

    @pytest.mark.asyncio
    async def test_refresh_requeries(self, context: AppContext) -> None:
        app = make_app(context)
        async with app.run_test(size=(120, 50)) as pilot:
            await pilot.pause()
            context.checker.is_installed.return_value = True
            app.action_refresh()
            await pilot.pause()
            assert app.installed is True


class TestConsoleTUI:
    """Tests for the Rich console output."""

    def make_tui(self) -> tuple[TUI, Console]:
        console = Console(record=True, width=120)
        return TUI(console), console

    def test_show_status_installed(self) -> None:
        tui, console = self.make_tui()
        tui.show_status(InstallationStatus.INSTALLED, [HELPER_TARGET, POLICY_TARGET], [])
        text = console.export_text()
        assert "/usr/libexec/tlp-switcher-helper" in text
        assert "0644" in text
        assert "Helper and policy are installed" in text

    def test_show_status_missing_policy(self) -> None:
        tui, console = self.make_tui()
        tui.show_status(
            InstallationStatus.NOT_INSTALLED, [HELPER_TARGET, POLICY_TARGET], [POLICY_TARGET]
        )
        text = console.export_text()
        assert "no" in text
        assert "Helper is not installed" in text

    def test_show_width(self) -> None:
        tui, console = self.make_tui()
        tui.show_width(1)
        assert "1 column (standard)" in console.export_text()
