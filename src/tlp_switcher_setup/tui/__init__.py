"""TUI package for tlp-switcher-setup.

This package provides both the interactive (Textual-based) preferences
window and non-interactive (Rich-based) console output.
"""

from tlp_switcher_setup.tui.app import PreferencesApp
from tlp_switcher_setup.tui.console import TUI, console

__all__ = [
    "PreferencesApp",
    "TUI",
    "console",
]
