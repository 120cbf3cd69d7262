"""Privileged helper setup for the TLP Profile Switcher GNOME extension."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from tlp_switcher_setup.protocols import (
    FileSystem,
    ProcessRunner,
    SettingsStore,
    SetupRunner,
    StateChecker,
)

__all__ = [
    "__version__",
    "FileSystem",
    "ProcessRunner",
    "SettingsStore",
    "SetupRunner",
    "StateChecker",
]
