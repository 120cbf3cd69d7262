"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands and the preferences window.

Dependencies are typed using Protocols (abstract interfaces) rather than
concrete implementations, so test doubles can be injected without inheritance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from tlp_switcher_setup.config import SetupConfig, load_config
from tlp_switcher_setup.protocols import SettingsStore, SetupRunner, StateChecker


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for all services used by CLI commands
    and the preferences window.
    """

    checker: StateChecker
    installer: SetupRunner
    settings: SettingsStore
    config: SetupConfig = field(default_factory=SetupConfig)


def create_context(
    config_path: Path | None = None,
    settings_dir: Path | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        config_path: Override config file location.
        settings_dir: Override settings directory (for testing).

    Returns:
        Configured AppContext with all dependencies.

    Raises:
        ConfigError: If the configuration file is invalid.
    """
    from tlp_switcher_setup.filesystem import RealFileSystem
    from tlp_switcher_setup.installer import PrivilegedInstaller
    from tlp_switcher_setup.settings import SettingsManager
    from tlp_switcher_setup.state import InstallationStateChecker

    config = load_config(config_path)
    filesystem = RealFileSystem()

    checker = InstallationStateChecker.create(filesystem=filesystem)
    installer = PrivilegedInstaller.create(
        elevator=config.elevator,
        reload_command=config.reload_command,
    )
    settings = SettingsManager.create(settings_dir or config.settings_dir, filesystem=filesystem)

    return AppContext(
        checker=checker,
        installer=installer,
        settings=settings,
        config=config,
    )
