"""Protocol definitions for core abstractions.

The setup workflow talks to the outside world through a handful of seams:
the file system (installation state), process execution (the elevated
command), and the settings store. Each seam is a Protocol so tests can
substitute doubles without inheritance.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tlp_switcher_setup.types import InstallationStatus, InstallationTarget, SetupOutcome

if TYPE_CHECKING:
    from tlp_switcher_setup.process import ProcessResult


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem queries.

    Abstracts filesystem access to enable testing without real I/O.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.

        Raises:
            OSError: If the path cannot be inspected.
        """
        ...

    def read_text(self, path: Path) -> str:
        """Read text content from a file.

        Args:
            path: Path to the file.

        Returns:
            File content as string.
        """
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file.

        Args:
            path: Path to the file.
            content: Content to write.
        """
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory.

        Args:
            path: Path to create.
            parents: Create parent directories if needed.
            exist_ok: Don't raise if directory exists.
        """
        ...


@runtime_checkable
class ProcessRunner(Protocol):
    """Protocol for running an external command to completion."""

    async def run(self, argv: list[str]) -> ProcessResult:
        """Run a command and capture its output.

        Args:
            argv: Program and arguments.

        Returns:
            ProcessResult with exit code and captured streams.

        Raises:
            ProcessSpawnError: If the program could not be started.
        """
        ...


@runtime_checkable
class StateChecker(Protocol):
    """Protocol for installation state queries."""

    targets: tuple[InstallationTarget, ...]

    def is_installed(self) -> bool:
        """Check whether helper and policy are both in place.

        Returns:
            True if both destinations exist, False otherwise.
        """
        ...

    def status(self) -> InstallationStatus:
        """Get the current installation status.

        Returns:
            InstallationStatus derived from the file system.
        """
        ...

    def missing(self) -> list[InstallationTarget]:
        """List targets whose destination is absent.

        Returns:
            Targets that are not installed.
        """
        ...


@runtime_checkable
class SetupRunner(Protocol):
    """Protocol for the privileged setup operation."""

    async def run_setup(
        self, helper_source: Path | str, policy_source: Path | str
    ) -> SetupOutcome:
        """Install helper and policy with elevated privileges.

        Args:
            helper_source: Bundled helper executable.
            policy_source: Bundled polkit policy file.

        Returns:
            SetupOutcome describing the attempt.
        """
        ...

    def start_setup(
        self, helper_source: Path | str, policy_source: Path | str
    ) -> asyncio.Task[SetupOutcome]:
        """Schedule setup on the running event loop.

        Args:
            helper_source: Bundled helper executable.
            policy_source: Bundled polkit policy file.

        Returns:
            Task resolving to the SetupOutcome.
        """
        ...


@runtime_checkable
class SettingsStore(Protocol):
    """Protocol for the extension's integer preferences."""

    def get_int(self, key: str) -> int:
        """Read an integer setting.

        Args:
            key: Setting key, e.g. "widget-width".

        Returns:
            Stored value or the key's default.
        """
        ...

    def set_int(self, key: str, value: int) -> None:
        """Write an integer setting.

        Args:
            key: Setting key.
            value: New value.
        """
        ...
