"""Installation state derived from the file system."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tlp_switcher_setup.filesystem import RealFileSystem
from tlp_switcher_setup.protocols import FileSystem
from tlp_switcher_setup.targets import HELPER_TARGET, POLICY_TARGET
from tlp_switcher_setup.types import InstallationStatus, InstallationTarget

logger = logging.getLogger(__name__)


class InstallationStateChecker:
    """Reports whether the helper and its policy are installed.

    Every query goes back to the file system; nothing is cached, so the
    answer follows files that were removed or added out-of-band.
    """

    def __init__(
        self,
        targets: Sequence[InstallationTarget],
        filesystem: FileSystem,
    ) -> None:
        """Initialize the checker.

        Args:
            targets: Targets whose destinations must all exist.
            filesystem: Filesystem abstraction.

        Note:
            Use factory method `create()` for production code.
        """
        self.targets = tuple(targets)
        self.fs = filesystem

    @classmethod
    def create(cls, filesystem: FileSystem | None = None) -> InstallationStateChecker:
        """Factory method for the canonical helper and policy locations.

        Args:
            filesystem: Optional filesystem abstraction (created if not provided).

        Returns:
            Configured InstallationStateChecker instance.
        """
        return cls(
            targets=(HELPER_TARGET, POLICY_TARGET),
            filesystem=filesystem or RealFileSystem(),
        )

    def is_installed(self) -> bool:
        """Check whether every target destination exists.

        Returns:
            True only if all destinations exist. Errors while inspecting a
            path count as "not installed".
        """
        return not self.missing()

    def status(self) -> InstallationStatus:
        """Get the current installation status."""
        if self.is_installed():
            return InstallationStatus.INSTALLED
        return InstallationStatus.NOT_INSTALLED

    def missing(self) -> list[InstallationTarget]:
        """List targets whose destination is absent or cannot be inspected."""
        absent = []
        for target in self.targets:
            try:
                present = self.fs.exists(target.destination)
            except OSError as e:
                logger.debug("Cannot inspect %s: %s", target.destination, e)
                present = False
            if not present:
                absent.append(target)
        return absent
