"""Shared data types for the privileged setup workflow."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

__all__ = [
    "FailureCategory",
    "InstallationStatus",
    "InstallationTarget",
    "SetupOutcome",
]


class InstallationStatus(str, Enum):
    """Installation state derived from the file system at query time."""

    INSTALLED = "installed"
    NOT_INSTALLED = "not_installed"


class FailureCategory(str, Enum):
    """Semantic category of a failed setup attempt."""

    PRIVILEGE_DENIED = "privilege_denied"
    COMMAND_FAILED = "command_failed"
    PROCESS_SPAWN_FAILED = "process_spawn_failed"


@dataclass(frozen=True)
class InstallationTarget:
    """A file to install into a protected system location.

    Attributes:
        name: Short label used in messages ("helper", "policy").
        destination: Canonical system path.
        mode: Permission bits applied by ``install -m``.
        source: Bundled source file (attached per invocation).
    """

    name: str
    destination: Path
    mode: int
    source: Path | None = None

    @property
    def mode_string(self) -> str:
        """Mode in the four-digit octal form ``install`` expects."""
        return f"{self.mode:04o}"

    def with_source(self, source: Path | str) -> InstallationTarget:
        """Return a copy of this target with its source path attached."""
        return replace(self, source=Path(source))


@dataclass
class SetupOutcome:
    """Result of one privileged setup attempt.

    Attributes:
        success: True if the elevated command exited 0.
        category: Failure category (None on success).
        exit_code: Exit code of the elevated process, when one exists.
        detail: Extra diagnostic text (stderr or launch error).
        stdout: Captured standard output, kept for logs.
        stderr: Captured standard error, kept for logs.
    """

    success: bool
    category: FailureCategory | None = None
    exit_code: int | None = None
    detail: str | None = None
    stdout: str = field(default="", repr=False)
    stderr: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.success and self.category is not None:
            raise ValueError("success=True but category is set")
        if not self.success and self.category is None:
            raise ValueError("success=False requires a failure category")

    @classmethod
    def succeeded(cls, stdout: str = "", stderr: str = "") -> SetupOutcome:
        """Build a successful outcome."""
        return cls(success=True, exit_code=0, stdout=stdout, stderr=stderr)

    @classmethod
    def failed(
        cls,
        category: FailureCategory,
        exit_code: int | None = None,
        detail: str | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> SetupOutcome:
        """Build a failed outcome."""
        return cls(
            success=False,
            category=category,
            exit_code=exit_code,
            detail=detail,
            stdout=stdout,
            stderr=stderr,
        )

    @property
    def message(self) -> str:
        """Human-readable summary for notifications."""
        if self.success:
            return "Setup completed successfully"
        if self.category is FailureCategory.PRIVILEGE_DENIED:
            return "Privilege required or user cancelled"
        if self.category is FailureCategory.PROCESS_SPAWN_FAILED:
            reason = f": {self.detail}" if self.detail else ""
            return f"Could not start the elevation helper{reason}"
        details = f": {self.detail}" if self.detail else ""
        return f"Setup failed with exit code {self.exit_code}{details}"
