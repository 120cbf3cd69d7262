"""Privileged installation of the helper executable and polkit policy."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from tlp_switcher_setup.command import (
    DEFAULT_ELEVATOR,
    DEFAULT_RELOAD_COMMAND,
    build_setup_argv,
)
from tlp_switcher_setup.process import AsyncProcessRunner, ProcessResult, ProcessSpawnError
from tlp_switcher_setup.protocols import ProcessRunner
from tlp_switcher_setup.targets import HELPER_TARGET, POLICY_TARGET
from tlp_switcher_setup.types import FailureCategory, InstallationTarget, SetupOutcome

logger = logging.getLogger(__name__)

# pkexec exits 126 when authorization is refused or the dialog is dismissed
EXIT_AUTH_DENIED = 126


def classify_result(result: ProcessResult) -> SetupOutcome:
    """Map the elevated process's exit status to a SetupOutcome.

    Args:
        result: Finished process result.

    Returns:
        Success for exit 0, PRIVILEGE_DENIED for 126, COMMAND_FAILED otherwise.
    """
    if result.returncode == 0:
        return SetupOutcome.succeeded(stdout=result.stdout, stderr=result.stderr)
    if result.returncode == EXIT_AUTH_DENIED:
        return SetupOutcome.failed(
            FailureCategory.PRIVILEGE_DENIED,
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return SetupOutcome.failed(
        FailureCategory.COMMAND_FAILED,
        exit_code=result.returncode,
        detail=result.stderr.strip() or None,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def _require_path(value: Path | str | None, label: str) -> Path:
    # Path("") normalizes to "."
    if value is None or not str(value).strip() or value == Path(""):
        raise ValueError(f"{label} source path cannot be empty")
    return Path(value)


class PrivilegedInstaller:
    """Installs the helper and policy through an elevation front-end.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.

    Concurrent invocations are not serialized here. Two runs write the same
    bytes to the same paths, so callers only need to keep the trigger
    disabled while a run is outstanding.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        helper_target: InstallationTarget,
        policy_target: InstallationTarget,
        elevator: Sequence[str],
        reload_command: str,
    ) -> None:
        """Initialize installer with required dependencies.

        Args:
            runner: Process runner used for the elevated command.
            helper_target: Helper executable target (destination and mode).
            policy_target: Polkit policy target (destination and mode).
            elevator: Elevation front-end argv prefix.
            reload_command: Best-effort polkit reload command.
        """
        self.runner = runner
        self.helper_target = helper_target
        self.policy_target = policy_target
        self.elevator = tuple(elevator)
        self.reload_command = reload_command

    @classmethod
    def create(
        cls,
        runner: ProcessRunner | None = None,
        elevator: Sequence[str] | None = None,
        reload_command: str | None = None,
    ) -> PrivilegedInstaller:
        """Factory method for production instantiation.

        Args:
            runner: Optional process runner (created if not provided).
            elevator: Optional elevation argv prefix. Defaults to pkexec.
            reload_command: Optional reload command. Defaults to restarting polkit.

        Returns:
            Configured PrivilegedInstaller targeting the canonical locations.
        """
        return cls(
            runner=runner or AsyncProcessRunner(),
            helper_target=HELPER_TARGET,
            policy_target=POLICY_TARGET,
            elevator=elevator or DEFAULT_ELEVATOR,
            reload_command=DEFAULT_RELOAD_COMMAND if reload_command is None else reload_command,
        )

    def build_argv(self, helper_source: Path | str, policy_source: Path | str) -> list[str]:
        """Build the elevated command for the given bundled sources.

        Raises:
            ValueError: If either source path is empty.
        """
        helper = self.helper_target.with_source(_require_path(helper_source, "Helper"))
        policy = self.policy_target.with_source(_require_path(policy_source, "Policy"))
        return build_setup_argv((helper, policy), self.elevator, self.reload_command)

    async def run_setup(
        self, helper_source: Path | str, policy_source: Path | str
    ) -> SetupOutcome:
        """Install helper and policy with elevated privileges.

        Running this when everything is already installed overwrites both
        files, which doubles as a repair.

        Args:
            helper_source: Bundled helper executable.
            policy_source: Bundled polkit policy file.

        Returns:
            SetupOutcome describing the attempt. Process failures are
            reported here, never raised.

        Raises:
            ValueError: If either source path is empty.
        """
        argv = self.build_argv(helper_source, policy_source)
        return await self._execute(argv)

    def start_setup(
        self, helper_source: Path | str, policy_source: Path | str
    ) -> asyncio.Task[SetupOutcome]:
        """Schedule setup on the running event loop.

        Arguments are validated before anything is scheduled.

        Returns:
            Task resolving to the SetupOutcome.

        Raises:
            ValueError: If either source path is empty.
            RuntimeError: If there is no running event loop.
        """
        argv = self.build_argv(helper_source, policy_source)
        return asyncio.get_running_loop().create_task(self._execute(argv))

    async def _execute(self, argv: list[str]) -> SetupOutcome:
        try:
            result = await self.runner.run(argv)
        except ProcessSpawnError as e:
            logger.warning("Could not start %s: %s", argv[0], e)
            return SetupOutcome.failed(FailureCategory.PROCESS_SPAWN_FAILED, detail=str(e))

        if result.stdout:
            logger.info("Setup stdout: %s", result.stdout)
        if result.stderr:
            logger.info("Setup stderr: %s", result.stderr)

        outcome = classify_result(result)
        if not outcome.success:
            logger.warning("Setup failed: %s", outcome.message)
        return outcome
