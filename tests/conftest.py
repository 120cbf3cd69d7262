"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from tlp_switcher_setup.process import ProcessResult
from tlp_switcher_setup.types import InstallationTarget


class FakeRunner:
    """ProcessRunner double returning canned results.

    Records every argv it receives. When ``gate`` is set, ``run`` waits on
    it before returning, which simulates an authentication prompt.
    """

    def __init__(
        self,
        result: ProcessResult | None = None,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.result = result or ProcessResult(returncode=0)
        self.error = error
        self.gate = gate
        self.calls: list[list[str]] = []

    async def run(self, argv: list[str]) -> ProcessResult:
        self.calls.append(argv)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner that reports a clean exit."""
    return FakeRunner()


# ============================================================================
# Installation Target Fixtures
# ============================================================================


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Stand-in for the protected system directories."""
    root = tmp_path / "root"
    (root / "usr" / "libexec").mkdir(parents=True)
    (root / "usr" / "share" / "polkit-1" / "actions").mkdir(parents=True)
    return root


@pytest.fixture
def helper_target(dest_dir: Path) -> InstallationTarget:
    """Helper target installed below the temporary root."""
    return InstallationTarget(
        name="helper",
        destination=dest_dir / "usr" / "libexec" / "tlp-switcher-helper",
        mode=0o755,
    )


@pytest.fixture
def policy_target(dest_dir: Path) -> InstallationTarget:
    """Policy target installed below the temporary root."""
    return InstallationTarget(
        name="policy",
        destination=dest_dir
        / "usr"
        / "share"
        / "polkit-1"
        / "actions"
        / "org.mahaon.tlp-switcher.policy",
        mode=0o644,
    )


@pytest.fixture
def bundle_dir(tmp_path: Path) -> Path:
    """Extension bundle with helper and policy sources."""
    bundle = tmp_path / "extension"
    (bundle / "tool").mkdir(parents=True)
    (bundle / "polkit").mkdir(parents=True)
    (bundle / "tool" / "tlp-switcher-helper").write_text("#!/bin/sh\nexec tlp \"$@\"\n")
    (bundle / "polkit" / "org.mahaon.tlp-switcher.policy").write_text(
        """<?xml version="1.0" encoding="UTF-8"?>
<policyconfig>
  <action id="org.mahaon.tlp-switcher">
    <defaults><allow_active>yes</allow_active></defaults>
  </action>
</policyconfig>
"""
    )
    return bundle


@pytest.fixture
def helper_source(bundle_dir: Path) -> Path:
    return bundle_dir / "tool" / "tlp-switcher-helper"


@pytest.fixture
def policy_source(bundle_dir: Path) -> Path:
    return bundle_dir / "polkit" / "org.mahaon.tlp-switcher.policy"


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.read_text.return_value = ""
    return fs
