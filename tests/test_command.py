"""Tests for command construction."""

from __future__ import annotations

import shlex
from pathlib import Path

import pytest

from tlp_switcher_setup.command import (
    build_install_script,
    build_setup_argv,
    install_step,
)
from tlp_switcher_setup.targets import HELPER_TARGET, POLICY_TARGET


@pytest.fixture
def targets():
    return (
        HELPER_TARGET.with_source("/ext/tool/tlp-switcher-helper"),
        POLICY_TARGET.with_source("/ext/polkit/org.mahaon.tlp-switcher.policy"),
    )


class TestInstallStep:
    """Tests for install_step."""

    def test_helper_step(self, targets) -> None:
        assert install_step(targets[0]) == (
            "install -m 0755 /ext/tool/tlp-switcher-helper /usr/libexec/tlp-switcher-helper"
        )

    def test_policy_step(self, targets) -> None:
        assert install_step(targets[1]) == (
            "install -m 0644 /ext/polkit/org.mahaon.tlp-switcher.policy "
            "/usr/share/polkit-1/actions/org.mahaon.tlp-switcher.policy"
        )

    def test_missing_source_raises(self) -> None:
        with pytest.raises(ValueError, match="No source path for helper"):
            install_step(HELPER_TARGET)

    def test_quotes_paths_with_spaces(self) -> None:
        target = HELPER_TARGET.with_source("/home/me/My Extensions/helper")
        step = install_step(target)
        assert shlex.split(step) == [
            "install",
            "-m",
            "0755",
            "/home/me/My Extensions/helper",
            "/usr/libexec/tlp-switcher-helper",
        ]

    def test_quotes_shell_metacharacters(self) -> None:
        target = HELPER_TARGET.with_source(Path("/tmp/$(reboot)"))
        assert "'/tmp/$(reboot)'" in install_step(target)


class TestBuildInstallScript:
    """Tests for build_install_script."""

    def test_steps_in_order(self, targets) -> None:
        script = build_install_script(targets)
        assert script == (
            "install -m 0755 /ext/tool/tlp-switcher-helper /usr/libexec/tlp-switcher-helper"
            " && install -m 0644 /ext/polkit/org.mahaon.tlp-switcher.policy"
            " /usr/share/polkit-1/actions/org.mahaon.tlp-switcher.policy"
            " && { systemctl restart polkit || true; }"
        )

    def test_reload_failure_is_grouped(self, targets) -> None:
        script = build_install_script(targets, reload_command="false")
        assert script.endswith("&& { false || true; }")

    def test_no_reload(self, targets) -> None:
        script = build_install_script(targets, reload_command="")
        assert "||" not in script
        assert script.count("&&") == 1


class TestBuildSetupArgv:
    """Tests for build_setup_argv."""

    def test_default_elevator(self, targets) -> None:
        argv = build_setup_argv(targets)
        assert argv[:3] == ["pkexec", "sh", "-c"]
        assert argv[3] == build_install_script(targets)
        assert len(argv) == 4

    def test_custom_elevator(self, targets) -> None:
        argv = build_setup_argv(targets, elevator=["pkexec", "--disable-internal-agent"])
        assert argv[:4] == ["pkexec", "--disable-internal-agent", "sh", "-c"]
