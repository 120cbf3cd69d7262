"""Construction of the elevated installation command."""

from __future__ import annotations

import shlex
from collections.abc import Sequence

from tlp_switcher_setup.types import InstallationTarget

DEFAULT_ELEVATOR = ("pkexec",)
DEFAULT_RELOAD_COMMAND = "systemctl restart polkit"


def install_step(target: InstallationTarget) -> str:
    """Render the ``install`` invocation for one target.

    Args:
        target: Target with its source attached.

    Returns:
        Shell command copying the source to the destination with the target mode.

    Raises:
        ValueError: If the target has no source.
    """
    if target.source is None:
        raise ValueError(f"No source path for {target.name}")
    return (
        f"install -m {target.mode_string} "
        f"{shlex.quote(str(target.source))} {shlex.quote(str(target.destination))}"
    )


def build_install_script(
    targets: Sequence[InstallationTarget],
    reload_command: str = DEFAULT_RELOAD_COMMAND,
) -> str:
    """Build the ``sh -c`` script performing the whole installation.

    Steps are chained with ``&&`` so the first failing copy stops the script.
    The reload is grouped with ``|| true`` on its own; without the group,
    ``a && b && c || true`` would also hide a failing copy.

    Args:
        targets: Targets to install, in order.
        reload_command: Command asking polkit to reload its rules.

    Returns:
        Shell script text.
    """
    steps = [install_step(target) for target in targets]
    if reload_command:
        steps.append(f"{{ {reload_command} || true; }}")
    return " && ".join(steps)


def build_setup_argv(
    targets: Sequence[InstallationTarget],
    elevator: Sequence[str] = DEFAULT_ELEVATOR,
    reload_command: str = DEFAULT_RELOAD_COMMAND,
) -> list[str]:
    """Build the full argv run through the elevation front-end.

    Args:
        targets: Targets to install, in order.
        elevator: Elevation front-end and its arguments.
        reload_command: Command asking polkit to reload its rules.

    Returns:
        Argument vector, e.g. ``["pkexec", "sh", "-c", "<script>"]``.
    """
    return [*elevator, "sh", "-c", build_install_script(targets, reload_command)]
