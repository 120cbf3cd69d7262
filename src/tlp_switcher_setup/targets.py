"""Canonical install locations and bundled source resolution."""

from __future__ import annotations

from pathlib import Path

from tlp_switcher_setup.types import InstallationTarget

HELPER_NAME = "tlp-switcher-helper"
POLICY_NAME = "org.mahaon.tlp-switcher.policy"

HELPER_DESTINATION = Path("/usr/libexec") / HELPER_NAME
POLICY_DESTINATION = Path("/usr/share/polkit-1/actions") / POLICY_NAME

HELPER_TARGET = InstallationTarget(name="helper", destination=HELPER_DESTINATION, mode=0o755)
POLICY_TARGET = InstallationTarget(name="policy", destination=POLICY_DESTINATION, mode=0o644)

# Where GNOME Shell keeps per-user extensions
EXTENSION_UUID = "tlp-switcher@mahaon"
DEFAULT_EXTENSION_DIR = (
    Path.home() / ".local" / "share" / "gnome-shell" / "extensions" / EXTENSION_UUID
)


def bundle_sources(extension_dir: Path) -> tuple[Path, Path]:
    """Locate the helper and policy files shipped inside the extension.

    Args:
        extension_dir: Root directory of the installed extension.

    Returns:
        Tuple of (helper source, policy source).
    """
    return (
        extension_dir / "tool" / HELPER_NAME,
        extension_dir / "polkit" / POLICY_NAME,
    )

