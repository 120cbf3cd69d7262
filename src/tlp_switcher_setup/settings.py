"""Persistent preferences for the extension."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tlp_switcher_setup.filesystem import RealFileSystem
from tlp_switcher_setup.protocols import FileSystem

logger = logging.getLogger(__name__)

# Default settings location
SETTINGS_DIR = Path.home() / ".config" / "tlp-switcher"

WIDGET_WIDTH_KEY = "widget-width"

# Labels shown for widget-width values 1 and 2
WIDTH_CHOICES: dict[int, str] = {
    1: "1 column (standard)",
    2: "2 columns (wide)",
}


class Preferences(BaseModel):
    """Stored preference values, keyed by their settings names."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    widget_width: Literal[1, 2] = Field(default=1, alias=WIDGET_WIDTH_KEY)


_FIELDS_BY_KEY = {
    (info.alias or name): name for name, info in Preferences.model_fields.items()
}


class SettingsManager:
    """Reads and writes integer preferences in ``settings.json``."""

    def __init__(self, settings_dir: Path, filesystem: FileSystem) -> None:
        """Initialize the settings manager.

        Args:
            settings_dir: Directory holding settings.json.
            filesystem: Filesystem abstraction.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.settings_dir = settings_dir
        self.settings_file = settings_dir / "settings.json"
        self.fs = filesystem

    @classmethod
    def create(cls, settings_dir: Path, filesystem: FileSystem | None = None) -> SettingsManager:
        """Create a settings manager with a custom directory."""
        return cls(settings_dir=settings_dir, filesystem=filesystem or RealFileSystem())

    @classmethod
    def create_default(cls) -> SettingsManager:
        """Create a settings manager using ~/.config/tlp-switcher."""
        return cls.create(SETTINGS_DIR)

    def load(self) -> Preferences:
        """Load preferences from disk, falling back to defaults.

        A damaged settings file is logged and treated as absent; the next
        save replaces it.
        """
        if not self.fs.exists(self.settings_file):
            return Preferences()
        try:
            data = json.loads(self.fs.read_text(self.settings_file))
            return Preferences.model_validate(data)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring invalid JSON in %s: %s", self.settings_file, e)
        except ValidationError as e:
            logger.warning("Ignoring invalid settings in %s: %s", self.settings_file, e)
        return Preferences()

    def save(self, prefs: Preferences) -> None:
        """Save preferences to disk."""
        self.fs.mkdir(self.settings_dir, parents=True, exist_ok=True)
        data = prefs.model_dump(by_alias=True)
        self.fs.write_text(self.settings_file, json.dumps(data, indent=2))

    def get_int(self, key: str) -> int:
        """Read an integer setting.

        Raises:
            KeyError: If the key is unknown.
        """
        field_name = self._field_for(key)
        return int(getattr(self.load(), field_name))

    def set_int(self, key: str, value: int) -> None:
        """Write an integer setting.

        Raises:
            KeyError: If the key is unknown.
            ValueError: If the value is outside the key's range.
        """
        field_name = self._field_for(key)
        prefs = self.load()
        try:
            setattr(prefs, field_name, value)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {value!r}") from e
        self.save(prefs)

    @staticmethod
    def _field_for(key: str) -> str:
        try:
            return _FIELDS_BY_KEY[key]
        except KeyError:
            raise KeyError(f"Unknown setting: {key}") from None
