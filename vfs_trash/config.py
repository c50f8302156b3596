"""
Trash configuration

Defaults follow the freedesktop layout (home trash under the user data
directory, rescans every 5 seconds). Overrides are persisted in QSettings
under the "Trash" group:

    [Trash]
    HomeDirectory=/home/user/.local/share/Trash
    RescanIntervalMs=5000
    ExtraDirectories=/media/data/.Trash-1000
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from PySide6.QtCore import QSettings

import gi
gi.require_version('GLib', '2.0')
from gi.repository import GLib


DEFAULT_RESCAN_INTERVAL_MS = 5 * 1000

SETTINGS_ORGANIZATION = "vfs-trash"
SETTINGS_APPLICATION = "Trash"
SETTINGS_GROUP = "Trash"


def default_home_directory() -> str:
    """Location of the home trash, `$XDG_DATA_HOME/Trash`."""
    return os.path.join(GLib.get_user_data_dir(), "Trash")


@dataclass
class TrashConfig:
    """Settings consumed by TrashManager when it builds its trashes."""
    home_directory: str = field(default_factory=default_home_directory)
    rescan_interval_ms: int = DEFAULT_RESCAN_INTERVAL_MS
    extra_directories: List[str] = field(default_factory=list)
    create_home: bool = True    # create the home trash if it does not exist yet

    @classmethod
    def load(cls, settings: Optional[QSettings] = None) -> "TrashConfig":
        """Load the configuration, falling back to defaults for missing keys."""
        if settings is None:
            settings = QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)

        config = cls()
        settings.beginGroup(SETTINGS_GROUP)
        try:
            home = settings.value("HomeDirectory")
            if home:
                config.home_directory = str(home)

            config.rescan_interval_ms = _to_interval(settings.value("RescanIntervalMs"))

            extra = settings.value("ExtraDirectories")
            if extra:
                # QSettings hands back a plain str for single-entry lists
                if isinstance(extra, str):
                    extra = [extra]
                config.extra_directories = [str(path) for path in extra if path]

            create_home = settings.value("CreateHome")
            if create_home is not None:
                config.create_home = _to_bool(create_home)
        finally:
            settings.endGroup()

        return config

    def save(self, settings: Optional[QSettings] = None) -> None:
        """Persist the configuration to QSettings."""
        if settings is None:
            settings = QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)

        settings.beginGroup(SETTINGS_GROUP)
        settings.setValue("HomeDirectory", self.home_directory)
        settings.setValue("RescanIntervalMs", self.rescan_interval_ms)
        settings.setValue("ExtraDirectories", list(self.extra_directories))
        settings.setValue("CreateHome", self.create_home)
        settings.endGroup()
        settings.sync()


def _to_interval(value) -> int:
    """Positive millisecond interval, or the default for anything unusable."""
    try:
        interval = int(value)
    except (TypeError, ValueError):
        return DEFAULT_RESCAN_INTERVAL_MS
    return interval if interval > 0 else DEFAULT_RESCAN_INTERVAL_MS


def _to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
