"""
TrashInfo - Restore Metadata of a Trashed File

Holds the original location and deletion date recorded in the
`info/<name>.trashinfo` record that sits next to every trashed entry.
The deletion date is kept exactly as written; nothing here parses it.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional

import gi
gi.require_version('GLib', '2.0')
from gi.repository import GLib

from vfs_trash.errors import InvalidArgumentError
from vfs_trash.gio_bridge.keyfile import read_group


TRASH_INFO_GROUP = "Trash Info"
TRASH_INFO_SUFFIX = ".trashinfo"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrashInfo:
    """Original path and deletion date of a trashed file."""
    original_path: str   # e.g. "/home/user/doc.txt"
    deletion_date: str   # e.g. "2024-01-01T10:00:00"

    @classmethod
    def parse(cls, original_path: Optional[str], deletion_date: Optional[str]) -> "TrashInfo":
        """Build a TrashInfo from the two record fields. Both must be non-empty."""
        if not original_path:
            raise InvalidArgumentError("original path must be a non-empty string")
        if not deletion_date:
            raise InvalidArgumentError("deletion date must be a non-empty string")
        return cls(original_path=original_path, deletion_date=deletion_date)

    @classmethod
    def load(cls, info_path: str) -> Optional["TrashInfo"]:
        """
        Read the `.trashinfo` record at `info_path`.

        Returns None if the record is missing, malformed, or lacks a
        non-empty Path/DeletionDate. A listed file without a usable record
        is a normal situation, so this never raises for it.
        """
        try:
            fields = read_group(info_path, TRASH_INFO_GROUP)
        except GLib.Error as e:
            logger.debug("No trash info at %s: %s", info_path, e.message)
            return None

        try:
            return cls.parse(fields.get("Path"), fields.get("DeletionDate"))
        except InvalidArgumentError as e:
            logger.debug("Incomplete trash info at %s: %s", info_path, e)
            return None

    def get_original_path(self) -> str:
        return self.original_path

    def get_deletion_date(self) -> str:
        return self.deletion_date

    def copy(self) -> "TrashInfo":
        return dataclasses.replace(self)
