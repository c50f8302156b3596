"""
Trash - Cached View of One Trash Root

A trash root holds two sibling directories:

    <root>/files/<name>             the trashed entry itself
    <root>/info/<name>.trashinfo    where it came from and when

Trash keeps the list of names in files/ in memory and polls the directory
on a QTimer. Each poll first compares the directory's modification time
with the one seen last; only when it moved is the directory listed again
and diffed against the cache. Membership changes are announced through
Qt signals, delivered synchronously from rescan().

Usage:
    trash = Trash("/home/user/.local/share/Trash")
    trash.filesChanged.connect(on_changed)
    trash.get_files()             # ("doc.txt",)
    trash.get_uri("doc.txt")      # "trash:///0-doc.txt"
"""

import logging
import os
from typing import List, Optional, Tuple

from PySide6.QtCore import QObject, Property, QTimer, Signal, Slot

import gi
gi.require_version('GLib', '2.0')
from gi.repository import GLib

from vfs_trash.config import DEFAULT_RESCAN_INTERVAL_MS
from vfs_trash.errors import InvalidArgumentError
from vfs_trash.gio_bridge.directory import ChangeMarker, list_names, query_change_marker
from vfs_trash.trash_info import TRASH_INFO_SUFFIX, TrashInfo
from vfs_trash.trash_uri import build_trash_uri


def _check_basename(file: str) -> None:
    """Only direct children of files/ are addressable."""
    if not file or "/" in file or file in (".", ".."):
        raise InvalidArgumentError(f"'{file}' is not a plain file name")


class Trash(QObject):
    """
    One trash root with a change-detected listing of its files/ directory.

    Signals:
        filesChanged()       - membership of the cached listing changed
        filesAdded(list)     - names that appeared since the previous rescan
        filesRemoved(list)   - names that disappeared since the previous rescan
    """

    filesChanged = Signal()
    filesAdded = Signal(list)
    filesRemoved = Signal(list)

    logger = logging.getLogger(__name__)

    def __init__(
        self,
        root_directory: str,
        trash_id: int = 0,
        rescan_interval_ms: int = DEFAULT_RESCAN_INTERVAL_MS,
        parent=None
    ):
        super().__init__(parent)
        if not root_directory or not os.path.isabs(root_directory):
            raise InvalidArgumentError(f"Trash directory must be absolute: '{root_directory}'")

        self._id = trash_id
        self._directory = os.path.normpath(root_directory)
        self._files_directory = os.path.join(self._directory, "files")
        self._info_directory = os.path.join(self._directory, "info")

        self._files: List[str] = []
        self._last_marker: Optional[ChangeMarker] = None

        # Read the current contents before anybody can ask for them
        self.rescan()

        self._timer: Optional[QTimer] = QTimer(self)
        self._timer.setInterval(rescan_interval_ms)
        self._timer.timeout.connect(self.rescan)
        self._timer.start()

        self.logger.debug(
            "Trash %d at %s (%d files, rescan every %d ms)",
            self._id, self._directory, len(self._files), rescan_interval_ms
        )

    def __repr__(self) -> str:
        return f"<Trash id={self._id} directory={self._directory!r}>"

    # -------------------------------------------------------------------------
    # PROPERTIES
    # -------------------------------------------------------------------------
    @property
    def root_directory(self) -> str:
        return self._directory

    @property
    def files_directory(self) -> str:
        return self._files_directory

    @property
    def info_directory(self) -> str:
        return self._info_directory

    @property
    def rescan_interval_ms(self) -> int:
        return self._timer.interval() if self._timer is not None else 0

    def _get_files_property(self) -> list:
        return list(self._files)

    # Qt-visible view of the listing, notified together with filesChanged
    files = Property(list, _get_files_property, notify=filesChanged)

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------
    def get_id(self) -> int:
        """Stable id of this trash, used as the `<id>` part of trash URIs."""
        return self._id

    def get_files(self) -> Tuple[str, ...]:
        """
        Snapshot of the names stored in files/.

        Names seen by earlier rescans come first (in the order they were
        found), followed by names found by later rescans.
        """
        return tuple(self._files)

    def is_empty(self) -> bool:
        return not self._files

    def get_info(self, file: str) -> Optional[TrashInfo]:
        """
        Restore metadata of `file`, read from info/<file>.trashinfo.

        Returns None when there is no usable record, even if `file` is
        listed; callers have to cope with trashed files lacking metadata.
        """
        if not file or "/" in file or file in (".", ".."):
            self.logger.debug("No trash info for nested name '%s'", file)
            return None

        info_path = os.path.join(self._info_directory, file + TRASH_INFO_SUFFIX)
        return TrashInfo.load(info_path)

    def get_path(self, file: str) -> str:
        """Absolute path of `file` inside files/."""
        _check_basename(file)
        return os.path.join(self._files_directory, file)

    def get_uri(self, file: str) -> str:
        """`trash:///<id>-<file>` URI of `file` in this trash."""
        _check_basename(file)
        return build_trash_uri(self._id, file)

    @Slot(result=bool)
    def rescan(self) -> bool:
        """
        Bring the cached listing in line with files/.

        Returns True if the membership changed (and the change signals were
        emitted), False otherwise.
        """
        marker = query_change_marker(self._files_directory)
        if marker == self._last_marker:
            return False
        self._last_marker = marker

        try:
            names = list_names(self._files_directory) if marker is not None else []
        except GLib.Error as e:
            # unreadable counts as empty, the next marker change retries
            self.logger.debug("Cannot list %s: %s", self._files_directory, e.message)
            names = []

        present = set()
        added = []
        known = set(self._files)
        for name in names:
            if name in (".", "..") or name in present:
                continue
            present.add(name)
            if name not in known:
                added.append(name)

        kept = [name for name in self._files if name in present]
        removed = [name for name in self._files if name not in present]

        if not added and not removed:
            self.logger.debug("Trash %d: marker moved, contents unchanged", self._id)
            return False

        self._files = kept + added
        self.logger.debug(
            "Trash %d: %d added, %d removed, %d total",
            self._id, len(added), len(removed), len(self._files)
        )

        if removed:
            self.filesRemoved.emit(removed)
        if added:
            self.filesAdded.emit(added)
        self.filesChanged.emit()
        return True

    @Slot()
    def shutdown(self) -> None:
        """Stop polling. Safe to call more than once."""
        if self._timer is None:
            return
        self._timer.stop()
        self._timer = None
        self.logger.debug("Trash %d shut down", self._id)

    def is_shut_down(self) -> bool:
        return self._timer is None
