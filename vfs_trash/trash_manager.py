"""
TrashManager - Registry of Known Trashes

Owns every Trash the process knows about (the home trash is always id 0),
keeps an aggregate "all trashes are empty" flag up to date, and turns
`trash:///<id>-<name>/<path>` URIs into a Trash plus a relative path.

One manager is shared by everything in the process:

    manager = TrashManager.get_default()
    manager.emptyChanged.connect(update_trash_icon)
    trash, relative_path = manager.resolve_identifier("trash:///0-bar/foo")
    ...
    manager.release()

get_default() hands out a reference each time it is called; the last
release() shuts the manager and its trashes down. The manager also works
as a context manager that releases on exit.
"""

import logging
import os
from typing import List, Optional, Tuple

from PySide6.QtCore import QObject, Property, Signal, Slot

import gi
gi.require_version('GLib', '2.0')
from gi.repository import GLib

from vfs_trash.config import TrashConfig
from vfs_trash.errors import InvalidArgumentError, TrashError, UnknownTrashIdError
from vfs_trash.gio_bridge.directory import ensure_directory
from vfs_trash.trash import Trash
from vfs_trash.trash_uri import TrashIdentifier, parse_trash_identifier


HOME_TRASH_ID = 0


class TrashManager(QObject):
    """
    Aggregates all trashes of the process.

    Signals:
        emptyChanged(bool) - emitted when the "every trash is empty" state flips
        trashesChanged()   - a trash was added to or removed from the registry
    """

    emptyChanged = Signal(bool)
    trashesChanged = Signal()

    logger = logging.getLogger(__name__)

    # Shared instance handed out by get_default()
    _default: Optional["TrashManager"] = None
    _default_refs: int = 0

    def __init__(self, config: Optional[TrashConfig] = None, parent=None):
        super().__init__(parent)
        self._config = config if config is not None else TrashConfig.load()
        self._trashes: List[Trash] = []
        self._empty = True
        self._shut_down = False

        home = self._config.home_directory
        if self._config.create_home and os.path.isabs(home):
            try:
                ensure_directory(home)
            except GLib.Error as e:
                # A missing home trash just lists as empty
                self.logger.warning("Cannot create home trash %s: %s", home, e.message)

        try:
            self.add_trash(home)
            for directory in self._config.extra_directories:
                self.add_trash(directory)
        except TrashError:
            # Stop the timers of the trashes added so far
            self.shutdown()
            raise

        self.logger.info(
            "Trash manager ready with %d trash(es), %s",
            len(self._trashes), "empty" if self._empty else "not empty"
        )

    # -------------------------------------------------------------------------
    # SHARED INSTANCE
    # -------------------------------------------------------------------------
    @staticmethod
    def get_default(config: Optional[TrashConfig] = None) -> "TrashManager":
        """
        Acquire the shared manager, creating it on first use.

        `config` only matters when the manager gets created. Every call
        must be balanced by a release().
        """
        if TrashManager._default is None:
            TrashManager._default = TrashManager(config)
            TrashManager._default_refs = 0
        TrashManager._default_refs += 1
        return TrashManager._default

    def release(self) -> None:
        """Drop one reference; the last one shuts the manager down."""
        if self is not TrashManager._default:
            self.shutdown()
            return

        TrashManager._default_refs -= 1
        if TrashManager._default_refs <= 0:
            TrashManager._default = None
            TrashManager._default_refs = 0
            self.shutdown()

    def __enter__(self) -> "TrashManager":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    # -------------------------------------------------------------------------
    # PROPERTIES
    # -------------------------------------------------------------------------
    @property
    def config(self) -> TrashConfig:
        return self._config

    def _get_empty_property(self) -> bool:
        return self.is_empty()

    empty = Property(bool, _get_empty_property, notify=emptyChanged)

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------
    def is_empty(self) -> bool:
        """True if none of the trashes contains any file."""
        return all(trash.is_empty() for trash in self._trashes)

    def get_trashes(self) -> List[Trash]:
        """All known trashes, as a new list the caller may keep."""
        return list(self._trashes)

    def get_trash(self, trash_id: int) -> Optional[Trash]:
        for trash in self._trashes:
            if trash.get_id() == trash_id:
                return trash
        return None

    def get_home_trash(self) -> Optional[Trash]:
        return self.get_trash(HOME_TRASH_ID)

    def add_trash(self, root_directory: str) -> Trash:
        """
        Start tracking the trash rooted at `root_directory`.

        The new trash gets the next free id. Adding a root that is already
        tracked returns the existing trash.
        """
        if self._shut_down:
            raise InvalidArgumentError("Trash manager has been shut down")

        for trash in self._trashes:
            if trash.root_directory == os.path.normpath(root_directory):
                return trash

        trash_id = max((trash.get_id() for trash in self._trashes), default=HOME_TRASH_ID - 1) + 1
        trash = Trash(
            root_directory,
            trash_id=trash_id,
            rescan_interval_ms=self._config.rescan_interval_ms,
            parent=self
        )
        trash.filesChanged.connect(self._on_trash_files_changed)
        self._trashes.append(trash)

        self.logger.debug("Added trash %d at %s", trash_id, trash.root_directory)
        self.trashesChanged.emit()
        self._update_empty()
        return trash

    def remove_trash(self, trash: Trash) -> None:
        """Stop tracking `trash` and shut it down. The home trash stays."""
        if trash not in self._trashes:
            raise InvalidArgumentError(f"{trash!r} is not managed here")
        if trash.get_id() == HOME_TRASH_ID:
            raise InvalidArgumentError("The home trash cannot be removed")

        self._trashes.remove(trash)
        self._drop(trash)

        self.logger.debug("Removed trash %d", trash.get_id())
        self.trashesChanged.emit()
        self._update_empty()

    @Slot()
    def rescan_all(self) -> None:
        """Rescan every trash right away instead of waiting for the timers."""
        for trash in list(self._trashes):
            trash.rescan()

    def resolve_identifier(self, uri: str) -> Tuple[Trash, str]:
        """
        Resolve a trash URI to the trash it points into and a relative path.

        The relative path is whatever follows the `<id>-<name>/` prefix,
        normalised; it is empty when the URI names the trashed entry itself.
        `trash:///0-bar/foo` resolves to (home trash, "foo").

        Raises:
            InvalidArgumentError: not a trash URI, or the bare `trash:///`.
            MalformedUriError: the path does not start with `<id>-<name>`,
                or its relative part climbs out of the entry.
            UnknownTrashIdError: no trash has the id from the URI.
        """
        trash, identifier = self._lookup(uri)
        return trash, identifier.relative_path

    def resolve_path(self, uri: str) -> str:
        """Absolute filesystem path addressed by a trash URI."""
        trash, identifier = self._lookup(uri)
        path = trash.get_path(identifier.name)
        if identifier.relative_path:
            path = os.path.join(path, identifier.relative_path)
        return path

    @Slot()
    def shutdown(self) -> None:
        """Shut down every trash (cancelling their timers) and forget them."""
        if self._shut_down:
            return
        self._shut_down = True

        trashes, self._trashes = self._trashes, []
        for trash in trashes:
            self._drop(trash)

        self.logger.debug("Trash manager shut down (%d trash(es))", len(trashes))

    def is_shut_down(self) -> bool:
        return self._shut_down

    # -------------------------------------------------------------------------
    # INTERNAL
    # -------------------------------------------------------------------------
    def _lookup(self, uri: str) -> Tuple[Trash, TrashIdentifier]:
        identifier = parse_trash_identifier(uri)
        trash = self.get_trash(identifier.trash_id)
        if trash is None:
            raise UnknownTrashIdError(identifier.trash_id)
        return trash, identifier

    def _drop(self, trash: Trash) -> None:
        trash.filesChanged.disconnect(self._on_trash_files_changed)
        trash.shutdown()

    @Slot()
    def _on_trash_files_changed(self) -> None:
        self._update_empty()

    def _update_empty(self) -> None:
        empty = self.is_empty()
        if empty != self._empty:
            self._empty = empty
            self.logger.debug("Trash is now %s", "empty" if empty else "not empty")
            self.emptyChanged.emit(empty)
