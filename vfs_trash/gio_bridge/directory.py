"""
Directory helpers for the trash cache.

Thin synchronous wrappers around Gio.File. The trash only ever looks at
local directories, so these run on the caller's thread.
"""

from typing import List, Optional, Tuple

import gi
gi.require_version('Gio', '2.0')
from gi.repository import Gio, GLib


# Modification time in whole seconds plus the microsecond part
ChangeMarker = Tuple[int, int]

MARKER_ATTRIBUTES = "time::modified,time::modified-usec"


def query_change_marker(path: str) -> Optional[ChangeMarker]:
    """
    Return the modification marker of `path`, or None if it cannot be stat'ed.

    None doubles as the "unknown" marker, so a directory that stays missing
    compares equal to itself between calls.
    """
    gfile = Gio.File.new_for_path(path)
    try:
        info = gfile.query_info(MARKER_ATTRIBUTES, Gio.FileQueryInfoFlags.NONE, None)
    except GLib.Error:
        return None

    return (
        info.get_attribute_uint64("time::modified"),
        info.get_attribute_uint32("time::modified-usec"),
    )


def list_names(path: str) -> List[str]:
    """
    List the entry names of the directory at `path`, in enumeration order.

    Raises GLib.Error if the directory cannot be opened or read.
    """
    gfile = Gio.File.new_for_path(path)
    enumerator = gfile.enumerate_children(
        "standard::name",
        Gio.FileQueryInfoFlags.NOFOLLOW_SYMLINKS,
        None
    )

    names = []
    try:
        while True:
            info = enumerator.next_file(None)
            if info is None:
                break
            names.append(info.get_name())
    finally:
        enumerator.close(None)

    return names


def ensure_directory(path: str) -> None:
    """Create `path` and its parents. An existing directory is fine."""
    gfile = Gio.File.new_for_path(path)
    try:
        gfile.make_directory_with_parents(None)
    except GLib.Error as e:
        if e.code != Gio.IOErrorEnum.EXISTS:
            raise
