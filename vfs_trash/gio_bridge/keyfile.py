"""Key/value record reader backed by GLib.KeyFile (desktop-entry syntax)."""

from typing import Dict

import gi
gi.require_version('GLib', '2.0')
from gi.repository import GLib


def read_group(path: str, group: str) -> Dict[str, str]:
    """
    Read every key of `group` from the key file at `path`.

    Keys are returned in file order. Raises GLib.Error if the file is
    missing or malformed, or if it has no such group.
    """
    key_file = GLib.KeyFile.new()
    key_file.load_from_file(path, GLib.KeyFileFlags.NONE)

    keys, _length = key_file.get_keys(group)
    return {key: key_file.get_string(group, key) for key in keys}
