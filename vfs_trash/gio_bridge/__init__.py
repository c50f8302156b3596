# Gio/GLib adapters used by the trash cache

from .directory import ChangeMarker, ensure_directory, list_names, query_change_marker
from .keyfile import read_group

__all__ = [
    'ChangeMarker',
    'ensure_directory',
    'list_names',
    'query_change_marker',
    'read_group',
]
