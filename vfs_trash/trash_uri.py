"""
Trash URI scheme: `trash:///<id>-<basename>[/<relative-path>]`

<id> selects the trash (0 is the home trash), <basename> is the entry
directly inside that trash's files/ directory, and the optional relative
path addresses something nested below it.

    parse_trash_identifier("trash:///0-bar/foo")
    -> TrashIdentifier(trash_id=0, name="bar", relative_path="foo")
"""

import os
import posixpath
import re
import urllib.parse
from typing import NamedTuple

from vfs_trash.errors import InvalidArgumentError, MalformedUriError


TRASH_SCHEME = "trash"
TRASH_ROOT_URI = f"{TRASH_SCHEME}:///"

# <digits> "-" <name without "/"> [ "/" <relative path> ]
_IDENTIFIER_RE = re.compile(r"(?P<id>[0-9]+)-(?P<name>[^/]+)(?:/(?P<rest>.*))?", re.DOTALL)


class TrashIdentifier(NamedTuple):
    trash_id: int
    name: str
    relative_path: str


def is_trash_uri(uri: str) -> bool:
    """True if `uri` uses the trash scheme."""
    return urllib.parse.urlsplit(uri).scheme == TRASH_SCHEME


def build_trash_uri(trash_id: int, file: str) -> str:
    """Build the URI of the trashed entry `file` inside trash `trash_id`."""
    # file names are bytes on disk; undecodable ones arrive surrogate-escaped
    return f"{TRASH_ROOT_URI}{trash_id}-{urllib.parse.quote(os.fsencode(file))}"


def parse_trash_identifier(uri: str) -> TrashIdentifier:
    """
    Split a trash URI into trash id, entry name and nested relative path.

    The relative path is normalised and never leaves the entry: `.` and
    `..` are not entry names, and `..` components that climb above the
    entry make the URI malformed.

    Raises:
        InvalidArgumentError: `uri` is not a trash URI, or is the bare
            trash root (`trash:///`), which names no trash at all.
        MalformedUriError: the path does not start with `<id>-<name>`,
            or its relative part escapes the entry.
    """
    if not is_trash_uri(uri):
        raise InvalidArgumentError(f"Not a trash URI: '{uri}'")

    # skip the leading '/'
    path = os.fsdecode(urllib.parse.unquote_to_bytes(urllib.parse.urlsplit(uri).path))[1:]
    if not path:
        raise InvalidArgumentError("The trash root URI does not name a trash")

    match = _IDENTIFIER_RE.fullmatch(path)
    if match is None or match.group("name") in (".", ".."):
        raise MalformedUriError(uri)

    relative_path = match.group("rest") or ""
    if relative_path:
        relative_path = posixpath.normpath(relative_path)
        if posixpath.isabs(relative_path) or relative_path == ".." or relative_path.startswith("../"):
            raise MalformedUriError(uri)
        if relative_path == ".":
            relative_path = ""

    return TrashIdentifier(
        trash_id=int(match.group("id")),
        name=match.group("name"),
        relative_path=relative_path,
    )
