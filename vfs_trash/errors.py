"""
Errors raised by the trash subsystem.

Missing trash directories or info records are not errors: they show up as
empty listings and absent info. Only broken preconditions and unusable
trash URIs raise.
"""


class TrashError(Exception):
    """Base class for all trash errors."""


class InvalidArgumentError(TrashError, ValueError):
    """A precondition was violated (relative root, nested basename, ...)."""


class MalformedUriError(TrashError, ValueError):
    """The path of a trash URI does not follow the `<id>-<name>` layout."""

    def __init__(self, uri: str):
        super().__init__(f"Unable to parse malformed trash URI '{uri}'")
        self.uri = uri


class UnknownTrashIdError(TrashError, LookupError):
    """A well-formed trash URI refers to a trash id nobody owns."""

    def __init__(self, trash_id: int):
        super().__init__(f"Invalid trash id {trash_id}")
        self.trash_id = trash_id
