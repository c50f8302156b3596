from .config import TrashConfig
from .errors import InvalidArgumentError, MalformedUriError, TrashError, UnknownTrashIdError
from .trash import Trash
from .trash_info import TrashInfo
from .trash_manager import TrashManager
from .trash_uri import TRASH_SCHEME, TrashIdentifier, build_trash_uri, parse_trash_identifier

__all__ = [
    'InvalidArgumentError',
    'MalformedUriError',
    'TRASH_SCHEME',
    'Trash',
    'TrashConfig',
    'TrashError',
    'TrashIdentifier',
    'TrashInfo',
    'TrashManager',
    'UnknownTrashIdError',
    'build_trash_uri',
    'parse_trash_identifier',
]
