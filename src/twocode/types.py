from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryKind(Enum):
    """Enumeration of entry kinds produced during traversal.

    Only directories and regular files take part in traversal; any other kind of
    entry (sockets, FIFOs, dangling symlinks) is skipped before a node is created.

    Attributes:
        FILE: Regular file
        DIRECTORY: Directory
    """

    FILE = "file"
    DIRECTORY = "directory"
