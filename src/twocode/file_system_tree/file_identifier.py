"""File identifier for uniquely identifying directories by device and inode."""

import os
from dataclasses import dataclass
from typing import Optional

from twocode.types import PathType


@dataclass(frozen=True)
class FileIdentifier:
    """Identity of a filesystem object as a (device, inode) pair.

    Used to notice a directory symlink that leads back into one of its own
    ancestors, which would otherwise make traversal recurse forever.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.
    """

    device_id: int
    inode_number: int

    @classmethod
    def of(cls, path: PathType) -> Optional["FileIdentifier"]:
        """Identify the object at ``path``, following symlinks.

        Returns:
            The identifier, or None if the path cannot be stat'ed.
        """
        try:
            stat_info = os.stat(path)
        except OSError:
            return None
        return cls(stat_info.st_dev, stat_info.st_ino)
