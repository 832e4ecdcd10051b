"""Node representation for file system entries in the tree."""

from typing import Any, Optional

from anytree import Node

from twocode.types import EntryKind


class FileSystemNode(Node):  # type: ignore
    """Node class representing a directory or regular file kept by traversal.

    Extends anytree.Node with the entry kind and its location on disk. Children
    are kept in the order the filesystem enumerated them.

    Attributes:
        name (str): The base name of the entry.
        kind (EntryKind): Whether the entry is a directory or a regular file.
        fs_path (str): Full path of the entry on disk. Named so as not to shadow
            anytree's ``path``, the tuple of nodes from the root.
        loop_detected (bool): True for a directory reached again through a symlink
            while already being traversed; such a node has no children.

    Example:
        >>> root = FileSystemNode("src", kind=EntryKind.DIRECTORY, fs_path="src")
        >>> child = FileSystemNode("main.cpp", parent=root, fs_path="src/main.cpp")
        >>> child.is_dir
        False
        >>> [node.name for node in root.children]
        ['main.cpp']
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        kind: EntryKind = EntryKind.FILE,
        fs_path: str = "",
        loop_detected: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.kind = kind
        self.fs_path = fs_path
        self.loop_detected = loop_detected

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY
