"""File system tree representation with configurable exclusion rules.

This module provides the FileSystemTree class, which enumerates a directory
structure depth-first and keeps only the entries its exclusion rules allow.
"""

import os
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

from twocode.exclusion_rules.base_rules import BaseExclusionRules
from twocode.file_system_tree.file_identifier import FileIdentifier
from twocode.file_system_tree.file_system_node import FileSystemNode
from twocode.file_system_tree.permission_action import PermissionAction
from twocode.types import EntryKind, PathType

DIRECTORY_MARKER = " + "
FILE_MARKER = " | "
INDENT_CHAR = "-"
INDENT_STEP = 2


class FileSystemTree:
    """A filtered tree representation of a directory structure.

    The tree is built lazily on first access. Entries are kept in the order the
    operating system enumerates them (``os.scandir`` order); they are never sorted,
    so two platforms may list the same directory differently.

    Filtering happens while enumerating: a directory rejected by
    ``exclusion_rules.exclude_directory`` is never opened, and a regular file
    rejected by ``exclusion_rules.exclude_file`` never becomes a node. Entries that
    are neither directories nor regular files are dropped.

    Symbolic links are classified by their target. A link to a directory that is
    already being traversed is kept as a node with ``loop_detected`` set and is not
    descended into. With ``follow_symlinks`` disabled, no directory link is
    descended into, so every file below the root is reached by exactly one path.

    Permission Handling:
        A directory that cannot be listed is kept as a node without children and
        handled according to ``permission_action``:
        - IGNORE: skip silently
        - WARN: print a warning to stderr and skip
        - RAISE: raise PermissionError

    Attributes:
        root_path (Path): The directory being represented.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for excluding entries.
        permission_action (PermissionAction): How to handle unreadable directories.
        follow_symlinks (bool): Whether to descend into symbolic links to directories.

    Example:
        >>> tree = FileSystemTree(".")  # doctest: +SKIP
        >>> for line in tree.stream_tree_representation():  # doctest: +SKIP
        ...     print(line)
         + src
        -- | main.cpp
         + include
        -- | util.h
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        permission_action: PermissionAction = PermissionAction.RAISE,
        follow_symlinks: bool = True,
    ) -> None:
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self.permission_action = permission_action
        self.follow_symlinks = follow_symlinks
        self._tree: Optional[FileSystemNode] = None

    def get_tree(self) -> FileSystemNode:
        """Get the root node of the filesystem tree, building it on first access.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            PermissionError: If permission is denied and permission_action is RAISE.
        """
        if self._tree is None:
            self._tree = self._build_tree()
        return self._tree

    def _build_tree(self) -> FileSystemNode:
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {self.root_path}")

        root = FileSystemNode(self.root_path.resolve().name, kind=EntryKind.DIRECTORY, fs_path=str(self.root_path))

        # Identifiers of the directories on the current branch, for symlink loop detection
        visited: Set[FileIdentifier] = set()
        root_id = FileIdentifier.of(self.root_path)
        if root_id is not None:
            visited.add(root_id)

        self._add_children(root, visited)
        return root

    def _list_directory(self, path: str) -> Optional[List["os.DirEntry[str]"]]:
        try:
            with os.scandir(path) as entries:
                return list(entries)
        except PermissionError as e:
            if self.permission_action == PermissionAction.RAISE:
                raise PermissionError(f"Access denied to {path}: {e}") from e
            if self.permission_action == PermissionAction.WARN:
                print(f"Warning: Access denied to {path}: {e.strerror}", file=sys.stderr)
            return None

    def _add_children(self, node: FileSystemNode, visited: Set[FileIdentifier]) -> None:
        """Recursively attach the kept entries of a directory node."""
        entries = self._list_directory(node.fs_path)
        if entries is None:
            return

        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
                is_link = entry.is_symlink()
            except OSError:
                continue

            if is_dir:
                if self.exclusion_rules and self.exclusion_rules.exclude_directory(entry.path):
                    continue

                child = FileSystemNode(entry.name, parent=node, kind=EntryKind.DIRECTORY, fs_path=entry.path)
                if is_link and not self.follow_symlinks:
                    continue
                file_id = FileIdentifier.of(entry.path)
                if file_id is not None and file_id in visited:
                    child.loop_detected = True
                    continue

                if file_id is not None:
                    visited.add(file_id)
                self._add_children(child, visited)
                if file_id is not None:
                    visited.discard(file_id)

            elif is_file:
                if self.exclusion_rules and self.exclusion_rules.exclude_file(entry.path):
                    continue
                FileSystemNode(entry.name, parent=node, kind=EntryKind.FILE, fs_path=entry.path)

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all kept regular files, depth-first in enumeration order.

        Yields:
            Pairs of (path, relative_path) for each file, where ``path`` joins the
            root path given at construction with the relative path.

        Raises:
            PermissionError: If access is denied and permission_action is RAISE.

        Example:
            >>> tree = FileSystemTree("src")  # doctest: +SKIP
            >>> for path, rel_path in tree.iterate_files():  # doctest: +SKIP
            ...     print(rel_path)
            main.cpp
            detail/impl.h
        """
        yield from self._iterate(self.get_tree(), "")

    def _iterate(self, node: FileSystemNode, current_path: str) -> Iterator[Tuple[str, str]]:
        for child in node.children:
            child_path = os.path.join(current_path, child.name) if current_path else child.name
            if child.is_dir:
                yield from self._iterate(child, child_path)
            else:
                yield child.fs_path, child_path

    def stream_tree_representation(self, indent: int = 0) -> Iterator[str]:
        """Generate the indented tree listing one line at a time.

        Each line is ``indent`` dash characters followed by `` + `` and the name of a
        directory, or `` | `` and the name of a file. A directory's contents follow it
        with the indentation increased by two. The root itself is not listed.

        Args:
            indent: Indentation of the root's direct children.

        Yields:
            Lines of the listing, without trailing newlines.

        Raises:
            PermissionError: If access is denied and permission_action is RAISE.
        """

        def write_node(node: FileSystemNode, level: int) -> Iterator[str]:
            for child in node.children:
                marker = DIRECTORY_MARKER if child.is_dir else FILE_MARKER
                yield f"{INDENT_CHAR * level}{marker}{child.name}"
                if child.is_dir:
                    yield from write_node(child, level + INDENT_STEP)

        yield from write_node(self.get_tree(), indent)

    def get_tree_representation(self, indent: int = 0) -> str:
        """Get the complete tree listing as a single newline-separated string."""
        return "\n".join(self.stream_tree_representation(indent))

    def refresh(self) -> None:
        """Drop the cached tree so the next access re-reads the filesystem."""
        self._tree = None
