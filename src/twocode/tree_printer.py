"""Console listing of a filtered directory tree."""

import sys
from typing import Optional, TextIO

from twocode.exclusion_rules.base_rules import BaseExclusionRules
from twocode.exclusion_rules.name_rules import NameExclusionRules
from twocode.file_system_tree.file_system_tree import FileSystemTree
from twocode.file_system_tree.permission_action import PermissionAction
from twocode.types import PathType


def print_dir_tree(
    path: PathType,
    indent: int = 0,
    *,
    file: Optional[TextIO] = None,
    exclusion_rules: Optional[BaseExclusionRules] = None,
    permission_action: PermissionAction = PermissionAction.RAISE,
) -> None:
    """Print the filtered tree below ``path``, one entry per line.

    Ignored directories are left out together with everything beneath them, and
    only regular files that are not ignored and carry an allowed extension are
    listed. Entries appear in filesystem enumeration order.

    Args:
        path: Directory whose contents are listed. The directory itself is not.
        indent: Number of dash characters in front of the top-level entries.
        file: Stream to write to. Defaults to the current ``sys.stdout``.
        exclusion_rules: Filters to apply. Defaults to the built-in source filters.
        permission_action: How to handle directories that cannot be listed.

    Raises:
        FileNotFoundError: If ``path`` doesn't exist.
        NotADirectoryError: If ``path`` isn't a directory.
        PermissionError: If a directory cannot be listed and permission_action is RAISE.

    Example:
        >>> print_dir_tree("project")  # doctest: +SKIP
         | main.cpp
         + include
        -- | main.h
    """
    out = file if file is not None else sys.stdout
    rules = exclusion_rules if exclusion_rules is not None else NameExclusionRules()

    tree = FileSystemTree(path, rules, permission_action=permission_action)
    for line in tree.stream_tree_representation(indent):
        print(line, file=out)
