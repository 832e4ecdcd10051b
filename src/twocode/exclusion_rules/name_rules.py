"""Name and extension based exclusion rules.

The filters are static: a single immutable configuration describing which
directory names, file names and file extensions take part in traversal. Every
decision depends only on the final component of a path, never on its parents.
"""

import os
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import FrozenSet, Iterable, Optional

from twocode.exclusion_rules.base_rules import BaseExclusionRules
from twocode.types import PathType


@dataclass(frozen=True)
class FilterConfig:
    """Immutable filter configuration.

    Attributes:
        ignored_folders: Directory names pruned from traversal together with their subtrees.
        ignored_files: File names skipped regardless of their extension.
        allowed_extensions: File extensions (with the leading dot) that are shown.
    """

    ignored_folders: FrozenSet[str] = field(default_factory=frozenset)
    ignored_files: FrozenSet[str] = field(default_factory=frozenset)
    allowed_extensions: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_iterables(
        cls,
        ignored_folders: Iterable[str] = (),
        ignored_files: Iterable[str] = (),
        allowed_extensions: Iterable[str] = (),
    ) -> "FilterConfig":
        """Build a configuration from arbitrary iterables of names.

        Example:
            >>> config = FilterConfig.from_iterables(allowed_extensions=[".py"])
            >>> config.allowed_extensions
            frozenset({'.py'})
        """
        return cls(frozenset(ignored_folders), frozenset(ignored_files), frozenset(allowed_extensions))


DEFAULT_FILTER_CONFIG = FilterConfig.from_iterables(
    ignored_folders=[".cache", "build", "CMakeFiles", "contents", ".git"],
    ignored_files=["CMakeCXXCompilerId.cpp"],
    allowed_extensions=[".cpp", ".h"],
)


def _name(path: PathType) -> str:
    return PurePath(os.fspath(path)).name


def _extension(path: PathType) -> str:
    # A leading dot starts a hidden name, not an extension: ".h" has none
    return os.path.splitext(_name(path))[1]


class NameExclusionRules(BaseExclusionRules):
    """Exclusion rules matching exact entry names and file extensions.

    Attributes:
        config (FilterConfig): The filter sets consulted by every check.

    Example:
        >>> rules = NameExclusionRules()
        >>> rules.should_ignore_folder("/any/parent/.git")
        True
        >>> rules.should_ignore_file("CMakeFiles/CMakeCXXCompilerId.cpp")
        True
        >>> rules.has_allowed_extension("include/vector.h")
        True
        >>> rules.has_allowed_extension("main.CPP")
        False
    """

    def __init__(self, config: Optional[FilterConfig] = None) -> None:
        self.config = config if config is not None else DEFAULT_FILTER_CONFIG

    def should_ignore_folder(self, path: PathType) -> bool:
        """Return True iff the final path component is an ignored directory name."""
        return _name(path) in self.config.ignored_folders

    def should_ignore_file(self, path: PathType) -> bool:
        """Return True iff the final path component is an ignored file name."""
        return _name(path) in self.config.ignored_files

    def has_allowed_extension(self, path: PathType) -> bool:
        """Return True iff the path's extension, leading dot included, is allowed."""
        return _extension(path) in self.config.allowed_extensions

    def exclude_directory(self, path: PathType) -> bool:
        return self.should_ignore_folder(path)

    def exclude_file(self, path: PathType) -> bool:
        return self.should_ignore_file(path) or not self.has_allowed_extension(path)


_default_rules = NameExclusionRules()


def should_ignore_folder(path: PathType) -> bool:
    """Check a directory path against the default filter configuration."""
    return _default_rules.should_ignore_folder(path)


def should_ignore_file(path: PathType) -> bool:
    """Check a file path against the default ignored file names."""
    return _default_rules.should_ignore_file(path)


def has_allowed_extension(path: PathType) -> bool:
    """Check a file path against the default allowed extensions."""
    return _default_rules.has_allowed_extension(path)
