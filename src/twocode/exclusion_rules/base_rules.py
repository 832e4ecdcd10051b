from abc import ABC, abstractmethod

from twocode.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Traversal asks a rules object two separate questions: whether a directory should
    be pruned (together with everything beneath it) and whether a regular file should
    be left out. Keeping the questions apart lets an implementation treat a name
    differently depending on the kind of entry carrying it.

    Example:
        >>> from twocode.exclusion_rules.name_rules import NameExclusionRules
        >>> rules = NameExclusionRules()
        >>> rules.exclude_directory("project/build")
        True
        >>> rules.exclude_file("project/main.cpp")
        False
        >>> rules.exclude_file("project/notes.txt")
        True
    """

    @abstractmethod
    def exclude_directory(self, path: PathType) -> bool:
        """
        Determine if a directory should be pruned from traversal.

        Args:
            path: Path of the directory. Only its final component is expected to
                matter, but implementations receive the full path.

        Returns:
            bool: True if the directory and its whole subtree should be skipped.
        """
        pass

    @abstractmethod
    def exclude_file(self, path: PathType) -> bool:
        """
        Determine if a regular file should be left out of traversal output.

        Args:
            path: Path of the file.

        Returns:
            bool: True if the file should be skipped, False if it should be shown.
        """
        pass
