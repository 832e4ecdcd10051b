"""Permission action enum for handling permission errors during directory traversal."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory cannot be listed during traversal.

    Values:
        IGNORE: Keep the directory node but skip its contents silently
        WARN: Keep the directory node, skip its contents and print a warning to stderr
        RAISE: Raise a PermissionError immediately when access is denied
    """

    IGNORE = "ignore"
    WARN = "warn"
    RAISE = "raise"
