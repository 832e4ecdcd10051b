"""Filtered file system traversal.

This module provides classes for building tree representations of directory
structures, pruning ignored directories and skipping unwanted files as they are
enumerated.
"""

from .file_system_node import FileSystemNode
from .file_system_tree import FileSystemTree
from .permission_action import PermissionAction

__all__ = ["FileSystemNode", "FileSystemTree", "PermissionAction"]
