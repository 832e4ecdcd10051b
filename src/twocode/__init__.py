"""Source tree browsing and content logging utilities.

This package provides an interactive tool that prints a filtered directory tree
and concatenates the contents of C++ source files into a timestamped log.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("twocode")
except PackageNotFoundError:
    __version__ = "unknown"
