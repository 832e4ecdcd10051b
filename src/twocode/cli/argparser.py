"""Command-line argument parsing for twocode.

This module defines the command-line interface for twocode. The tool itself is
interactive, so the parser only carries process-wide options.
"""

import argparse

from twocode import __version__
from twocode.file_system_tree.permission_action import PermissionAction

PERMISSION_ACTIONS = {
    "ignore": PermissionAction.IGNORE,
    "warn": PermissionAction.WARN,
    "fail": PermissionAction.RAISE,
}


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with twocode's options.
    """
    description = """
    2code: An interactive browser for C++ source trees.

    Run it from the root of a project. A menu offers to print the project's
    directory tree or to log the contents of its source files into a single
    timestamped text file under ./contents.

    Filtering:
    - Directories named .cache, build, CMakeFiles, contents or .git are skipped
      together with everything beneath them
    - Only files ending in .cpp or .h are shown, except CMakeCXXCompilerId.cpp
    """

    epilog = """
    Examples:
      # Start the interactive menu in the current directory
      2code

      # Stop on unreadable directories instead of warning about them
      2code -P fail

      # Display version information and exit
      2code -V
    """

    parser = argparse.ArgumentParser(
        prog="2code",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"2code {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=sorted(PERMISSION_ACTIONS),
        default="warn",
        help="How to handle directories that cannot be listed (default: warn).",
    )

    return parser


def permission_action_from_args(args: argparse.Namespace) -> PermissionAction:
    """Map the CLI permission action name to its internal enum value."""
    return PERMISSION_ACTIONS[args.permission_action]
