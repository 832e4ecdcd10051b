"""Command-line interface for twocode.

This module provides the entry point of the interactive ``2code`` tool. It
parses the few process-wide options, installs interrupt handling and runs the
menu against the current working directory.

Signal Handling Notes:
    SIGINT is recorded by the signal handler and acted on by the menu loop, which
    prints an acknowledgment and a farewell before exiting normally. A second
    SIGINT falls through to Python's default handling.

Exit Codes:
    0: Successful completion, including shutdown on SIGINT
    1: Runtime error during setup (e.g. the current directory is unavailable)
    2: Command-line syntax error

Example:
    # Start the menu in the current project
    $ 2code

    # Display version information
    $ 2code --version
"""

import sys
from pathlib import Path

from twocode.cli.argparser import create_parser, permission_action_from_args
from twocode.cli.menu import Menu
from twocode.cli.signal_handler import restore_signal_handling, setup_signal_handling


def main() -> None:
    """Main entry point for the twocode command-line interface.

    Exit codes:
        0: Successful completion, including shutdown on SIGINT
        1: Runtime error during setup
        2: Command-line syntax error
    """
    parser = create_parser()
    args = parser.parse_args()

    try:
        root_path = Path.cwd()
    except OSError as e:
        print(f"Error: Unable to determine the current directory: {str(e)}", file=sys.stderr)
        sys.exit(1)

    menu = Menu(root_path, root_path / "contents", permission_action=permission_action_from_args(args))

    setup_signal_handling()
    try:
        menu.run()
    except KeyboardInterrupt:
        # Second interrupt while a command was still running
        print(file=sys.stdout)
        menu.farewell()
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)
    finally:
        restore_signal_handling()


if __name__ == "__main__":
    main()
