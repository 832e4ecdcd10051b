"""Interactive menu loop for twocode.

The menu is a two-state machine. It stays RUNNING while commands are read and
dispatched, and moves to SHUTTING_DOWN on the quit command, at end of input, or
once an interrupt has been observed. Interrupts are observed at the start of
every iteration and right after the blocking read.
"""

import signal
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TextIO

from twocode.cli.signal_handler import SignalHandler, signal_handler
from twocode.content_logger import log_file_contents
from twocode.exceptions import TwoCodeError
from twocode.file_system_tree.permission_action import PermissionAction
from twocode.tree_printer import print_dir_tree
from twocode.types import PathType

MENU_TEXT = (
    "\n"
    "=================================\n"
    "              2code              \n"
    "          (C) 2024 0xB           \n"
    "=================================\n\n"
    "  Options:                       \n"
    "    1 - Show Directory Tree      \n"
    "    2 - Log File Contents        \n"
    "    0 - Quit                     \n\n"
    "=================================\n\n"
    "Please choose an option: "
)

QUIT, SHOW_TREE, LOG_CONTENTS = 0, 1, 2


class MenuState(Enum):
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"


class Menu:
    """Reads numeric commands and dispatches them until asked to stop.

    Attributes:
        root_path (Path): Directory that commands operate on.
        output_folder (Path): Folder receiving content logs.
        permission_action (PermissionAction): How traversals treat unreadable directories.
        state (MenuState): Current state of the loop.

    Example:
        >>> menu = Menu(".", input_func=lambda: "0")  # doctest: +SKIP
        >>> menu.run()  # doctest: +SKIP
        ...
        Program exited successfully.
    """

    def __init__(
        self,
        root_path: PathType,
        output_folder: Optional[PathType] = None,
        *,
        permission_action: PermissionAction = PermissionAction.WARN,
        input_func: Optional[Callable[[], str]] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        handler: SignalHandler = signal_handler,
    ) -> None:
        self.root_path = Path(root_path)
        self.output_folder = Path(output_folder) if output_folder is not None else self.root_path / "contents"
        self.permission_action = permission_action
        self.state = MenuState.RUNNING
        self._input = input_func if input_func is not None else input
        self._stdout = stdout
        self._stderr = stderr
        self._handler = handler

    @property
    def out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def run(self) -> None:
        """Run the loop until it reaches SHUTTING_DOWN, then say goodbye."""
        while self.state is MenuState.RUNNING:
            if self._check_interrupt():
                break

            self.display()
            command = self._read_command()

            if self._check_interrupt():
                break
            if command is not None:
                self.dispatch(command)

        self.farewell()

    def display(self) -> None:
        print(MENU_TEXT, end="", file=self.out, flush=True)

    def farewell(self) -> None:
        print("Program exited successfully.", file=self.out, flush=True)

    def _check_interrupt(self) -> bool:
        if not self._handler.sigint_received.is_set():
            return False
        signum = self._handler.last_signal if self._handler.last_signal is not None else signal.SIGINT
        print(f"\nReceived interrupt signal ({int(signum)}). Shutting down gracefully...", file=self.out)
        self.state = MenuState.SHUTTING_DOWN
        return True

    def _read_command(self) -> Optional[str]:
        """Block for one line of input.

        Returns:
            The line read, or None if input ended or was interrupted.
        """
        try:
            self._handler.awaiting_input.set()
            # A signal that arrived before the flag was set would not wake the read
            if self._handler.sigint_received.is_set():
                return None
            return self._input()
        except EOFError:
            print(file=self.out)
            self.state = MenuState.SHUTTING_DOWN
            return None
        except KeyboardInterrupt:
            # Raised by the handler while waiting, or delivered without it installed
            self._handler.sigint_received.set()
            return None
        finally:
            self._handler.awaiting_input.clear()

    def dispatch(self, command: str) -> None:
        """Act on one line of user input.

        Args:
            command: The raw line. Surrounding whitespace is ignored; anything that
                is not one of the known integers is reported as invalid.
        """
        try:
            choice: Optional[int] = int(command.strip())
        except ValueError:
            choice = None

        if choice == QUIT:
            self.state = MenuState.SHUTTING_DOWN
        elif choice == SHOW_TREE:
            self.show_tree()
        elif choice == LOG_CONTENTS:
            self.log_contents()
        else:
            print("Invalid option. Please choose again.", file=self.out)

    def show_tree(self) -> None:
        print(f"\nDirectory Tree for: {self.root_path}", file=self.out)
        try:
            print_dir_tree(self.root_path, file=self.out, permission_action=self.permission_action)
        except OSError as e:
            print(f"Error: {str(e)}", file=self.err)

    def log_contents(self) -> None:
        print("\nLogging file contents for allowed file types...", file=self.out)
        try:
            output_path = log_file_contents(
                self.root_path, self.output_folder, permission_action=self.permission_action
            )
        except (TwoCodeError, OSError) as e:
            print(f"Error: {str(e)}", file=self.err)
            return
        print(f"Log created: {output_path}", file=self.out)
