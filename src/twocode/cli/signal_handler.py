"""Signal handling utilities for the twocode CLI.

This module records interrupt requests so that the interactive menu can shut
down at a well-defined point instead of being torn down mid-operation.
"""

import signal
from threading import Event
from types import FrameType
from typing import Optional


class SignalHandler:
    """Records SIGINT so the menu loop can exit gracefully.

    The handler does no work beyond setting flags. When the menu is blocked waiting
    for a line of input it additionally raises KeyboardInterrupt, because a
    returning handler would leave the read blocked. During any other operation the
    request is only recorded and takes effect once the operation completes.

    After the first SIGINT the original handler is reinstated, so a second
    interrupt stops the process the usual way.

    Attributes:
        sigint_received: Event that is set when a SIGINT signal is received.
        awaiting_input: Event that is set while the menu is blocked on input.
        last_signal: Number of the last signal handled, if any.
        original_sigint_handler: Original SIGINT signal handler.
    """

    def __init__(self) -> None:
        """Initialize signal handler with original handlers preserved."""
        self.sigint_received = Event()
        self.awaiting_input = Event()
        self.last_signal: Optional[int] = None
        self.original_sigint_handler = signal.getsignal(signal.SIGINT)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        """Handle SIGINT signal.

        Args:
            signum: The signal number.
            frame: The current stack frame.

        Raises:
            KeyboardInterrupt: If the menu is currently blocked on input.
        """
        self.last_signal = signum
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)
        if self.awaiting_input.is_set():
            raise KeyboardInterrupt

    def reset(self) -> None:
        """Forget any recorded signal."""
        self.sigint_received.clear()
        self.awaiting_input.clear()
        self.last_signal = None


# Create a singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGINT handler."""
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def restore_signal_handling() -> None:
    """Reinstate the SIGINT handler that was active before setup."""
    signal.signal(signal.SIGINT, signal_handler.original_sigint_handler)
