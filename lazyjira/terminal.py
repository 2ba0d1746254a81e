"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching, plus the scoped
hand-off that lends the terminal to an external line-mode program.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

from .errors import TerminalIOError

logger = logging.getLogger(__name__)

# Enter alternate screen, hide cursor, wipe screen and scrollback, home cursor.
APPLICATION_MODE_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[2J\x1b[3J\x1b[H"
# Show cursor and restore the main screen buffer.
LINE_MODE_SEQUENCE = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Switch the controlling terminal between application and line mode."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except (termios.error, OSError) as exc:
            raise TerminalIOError(f"stdin is not a usable terminal: {exc}") from exc
        self.application_mode = False

    def enter_application_mode(self) -> None:
        """Enter raw alternate-screen mode and force a blank canvas for repaint."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            os.write(self.stdout_fd, APPLICATION_MODE_SEQUENCE)
        except (termios.error, OSError) as exc:
            raise TerminalIOError(f"Failed to enter application mode: {exc}") from exc
        self.application_mode = True

    def enter_line_mode(self) -> None:
        """Hand echo and line editing back to the terminal driver."""
        try:
            os.write(self.stdout_fd, LINE_MODE_SEQUENCE)
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            raise TerminalIOError(f"Failed to enter line mode: {exc}") from exc
        self.application_mode = False

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets a whole UI session."""
        self.enter_application_mode()
        try:
            yield self
        finally:
            self.enter_line_mode()

    @contextlib.contextmanager
    def released(self):
        """Lend the terminal to a line-mode program for the duration of the block.

        Entering line mode may raise ``TerminalIOError``; in that case the block
        never runs. Once line mode was entered, application mode is restored on
        every exit path. A failed restore is logged and swallowed so it cannot
        replace an exception already propagating out of the block.
        """
        self.enter_line_mode()
        try:
            yield self
        finally:
            try:
                self.enter_application_mode()
            except TerminalIOError:
                logger.error("Failed to restore application mode after external program", exc_info=True)
