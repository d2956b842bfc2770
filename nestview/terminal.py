"""Terminal control helpers for the TUI session.

Owns the raw-mode lifecycle and alternate-screen switching. Failures here
are fatal to the session and surface as ``TerminalError``.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import termios
import tty

logger = logging.getLogger(__name__)

_ENTER_TUI = b"\x1b[?1049h\x1b[?25l"
_LEAVE_TUI = b"\x1b[?25h\x1b[?1049l"


class TerminalError(RuntimeError):
    """Terminal mode could not be acquired or restored."""


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"cannot read terminal attributes: {exc}") from exc

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            os.write(self.stdout_fd, _ENTER_TUI)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"cannot enter raw mode: {exc}") from exc
        logger.debug("entered raw mode")

    def disable_tui_mode(self) -> None:
        """Show the cursor, restore the main screen and saved tty state."""
        try:
            os.write(self.stdout_fd, _LEAVE_TUI)
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"cannot restore terminal: {exc}") from exc
        logger.debug("restored terminal mode")

    def size(self) -> tuple[int, int]:
        """Current ``(columns, lines)`` of the terminal frames are written to."""
        try:
            term = os.get_terminal_size(self.stdout_fd)
        except OSError:
            term = shutil.get_terminal_size((80, 24))
        return term.columns, term.lines

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController", "TerminalError"]
