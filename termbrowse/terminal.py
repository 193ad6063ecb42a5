"""Terminal control helpers for the browser session.

Owns the raw-mode lifecycle: attributes are captured on entry and restored
verbatim on exit, including when the session unwinds through an exception.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

from .ansi import CLEAR_SCREEN, HIDE_CURSOR, SHOW_CURSOR

logger = logging.getLogger(__name__)


class TerminalController:
    """Manage raw-mode transitions for one pair of terminal descriptors.

    Raw mode is process-wide device state, so only one controller may hold it
    at a time.
    """

    _active: TerminalController | None = None

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state: list | None = None

    @property
    def raw_mode_active(self) -> bool:
        return self._saved_tty_state is not None

    def enter_raw_mode(self) -> None:
        """Capture tty attributes and disable line buffering and echo.

        Repeated calls while active are no-ops. If the attributes cannot be
        read or set the session continues in whatever mode the terminal has.
        """
        if self.raw_mode_active:
            return
        owner = TerminalController._active
        if owner is not None and owner is not self:
            raise RuntimeError("another TerminalController already holds raw mode")
        try:
            saved = termios.tcgetattr(self.stdin_fd)
        except termios.error as exc:
            logger.warning("cannot read terminal attributes: %s", exc)
            return
        try:
            tty.setcbreak(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            logger.warning("cannot enter raw mode: %s", exc)
            return
        self._saved_tty_state = saved
        TerminalController._active = self
        logger.debug("entered raw mode on fd %d", self.stdin_fd)

    def leave_raw_mode(self) -> None:
        """Restore the attributes captured by ``enter_raw_mode``.

        Never raises: a failed restore is logged and the captured state is
        dropped so a later call does not retry with stale attributes.
        """
        saved = self._saved_tty_state
        if saved is None:
            return
        self._saved_tty_state = None
        if TerminalController._active is self:
            TerminalController._active = None
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, saved)
        except (termios.error, OSError) as exc:
            logger.error("failed to restore terminal attributes: %s", exc)
            return
        logger.debug("left raw mode on fd %d", self.stdin_fd)

    def write(self, text: str) -> None:
        """Write ``text`` to the terminal, replacing unencodable characters."""
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def hide_cursor(self) -> None:
        self.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(SHOW_CURSOR)

    def clear_screen(self) -> None:
        self.write(CLEAR_SCREEN)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/exit calls."""
        try:
            self.enter_raw_mode()
            yield self
        finally:
            self.leave_raw_mode()

    @contextlib.contextmanager
    def suspended(self):
        """Temporarily return to canonical mode, e.g. for a line prompt.

        Raw mode is re-entered afterwards only if it was active before, and
        regardless of how the suspended block exits.
        """
        was_raw = self.raw_mode_active
        self.leave_raw_mode()
        self.show_cursor()
        try:
            yield self
        finally:
            if was_raw:
                self.enter_raw_mode()


def terminal_is_interactive(stdin_fd: int, stdout_fd: int) -> bool:
    """Return whether both standard streams are attached to a terminal."""
    try:
        return os.isatty(stdin_fd) and os.isatty(stdout_fd)
    except OSError:
        return False
