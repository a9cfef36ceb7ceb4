"""Raw-mode session for the pager.

While the pager runs the terminal shows the alternate screen with the cursor
hidden, and wheel events arrive as SGR mouse reports.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

# (DEC private mode, state while paging)
_PAGER_MODES = (
    (1049, True),  # alternate screen
    (25, False),  # cursor
    (1000, True),  # button reporting
    (1006, True),  # SGR report encoding
)


def _mode_sequence(entering: bool) -> bytes:
    modes = _PAGER_MODES if entering else tuple(reversed(_PAGER_MODES))
    out = []
    for mode, paging in modes:
        on = paging if entering else not paging
        out.append(f"\x1b[?{mode}{'h' if on else 'l'}")
    return "".join(out).encode("ascii")


ENTER_PAGER = _mode_sequence(True)
LEAVE_PAGER = _mode_sequence(False)


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._cooked = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_PAGER)

    def disable_tui_mode(self) -> None:
        """Leave the pager screen and put back the saved tty attributes."""
        os.write(self.stdout_fd, LEAVE_PAGER)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._cooked)

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()


__all__ = ["ENTER_PAGER", "LEAVE_PAGER", "TerminalController"]
