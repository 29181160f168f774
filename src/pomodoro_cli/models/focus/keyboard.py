"""Non-blocking single-key input for the full-screen timer."""

from __future__ import annotations

import select
import sys

try:
    import termios
    import tty
except ImportError:  # Windows
    termios = None
    tty = None


class KeyboardHandler:
    """Reads single keypresses without blocking.

    On POSIX terminals the tty is switched to cbreak mode until ``stop()``;
    on Windows ``msvcrt`` is polled instead.
    """

    def __init__(self):
        self.old_settings = None
        self._msvcrt = None
        self.fd: int | None = None
        self._setup()

    def _setup(self) -> None:
        if termios is None:
            try:
                import msvcrt

                self._msvcrt = msvcrt
            except ImportError:
                pass
            return

        try:
            self.fd = sys.stdin.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (OSError, ValueError, termios.error):
            # stdin is not a terminal
            self.fd = None
            self.old_settings = None

    def get_key(self) -> str | None:
        """
        Get a single keypress without blocking.

        Returns the lower-cased key character or None if no key was pressed.
        """
        if self._msvcrt is not None:
            if not self._msvcrt.kbhit():
                return None
            key = self._msvcrt.getch()
            if isinstance(key, bytes):
                key = key.decode("utf-8", errors="ignore")
            return key.lower()

        if self.fd is None:
            return None

        if select.select([sys.stdin], [], [], 0)[0]:
            return sys.stdin.read(1).lower()
        return None

    def stop(self) -> None:
        """Restore terminal settings."""
        if self.old_settings is not None and self.fd is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None
