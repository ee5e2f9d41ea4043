"""Terminal control for the interactive ``try`` command."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Minimal screen driver: full-frame repaint in the alternate screen."""

    @staticmethod
    def size() -> TerminalSize:
        try:
            size = os.get_terminal_size()
            return TerminalSize(size.lines, size.columns)
        except OSError:
            return TerminalSize(24, 80)

    @staticmethod
    def write(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    @staticmethod
    def paint(lines: list[str]) -> None:
        """Repaint the screen with ``lines``, one per row.

        Raw mode disables output newline translation, so rows are joined with
        CR LF.
        """
        sys.stdout.write('\x1b[H\x1b[2J')
        sys.stdout.write('\r\n'.join(lines))
        sys.stdout.write('\x1b[0m')
        sys.stdout.flush()

    @staticmethod
    @contextmanager
    def raw_mode() -> Iterator[None]:
        """Raw keyboard input (Unix only, a no-op elsewhere)."""
        try:
            import termios
            import tty
        except ImportError:
            yield
            return
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    @contextmanager
    def managed_mode() -> Iterator[None]:
        """Alternate screen, hidden cursor and raw input, restored on exit."""
        Terminal.write('\x1b[?1049h\x1b[?25l')
        try:
            with Terminal.raw_mode():
                yield
        finally:
            Terminal.write('\x1b[0m\x1b[?25h\x1b[?1049l')
