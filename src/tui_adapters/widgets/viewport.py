"""Scrollable read-only text viewport."""

from __future__ import annotations

from typing import Any, Optional

from tui_adapters.core.commands import Command
from tui_adapters.core.input import Key, KeyEvent
from tui_adapters.core.messages import WindowSizeMessage
from tui_adapters.core.ansi_text import truncate
from tui_adapters.widgets.base import BaseWidget, Rect


class Viewport(BaseWidget):
    """
    Fixed-height window onto a longer block of text.

    Keyboard shortcuts:
        ↑/k             Line up
        ↓/j             Line down
        PgUp/b          Page up
        PgDn/f/Space    Page down
        Ctrl+U/Ctrl+D   Half page up/down
        Home/g          Top
        End/G           Bottom
    """

    def __init__(self, width: int = 80, height: int = 10, content: str = "") -> None:
        super().__init__()
        self.width = width
        self.height = height
        self._lines: list[str] = []
        self._y_offset = 0
        self.set_content(content)

    @property
    def y_offset(self) -> int:
        return self._y_offset

    def _max_offset(self) -> int:
        return max(0, len(self._lines) - max(1, self.height))

    @property
    def at_bottom(self) -> bool:
        return self._y_offset >= self._max_offset()

    def set_content(self, content: str) -> None:
        """Replace the text, keeping the offset valid."""
        self._lines = content.split("\n") if content else []
        self.set_offset(self._y_offset)

    def set_offset(self, offset: int) -> None:
        self._y_offset = max(0, min(self._max_offset(), offset))

    def scroll_by(self, delta: int) -> None:
        self.set_offset(self._y_offset + delta)

    def goto_top(self) -> None:
        self._y_offset = 0

    def goto_bottom(self) -> None:
        self._y_offset = self._max_offset()

    def update(self, message: Any) -> Optional[Command]:
        if isinstance(message, WindowSizeMessage):
            self.width = message.width
            self.set_offset(self._y_offset)
            return None
        if not self.focused or not isinstance(message, KeyEvent):
            return None
        event = message
        page = max(1, self.height)

        if event.key == Key.UP or event.char == 'k':
            self.scroll_by(-1)
        elif event.key == Key.DOWN or event.char == 'j':
            self.scroll_by(1)
        elif event.key == Key.PAGE_UP or event.char == 'b':
            self.scroll_by(-page)
        elif event.key == Key.PAGE_DOWN or event.char in ('f', ' '):
            self.scroll_by(page)
        elif event.ctrl and event.char == 'u':
            self.scroll_by(-(page // 2))
        elif event.ctrl and event.char == 'd':
            self.scroll_by(page // 2)
        elif event.key == Key.HOME or event.char == 'g':
            self.goto_top()
        elif event.key == Key.END or event.char == 'G':
            self.goto_bottom()
        return None

    def visible_lines(self) -> list[str]:
        return self._lines[self._y_offset:self._y_offset + max(1, self.height)]

    def render(self, bounds: Rect) -> list[str]:
        width = bounds.width or self.width
        return [truncate(line, width) if width > 0 else line for line in self.visible_lines()]
