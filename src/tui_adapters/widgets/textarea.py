"""Multi-line text editing widget."""

from __future__ import annotations

from typing import Any, Optional

from tui_adapters.core.commands import Command
from tui_adapters.core.config import DEFAULT_THEME, Theme
from tui_adapters.core.input import Key, KeyEvent
from tui_adapters.core.ansi_text import truncate
from tui_adapters.widgets.base import BaseWidget, Rect


class TextArea(BaseWidget):
    """
    Multi-line editor. The value is the lines joined with ``\\n``.

    Keyboard shortcuts:
        Arrows          Move cursor
        Home/End        Start/end of line
        Enter           Insert newline
        Backspace/Del   Delete, joining lines at the edges
        Ctrl+K          Delete to end of line
        Ctrl+U          Delete to start of line
    """

    def __init__(
        self,
        value: str = "",
        placeholder: str = "",
        prompt: str = "",
        char_limit: int = 0,
        max_height: int = 0,
        show_line_numbers: bool = False,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__()
        self.placeholder = placeholder
        self.prompt = prompt
        self.char_limit = char_limit
        self.max_height = max_height
        self.show_line_numbers = show_line_numbers
        self.theme = theme
        self._lines: list[str] = [""]
        self._row = 0
        self._col = 0
        self._scroll = 0
        self.set_value(value)

    @property
    def value(self) -> str:
        return "\n".join(self._lines)

    @property
    def cursor(self) -> tuple[int, int]:
        """(row, column) of the cursor."""
        return self._row, self._col

    def _length(self) -> int:
        return len(self.value)

    def set_value(self, value: str) -> None:
        if self.char_limit > 0:
            value = value[:self.char_limit]
        self._lines = value.split("\n")
        self._row = len(self._lines) - 1
        self._col = len(self._lines[self._row])

    def reset(self) -> None:
        self.set_value("")

    def insert(self, text: str) -> None:
        """Insert text (possibly containing newlines) at the cursor."""
        if self.char_limit > 0:
            room = self.char_limit - self._length()
            if room <= 0:
                return
            text = text[:room]
        line = self._lines[self._row]
        head, tail = line[:self._col], line[self._col:]
        parts = text.split("\n")
        if len(parts) == 1:
            self._lines[self._row] = head + text + tail
            self._col += len(text)
            return
        new_lines = [head + parts[0], *parts[1:-1], parts[-1] + tail]
        self._lines[self._row:self._row + 1] = new_lines
        self._row += len(parts) - 1
        self._col = len(parts[-1])

    def insert_newline(self) -> None:
        self.insert("\n")

    def update(self, message: Any) -> Optional[Command]:
        if not self.focused or not isinstance(message, KeyEvent):
            return None
        event = message

        if event.key == Key.ENTER:
            self.insert_newline()
        elif event.key == Key.UP:
            self._move_row(-1)
        elif event.key == Key.DOWN:
            self._move_row(1)
        elif event.key == Key.LEFT:
            self._move_left()
        elif event.key == Key.RIGHT:
            self._move_right()
        elif event.key == Key.HOME or (event.ctrl and event.char == "a"):
            self._col = 0
        elif event.key == Key.END or (event.ctrl and event.char == "e"):
            self._col = len(self._lines[self._row])
        elif event.key == Key.BACKSPACE:
            self._backspace()
        elif event.key == Key.DELETE:
            self._delete()
        elif event.ctrl and event.char == "k":
            self._lines[self._row] = self._lines[self._row][:self._col]
        elif event.ctrl and event.char == "u":
            self._lines[self._row] = self._lines[self._row][self._col:]
            self._col = 0
        elif event.is_char and not event.ctrl and not event.alt:
            self.insert(event.char)
        return None

    def _move_row(self, delta: int) -> None:
        self._row = max(0, min(len(self._lines) - 1, self._row + delta))
        self._col = min(self._col, len(self._lines[self._row]))

    def _move_left(self) -> None:
        if self._col > 0:
            self._col -= 1
        elif self._row > 0:
            self._row -= 1
            self._col = len(self._lines[self._row])

    def _move_right(self) -> None:
        if self._col < len(self._lines[self._row]):
            self._col += 1
        elif self._row < len(self._lines) - 1:
            self._row += 1
            self._col = 0

    def _backspace(self) -> None:
        if self._col > 0:
            line = self._lines[self._row]
            self._lines[self._row] = line[:self._col - 1] + line[self._col:]
            self._col -= 1
        elif self._row > 0:
            prev = self._lines[self._row - 1]
            self._lines[self._row - 1] = prev + self._lines.pop(self._row)
            self._row -= 1
            self._col = len(prev)

    def _delete(self) -> None:
        line = self._lines[self._row]
        if self._col < len(line):
            self._lines[self._row] = line[:self._col] + line[self._col + 1:]
        elif self._row < len(self._lines) - 1:
            self._lines[self._row] = line + self._lines.pop(self._row + 1)

    def render(self, bounds: Rect) -> list[str]:
        theme = self.theme
        height = self.max_height or bounds.height or len(self._lines)
        if self._row < self._scroll:
            self._scroll = self._row
        elif self._row >= self._scroll + height:
            self._scroll = self._row - height + 1

        if self.value == "" and self.placeholder:
            return [theme.style("prompt", self.prompt) + theme.style("placeholder", self.placeholder)]

        gutter = len(str(len(self._lines)))
        out = []
        for row in range(self._scroll, min(len(self._lines), self._scroll + height)):
            line = self._lines[row]
            if self.focused and row == self._row:
                under = line[self._col:self._col + 1] or " "
                line = line[:self._col] + theme.style("cursor", under) + line[self._col + 1:]
            prefix = theme.style("prompt", self.prompt)
            if self.show_line_numbers:
                prefix += theme.style("dim", f"{row + 1:>{gutter}} ")
            text = prefix + line
            out.append(truncate(text, bounds.width) if bounds.width > 0 else text)
        return out
