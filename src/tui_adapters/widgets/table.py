"""Tabular data widget with a row cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from tui_adapters.core.commands import Command
from tui_adapters.core.config import DEFAULT_THEME, Theme
from tui_adapters.core.input import Key, KeyEvent
from tui_adapters.core.ansi_text import truncate_and_pad, truncate
from tui_adapters.widgets.base import BaseWidget, Rect


@dataclass(frozen=True)
class Column:
    """A table column: heading, data key and display width."""
    title: str
    key: str = ""
    width: int = 10

    @property
    def field(self) -> str:
        return self.key or self.title


class Table(BaseWidget):
    """
    Table of rows, each row a sequence of cell strings.

    Keyboard shortcuts:
        ↑/k         Previous row
        ↓/j         Next row
        PgUp/PgDn   Page up/down
        Ctrl+U/D    Half page up/down
        Home/g      First row
        End/G       Last row
    """

    def __init__(
        self,
        columns: Sequence[Column] = (),
        rows: Sequence[Sequence[str]] = (),
        height: int = 10,
        show_header: bool = True,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__()
        self.columns = list(columns)
        self.height = height
        self.show_header = show_header
        self.theme = theme
        self._rows: list[list[str]] = [list(r) for r in rows]
        self._cursor = 0
        self._scroll_offset = 0

    @property
    def rows(self) -> list[list[str]]:
        return [list(r) for r in self._rows]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def selected_row(self) -> Optional[list[str]]:
        if self._rows and 0 <= self._cursor < len(self._rows):
            return list(self._rows[self._cursor])
        return None

    def set_rows(self, rows: Sequence[Sequence[str]]) -> None:
        self._rows = [list(r) for r in rows]
        self.set_cursor(self._cursor)

    def set_cursor(self, index: int) -> None:
        if not self._rows:
            self._cursor = 0
            return
        self._cursor = max(0, min(len(self._rows) - 1, index))
        visible = max(1, self.height)
        if self._cursor < self._scroll_offset:
            self._scroll_offset = self._cursor
        elif self._cursor >= self._scroll_offset + visible:
            self._scroll_offset = self._cursor - visible + 1

    def update(self, message: Any) -> Optional[Command]:
        if not self.focused or not isinstance(message, KeyEvent) or not self._rows:
            return None
        event = message
        page = max(1, self.height)

        if event.key == Key.UP or event.char == 'k':
            self.set_cursor(self._cursor - 1)
        elif event.key == Key.DOWN or event.char == 'j':
            self.set_cursor(self._cursor + 1)
        elif event.key == Key.PAGE_UP or event.char == 'b':
            self.set_cursor(self._cursor - page)
        elif event.key == Key.PAGE_DOWN or event.char == 'f':
            self.set_cursor(self._cursor + page)
        elif event.ctrl and event.char == 'u':
            self.set_cursor(self._cursor - page // 2)
        elif event.ctrl and event.char == 'd':
            self.set_cursor(self._cursor + page // 2)
        elif event.key == Key.HOME or event.char == 'g':
            self.set_cursor(0)
        elif event.key == Key.END or event.char == 'G':
            self.set_cursor(len(self._rows) - 1)
        return None

    def render(self, bounds: Rect) -> list[str]:
        theme = self.theme
        lines: list[str] = []
        if self.show_header and self.columns:
            header = " ".join(truncate_and_pad(c.title, c.width) for c in self.columns)
            lines.append(theme.style("title", header))

        end = min(self._scroll_offset + max(1, self.height), len(self._rows))
        for i in range(self._scroll_offset, end):
            row = self._rows[i]
            cells = [
                truncate_and_pad(row[j] if j < len(row) else "", col.width)
                for j, col in enumerate(self.columns)
            ]
            line = " ".join(cells)
            if i == self._cursor and self.focused:
                line = theme.style("selected", line)
            elif i == self._cursor:
                line = theme.style("dim", line)
            lines.append(truncate(line, bounds.width) if bounds.width > 0 else line)
        return lines
