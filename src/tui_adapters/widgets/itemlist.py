"""Scrollable selectable list widget."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from tui_adapters.core.commands import Command
from tui_adapters.core.config import DEFAULT_THEME, Theme
from tui_adapters.core.input import Key, KeyEvent
from tui_adapters.core.ansi_text import truncate
from tui_adapters.widgets.base import BaseWidget, Rect


@dataclass
class ListItem:
    """Represents one entry in the list."""
    title: str
    description: str = ""
    value: Any = None
    disabled: bool = False
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"title": self.title}
        if self.description:
            result["description"] = self.description
        if self.value is not None:
            result["value"] = self.value
        if self.disabled:
            result["disabled"] = True
        result.update(self.data)
        return result


class ItemList(BaseWidget):
    """
    Scrollable list with a single selection cursor.

    Keyboard shortcuts:
        ↑/k         Move selection up
        ↓/j         Move selection down
        PgUp/PgDn   Page up/down
        Home/g      Jump to first
        End/G       Jump to last

    Items only need a ``title`` attribute; ``label`` (display override),
    ``description`` and ``disabled`` are used when present.
    """

    def __init__(
        self,
        items: Sequence[Any] = (),
        title: str = "",
        height: int = 10,
        show_description: bool = True,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__()
        self.title = title
        self.height = height
        self.show_description = show_description
        self.theme = theme
        self._items: list[Any] = list(items)
        self._index = 0
        self._scroll_offset = 0

    @property
    def items(self) -> list[Any]:
        return list(self._items)

    @property
    def index(self) -> int:
        return self._index

    @property
    def selected_item(self) -> Optional[Any]:
        if self._items and 0 <= self._index < len(self._items):
            return self._items[self._index]
        return None

    def set_items(self, items: Sequence[Any]) -> None:
        self._items = list(items)
        self._index = min(self._index, max(0, len(self._items) - 1))
        self._scroll_offset = 0

    def select(self, index: int) -> None:
        """Move the cursor to ``index``, clamped to the list."""
        if not self._items:
            self._index = 0
            return
        self._index = max(0, min(len(self._items) - 1, index))
        self._adjust_scroll()

    def update(self, message: Any) -> Optional[Command]:
        if not self.focused or not isinstance(message, KeyEvent) or not self._items:
            return None
        event = message

        if event.key == Key.UP or event.char == 'k':
            self.select(self._index - 1)
        elif event.key == Key.DOWN or event.char == 'j':
            self.select(self._index + 1)
        elif event.key == Key.PAGE_UP:
            self.select(self._index - self._page_size())
        elif event.key == Key.PAGE_DOWN:
            self.select(self._index + self._page_size())
        elif event.key == Key.HOME or event.char == 'g':
            self.select(0)
        elif event.key == Key.END or event.char == 'G':
            self.select(len(self._items) - 1)
        return None

    def _page_size(self) -> int:
        return max(1, self.height)

    def _adjust_scroll(self) -> None:
        """Ensure selected item is visible."""
        visible = self._page_size()
        if self._index < self._scroll_offset:
            self._scroll_offset = self._index
        elif self._index >= self._scroll_offset + visible:
            self._scroll_offset = self._index - visible + 1

    def render(self, bounds: Rect) -> list[str]:
        theme = self.theme
        lines: list[str] = []
        if self.title:
            lines.append(theme.style("title", self.title))

        if not self._items:
            lines.append(theme.style("dim", "No items."))
            return lines

        end = min(self._scroll_offset + self._page_size(), len(self._items))
        for i in range(self._scroll_offset, end):
            item = self._items[i]
            name = getattr(item, "label", None) or getattr(item, "title", str(item))
            description = getattr(item, "description", "") if self.show_description else ""
            if description:
                name = f"{name} {theme.style('dim', description)}"
            if getattr(item, "disabled", False):
                line = "  " + theme.style("disabled", name)
            elif i == self._index:
                marker = "▶ " if self.focused else "› "
                line = theme.style("selected", marker + name)
            else:
                line = "  " + name
            lines.append(truncate(line, bounds.width) if bounds.width > 0 else line)
        return lines
