"""Single-line text entry widget."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from tui_adapters.core.commands import Command
from tui_adapters.core.config import DEFAULT_THEME, Theme
from tui_adapters.core.input import Key, KeyEvent
from tui_adapters.core.ansi_text import truncate
from tui_adapters.widgets.base import BaseWidget, Rect


class EchoMode(Enum):
    NORMAL = "normal"
    PASSWORD = "password"
    NONE = "none"


class TextInput(BaseWidget):
    """
    Single-line editor with a cursor.

    Keyboard shortcuts:
        ←/→             Move cursor
        Home/Ctrl+A     Start of line
        End/Ctrl+E      End of line
        Backspace/Del   Delete before/at cursor
        Ctrl+U          Delete to start of line
        Ctrl+K          Delete to end of line
        Ctrl+W          Delete previous word

    Enter is not handled here; the owning component decides what it means.
    """

    def __init__(
        self,
        value: str = "",
        placeholder: str = "",
        prompt: str = "> ",
        char_limit: int = 0,
        width: int = 0,
        echo_mode: EchoMode = EchoMode.NORMAL,
        echo_char: str = "*",
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__()
        self.placeholder = placeholder
        self.prompt = prompt
        self.char_limit = char_limit
        self.width = width
        self.echo_mode = echo_mode
        self.echo_char = echo_char
        self.theme = theme
        self._value = ""
        self._cursor = 0
        self.set_value(value)

    @property
    def value(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        return self._cursor

    def set_value(self, value: str) -> None:
        """Replace the text, honouring ``char_limit``; cursor moves to the end."""
        if self.char_limit > 0:
            value = value[:self.char_limit]
        self._value = value
        self._cursor = len(value)

    def reset(self) -> None:
        self.set_value("")

    def set_cursor(self, pos: int) -> None:
        self._cursor = max(0, min(len(self._value), pos))

    def insert(self, text: str) -> None:
        """Insert text at the cursor, truncated to the remaining room."""
        if self.char_limit > 0:
            room = self.char_limit - len(self._value)
            if room <= 0:
                return
            text = text[:room]
        self._value = self._value[:self._cursor] + text + self._value[self._cursor:]
        self._cursor += len(text)

    def update(self, message: Any) -> Optional[Command]:
        if not self.focused or not isinstance(message, KeyEvent):
            return None
        event = message

        if event.ctrl and event.char:
            self._handle_ctrl(event.char)
        elif event.key == Key.LEFT:
            self.set_cursor(self._cursor - 1)
        elif event.key == Key.RIGHT:
            self.set_cursor(self._cursor + 1)
        elif event.key == Key.HOME:
            self._cursor = 0
        elif event.key == Key.END:
            self._cursor = len(self._value)
        elif event.key == Key.BACKSPACE:
            if event.alt:
                self._delete_word_backward()
            elif self._cursor > 0:
                self._value = self._value[:self._cursor - 1] + self._value[self._cursor:]
                self._cursor -= 1
        elif event.key == Key.DELETE:
            self._value = self._value[:self._cursor] + self._value[self._cursor + 1:]
        elif event.is_char and not event.alt:
            self.insert(event.char)
        return None

    def _handle_ctrl(self, char: str) -> None:
        if char == "a":
            self._cursor = 0
        elif char == "e":
            self._cursor = len(self._value)
        elif char == "b":
            self.set_cursor(self._cursor - 1)
        elif char == "f":
            self.set_cursor(self._cursor + 1)
        elif char == "u":
            self._value = self._value[self._cursor:]
            self._cursor = 0
        elif char == "k":
            self._value = self._value[:self._cursor]
        elif char == "w":
            self._delete_word_backward()
        elif char == "d":
            self._value = self._value[:self._cursor] + self._value[self._cursor + 1:]

    def _delete_word_backward(self) -> None:
        pos = self._cursor
        while pos > 0 and self._value[pos - 1] == " ":
            pos -= 1
        while pos > 0 and self._value[pos - 1] != " ":
            pos -= 1
        self._value = self._value[:pos] + self._value[self._cursor:]
        self._cursor = pos

    def _display_text(self) -> str:
        if self.echo_mode == EchoMode.PASSWORD:
            return self.echo_char * len(self._value)
        if self.echo_mode == EchoMode.NONE:
            return ""
        return self._value

    def render(self, bounds: Rect) -> list[str]:
        theme = self.theme
        prompt = theme.style("prompt", self.prompt)
        if not self._value and self.placeholder:
            body = theme.style("placeholder", self.placeholder)
            if self.focused:
                body = theme.style("cursor", self.placeholder[:1]) + theme.style("placeholder", self.placeholder[1:])
        else:
            text = self._display_text()
            if self.focused:
                cursor = min(self._cursor, len(text))
                under = text[cursor:cursor + 1] or " "
                body = text[:cursor] + theme.style("cursor", under) + text[cursor + 1:]
            else:
                body = text
        width = self.width or bounds.width
        return [truncate(prompt + body, width) if width > 0 else prompt + body]
