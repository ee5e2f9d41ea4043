"""Animated activity spinner."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Optional

from tui_adapters.core.commands import Command
from tui_adapters.core.messages import TickMessage
from tui_adapters.widgets.base import BaseWidget, Rect


@dataclass(frozen=True)
class SpinnerStyle:
    frames: tuple[str, ...]
    interval: float  # seconds between frames


SPINNER_STYLES: dict[str, SpinnerStyle] = {
    "line": SpinnerStyle(("|", "/", "-", "\\"), 0.1),
    "dot": SpinnerStyle(("⣾ ", "⣽ ", "⣻ ", "⢿ ", "⡿ ", "⣟ ", "⣯ ", "⣷ "), 0.1),
    "minidot": SpinnerStyle(("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"), 1 / 12),
    "jump": SpinnerStyle(("⢄", "⢂", "⢁", "⡁", "⡈", "⡐", "⡠"), 0.1),
    "pulse": SpinnerStyle(("█", "▓", "▒", "░"), 1 / 8),
    "points": SpinnerStyle(("∙∙∙", "●∙∙", "∙●∙", "∙∙●"), 1 / 7),
    "globe": SpinnerStyle(("🌍", "🌎", "🌏"), 0.25),
    "moon": SpinnerStyle(("🌑", "🌒", "🌓", "🌔", "🌕", "🌖", "🌗", "🌘"), 1 / 8),
    "monkey": SpinnerStyle(("🙈", "🙉", "🙊"), 1 / 3),
}

DEFAULT_STYLE = "dot"

_ids = itertools.count(1)


class Spinner(BaseWidget):
    """
    Frame-cycling spinner driven by :class:`TickMessage`.

    ``tick()`` returns a command producing the next tick. The host decides
    when to deliver it (normally after ``style.interval`` seconds). Ticks
    carry the spinner's id and a tag so stale or foreign ticks are dropped.
    """

    def __init__(self, style: str = DEFAULT_STYLE, frames: Optional[tuple[str, ...]] = None) -> None:
        super().__init__()
        base = SPINNER_STYLES.get(style, SPINNER_STYLES[DEFAULT_STYLE])
        self.style = SpinnerStyle(tuple(frames), base.interval) if frames else base
        self.id = next(_ids)
        self.running = True
        self._frame = 0
        self._tag = 0

    @property
    def frame(self) -> int:
        return self._frame

    def tick(self) -> Command:
        message = TickMessage(widget_id=self.id, tag=self._tag)

        def _tick() -> TickMessage:
            return message

        return _tick

    def update(self, message: Any) -> Optional[Command]:
        if not isinstance(message, TickMessage) or not self.running:
            return None
        if message.widget_id != self.id or message.tag != self._tag:
            return None
        self._frame = (self._frame + 1) % len(self.style.frames)
        self._tag += 1
        return self.tick()

    def accepts(self, message: Any) -> bool:
        """True if ``message`` is the tick this spinner is waiting for."""
        return (
            self.running
            and isinstance(message, TickMessage)
            and message.widget_id == self.id
            and message.tag == self._tag
        )

    def render(self, bounds: Rect) -> list[str]:
        return [self.style.frames[self._frame]]
