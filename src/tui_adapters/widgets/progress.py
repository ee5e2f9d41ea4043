"""Horizontal progress bar."""

from __future__ import annotations

from typing import Any, Optional

from tui_adapters.core.commands import Command
from tui_adapters.core.config import DEFAULT_THEME, Theme
from tui_adapters.widgets.base import BaseWidget, Rect


class ProgressBar(BaseWidget):
    """Progress bar showing ``percent`` (0-100)."""

    def __init__(
        self,
        percent: float = 0.0,
        width: int = 40,
        show_percentage: bool = False,
        full_char: str = "█",
        empty_char: str = "░",
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__()
        self.width = width
        self.show_percentage = show_percentage
        self.full_char = full_char
        self.empty_char = empty_char
        self.theme = theme
        self._percent = 0.0
        self.set_percent(percent)

    @property
    def percent(self) -> float:
        return self._percent

    def set_percent(self, percent: float) -> None:
        """Set progress, clamped to 0-100."""
        self._percent = max(0.0, min(100.0, float(percent)))

    def update(self, message: Any) -> Optional[Command]:
        return None

    def render(self, bounds: Rect) -> list[str]:
        width = self.width or bounds.width
        suffix = f" {self._percent:3.0f}%" if self.show_percentage else ""
        bar_width = max(0, width - len(suffix))
        filled = round(bar_width * self._percent / 100)
        bar = (
            self.theme.style("progress_full", self.full_char * filled)
            + self.theme.style("progress_empty", self.empty_char * (bar_width - filled))
        )
        return [bar + suffix]
