"""Progress bar component."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.components.base import BaseComponent, ComponentProps
from tui_adapters.core.commands import Command
from tui_adapters.core.config import (
    DEFAULT_THEME,
    Theme,
    coerce_bool,
    coerce_float,
    coerce_str,
)
from tui_adapters.core.events import EVENT_PROGRESS_CHANGED
from tui_adapters.core.messages import StateUpdateMessage
from tui_adapters.core.state import WatchedField
from tui_adapters.widgets.base import Rect
from tui_adapters.widgets.progress import ProgressBar


@dataclass
class ProgressProps(ComponentProps):
    percent: float = 0.0
    show_percentage: bool = False
    filled_char: str = "█"
    empty_char: str = "░"
    label: str = ""

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> ProgressProps:
        return cls(
            **cls._common(props),
            percent=coerce_float(props, "percent", 0.0),
            show_percentage=coerce_bool(props, "showPercentage"),
            filled_char=coerce_str(props, "filledChar", "█") or "█",
            empty_char=coerce_str(props, "emptyChar", "░") or "░",
            label=coerce_str(props, "label"),
        )


class ProgressComponent(BaseComponent):
    """Progress bar. ``StateUpdateMessage("percent" | "progress", value)`` moves it."""

    kind: ClassVar[str] = "progress"
    Props = ProgressProps

    SUBSCRIBED_MESSAGE_TYPES: ClassVar[tuple[str, ...]] = (
        "TargetedMessage",
        "StateUpdateMessage",
    )

    def __init__(
        self,
        component_id: str,
        props: Optional[Mapping[str, Any]] = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__(component_id, theme)
        self._bar = ProgressBar(theme=theme)
        self.apply_config(props or {})

    def configure(self, props: ProgressProps) -> None:
        self._bar.width = props.width or 40
        self._bar.show_percentage = props.show_percentage
        self._bar.full_char = props.filled_char
        self._bar.empty_char = props.empty_char
        self._bar.set_percent(props.percent)

    @property
    def percent(self) -> float:
        return self._bar.percent

    def set_percent(self, percent: float) -> None:
        self._bar.set_percent(percent)

    def delegate(self, message: Any) -> Optional[Command]:
        if isinstance(message, StateUpdateMessage) and message.key in ("percent", "progress"):
            value = message.value
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                self._bar.set_percent(value)
            return None
        return self._bar.update(message)

    def watched_fields(self) -> list[WatchedField]:
        return [
            WatchedField(
                "percent",
                lambda: self._bar.percent,
                EVENT_PROGRESS_CHANGED,
                lambda old, new: {"oldPercent": old, "newPercent": new},
            ),
        ]

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        return {
            f"{self.id}_percent": self._bar.percent,
            f"{self.id}_value": self.view(),
        }, True

    def render(self, bounds: Rect) -> list[str]:
        lines = self._bar.render(bounds)
        if self.props.label:
            lines.insert(0, self.props.label)
        return lines
