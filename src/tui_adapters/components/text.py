"""Static text component."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.components.base import BaseComponent, ComponentProps
from tui_adapters.core.ansi_text import truncate
from tui_adapters.core.commands import Command
from tui_adapters.core.config import DEFAULT_THEME, Theme, coerce_bool, coerce_str
from tui_adapters.core.dispatch import BubbleSignal
from tui_adapters.core.messages import StateUpdateMessage
from tui_adapters.widgets.base import Rect


@dataclass
class TextProps(ComponentProps):
    content: str = ""
    bold: bool = False

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> TextProps:
        return cls(
            **cls._common(props),
            content=coerce_str(props, "content", coerce_str(props, "text")),
            bold=coerce_bool(props, "bold"),
        )


class TextComponent(BaseComponent):
    """Decorative text. Never consumes anything, so every message bubbles on."""

    kind: ClassVar[str] = "text"
    Props = TextProps
    PASSTHROUGH_SIGNAL: ClassVar[BubbleSignal] = BubbleSignal.IGNORED

    def __init__(
        self,
        component_id: str,
        props: Optional[Mapping[str, Any]] = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__(component_id, theme)
        self._content = ""
        self.apply_config(props or {})

    def configure(self, props: TextProps) -> None:
        self._content = props.content

    @property
    def content(self) -> str:
        return self._content

    def delegate(self, message: Any) -> Optional[Command]:
        if isinstance(message, StateUpdateMessage) and message.key == "content" and isinstance(message.value, str):
            self._content = message.value
        return None

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        return {}, False

    def render(self, bounds: Rect) -> list[str]:
        lines = self._content.split("\n")
        if self.props.bold:
            lines = [self.theme.style("title", line) for line in lines]
        if bounds.width > 0:
            lines = [truncate(line, bounds.width) for line in lines]
        if bounds.height > 0:
            lines = lines[:bounds.height]
        return lines
