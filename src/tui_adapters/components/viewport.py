"""Scrollable viewport component, optionally rendering markdown."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.components.base import ComponentProps, FocusableComponent, focus_payload
from tui_adapters.components.markdown import render_markdown
from tui_adapters.core.commands import Command
from tui_adapters.core.config import DEFAULT_THEME, Theme, coerce_bool, coerce_str
from tui_adapters.core.events import EVENT_FOCUS_CHANGED, EVENT_VIEWPORT_SCROLLED
from tui_adapters.core.messages import StateUpdateMessage
from tui_adapters.core.state import WatchedField
from tui_adapters.widgets.base import Rect
from tui_adapters.widgets.viewport import Viewport


@dataclass
class ViewportProps(ComponentProps):
    content: str = ""
    enable_markdown: bool = False
    auto_scroll: bool = False

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> ViewportProps:
        return cls(
            **cls._common(props),
            content=coerce_str(props, "content"),
            enable_markdown=coerce_bool(props, "enableMarkdown", coerce_bool(props, "enableGlamour")),
            auto_scroll=coerce_bool(props, "autoScroll"),
        )


class ViewportComponent(FocusableComponent):
    """Read-only scrolling text. ``StateUpdateMessage("content", ...)`` replaces the text."""

    kind: ClassVar[str] = "viewport"
    Props = ViewportProps

    SUBSCRIBED_MESSAGE_TYPES: ClassVar[tuple[str, ...]] = (
        "TargetedMessage",
        "KeyEvent",
        "FocusMessage",
        "StateUpdateMessage",
        "WindowSizeMessage",
    )

    def __init__(
        self,
        component_id: str,
        props: Optional[Mapping[str, Any]] = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__(component_id, theme)
        self._viewport = Viewport()
        self.apply_config(props or {})

    def configure(self, props: ViewportProps) -> None:
        self._viewport.width = props.width or 80
        self._viewport.height = props.height or 10
        self.set_content(props.content)

    def set_content(self, content: str) -> None:
        if self.props.enable_markdown:
            content = render_markdown(content, self._viewport.width)
        self._viewport.set_content(content)
        if self.props.auto_scroll:
            self._viewport.goto_bottom()

    @property
    def offset(self) -> int:
        return self._viewport.y_offset

    @property
    def focused(self) -> bool:
        return self._viewport.focused

    def set_focus(self, focused: bool) -> None:
        if focused:
            self._viewport.focus()
        else:
            self._viewport.blur()

    def delegate_to_widget(self, message: Any) -> Optional[Command]:
        if isinstance(message, StateUpdateMessage):
            if message.key == "content" and isinstance(message.value, str):
                self.set_content(message.value)
            return None
        return self._viewport.update(message)

    def watched_fields(self) -> list[WatchedField]:
        return [
            WatchedField(
                "offset",
                lambda: self._viewport.y_offset,
                EVENT_VIEWPORT_SCROLLED,
                lambda old, new: {"oldOffset": old, "newOffset": new},
            ),
            WatchedField("focused", lambda: self._viewport.focused, EVENT_FOCUS_CHANGED, focus_payload),
        ]

    def binding_context(self) -> dict[str, Any]:
        return {"index": self._viewport.y_offset}

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        return {
            f"{self.id}_offset": self._viewport.y_offset,
            f"{self.id}_at_bottom": self._viewport.at_bottom,
        }, True

    def render(self, bounds: Rect) -> list[str]:
        return self._viewport.render(bounds)
