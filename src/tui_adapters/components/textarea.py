"""Multi-line text area component."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.components.base import ComponentProps, FocusableComponent, focus_payload
from tui_adapters.core.commands import Command
from tui_adapters.core.config import (
    DEFAULT_THEME,
    Theme,
    coerce_bool,
    coerce_int,
    coerce_str,
)
from tui_adapters.core.dispatch import BubbleSignal, KeyOutcome
from tui_adapters.core.events import (
    EVENT_INPUT_ENTER_PRESSED,
    EVENT_INPUT_FOCUS_CHANGED,
    EVENT_INPUT_VALUE_CHANGED,
    publish_event,
)
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.state import WatchedField
from tui_adapters.widgets.base import Rect
from tui_adapters.widgets.textarea import TextArea


@dataclass
class TextareaProps(ComponentProps):
    placeholder: str = ""
    value: Optional[str] = None
    prompt: str = ""
    max_height: int = 0
    char_limit: int = 0
    show_line_numbers: bool = False
    enter_submits: bool = False
    disabled: bool = False

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> TextareaProps:
        return cls(
            **cls._common(props),
            placeholder=coerce_str(props, "placeholder"),
            value=coerce_str(props, "value") if "value" in props else None,
            prompt=coerce_str(props, "prompt"),
            max_height=coerce_int(props, "maxHeight", 0, minimum=0),
            char_limit=coerce_int(props, "charLimit", 0, minimum=0),
            show_line_numbers=coerce_bool(props, "showLineNumbers"),
            enter_submits=coerce_bool(props, "enterSubmits"),
            disabled=coerce_bool(props, "disabled"),
        )


class TextareaComponent(FocusableComponent):
    """Multi-line editor.

    Enter inserts a newline unless ``enterSubmits`` is set, in which case it
    publishes and clears a non-empty value, swallows Enter on an empty one,
    and Shift+Enter inserts the newline instead.
    """

    kind: ClassVar[str] = "textarea"
    Props = TextareaProps

    SPECIAL_KEYS: ClassVar[dict[str, str]] = {
        **FocusableComponent.SPECIAL_KEYS,
        "enter": "handle_enter",
    }

    def __init__(
        self,
        component_id: str,
        props: Optional[Mapping[str, Any]] = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__(component_id, theme)
        self._area = TextArea(theme=theme)
        self.apply_config(props or {})

    def configure(self, props: TextareaProps) -> None:
        self._area.placeholder = props.placeholder
        self._area.prompt = props.prompt
        self._area.max_height = props.max_height or props.height
        self._area.char_limit = props.char_limit
        self._area.show_line_numbers = props.show_line_numbers
        if props.value is not None:
            self._area.set_value(props.value)
        if props.disabled:
            self._area.blur()

    @property
    def value(self) -> str:
        return self._area.value

    def set_value(self, value: str) -> None:
        self._area.set_value(value)

    @property
    def focused(self) -> bool:
        return self._area.focused

    def set_focus(self, focused: bool) -> None:
        if focused and not self.props.disabled:
            self._area.focus()
        else:
            self._area.blur()

    def handle_enter(self, event: KeyEvent) -> KeyOutcome:
        if not self.props.enter_submits:
            return None, BubbleSignal.IGNORED, False
        value = self._area.value
        if value == "":
            return None, BubbleSignal.HANDLED, True
        self._area.reset()
        return publish_event(self.id, EVENT_INPUT_ENTER_PRESSED, {"value": value}), BubbleSignal.HANDLED, True

    def delegate_to_widget(self, message: Any) -> Optional[Command]:
        return self._area.update(message)

    def watched_fields(self) -> list[WatchedField]:
        return [
            WatchedField("value", lambda: self._area.value, EVENT_INPUT_VALUE_CHANGED),
            WatchedField("focused", lambda: self._area.focused, EVENT_INPUT_FOCUS_CHANGED, focus_payload),
        ]

    def binding_context(self) -> dict[str, Any]:
        return {"value": self._area.value}

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        return {self.id: self._area.value}, True

    def render(self, bounds: Rect) -> list[str]:
        return self._area.render(bounds)
