"""Single-line text input component."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.components.base import ComponentProps, FocusableComponent, focus_payload
from tui_adapters.core.commands import Command
from tui_adapters.core.config import (
    DEFAULT_THEME,
    ConfigurationError,
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
from tui_adapters.widgets.textinput import EchoMode, TextInput


@dataclass
class InputProps(ComponentProps):
    placeholder: str = ""
    value: Optional[str] = None
    prompt: str = "> "
    char_limit: int = 0
    echo_mode: EchoMode = EchoMode.NORMAL
    disabled: bool = False

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> InputProps:
        echo = coerce_str(props, "echoMode", "normal").lower()
        try:
            echo_mode = EchoMode(echo)
        except ValueError:
            raise ConfigurationError(f"Property 'echoMode' must be one of normal, password, none; got {echo!r}") from None
        return cls(
            **cls._common(props),
            placeholder=coerce_str(props, "placeholder"),
            value=coerce_str(props, "value") if "value" in props else None,
            prompt=coerce_str(props, "prompt", "> "),
            char_limit=coerce_int(props, "charLimit", 0, minimum=0),
            echo_mode=echo_mode,
            disabled=coerce_bool(props, "disabled"),
        )


class InputComponent(FocusableComponent):
    """Text input. Enter submits the value and clears the field."""

    kind: ClassVar[str] = "input"
    Props = InputProps

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
        self._input = TextInput(theme=theme)
        self.apply_config(props or {})

    def configure(self, props: InputProps) -> None:
        self._input.placeholder = props.placeholder
        self._input.prompt = props.prompt
        self._input.char_limit = props.char_limit
        self._input.width = props.width
        self._input.echo_mode = props.echo_mode
        if props.value is not None:
            self._input.set_value(props.value)
        if props.disabled:
            self._input.blur()

    @property
    def value(self) -> str:
        return self._input.value

    def set_value(self, value: str) -> None:
        self._input.set_value(value)

    @property
    def focused(self) -> bool:
        return self._input.focused

    def set_focus(self, focused: bool) -> None:
        if focused and not self.props.disabled:
            self._input.focus()
        else:
            self._input.blur()

    def handle_enter(self, event: KeyEvent) -> KeyOutcome:
        """Submit a non-empty value; an empty one is swallowed."""
        value = self._input.value
        if value == "":
            return None, BubbleSignal.HANDLED, True
        self._input.reset()
        return publish_event(self.id, EVENT_INPUT_ENTER_PRESSED, {"value": value}), BubbleSignal.HANDLED, True

    def delegate_to_widget(self, message: Any) -> Optional[Command]:
        return self._input.update(message)

    def watched_fields(self) -> list[WatchedField]:
        return [
            WatchedField("value", lambda: self._input.value, EVENT_INPUT_VALUE_CHANGED),
            WatchedField("focused", lambda: self._input.focused, EVENT_INPUT_FOCUS_CHANGED, focus_payload),
        ]

    def binding_context(self) -> dict[str, Any]:
        return {"value": self._input.value}

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        return {self.id: self._input.value}, True

    def render(self, bounds: Rect) -> list[str]:
        return self._input.render(bounds)
