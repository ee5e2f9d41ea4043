"""Chat component: scrollable message history plus a multi-line input."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.components.base import ComponentProps, FocusableComponent, focus_payload
from tui_adapters.components.markdown import render_markdown
from tui_adapters.core.commands import Command, batch
from tui_adapters.core.config import (
    DEFAULT_THEME,
    ConfigurationError,
    Theme,
    coerce_bool,
    coerce_int,
    coerce_list,
    coerce_str,
)
from tui_adapters.core.dispatch import BubbleSignal, KeyOutcome
from tui_adapters.core.events import (
    EVENT_CHAT_MESSAGE_RECEIVED,
    EVENT_CHAT_MESSAGE_SENT,
    EVENT_INPUT_FOCUS_CHANGED,
    EVENT_INPUT_VALUE_CHANGED,
    publish_event,
)
from tui_adapters.core.input import Key, KeyEvent
from tui_adapters.core.messages import ActionMessage
from tui_adapters.core.state import WatchedField
from tui_adapters.widgets.base import Rect
from tui_adapters.widgets.textarea import TextArea
from tui_adapters.widgets.viewport import Viewport


@dataclass
class ChatMessage:
    role: str
    content: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> ChatMessage:
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Chat message must be an object, got {type(data).__name__}")
        role = data.get("role")
        content = data.get("content")
        if not isinstance(role, str) or not isinstance(content, str):
            raise ConfigurationError("Chat message requires string 'role' and 'content'")
        return cls(role, content)


@dataclass
class ChatProps(ComponentProps):
    messages: list[ChatMessage] = field(default_factory=list)
    input_placeholder: str = "Type a message..."
    show_input: bool = True
    enable_markdown: bool = False
    input_height: int = 3

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> ChatProps:
        return cls(
            **cls._common(props),
            messages=[ChatMessage.from_dict(m) for m in coerce_list(props, "messages")],
            input_placeholder=coerce_str(props, "inputPlaceholder", "Type a message..."),
            show_input=coerce_bool(props, "showInput", True),
            enable_markdown=coerce_bool(props, "enableMarkdown"),
            input_height=coerce_int(props, "inputHeight", 3, minimum=1),
        )


class ChatComponent(FocusableComponent):
    """
    Chat transcript with an input box.

    Enter sends the input as a user message; Shift+Enter and Alt+Enter
    insert a newline. PgUp/PgDn scroll the history. Messages from elsewhere
    arrive as ``ActionMessage(action="CHAT_MESSAGE_RECEIVED")``.
    """

    kind: ClassVar[str] = "chat"
    Props = ChatProps

    SPECIAL_KEYS: ClassVar[dict[str, str]] = {
        **FocusableComponent.SPECIAL_KEYS,
        "enter": "handle_send",
        "shift+enter": "handle_newline",
        "alt+enter": "handle_newline",
    }

    SUBSCRIBED_MESSAGE_TYPES: ClassVar[tuple[str, ...]] = (
        "TargetedMessage",
        "KeyEvent",
        "FocusMessage",
        "ActionMessage",
    )

    def __init__(
        self,
        component_id: str,
        props: Optional[Mapping[str, Any]] = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__(component_id, theme)
        self._messages: list[ChatMessage] = []
        self._input = TextArea(theme=theme)
        self._history = Viewport()
        self.apply_config(props or {})

    def configure(self, props: ChatProps) -> None:
        self._input.placeholder = props.input_placeholder
        self._input.max_height = props.input_height
        self._history.width = props.width or 80
        reserved = props.input_height + 1 if props.show_input else 0
        self._history.height = max(1, (props.height or 20) - reserved)
        self._messages = list(props.messages)
        self._refresh_history()

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def input_value(self) -> str:
        return self._input.value

    @property
    def focused(self) -> bool:
        return self._input.focused

    def set_focus(self, focused: bool) -> None:
        if focused:
            self._input.focus()
        else:
            self._input.blur()

    def add_message(self, role: str, content: str) -> None:
        self._messages.append(ChatMessage(role, content))
        self._refresh_history()

    def _format_message(self, message: ChatMessage) -> str:
        theme = self.theme
        if message.role == "user":
            prefix = theme.style("user_prefix", "You: ")
        elif message.role == "assistant":
            prefix = theme.style("assistant_prefix", "Assistant: ")
        else:
            prefix = theme.style("user_prefix", f"{message.role}: ")
        content = message.content
        if self.props.enable_markdown:
            content = render_markdown(content, self._history.width)
        return prefix + content

    def _refresh_history(self) -> None:
        text = "\n\n".join(self._format_message(m) for m in self._messages)
        self._history.set_content(text)
        self._history.goto_bottom()

    def handle_send(self, event: KeyEvent) -> KeyOutcome:
        content = self._input.value
        if content == "":
            return None, BubbleSignal.HANDLED, True
        self._input.reset()
        self.add_message("user", content)
        cmd = publish_event(self.id, EVENT_CHAT_MESSAGE_SENT, {"role": "user", "content": content})
        return cmd, BubbleSignal.HANDLED, True

    def handle_newline(self, event: KeyEvent) -> KeyOutcome:
        before = self.capture_state()
        self._input.insert_newline()
        return batch(*self.notify_changes(before)), BubbleSignal.HANDLED, True

    def delegate_to_widget(self, message: Any) -> Optional[Command]:
        if isinstance(message, ActionMessage):
            if message.action == EVENT_CHAT_MESSAGE_RECEIVED and isinstance(message.data, Mapping):
                role, content = message.data.get("role"), message.data.get("content")
                if isinstance(role, str) and isinstance(content, str):
                    self.add_message(role, content)
            return None
        if isinstance(message, KeyEvent):
            if message.key == Key.PAGE_UP:
                self._history.scroll_by(-self._history.height)
                return None
            if message.key == Key.PAGE_DOWN:
                self._history.scroll_by(self._history.height)
                return None
            return self._input.update(message)
        return self._history.update(message)

    def watched_fields(self) -> list[WatchedField]:
        return [
            WatchedField("input_value", lambda: self._input.value, EVENT_INPUT_VALUE_CHANGED),
            WatchedField("focused", lambda: self._input.focused, EVENT_INPUT_FOCUS_CHANGED, focus_payload),
        ]

    def binding_context(self) -> dict[str, Any]:
        return {"value": self._input.value}

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        changes = {
            f"{self.id}_messages": [m.to_dict() for m in self._messages],
            f"{self.id}_input": self._input.value,
        }
        return changes, bool(self._messages) or self._input.value != ""

    def render(self, bounds: Rect) -> list[str]:
        width = bounds.width or self._history.width
        lines = self._history.render(Rect(0, 0, width, self._history.height))
        if self.props.show_input:
            lines.append(self.theme.style("dim", "─" * width))
            lines.extend(self._input.render(Rect(0, 0, width, self.props.input_height)))
        return lines
