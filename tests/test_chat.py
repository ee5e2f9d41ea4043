"""Tests for the chat component."""

from typing import Any

import pytest

from tui_adapters.core.config import ConfigurationError
from tui_adapters.core.dispatch import BubbleSignal
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.messages import ActionMessage, TargetedMessage


def _type(component: Any, text: str) -> None:
    for ch in text:
        component.update_message(KeyEvent.parse("space" if ch == " " else ch))


class TestChatComponent:
    """Tests for ChatComponent."""

    def test_send_appends_and_publishes(self, make_component: Any, events: Any) -> None:
        component = make_component("chat", component_id="chat")
        _type(component, "hi there")
        _, cmd, signal = component.update_message(KeyEvent.parse("enter"))
        assert signal is BubbleSignal.HANDLED
        assert [(e.name, e.payload) for e in events(cmd)] == [
            ("CHAT_MESSAGE_SENT", {"role": "user", "content": "hi there"}),
        ]
        assert component.input_value == ""
        assert [(m.role, m.content) for m in component.messages] == [("user", "hi there")]

    def test_send_empty_is_swallowed(self, make_component: Any) -> None:
        component = make_component("chat")
        _, cmd, signal = component.update_message(KeyEvent.parse("enter"))
        assert cmd is None
        assert signal is BubbleSignal.HANDLED
        assert component.messages == []

    def test_shift_and_alt_enter_insert_newline(self, make_component: Any, events: Any) -> None:
        component = make_component("chat")
        _type(component, "a")
        _, cmd, _ = component.update_message(KeyEvent.parse("shift+enter"))
        assert [e.name for e in events(cmd)] == ["INPUT_VALUE_CHANGED"]
        component.update_message(KeyEvent.parse("alt+enter"))
        assert component.input_value == "a\n\n"
        assert component.messages == []

    def test_received_message_via_action(self, make_component: Any) -> None:
        component = make_component("chat", component_id="chat", focused=False)
        action = ActionMessage("chat", "CHAT_MESSAGE_RECEIVED", {"role": "assistant", "content": "hello"})
        _, _, signal = component.update_message(TargetedMessage("chat", action))
        assert signal is BubbleSignal.HANDLED
        assert [(m.role, m.content) for m in component.messages] == [("assistant", "hello")]
        assert "Assistant: hello" in component.view()

    def test_initial_messages_and_state(self, make_component: Any) -> None:
        component = make_component("chat", {
            "messages": [{"role": "user", "content": "q"}, {"role": "assistant", "content": "a"}],
        }, component_id="c")
        changes, has_changes = component.get_state_changes()
        assert has_changes is True
        assert [m["content"] for m in changes["c_messages"]] == ["q", "a"]
        assert changes["c_input"] == ""

    def test_invalid_message_rejected(self, make_component: Any) -> None:
        with pytest.raises(ConfigurationError):
            make_component("chat", {"messages": [{"role": "user"}]})

    def test_markdown_history(self, make_component: Any) -> None:
        component = make_component("chat", {
            "enableMarkdown": True,
            "messages": [{"role": "assistant", "content": "**bold** text"}],
        }, focused=False)
        view = component.view()
        assert "bold" in view
        assert "**" not in view
