"""Tests for the input and textarea components."""

from typing import Any

import pytest

from tui_adapters.core.config import ConfigurationError
from tui_adapters.core.dispatch import BubbleSignal
from tui_adapters.core.input import KeyEvent
from tui_adapters.widgets.textinput import EchoMode


class TestInputComponent:
    """Tests for InputComponent."""

    def test_typing_then_enter(self, make_component: Any, events: Any) -> None:
        component = make_component("input", component_id="name")

        _, cmd, signal = component.update_message(KeyEvent.parse("h"))
        assert signal is BubbleSignal.HANDLED
        assert [(e.source_id, e.name, e.payload) for e in events(cmd)] == [
            ("name", "INPUT_VALUE_CHANGED", {"oldValue": "", "newValue": "h"}),
        ]

        _, cmd, signal = component.update_message(KeyEvent.parse("i"))
        assert signal is BubbleSignal.HANDLED
        assert [e.payload for e in events(cmd)] == [{"oldValue": "h", "newValue": "hi"}]

        _, cmd, signal = component.update_message(KeyEvent.parse("enter"))
        assert signal is BubbleSignal.HANDLED
        assert [(e.name, e.payload) for e in events(cmd)] == [("INPUT_ENTER_PRESSED", {"value": "hi"})]
        assert component.value == ""

    def test_enter_on_empty_is_swallowed(self, make_component: Any) -> None:
        component = make_component("input")
        _, cmd, signal = component.update_message(KeyEvent.parse("enter"))
        assert cmd is None
        assert signal is BubbleSignal.HANDLED
        assert component.value == ""

    def test_editing_keys(self, make_component: Any) -> None:
        component = make_component("input", {"value": "hello world"})
        component.update_message(KeyEvent.parse("ctrl+w"))
        assert component.value == "hello "
        component.update_message(KeyEvent.parse("backspace"))
        assert component.value == "hello"
        component.update_message(KeyEvent.parse("home"))
        component.update_message(KeyEvent.parse("delete"))
        assert component.value == "ello"

    def test_char_limit(self, make_component: Any) -> None:
        component = make_component("input", {"charLimit": 2})
        for k in ("a", "b", "c"):
            component.update_message(KeyEvent.parse(k))
        assert component.value == "ab"

    def test_disabled_refuses_focus(self, make_component: Any) -> None:
        component = make_component("input", {"disabled": True})
        assert component.focused is False
        _, cmd, signal = component.update_message(KeyEvent.parse("a"))
        assert signal is BubbleSignal.IGNORED

    def test_password_view(self, make_component: Any) -> None:
        component = make_component("input", {"value": "secret", "echoMode": "password", "prompt": ""}, focused=False)
        assert component.view() == "******"

    def test_invalid_echo_mode(self, make_component: Any) -> None:
        with pytest.raises(ConfigurationError, match="echoMode"):
            make_component("input", {"echoMode": "loud"})

    def test_bad_config_keeps_previous_state(self, make_component: Any) -> None:
        component = make_component("input", {
            "value": "kept",
            "placeholder": "type",
            "bindings": [{"key": "x", "event": "X"}],
        })
        with pytest.raises(ConfigurationError):
            component.apply_config({"placeholder": "new", "bindings": [{"key": "y"}]})
        assert component.props.placeholder == "type"
        assert component.value == "kept"
        assert len(component.binding_table) == 1

    def test_apply_config_replaces_bindings(self, make_component: Any) -> None:
        component = make_component("input", {"bindings": [{"key": "x", "event": "X"}]})
        component.apply_config({"bindings": [{"key": "y", "event": "Y"}]})
        assert component.binding_table.match(KeyEvent.parse("x")) is None
        assert component.binding_table.match(KeyEvent.parse("y")).event == "Y"

    def test_state_changes_and_subscriptions(self, make_component: Any) -> None:
        component = make_component("input", {"value": "v"}, component_id="field")
        assert component.get_state_changes() == ({"field": "v"}, True)
        assert "KeyEvent" in component.subscribed_message_types()
        assert component.props.echo_mode is EchoMode.NORMAL


class TestTextareaComponent:
    """Tests for TextareaComponent."""

    def test_enter_inserts_newline(self, make_component: Any, events: Any) -> None:
        component = make_component("textarea", {"value": "a"})
        _, cmd, signal = component.update_message(KeyEvent.parse("enter"))
        assert signal is BubbleSignal.HANDLED
        assert component.value == "a\n"
        assert [e.name for e in events(cmd)] == ["INPUT_VALUE_CHANGED"]

    def test_enter_submits_when_configured(self, make_component: Any, events: Any) -> None:
        component = make_component("textarea", {"value": "line", "enterSubmits": True})
        _, cmd, signal = component.update_message(KeyEvent.parse("enter"))
        assert signal is BubbleSignal.HANDLED
        assert [(e.name, e.payload) for e in events(cmd)] == [("INPUT_ENTER_PRESSED", {"value": "line"})]
        assert component.value == ""

        component.update_message(KeyEvent.parse("x"))
        component.update_message(KeyEvent.parse("shift+enter"))
        assert component.value == "x\n"

    def test_submit_clears_multiline_value(self, make_component: Any, events: Any) -> None:
        component = make_component("textarea", {"value": "one\ntwo", "enterSubmits": True})
        _, cmd, _ = component.update_message(KeyEvent.parse("enter"))
        assert [e.payload for e in events(cmd)] == [{"value": "one\ntwo"}]
        assert component.value == ""
        assert "one" not in component.view()

    def test_enter_on_empty_value_is_swallowed(self, make_component: Any) -> None:
        component = make_component("textarea", {"enterSubmits": True})
        _, cmd, signal = component.update_message(KeyEvent.parse("enter"))
        assert cmd is None
        assert signal is BubbleSignal.HANDLED
        assert component.value == ""

    def test_backspace_joins_lines(self, make_component: Any) -> None:
        component = make_component("textarea", {"value": "ab\ncd"})
        component.update_message(KeyEvent.parse("home"))
        component.update_message(KeyEvent.parse("backspace"))
        assert component.value == "abcd"

    def test_line_numbers_in_view(self, make_component: Any) -> None:
        component = make_component("textarea", {"value": "one\ntwo", "showLineNumbers": True}, focused=False)
        assert component.view().split("\n") == ["1 one", "2 two"]
