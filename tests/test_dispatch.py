"""Tests for the dispatch order: targeting, focus gate, bindings, special keys, delegation."""

from typing import Any

import pytest

from tui_adapters.components.registry import create_component
from tui_adapters.components.text import TextComponent
from tui_adapters.core.commands import message_command, run_command
from tui_adapters.core.dispatch import (
    MAX_ENVELOPE_DEPTH,
    BubbleSignal,
    Focusable,
    PassthroughProvider,
    Targetable,
    dispatch,
    has_focus_concept,
    unwrap_targeted,
)
from tui_adapters.core.config import PLAIN_THEME, ConfigurationError
from tui_adapters.core.events import NotificationEvent, publish_event
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.messages import FocusMessage, FocusType, TargetedMessage


class _Counter:
    """Bare component: an id, a delegate and a watched counter. No focus concept."""

    def __init__(self) -> None:
        self.id = "counter"
        self.value = 0
        self.delegated: list[Any] = []

    def capture_state(self) -> dict:
        return {"value": self.value}

    def state_notifications(self, old: dict, new: dict) -> list:
        if old == new:
            return []
        return [publish_event(self.id, "COUNTER_CHANGED", {"old": old["value"], "new": new["value"]})]

    def delegate(self, message: Any) -> Any:
        self.delegated.append(message)
        self.value += 1
        return message_command("widget-message")


class _QuietCounter(_Counter):
    """Counter whose handled messages still bubble."""

    @property
    def passthrough_signal(self) -> BubbleSignal:
        return BubbleSignal.IGNORED


def _wrap(message: Any, *target_ids: str) -> Any:
    for target_id in reversed(target_ids):
        message = TargetedMessage(target_id, message)
    return message


class TestTargeting:
    """Tests for envelope handling."""

    def test_mismatch_is_a_no_op(self) -> None:
        counter = _Counter()
        component, cmd, signal = dispatch(counter, TargetedMessage("someone-else", "ping"))
        assert component is counter
        assert cmd is None
        assert signal is BubbleSignal.IGNORED
        assert counter.delegated == []
        assert counter.value == 0

    def test_match_unwraps(self) -> None:
        counter = _Counter()
        _, _, signal = dispatch(counter, TargetedMessage("counter", "ping"))
        assert signal is BubbleSignal.HANDLED
        assert counter.delegated == ["ping"]

    def test_nested_envelopes_all_must_match(self) -> None:
        assert unwrap_targeted("a", _wrap("x", "a", "a", "a")) == "x"
        assert unwrap_targeted("a", _wrap("x", "a", "b", "a")) is None

    def test_depth_is_bounded(self) -> None:
        assert unwrap_targeted("a", _wrap("x", *["a"] * MAX_ENVELOPE_DEPTH)) == "x"
        assert unwrap_targeted("a", _wrap("x", *["a"] * (MAX_ENVELOPE_DEPTH + 1))) is None

    def test_untargeted_passes_through(self) -> None:
        assert unwrap_targeted("a", "x") == "x"


class TestFocusGate:
    """Tests for the focus gate on key events."""

    def test_unfocused_ignores_keys(self, make_component: Any) -> None:
        component = make_component("input", focused=False)
        _, cmd, signal = component.update_message(KeyEvent.parse("a"))
        assert signal is BubbleSignal.IGNORED
        assert cmd is None
        assert component.value == ""

    def test_unfocused_still_receives_focus_messages(self, make_component: Any, events: Any) -> None:
        component = make_component("input", focused=False)
        _, cmd, signal = component.update_message(FocusMessage(FocusType.GAINED))
        assert signal is BubbleSignal.HANDLED
        assert component.focused is True
        assert [(e.name, e.payload) for e in events(cmd)] == [("INPUT_FOCUS_CHANGED", {"focused": True})]

    def test_components_without_focus_skip_gate(self) -> None:
        counter = _Counter()
        assert has_focus_concept(counter) is False
        _, _, signal = dispatch(counter, KeyEvent.parse("a"))
        assert signal is BubbleSignal.HANDLED
        assert counter.value == 1

    def test_focus_protocol(self, make_component: Any) -> None:
        assert isinstance(make_component("list"), Focusable)
        assert isinstance(make_component("progress"), Targetable)
        assert not isinstance(make_component("progress"), Focusable)


class TestPrecedence:
    """Bindings run before special keys, special keys before delegation."""

    def test_binding_beats_special_key(self, make_component: Any, events: Any) -> None:
        component = make_component("input", {
            "value": "draft",
            "bindings": [{"key": "enter", "event": "CUSTOM_SUBMIT"}],
        })
        _, cmd, signal = component.update_message(KeyEvent.parse("enter"))
        assert signal is BubbleSignal.HANDLED
        assert [(e.name, e.payload) for e in events(cmd)] == [
            ("CUSTOM_SUBMIT", {"key": "enter", "value": "draft"}),
        ]
        assert component.value == "draft"

    def test_binding_beats_delegation(self, make_component: Any, events: Any) -> None:
        component = make_component("input", {"bindings": [{"key": "x", "event": "X_PRESSED"}]})
        _, cmd, _ = component.update_message(KeyEvent.parse("x"))
        assert [e.name for e in events(cmd)] == ["X_PRESSED"]
        assert component.value == ""

    def test_use_default_falls_through(self, make_component: Any, events: Any) -> None:
        component = make_component("input", {
            "value": "go",
            "bindings": [{"key": "enter", "useDefault": True}],
        })
        _, cmd, _ = component.update_message(KeyEvent.parse("enter"))
        assert [e.name for e in events(cmd)] == ["INPUT_ENTER_PRESSED"]

    def test_disabled_binding_skipped(self, make_component: Any, events: Any) -> None:
        component = make_component("input", {
            "bindings": [{"key": "x", "event": "X_PRESSED", "enabled": False}],
        })
        _, cmd, _ = component.update_message(KeyEvent.parse("x"))
        assert [e.name for e in events(cmd)] == ["INPUT_VALUE_CHANGED"]
        assert component.value == "x"

    def test_bindings_on_unfocused_component_do_not_fire(self, make_component: Any) -> None:
        component = make_component("input", {"bindings": [{"key": "x", "event": "X"}]}, focused=False)
        _, cmd, signal = component.update_message(KeyEvent.parse("x"))
        assert cmd is None
        assert signal is BubbleSignal.IGNORED


class TestSharedSpecialKeys:
    """Tab, Escape and Ctrl+C shared across kinds."""

    def test_tab_bubbles_without_state_change(self, make_component: Any) -> None:
        component = make_component("input", {"value": "abc"})
        for key in ("tab", "shift+tab"):
            _, cmd, signal = component.update_message(KeyEvent.parse(key))
            assert cmd is None
            assert signal is BubbleSignal.IGNORED
        assert component.value == "abc"
        assert component.focused is True

    def test_ctrl_c_bubbles(self, make_component: Any) -> None:
        component = make_component("textarea")
        _, cmd, signal = component.update_message(KeyEvent.parse("ctrl+c"))
        assert cmd is None
        assert signal is BubbleSignal.IGNORED

    def test_kinds_without_focus_bubble_tab_and_ctrl_c(self, make_component: Any) -> None:
        for kind in ("spinner", "progress", "text"):
            component = make_component(kind, focused=False)
            for key in ("tab", "shift+tab", "ctrl+c"):
                _, cmd, signal = component.update_message(KeyEvent.parse(key))
                assert cmd is None, (kind, key)
                assert signal is BubbleSignal.IGNORED, (kind, key)

    def test_escape_blurs_with_one_focus_notification(self, make_component: Any, events: Any) -> None:
        for kind, focus_event in (
            ("input", "INPUT_FOCUS_CHANGED"),
            ("list", "FOCUS_CHANGED"),
            ("table", "FOCUS_CHANGED"),
            ("viewport", "FOCUS_CHANGED"),
            ("menu", "FOCUS_CHANGED"),
        ):
            component = make_component(kind)
            _, cmd, signal = component.update_message(KeyEvent.parse("esc"))
            assert signal is BubbleSignal.IGNORED, kind
            assert component.focused is False, kind
            names = [e.name for e in events(cmd)]
            assert names == [focus_event, "ESCAPE_PRESSED"], kind


class TestDelegation:
    """Tests for delegation and diff-driven notifications."""

    def test_widget_command_precedes_notifications(self) -> None:
        counter = _Counter()
        _, cmd, signal = dispatch(counter, "tick")
        messages = run_command(cmd)
        assert messages[0] == "widget-message"
        assert isinstance(messages[1], NotificationEvent)
        assert messages[1].payload == {"old": 0, "new": 1}
        assert signal is BubbleSignal.HANDLED

    def test_unknown_messages_fall_through(self, make_component: Any) -> None:
        component = make_component("list", {"items": ["a", "b"]})
        _, cmd, signal = component.update_message(object())
        assert cmd is None
        assert signal is BubbleSignal.HANDLED

    def test_decorative_kind_reports_ignored(self, make_component: Any) -> None:
        component = make_component("text", {"content": "hello"})
        _, cmd, signal = component.update_message(KeyEvent.parse("a"))
        assert cmd is None
        assert signal is BubbleSignal.IGNORED

    def test_passthrough_signal_chosen_by_component(self) -> None:
        counter = _QuietCounter()
        _, cmd, signal = dispatch(counter, "tick")
        assert signal is BubbleSignal.IGNORED
        assert run_command(cmd)[0] == "widget-message"
        assert counter.delegated == ["tick"]

    def test_passthrough_protocol(self) -> None:
        assert isinstance(_QuietCounter(), PassthroughProvider)
        assert not isinstance(_Counter(), PassthroughProvider)
        assert TextComponent("t").passthrough_signal is BubbleSignal.IGNORED
        assert create_component("list", "l").passthrough_signal is BubbleSignal.HANDLED


class TestInitialFocus:
    """Tests for the focused prop."""

    def test_focused_prop_accepts_keys_without_focus_message(self) -> None:
        component = create_component("menu", "m", {"items": ["a", "b"], "focused": True}, PLAIN_THEME)
        assert component.focused is True
        _, _, signal = component.update_message(KeyEvent.parse("down"))
        assert signal is BubbleSignal.HANDLED
        assert component.index == 1

    def test_unfocused_by_default(self) -> None:
        for kind in ("input", "list", "menu", "viewport"):
            assert create_component(kind, "c", {}, PLAIN_THEME).focused is False, kind

    def test_disabled_wins_over_focused(self) -> None:
        component = create_component("input", "i", {"focused": True, "disabled": True}, PLAIN_THEME)
        assert component.focused is False

    def test_reconfigure_without_focused_keeps_focus(self) -> None:
        component = create_component("list", "l", {"items": ["a"], "focused": "yes"}, PLAIN_THEME)
        component.apply_config({"items": ["a", "b"]})
        assert component.focused is True
        component.apply_config({"items": ["a"], "focused": False})
        assert component.focused is False

    def test_ignored_on_kinds_without_focus(self) -> None:
        component = create_component("progress", "p", {"focused": True}, PLAIN_THEME)
        assert not has_focus_concept(component)

    def test_invalid_value_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="'focused'"):
            create_component("input", "i", {"focused": "maybe"}, PLAIN_THEME)
