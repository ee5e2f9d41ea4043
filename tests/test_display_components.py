"""Tests for viewport, spinner, progress and text components."""

from typing import Any

import pytest

from tui_adapters.core.commands import run_command
from tui_adapters.core.config import ConfigurationError
from tui_adapters.core.dispatch import BubbleSignal
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.messages import StateUpdateMessage, TargetedMessage, TickMessage

LINES = "\n".join(f"line {i}" for i in range(30))


class TestViewportComponent:
    """Tests for ViewportComponent."""

    def test_scroll_publishes_offsets(self, make_component: Any, events: Any) -> None:
        component = make_component("viewport", {"content": LINES, "height": 5}, component_id="log")
        _, cmd, signal = component.update_message(KeyEvent.parse("down"))
        assert signal is BubbleSignal.HANDLED
        assert [(e.name, e.payload) for e in events(cmd)] == [
            ("VIEWPORT_SCROLLED", {"oldOffset": 0, "newOffset": 1}),
        ]
        component.update_message(KeyEvent.parse("pgdown"))
        assert component.offset == 6

    def test_scroll_past_end_is_quiet(self, make_component: Any, events: Any) -> None:
        component = make_component("viewport", {"content": LINES, "height": 5})
        component.update_message(KeyEvent.parse("G"))
        assert component.offset == 25
        _, cmd, _ = component.update_message(KeyEvent.parse("down"))
        assert events(cmd) == []
        assert component.get_state_changes()[0]["c1_at_bottom"] is True

    def test_content_update(self, make_component: Any) -> None:
        component = make_component("viewport", {"content": "old", "height": 3}, component_id="v", focused=False)
        _, _, signal = component.update_message(TargetedMessage("v", StateUpdateMessage("content", "a\nb")))
        assert signal is BubbleSignal.HANDLED
        assert component.view() == "a\nb"

    def test_auto_scroll(self, make_component: Any) -> None:
        component = make_component("viewport", {"content": LINES, "height": 5, "autoScroll": True})
        assert component.offset == 25
        component.update_message(StateUpdateMessage("content", LINES + "\nline 30"))
        assert component.offset == 26

    def test_markdown(self, make_component: Any) -> None:
        component = make_component("viewport", {"content": "# Title\n\nsome *text*", "enableMarkdown": True})
        view = component.view()
        assert "Title" in view
        assert "#" not in view


class TestSpinnerComponent:
    """Tests for SpinnerComponent."""

    def test_tick_cycle(self, make_component: Any, events: Any) -> None:
        component = make_component("spinner", {"style": "line"}, component_id="busy")
        [tick] = run_command(component.init())
        assert isinstance(tick, TickMessage)
        assert component.view() == "|"

        _, cmd, signal = component.update_message(tick)
        assert signal is BubbleSignal.HANDLED
        messages = run_command(cmd)
        assert isinstance(messages[0], TickMessage)
        assert [(e.name, e.payload) for e in events(cmd)] == [
            ("SPINNER_TICK", {"running": True, "frame": 1}),
        ]
        assert component.view() == "/"

    def test_stale_tick_ignored(self, make_component: Any) -> None:
        component = make_component("spinner", {"style": "line"})
        [tick] = run_command(component.init())
        component.update_message(tick)
        _, cmd, _ = component.update_message(tick)
        assert cmd is None
        assert component.view() == "/"

    def test_stop_and_restart(self, make_component: Any) -> None:
        component = make_component("spinner", {"running": False})
        assert component.init() is None
        _, cmd, _ = component.update_message(StateUpdateMessage("running", True))
        [tick] = run_command(cmd)
        assert isinstance(tick, TickMessage)
        component.cleanup()
        assert component.running is False
        _, cmd, _ = component.update_message(tick)
        assert cmd is None

    def test_custom_frames_and_speed(self, make_component: Any) -> None:
        component = make_component("spinner", {"frames": ["a", "b"], "speed": 250, "label": "Working"})
        assert component.interval == 0.25
        assert component.view() == "a Working"
        assert component.get_state_changes() == ({"c1_running": True}, True)

    def test_unknown_style(self, make_component: Any) -> None:
        with pytest.raises(ConfigurationError, match="spinner style"):
            make_component("spinner", {"style": "wobble"})


class TestProgressComponent:
    """Tests for ProgressComponent."""

    def test_update_publishes_change(self, make_component: Any, events: Any) -> None:
        component = make_component("progress", {"width": 10}, component_id="dl")
        _, cmd, signal = component.update_message(StateUpdateMessage("percent", 50))
        assert signal is BubbleSignal.HANDLED
        assert [(e.name, e.payload) for e in events(cmd)] == [
            ("PROGRESS_CHANGED", {"oldPercent": 0.0, "newPercent": 50.0}),
        ]
        assert component.view() == "█████░░░░░"

    def test_progress_alias_and_clamp(self, make_component: Any) -> None:
        component = make_component("progress")
        component.update_message(StateUpdateMessage("progress", 250))
        assert component.percent == 100.0
        component.update_message(StateUpdateMessage("percent", -3))
        assert component.percent == 0.0

    def test_non_numeric_ignored(self, make_component: Any, events: Any) -> None:
        component = make_component("progress", {"percent": 10})
        for value in ("20", True, None):
            _, cmd, _ = component.update_message(StateUpdateMessage("percent", value))
            assert events(cmd) == []
        assert component.percent == 10.0

    def test_state_changes(self, make_component: Any) -> None:
        component = make_component("progress", {"percent": 30, "width": 14, "showPercentage": True}, component_id="p")
        changes, has_changes = component.get_state_changes()
        assert has_changes is True
        assert changes["p_percent"] == 30.0
        assert changes["p_value"].endswith(" 30%")


class TestTextComponent:
    """Tests for TextComponent."""

    def test_everything_bubbles(self, make_component: Any) -> None:
        component = make_component("text", {"content": "hello"}, component_id="t")
        for message in (KeyEvent.parse("enter"), StateUpdateMessage("content", "bye")):
            _, cmd, signal = component.update_message(message)
            assert cmd is None
            assert signal is BubbleSignal.IGNORED
        assert component.view() == "bye"
        assert component.get_state_changes() == ({}, False)

    def test_text_alias_and_truncation(self, make_component: Any) -> None:
        component = make_component("text", {"text": "one\ntwo\nthree", "height": 2, "width": 3})
        assert component.view() == "one\ntwo"
