"""Tests for notification events, commands and the event bus."""

from tui_adapters.core.commands import BatchMessage, batch, message_command, run_command
from tui_adapters.core.events import EventBus, NotificationEvent, publish_event


class TestCommands:
    """Tests for command batching."""

    def test_batch_drops_none(self) -> None:
        assert batch() is None
        assert batch(None, None) is None

    def test_batch_of_one_is_the_command(self) -> None:
        cmd = message_command("x")
        assert batch(None, cmd) is cmd

    def test_batch_preserves_order(self) -> None:
        cmd = batch(message_command(1), batch(message_command(2), message_command(3)), message_command(4))
        assert isinstance(cmd(), BatchMessage)
        assert run_command(cmd) == [1, 2, 3, 4]

    def test_run_command_skips_none_messages(self) -> None:
        assert run_command(batch(lambda: None, message_command("a"))) == ["a"]


class TestPublishEvent:
    """Tests for publish_event."""

    def test_payload_captured_at_call_time(self) -> None:
        payload = {"value": "a"}
        cmd = publish_event("c1", "CHANGED", payload)
        payload["value"] = "b"
        [event] = run_command(cmd)
        assert event == NotificationEvent("c1", "CHANGED", {"value": "a"})

    def test_default_payload_is_empty(self) -> None:
        [event] = run_command(publish_event("c1", "ESCAPE_PRESSED"))
        assert event.payload == {}


class TestEventBus:
    """Tests for EventBus."""

    def test_publish_reaches_subscribers(self) -> None:
        bus = EventBus()
        seen: list[NotificationEvent] = []
        bus.subscribe("SAVE", seen.append)
        bus.subscribe("OTHER", seen.append)
        event = NotificationEvent("c1", "SAVE")
        assert bus.publish(event) == 1
        assert seen == [event]

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        seen: list[NotificationEvent] = []
        unsubscribe = bus.subscribe("SAVE", seen.append)
        assert bus.subscriber_count("SAVE") == 1
        unsubscribe()
        unsubscribe()
        assert bus.subscriber_count("SAVE") == 0
        assert bus.publish(NotificationEvent("c1", "SAVE")) == 0
        assert seen == []

    def test_unsubscribe_removes_only_its_registration(self) -> None:
        bus = EventBus()
        calls: list[str] = []
        bus.subscribe("E", lambda e: calls.append("first"))
        remove_second = bus.subscribe("E", lambda e: calls.append("second"))
        remove_second()
        bus.publish(NotificationEvent("c1", "E"))
        assert calls == ["first"]
