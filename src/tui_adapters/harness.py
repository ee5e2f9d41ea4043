"""Minimal host for driving a single component.

The real host runtime composes screens and schedules ticks. This harness
does just enough of that job for the CLI and the tests: it delivers
messages, re-offers ignored keys to global bindings, runs the returned
commands and fans notifications out to an :class:`EventBus`.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from tui_adapters.components.base import BaseComponent
from tui_adapters.core.bindings import BindingTable
from tui_adapters.core.commands import run_command
from tui_adapters.core.dispatch import BubbleSignal
from tui_adapters.core.events import EventBus, NotificationEvent
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.messages import (
    ExecuteActionMessage,
    FocusMessage,
    FocusType,
    QuitMessage,
    TargetedMessage,
)

logger = logging.getLogger(__name__)

HOST_ID = "host"


@dataclass
class Delivery:
    """Outcome of delivering one message."""
    message: Any
    signal: BubbleSignal
    messages: list[Any] = field(default_factory=list)

    @property
    def handled(self) -> bool:
        return self.signal is BubbleSignal.HANDLED

    @property
    def notifications(self) -> list[NotificationEvent]:
        return [m for m in self.messages if isinstance(m, NotificationEvent)]

    @property
    def event_names(self) -> list[str]:
        return [n.name for n in self.notifications]

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": str(self.message),
            "signal": self.signal.name,
            "notifications": [
                {"source": n.source_id, "name": n.name, "payload": n.payload}
                for n in self.notifications
            ],
        }


class ComponentHarness:
    """Drives one component the way a host would.

    Example:
        harness = ComponentHarness(create_component("input", "name"))
        harness.focus()
        for delivery in harness.replay_keys(["h", "i", "enter"]):
            print(delivery.signal, delivery.event_names)
    """

    def __init__(
        self,
        component: BaseComponent,
        bus: Optional[EventBus] = None,
        global_bindings: Optional[BindingTable] = None,
        quit_keys: Iterable[str] = ("ctrl+c",),
    ) -> None:
        self.component = component
        self.bus = bus or EventBus()
        self.global_bindings = global_bindings or BindingTable()
        self.quit_keys = frozenset(KeyEvent.parse(k).string for k in quit_keys)
        self.notifications: list[NotificationEvent] = []
        self.actions: list[ExecuteActionMessage] = []
        self.quit_requested = False
        self._pending: deque[Any] = deque()

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> list[Any]:
        """Run the component's ``init`` command; its messages queue as pending."""
        return self._route(run_command(self.component.init()))

    def close(self) -> None:
        self.component.cleanup()

    # -- delivery -----------------------------------------------------------

    def deliver(self, message: Any) -> Delivery:
        _, cmd, signal = self.component.update_message(message)
        messages = run_command(cmd)
        if signal is BubbleSignal.IGNORED and isinstance(message, KeyEvent):
            messages.extend(self._handle_global_key(message))
        self._route(messages)
        logger.debug("Delivered %s to %r: %s", message, self.component, signal.name)
        return Delivery(message, signal, messages)

    def deliver_to(self, target_id: str, message: Any) -> Delivery:
        return self.deliver(TargetedMessage(target_id, message))

    def press(self, key: str) -> Delivery:
        """Deliver a key given as a key string, e.g. ``"ctrl+s"``."""
        return self.deliver(KeyEvent.parse(key))

    def replay_keys(self, keys: Iterable[str]) -> list[Delivery]:
        return [self.press(key) for key in keys]

    def focus(self) -> Delivery:
        return self.deliver(FocusMessage(FocusType.GAINED))

    def blur(self) -> Delivery:
        return self.deliver(FocusMessage(FocusType.LOST))

    @property
    def pending(self) -> list[Any]:
        """Messages produced by commands that still await delivery (ticks...)."""
        return list(self._pending)

    def drain(self, limit: int = 1) -> list[Delivery]:
        """Deliver up to ``limit`` pending messages in arrival order.

        Animated components re-arm themselves on every tick, so the queue never
        runs dry on its own. ``limit`` bounds the work.
        """
        deliveries = []
        while self._pending and len(deliveries) < limit:
            deliveries.append(self.deliver(self._pending.popleft()))
        return deliveries

    def view(self) -> str:
        return self.component.view()

    # -- internals ----------------------------------------------------------

    def _handle_global_key(self, event: KeyEvent) -> list[Any]:
        binding = self.global_bindings.match(event)
        if binding is not None:
            if binding.action is not None:
                return [ExecuteActionMessage(action=binding.action, source_id=HOST_ID)]
            if binding.event:
                return [NotificationEvent(HOST_ID, binding.event, {"key": event.string})]
        if event.string in self.quit_keys:
            return [QuitMessage(reason=event.string)]
        return []

    def _route(self, messages: list[Any]) -> list[Any]:
        for message in messages:
            if isinstance(message, NotificationEvent):
                self.notifications.append(message)
                self.bus.publish(message)
            elif isinstance(message, ExecuteActionMessage):
                self.actions.append(message)
            elif isinstance(message, QuitMessage):
                self.quit_requested = True
            else:
                self._pending.append(message)
        return messages

