"""Outbound notification events and the in-process event bus."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from tui_adapters.core.commands import Command

logger = logging.getLogger(__name__)


# Form events
EVENT_FORM_SUBMIT_SUCCESS = "FORM_SUBMIT_SUCCESS"
EVENT_FORM_CANCEL = "FORM_CANCEL"

# Table events
EVENT_ROW_SELECTED = "ROW_SELECTED"
EVENT_ROW_DOUBLE_CLICKED = "ROW_DOUBLE_CLICKED"
EVENT_TABLE_ITEM_SELECTED = "TABLE_ITEM_SELECTED"

# Navigation events
EVENT_FOCUS_CHANGED = "FOCUS_CHANGED"
EVENT_TAB_PRESSED = "TAB_PRESSED"
EVENT_ESCAPE_PRESSED = "ESCAPE_PRESSED"

# List events
EVENT_LIST_SELECTION_CHANGED = "LIST_SELECTION_CHANGED"
EVENT_LIST_ITEM_SELECTED = "LIST_ITEM_SELECTED"

# Menu events
EVENT_MENU_ITEM_SELECTED = "MENU_ITEM_SELECTED"
EVENT_MENU_ACTION_TRIGGERED = "MENU_ACTION_TRIGGERED"
EVENT_MENU_SUBMENU_ENTERED = "MENU_SUBMENU_ENTERED"
EVENT_MENU_SUBMENU_EXITED = "MENU_SUBMENU_EXITED"

# Input events
EVENT_INPUT_VALUE_CHANGED = "INPUT_VALUE_CHANGED"
EVENT_INPUT_FOCUS_CHANGED = "INPUT_FOCUS_CHANGED"
EVENT_INPUT_ENTER_PRESSED = "INPUT_ENTER_PRESSED"

# Chat events
EVENT_CHAT_MESSAGE_SENT = "CHAT_MESSAGE_SENT"
EVENT_CHAT_MESSAGE_RECEIVED = "CHAT_MESSAGE_RECEIVED"

# Display events
EVENT_VIEWPORT_SCROLLED = "VIEWPORT_SCROLLED"
EVENT_SPINNER_TICK = "SPINNER_TICK"
EVENT_PROGRESS_CHANGED = "PROGRESS_CHANGED"


@dataclass(frozen=True)
class NotificationEvent:
    """Something a component wants the rest of the application to know."""
    source_id: str
    name: str
    payload: dict[str, Any] = field(default_factory=dict)


def publish_event(source_id: str, name: str, payload: Optional[dict[str, Any]] = None) -> Command:
    """Build a command that yields a :class:`NotificationEvent`.

    The event is constructed eagerly so its payload reflects the state at the
    time of the call, not the time the host gets around to running it.
    """
    event = NotificationEvent(source_id, name, dict(payload) if payload else {})

    def _publish() -> NotificationEvent:
        return event

    return _publish


Subscriber = Callable[[NotificationEvent], None]


class EventBus:
    """Named-event pub/sub used by hosts to fan out notifications.

    Example:
        bus = EventBus()
        unsubscribe = bus.subscribe("INPUT_ENTER_PRESSED", handle_submit)
        bus.publish(event)
        unsubscribe()
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscriber]] = {}
        self._lock = threading.Lock()

    def subscribe(self, name: str, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for events called ``name``.

        Returns a function that removes this registration.
        """
        with self._lock:
            self._subscribers.setdefault(name, []).append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(name, [])
                for i, cb in enumerate(callbacks):
                    if cb is callback:
                        del callbacks[i]
                        break
                if not callbacks:
                    self._subscribers.pop(name, None)

        return _unsubscribe

    def publish(self, event: NotificationEvent) -> int:
        """Deliver ``event`` to its subscribers. Returns how many were called."""
        with self._lock:
            callbacks = list(self._subscribers.get(event.name, ()))
        for callback in callbacks:
            callback(event)
        logger.debug("Published %s from %s to %d subscriber(s)", event.name, event.source_id, len(callbacks))
        return len(callbacks)

    def subscriber_count(self, name: str) -> int:
        with self._lock:
            return len(self._subscribers.get(name, ()))
