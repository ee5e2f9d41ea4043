"""Message dispatch shared by every component adapter.

``dispatch()`` decides, in a fixed order, what happens to one message:

1. targeting: envelopes addressed elsewhere are ignored,
2. focus gate: unfocused components ignore keys,
3. user bindings,
4. special keys (Tab, Escape, Enter, Ctrl+C),
5. delegation to the wrapped widget,
6. state diff, turned into notifications.

Components opt into each step by implementing the matching capability
protocol below.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

from tui_adapters.core.commands import Command, batch
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.messages import TargetedMessage

if TYPE_CHECKING:
    from tui_adapters.core.bindings import BindingTable, ComponentBinding
    from tui_adapters.core.state import ObservableState

logger = logging.getLogger(__name__)

# Deepest envelope nesting accepted before a message is dropped
MAX_ENVELOPE_DEPTH = 16


class BubbleSignal(Enum):
    """Whether a message was consumed or should bubble to the host."""
    HANDLED = "handled"
    IGNORED = "ignored"


DispatchResult = tuple[Any, Optional[Command], BubbleSignal]
KeyOutcome = tuple[Optional[Command], BubbleSignal, bool]


@runtime_checkable
class Targetable(Protocol):
    @property
    def id(self) -> str: ...


@runtime_checkable
class Focusable(Protocol):
    """Component with a focus concept; unfocused ones ignore keys."""

    @property
    def focused(self) -> bool: ...

    def set_focus(self, focused: bool) -> None: ...


@runtime_checkable
class BindingProvider(Protocol):
    @property
    def binding_table(self) -> BindingTable: ...

    def handle_binding(self, event: KeyEvent, binding: ComponentBinding) -> KeyOutcome: ...

    def binding_context(self) -> dict[str, Any]: ...


@runtime_checkable
class SpecialKeyHandler(Protocol):
    def handle_special_key(self, event: KeyEvent) -> KeyOutcome: ...


@runtime_checkable
class Delegate(Protocol):
    def delegate(self, message: Any) -> Optional[Command]: ...


@runtime_checkable
class StateCapturable(Protocol):
    def capture_state(self) -> ObservableState: ...

    def state_notifications(self, old: ObservableState, new: ObservableState) -> list[Command]: ...


@runtime_checkable
class PassthroughProvider(Protocol):
    """Component that picks the signal for messages its widget handled.

    Components without it report ``HANDLED`` for every delegated message.
    """

    @property
    def passthrough_signal(self) -> BubbleSignal: ...


def unwrap_targeted(component_id: str, message: Any) -> Any:
    """Strip envelopes addressed to ``component_id``.

    Every layer must name the component. Returns the innermost message, or
    ``None`` if any layer targets someone else or nesting is too deep.
    """
    depth = 0
    while isinstance(message, TargetedMessage):
        if message.target_id != component_id:
            return None
        depth += 1
        if depth > MAX_ENVELOPE_DEPTH:
            logger.warning("Dropping message for %s nested deeper than %d envelopes", component_id, MAX_ENVELOPE_DEPTH)
            return None
        message = message.inner
    return message


def has_focus_concept(component: Any) -> bool:
    return isinstance(component, Focusable)


def dispatch(component: Any, message: Any) -> DispatchResult:
    """Route ``message`` through ``component`` and report what happened.

    Returns:
        ``(component, command, signal)``. ``command`` is ``None`` when there
        is nothing for the host to run.
    """
    comp_id = component.id
    if isinstance(message, TargetedMessage):
        inner = unwrap_targeted(comp_id, message)
        if inner is None:
            logger.debug("Component[%s] ignoring message targeted at %s", comp_id, message.target_id)
            return component, None, BubbleSignal.IGNORED
        message = inner

    if isinstance(message, KeyEvent):
        if has_focus_concept(component) and not component.focused:
            logger.debug("Component[%s] unfocused, ignoring key %s", comp_id, message)
            return component, None, BubbleSignal.IGNORED

        if isinstance(component, BindingProvider):
            binding = component.binding_table.match(message)
            if binding is not None:
                cmd, signal, consumed = component.handle_binding(message, binding)
                if consumed:
                    return component, cmd, signal
                logger.debug("Component[%s] binding for %s defers to default handling", comp_id, message)

        if isinstance(component, SpecialKeyHandler):
            cmd, signal, consumed = component.handle_special_key(message)
            if consumed:
                logger.debug("Component[%s] special key %s -> %s", comp_id, message, signal.value)
                return component, cmd, signal

    capturable = isinstance(component, StateCapturable)
    before = component.capture_state() if capturable else None

    cmd = component.delegate(message) if isinstance(component, Delegate) else None

    notifications: list[Command] = []
    if capturable:
        after = component.capture_state()
        notifications = component.state_notifications(before, after)

    if isinstance(component, PassthroughProvider):
        signal = component.passthrough_signal
    else:
        signal = BubbleSignal.HANDLED
    return component, batch(cmd, *notifications), signal
