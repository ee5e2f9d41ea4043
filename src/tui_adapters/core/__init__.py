"""Dispatch core - key input, messages, bindings, state diffing."""

from tui_adapters.core.input import InputReader, KeyEvent, Key
from tui_adapters.core.messages import (
    ActionMessage,
    FocusMessage,
    FocusType,
    TargetedMessage,
)
from tui_adapters.core.commands import Command, batch, run_command
from tui_adapters.core.events import EventBus, NotificationEvent, publish_event
from tui_adapters.core.config import ConfigurationError, Theme, DEFAULT_THEME
from tui_adapters.core.dispatch import (
    BubbleSignal,
    Focusable,
    PassthroughProvider,
    Targetable,
    dispatch,
)
from tui_adapters.core.bindings import (
    BindingAction,
    BindingTable,
    ComponentBinding,
    parse_bindings,
)
from tui_adapters.core.state import FieldChange, StateWatcher, WatchedField

__all__ = [
    "InputReader",
    "KeyEvent",
    "Key",
    "ActionMessage",
    "FocusMessage",
    "FocusType",
    "TargetedMessage",
    "Command",
    "batch",
    "run_command",
    "EventBus",
    "NotificationEvent",
    "publish_event",
    "ConfigurationError",
    "Theme",
    "DEFAULT_THEME",
    "BubbleSignal",
    "Focusable",
    "PassthroughProvider",
    "Targetable",
    "dispatch",
    "BindingAction",
    "BindingTable",
    "ComponentBinding",
    "parse_bindings",
    "FieldChange",
    "StateWatcher",
    "WatchedField",
]
