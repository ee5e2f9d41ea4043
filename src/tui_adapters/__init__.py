"""
tui-adapters: terminal UI component adapters

Wraps small widget models (text input, textarea, list, menu, table,
viewport, chat, spinner, progress, text) behind one component contract
and routes every message through a single dispatch core.

Quick Start:
    >>> from tui_adapters import ComponentHarness, create_component
    >>> harness = ComponentHarness(create_component("input", "name"))
    >>> harness.focus()
    >>> [d.event_names for d in harness.replay_keys(["h", "i", "enter"])]

Features:
    - Envelope targeting and a focus gate for key events
    - Per-component key bindings (action, event or default pass-through)
    - Special-key interception for Tab, Escape, Enter and Ctrl+C
    - Snapshot diffing that turns state changes into notification events
    - In-process event bus for hosts
"""

__version__ = "0.1.0"

# Dispatch core
from tui_adapters.core.dispatch import BubbleSignal, dispatch
from tui_adapters.core.events import EventBus, NotificationEvent
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.config import ConfigurationError, Theme, DEFAULT_THEME

# Components
from tui_adapters.components.base import BaseComponent
from tui_adapters.components.registry import ComponentRegistry, create_component, default_registry

# Host
from tui_adapters.harness import ComponentHarness

__all__ = [
    # Version
    "__version__",
    # Dispatch core
    "BubbleSignal",
    "dispatch",
    "EventBus",
    "NotificationEvent",
    "KeyEvent",
    "ConfigurationError",
    "Theme",
    "DEFAULT_THEME",
    # Components
    "BaseComponent",
    "ComponentRegistry",
    "create_component",
    "default_registry",
    # Host
    "ComponentHarness",
]
