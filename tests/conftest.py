"""Shared fixtures for component and dispatch tests."""

from typing import Any, Callable, Mapping, Optional

import pytest

from tui_adapters.components.base import BaseComponent
from tui_adapters.components.registry import create_component
from tui_adapters.core.commands import Command, run_command
from tui_adapters.core.config import PLAIN_THEME
from tui_adapters.core.events import NotificationEvent
from tui_adapters.core.input import KeyEvent


@pytest.fixture
def key() -> Callable[[str], KeyEvent]:
    """Build a KeyEvent from a key string, e.g. ``key("shift+tab")``."""
    return KeyEvent.parse


@pytest.fixture
def make_component() -> Callable[..., BaseComponent]:
    """Build a component with the plain theme, focused unless told otherwise."""
    def _make(
        kind: str,
        props: Optional[Mapping[str, Any]] = None,
        component_id: str = "c1",
        focused: bool = True,
    ) -> BaseComponent:
        component = create_component(kind, component_id, props, PLAIN_THEME)
        if focused:
            component.set_focus(True)
        return component
    return _make


@pytest.fixture
def events() -> Callable[[Optional[Command]], list[NotificationEvent]]:
    """Run a command and return the notifications it produced."""
    def _events(cmd: Optional[Command]) -> list[NotificationEvent]:
        return [m for m in run_command(cmd) if isinstance(m, NotificationEvent)]
    return _events
