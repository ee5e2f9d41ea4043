"""Base widget protocol and common functionality."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from tui_adapters.core.commands import Command


@dataclass
class Rect:
    """Rectangle bounds for widget rendering."""
    x: int
    y: int
    width: int
    height: int


@runtime_checkable
class Widget(Protocol):
    """Protocol for widget models wrapped by component adapters."""

    def render(self, bounds: Rect) -> list[str]:
        """Render widget content as list of lines."""
        ...

    def update(self, message: Any) -> Optional[Command]:
        """Apply a message. Returns a follow-up command, if any."""
        ...

    @property
    def focused(self) -> bool:
        ...


class BaseWidget(ABC):
    """Base class with common widget functionality.

    Widgets know nothing about component ids, bindings or notifications.
    They mutate their own state in ``update`` and may return a command.
    """

    def __init__(self) -> None:
        self._focused = False

    @property
    def focused(self) -> bool:
        return self._focused

    def focus(self) -> None:
        self._focused = True

    def blur(self) -> None:
        self._focused = False

    @abstractmethod
    def render(self, bounds: Rect) -> list[str]:
        """Subclasses must implement rendering."""
        pass

    def update(self, message: Any) -> Optional[Command]:
        """Default: ignore everything."""
        return None
