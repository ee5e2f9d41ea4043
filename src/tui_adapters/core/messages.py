"""Message types exchanged between the host runtime and components.

Key presses travel as :class:`~tui_adapters.core.input.KeyEvent`; everything
else a component can receive is defined here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from tui_adapters.core.bindings import BindingAction


@dataclass(frozen=True)
class TargetedMessage:
    """Envelope addressing ``inner`` to the component whose id is ``target_id``."""
    target_id: str
    inner: Any


@dataclass(frozen=True)
class ActionMessage:
    """Framework-level action replayed into a component (e.g. a received chat message)."""
    component_id: str
    action: str
    data: Any = None


class FocusType(Enum):
    GAINED = "gained"
    LOST = "lost"


@dataclass(frozen=True)
class FocusMessage:
    """Focus change requested by the host (or by a component for itself)."""
    type: FocusType
    reason: str = ""
    to_id: str = ""


@dataclass(frozen=True)
class StateUpdateMessage:
    """Single state key update."""
    key: str
    value: Any


@dataclass(frozen=True)
class TickMessage:
    """Animation tick addressed to the widget that scheduled it."""
    widget_id: int
    tag: int = 0


@dataclass(frozen=True)
class WindowSizeMessage:
    width: int
    height: int


@dataclass(frozen=True)
class ExecuteActionMessage:
    """Request for the host to run a binding action on behalf of ``source_id``."""
    action: BindingAction
    source_id: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class QuitMessage:
    """Ask the host to shut down."""
    reason: Optional[str] = None
