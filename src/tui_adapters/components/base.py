"""Component adapter base classes.

A component wraps one widget model and exposes it to the host through a
uniform contract (``update_message``, ``view``, ``set_focus``...). Message
routing itself lives in :func:`tui_adapters.core.dispatch.dispatch`; the
classes here supply the capabilities it asks for.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.core.bindings import (
    BindingTable,
    ComponentBinding,
    handle_binding,
    parse_bindings,
)
from tui_adapters.core.commands import Command, batch
from tui_adapters.core.config import DEFAULT_THEME, ConfigurationError, Theme, coerce_bool, coerce_int
from tui_adapters.core.dispatch import BubbleSignal, DispatchResult, KeyOutcome, dispatch
from tui_adapters.core.events import EVENT_ESCAPE_PRESSED, publish_event
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.messages import FocusMessage, FocusType
from tui_adapters.core.state import ObservableState, StateWatcher, WatchedField
from tui_adapters.widgets.base import Rect

logger = logging.getLogger(__name__)


def focus_payload(old: Any, new: Any) -> dict[str, Any]:
    return {"focused": new}


@dataclass
class ComponentProps:
    """Props shared by every kind. Subclasses add their own fields."""
    width: int = 0
    height: int = 0
    # Initial focus; None leaves the current focus alone
    focused: Optional[bool] = None

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> ComponentProps:
        return cls(**cls._common(props))

    @staticmethod
    def _common(props: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "width": coerce_int(props, "width", 0, minimum=0),
            "height": coerce_int(props, "height", 0, minimum=0),
            "focused": coerce_bool(props, "focused") if props.get("focused") is not None else None,
        }


class BaseComponent(ABC):
    """Adapter around a widget model.

    Subclasses set ``kind``, build their widget in ``__init__`` before
    calling :meth:`apply_config`, and list the state they want watched in
    :meth:`watched_fields`.
    """

    kind: ClassVar[str] = ""
    Props: ClassVar[type[ComponentProps]] = ComponentProps

    # Signal returned when a message is delegated to the widget
    PASSTHROUGH_SIGNAL: ClassVar[BubbleSignal] = BubbleSignal.HANDLED

    # Normalized key string -> handler method name. Tab and Ctrl+C always
    # bubble so the host can move focus or quit.
    SPECIAL_KEYS: ClassVar[dict[str, str]] = {
        "tab": "handle_tab",
        "shift+tab": "handle_tab",
        "ctrl+c": "handle_interrupt",
    }

    SUBSCRIBED_MESSAGE_TYPES: ClassVar[tuple[str, ...]] = ("TargetedMessage",)

    def __init__(self, component_id: str, theme: Theme = DEFAULT_THEME) -> None:
        if not component_id:
            raise ConfigurationError(f"{type(self).__name__} requires a non-empty id")
        self._id = component_id
        self.theme = theme
        self.props: ComponentProps = self.Props()
        self._bindings = BindingTable()
        self._watcher: Optional[StateWatcher] = None

    # -- contract -----------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    def init(self) -> Optional[Command]:
        return None

    def update_message(self, message: Any) -> DispatchResult:
        return dispatch(self, message)

    def view(self) -> str:
        bounds = Rect(0, 0, self.props.width, self.props.height)
        return "\n".join(self.render(bounds))

    @abstractmethod
    def render(self, bounds: Rect) -> list[str]:
        pass

    def set_focus(self, focused: bool) -> None:
        """No focus concept by default."""

    def apply_config(self, props: Mapping[str, Any]) -> None:
        """Replace props and bindings.

        Everything is parsed before anything is committed, so a bad mapping
        leaves the component exactly as it was.

        Raises:
            ConfigurationError: If any prop or binding is invalid.
        """
        if not isinstance(props, Mapping):
            raise ConfigurationError(f"Props must be a mapping, got {type(props).__name__}")
        try:
            parsed = self.Props.from_props(props)
            bindings = parse_bindings(props.get("bindings"))
        except ConfigurationError as e:
            logger.warning("Component[%s] rejected configuration: %s", self._id, e)
            raise
        self.props = parsed
        self._bindings = bindings
        self.configure(parsed)
        if parsed.focused is not None:
            self.set_focus(parsed.focused)

    @abstractmethod
    def configure(self, props: ComponentProps) -> None:
        """Push validated props into the widget."""

    def cleanup(self) -> None:
        pass

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        return {}, False

    def subscribed_message_types(self) -> list[str]:
        return list(self.SUBSCRIBED_MESSAGE_TYPES)

    # -- bindings -----------------------------------------------------------

    @property
    def binding_table(self) -> BindingTable:
        return self._bindings

    def handle_binding(self, event: KeyEvent, binding: ComponentBinding) -> KeyOutcome:
        return handle_binding(self, event, binding)

    def binding_context(self) -> dict[str, Any]:
        """Component data attached to binding events and actions."""
        return {}

    @property
    def passthrough_signal(self) -> BubbleSignal:
        return self.PASSTHROUGH_SIGNAL

    # -- special keys -------------------------------------------------------

    def handle_tab(self, event: KeyEvent) -> KeyOutcome:
        return None, BubbleSignal.IGNORED, True

    def handle_interrupt(self, event: KeyEvent) -> KeyOutcome:
        return None, BubbleSignal.IGNORED, True

    def handle_special_key(self, event: KeyEvent) -> KeyOutcome:
        handler_name = self.SPECIAL_KEYS.get(event.string)
        if handler_name is None:
            return None, BubbleSignal.IGNORED, False
        return getattr(self, handler_name)(event)

    # -- delegation and state ----------------------------------------------

    @abstractmethod
    def delegate(self, message: Any) -> Optional[Command]:
        pass

    def watched_fields(self) -> list[WatchedField]:
        return []

    @property
    def watcher(self) -> StateWatcher:
        if self._watcher is None:
            self._watcher = StateWatcher(self._id, self.watched_fields())
        return self._watcher

    def capture_state(self) -> ObservableState:
        return self.watcher.capture()

    def state_notifications(self, old: ObservableState, new: ObservableState) -> list[Command]:
        return self.watcher.notifications(old, new)

    def notify_changes(self, before: ObservableState) -> list[Command]:
        """Notifications for everything that changed since ``before``."""
        return self.state_notifications(before, self.capture_state())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"


class FocusableComponent(BaseComponent):
    """Component with a focus concept.

    Unfocused instances ignore key events. Tab and Ctrl+C always bubble to
    the host, Escape blurs the component.
    """

    SPECIAL_KEYS: ClassVar[dict[str, str]] = {
        **BaseComponent.SPECIAL_KEYS,
        "esc": "handle_escape",
    }

    SUBSCRIBED_MESSAGE_TYPES: ClassVar[tuple[str, ...]] = (
        "TargetedMessage",
        "KeyEvent",
        "FocusMessage",
    )

    @property
    @abstractmethod
    def focused(self) -> bool:
        pass

    @abstractmethod
    def set_focus(self, focused: bool) -> None:
        pass

    def handle_escape(self, event: KeyEvent) -> KeyOutcome:
        """Blur, announce it, and let the host see the key too."""
        return self.blur_with_notifications(), BubbleSignal.IGNORED, True

    def blur_with_notifications(self) -> Optional[Command]:
        before = self.capture_state()
        self.set_focus(False)
        cmds = self.notify_changes(before)
        cmds.append(publish_event(self.id, EVENT_ESCAPE_PRESSED))
        logger.debug("Component[%s] blurred by escape", self.id)
        return batch(*cmds)

    def delegate(self, message: Any) -> Optional[Command]:
        if isinstance(message, FocusMessage):
            self.set_focus(message.type == FocusType.GAINED)
            return None
        return self.delegate_to_widget(message)

    @abstractmethod
    def delegate_to_widget(self, message: Any) -> Optional[Command]:
        pass
