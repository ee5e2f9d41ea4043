"""Hierarchical menu component.

The menu starts at the root level. Enter on an item with children descends
into them; Escape climbs back up. The parent item lists are kept on a stack
so any depth restores exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.components.base import ComponentProps, FocusableComponent, focus_payload
from tui_adapters.core.commands import Command, batch
from tui_adapters.core.config import (
    DEFAULT_THEME,
    ConfigurationError,
    Theme,
    coerce_list,
    coerce_str,
)
from tui_adapters.core.dispatch import BubbleSignal, KeyOutcome
from tui_adapters.core.events import (
    EVENT_FOCUS_CHANGED,
    EVENT_MENU_ACTION_TRIGGERED,
    EVENT_MENU_ITEM_SELECTED,
    EVENT_MENU_SUBMENU_ENTERED,
    EVENT_MENU_SUBMENU_EXITED,
    publish_event,
)
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.state import WatchedField
from tui_adapters.widgets.base import Rect
from tui_adapters.widgets.itemlist import ItemList

logger = logging.getLogger(__name__)


@dataclass
class MenuItem:
    title: str
    description: str = ""
    value: Any = None
    disabled: bool = False
    action: Optional[dict[str, Any]] = None
    children: list[MenuItem] = field(default_factory=list)

    @property
    def has_submenu(self) -> bool:
        return bool(self.children)

    @property
    def label(self) -> str:
        return f"{self.title} ▶" if self.children else self.title

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "title": self.title,
            "value": self.value,
            "disabled": self.disabled,
            "hasSubmenu": self.has_submenu,
        }
        if self.description:
            result["description"] = self.description
        if self.action is not None:
            result["action"] = dict(self.action)
        return result

    @classmethod
    def from_dict(cls, raw: Any) -> MenuItem:
        if isinstance(raw, str):
            return cls(title=raw, value=raw)
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"Menu item must be a string or an object, got {type(raw).__name__}")
        title = raw.get("title")
        if not isinstance(title, str) or not title:
            raise ConfigurationError("Menu item requires a non-empty 'title'")
        action = raw.get("action")
        if action is not None and not isinstance(action, Mapping):
            raise ConfigurationError(f"Menu item {title!r}: 'action' must be an object")
        children = raw.get("children") or []
        if not isinstance(children, (list, tuple)):
            raise ConfigurationError(f"Menu item {title!r}: 'children' must be a list")
        return cls(
            title=title,
            description=str(raw.get("description") or ""),
            value=raw.get("value"),
            disabled=bool(raw.get("disabled", False)),
            action=dict(action) if action is not None else None,
            children=[cls.from_dict(child) for child in children],
        )


@dataclass
class MenuProps(ComponentProps):
    items: list[MenuItem] = field(default_factory=list)
    title: str = ""

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> MenuProps:
        return cls(
            **cls._common(props),
            items=[MenuItem.from_dict(item) for item in coerce_list(props, "items")],
            title=coerce_str(props, "title"),
        )


class MenuComponent(FocusableComponent):
    """
    Nested menu.

    Keyboard shortcuts:
        ↑/↓     Move selection
        Enter   Open submenu or select item
        Esc     Close submenu; at the root, leave the menu
    """

    kind: ClassVar[str] = "menu"
    Props = MenuProps

    SPECIAL_KEYS: ClassVar[dict[str, str]] = {
        **FocusableComponent.SPECIAL_KEYS,
        "enter": "handle_enter",
        "esc": "handle_escape",
    }

    def __init__(
        self,
        component_id: str,
        props: Optional[Mapping[str, Any]] = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__(component_id, theme)
        self._list = ItemList(theme=theme, show_description=False)
        self._path: list[str] = []
        self._parents: list[list[MenuItem]] = []
        self.apply_config(props or {})

    def configure(self, props: MenuProps) -> None:
        self._list.title = props.title
        self._list.height = props.height or 10
        self._path = []
        self._parents = []
        self._list.set_items(props.items)
        self._list.select(0)

    @property
    def level(self) -> int:
        return len(self._path)

    @property
    def path(self) -> list[str]:
        return list(self._path)

    @property
    def items(self) -> list[MenuItem]:
        return self._list.items

    @property
    def index(self) -> int:
        return self._list.index

    @property
    def selected_item(self) -> Optional[MenuItem]:
        return self._list.selected_item

    @property
    def focused(self) -> bool:
        return self._list.focused

    def set_focus(self, focused: bool) -> None:
        if focused:
            self._list.focus()
        else:
            self._list.blur()

    def enter_submenu(self) -> Optional[Command]:
        """Descend into the selected item's children."""
        item = self._list.selected_item
        if item is None or not item.has_submenu:
            return None
        parent_path = list(self._path)
        self._parents.append(self._list.items)
        self._path.append(item.title)
        self._list.set_items(item.children)
        self._list.select(0)
        logger.debug("Menu[%s] entered submenu %s (level %d)", self.id, "/".join(self._path), self.level)
        return publish_event(self.id, EVENT_MENU_SUBMENU_ENTERED, {
            "item": item.to_dict(),
            "parentPath": parent_path,
            "currentPath": list(self._path),
            "level": self.level,
        })

    def exit_submenu(self) -> Optional[Command]:
        """Climb back to the parent list. A no-op at the root."""
        if not self._path:
            return None
        previous_path = list(self._path)
        self._path.pop()
        self._list.set_items(self._parents.pop())
        self._list.select(0)
        logger.debug("Menu[%s] exited to level %d", self.id, self.level)
        return publish_event(self.id, EVENT_MENU_SUBMENU_EXITED, {
            "previousPath": previous_path,
            "currentPath": list(self._path),
            "level": self.level,
        })

    def handle_enter(self, event: KeyEvent) -> KeyOutcome:
        item = self._list.selected_item
        if item is None or item.disabled:
            return None, BubbleSignal.HANDLED, True
        if item.has_submenu:
            return self.enter_submenu(), BubbleSignal.HANDLED, True

        payload = {
            "item": item.to_dict(),
            "action": dict(item.action) if item.action is not None else None,
            "path": list(self._path),
            "level": self.level,
        }
        cmds = [publish_event(self.id, EVENT_MENU_ITEM_SELECTED, payload)]
        if item.action is not None:
            cmds.append(publish_event(self.id, EVENT_MENU_ACTION_TRIGGERED, payload))
        return batch(*cmds), BubbleSignal.HANDLED, True

    def handle_escape(self, event: KeyEvent) -> KeyOutcome:
        if self._path:
            return self.exit_submenu(), BubbleSignal.HANDLED, True
        return super().handle_escape(event)

    def delegate_to_widget(self, message: Any) -> Optional[Command]:
        return self._list.update(message)

    def _selected_dict(self) -> Optional[dict[str, Any]]:
        item = self._list.selected_item
        return item.to_dict() if item is not None else None

    def watched_fields(self) -> list[WatchedField]:
        return [
            WatchedField(
                "index",
                lambda: self._list.index,
                EVENT_MENU_ITEM_SELECTED,
                lambda old, new: {"oldIndex": old, "newIndex": new},
            ),
            WatchedField("selected", self._selected_dict),
            WatchedField("focused", lambda: self._list.focused, EVENT_FOCUS_CHANGED, focus_payload),
        ]

    def binding_context(self) -> dict[str, Any]:
        context: dict[str, Any] = {"index": self._list.index}
        selected = self._selected_dict()
        if selected is not None:
            context["selected"] = selected
        return context

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        selected = self._selected_dict()
        if selected is None:
            return {f"{self.id}_selected_index": -1, f"{self.id}_selected_item": None}, False
        return {f"{self.id}_selected_index": self._list.index, f"{self.id}_selected_item": selected}, True

    def render(self, bounds: Rect) -> list[str]:
        lines = self._list.render(bounds)
        if self._path:
            crumb = self.theme.style("dim", " › ".join(self._path))
            lines.insert(1 if self._list.title else 0, crumb)
        return lines
