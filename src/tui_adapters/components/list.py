"""Selectable list component."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.components.base import ComponentProps, FocusableComponent, focus_payload
from tui_adapters.core.commands import Command
from tui_adapters.core.config import (
    DEFAULT_THEME,
    ConfigurationError,
    Theme,
    coerce_bool,
    coerce_list,
    coerce_str,
)
from tui_adapters.core.dispatch import BubbleSignal, KeyOutcome
from tui_adapters.core.events import (
    EVENT_FOCUS_CHANGED,
    EVENT_LIST_ITEM_SELECTED,
    EVENT_LIST_SELECTION_CHANGED,
    publish_event,
)
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.state import WatchedField
from tui_adapters.widgets.base import Rect
from tui_adapters.widgets.itemlist import ItemList, ListItem


def parse_list_item(raw: Any) -> ListItem:
    """Accept a bare string or an object with at least a ``title``."""
    if isinstance(raw, str):
        return ListItem(title=raw, value=raw)
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"List item must be a string or an object, got {type(raw).__name__}")
    title = raw.get("title")
    if not isinstance(title, str) or not title:
        raise ConfigurationError("List item requires a non-empty 'title'")
    known = {"title", "description", "value", "disabled", "selected"}
    return ListItem(
        title=title,
        description=str(raw.get("description") or ""),
        value=raw.get("value"),
        disabled=bool(raw.get("disabled", False)),
        data={k: v for k, v in raw.items() if k not in known},
    )


@dataclass
class ListProps(ComponentProps):
    items: list[ListItem] = field(default_factory=list)
    title: str = ""
    show_title: bool = True
    selected: Optional[int] = None

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> ListProps:
        raw_items = coerce_list(props, "items")
        items = [parse_list_item(item) for item in raw_items]
        selected = None
        for i, raw in enumerate(raw_items):
            if isinstance(raw, Mapping) and raw.get("selected"):
                selected = i
                break
        return cls(
            **cls._common(props),
            items=items,
            title=coerce_str(props, "title"),
            show_title=coerce_bool(props, "showTitle", True),
            selected=selected,
        )


class ListComponent(FocusableComponent):
    """Vertical list; Enter selects the highlighted item."""

    kind: ClassVar[str] = "list"
    Props = ListProps

    SPECIAL_KEYS: ClassVar[dict[str, str]] = {
        **FocusableComponent.SPECIAL_KEYS,
        "enter": "handle_enter",
    }

    def __init__(
        self,
        component_id: str,
        props: Optional[Mapping[str, Any]] = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__(component_id, theme)
        self._list = ItemList(theme=theme)
        self.apply_config(props or {})

    def configure(self, props: ListProps) -> None:
        self._list.title = props.title if props.show_title else ""
        self._list.height = props.height or 10
        self._list.set_items(props.items)
        if props.selected is not None:
            self._list.select(props.selected)

    @property
    def index(self) -> int:
        return self._list.index

    @property
    def selected_item(self) -> Optional[ListItem]:
        return self._list.selected_item

    @property
    def focused(self) -> bool:
        return self._list.focused

    def set_focus(self, focused: bool) -> None:
        if focused:
            self._list.focus()
        else:
            self._list.blur()

    def handle_enter(self, event: KeyEvent) -> KeyOutcome:
        item = self._list.selected_item
        if item is None:
            return None, BubbleSignal.IGNORED, False
        if item.disabled:
            return None, BubbleSignal.HANDLED, True
        payload = {
            "item": item.to_dict(),
            "index": self._list.index,
            "title": item.title,
            "value": item.value,
        }
        return publish_event(self.id, EVENT_LIST_ITEM_SELECTED, payload), BubbleSignal.HANDLED, True

    def delegate_to_widget(self, message: Any) -> Optional[Command]:
        return self._list.update(message)

    def _selected_dict(self) -> Optional[dict[str, Any]]:
        item = self._list.selected_item
        return item.to_dict() if item is not None else None

    def _selection_payload(self, old: Any, new: Any) -> dict[str, Any]:
        return {"oldIndex": old, "newIndex": new, "selected": self._selected_dict()}

    def watched_fields(self) -> list[WatchedField]:
        return [
            WatchedField("index", lambda: self._list.index, EVENT_LIST_SELECTION_CHANGED, self._selection_payload),
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
        return self._list.render(bounds)
