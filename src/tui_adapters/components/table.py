"""Table component."""

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
    coerce_int,
    coerce_list,
)
from tui_adapters.core.dispatch import BubbleSignal, KeyOutcome
from tui_adapters.core.events import (
    EVENT_FOCUS_CHANGED,
    EVENT_ROW_DOUBLE_CLICKED,
    EVENT_ROW_SELECTED,
    EVENT_TABLE_ITEM_SELECTED,
    publish_event,
)
from tui_adapters.core.input import KeyEvent
from tui_adapters.core.state import WatchedField
from tui_adapters.widgets.base import Rect
from tui_adapters.widgets.table import Column, Table


def parse_column(raw: Any) -> Column:
    if isinstance(raw, str):
        return Column(title=raw, key=raw)
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Column must be a string or an object, got {type(raw).__name__}")
    title = raw.get("title") or raw.get("key")
    if not isinstance(title, str) or not title:
        raise ConfigurationError("Column requires a 'title' or 'key'")
    return Column(
        title=title,
        key=str(raw.get("key") or ""),
        width=coerce_int(raw, "width", max(len(title), 10), minimum=1),
    )


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def parse_row(raw: Any, columns: list[Column]) -> list[str]:
    """A row is a list of cells, or an object keyed by column field."""
    if isinstance(raw, Mapping):
        return [_cell(raw.get(col.field)) for col in columns]
    if isinstance(raw, (list, tuple)):
        return [_cell(v) for v in raw]
    raise ConfigurationError(f"Table row must be a list or an object, got {type(raw).__name__}")


@dataclass
class TableProps(ComponentProps):
    columns: list[Column] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    show_header: bool = True

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> TableProps:
        columns = [parse_column(c) for c in coerce_list(props, "columns")]
        rows = [parse_row(r, columns) for r in coerce_list(props, "data")]
        return cls(
            **cls._common(props),
            columns=columns,
            rows=rows,
            show_header=coerce_bool(props, "showHeader", True),
        )


class TableComponent(FocusableComponent):
    """Table with a row cursor. Enter reports the current row."""

    kind: ClassVar[str] = "table"
    Props = TableProps

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
        self._table = Table(theme=theme)
        self.apply_config(props or {})

    def configure(self, props: TableProps) -> None:
        self._table.columns = list(props.columns)
        self._table.height = props.height or 10
        self._table.show_header = props.show_header
        self._table.set_rows(props.rows)

    @property
    def cursor(self) -> int:
        return self._table.cursor

    @property
    def selected_row(self) -> Optional[list[str]]:
        return self._table.selected_row

    @property
    def focused(self) -> bool:
        return self._table.focused

    def set_focus(self, focused: bool) -> None:
        if focused:
            self._table.focus()
        else:
            self._table.blur()

    def handle_enter(self, event: KeyEvent) -> KeyOutcome:
        row = self._table.selected_row
        if row is None:
            return None, BubbleSignal.HANDLED, True
        payload = {
            "rowIndex": self._table.cursor,
            "rowData": row,
            "tableID": self.id,
            "trigger": "enter_key",
        }
        return publish_event(self.id, EVENT_ROW_DOUBLE_CLICKED, payload), BubbleSignal.HANDLED, True

    def delegate_to_widget(self, message: Any) -> Optional[Command]:
        return self._table.update(message)

    def watched_fields(self) -> list[WatchedField]:
        return [
            WatchedField(
                "index",
                lambda: self._table.cursor,
                EVENT_ROW_SELECTED,
                lambda old, new: {"oldIndex": old, "newIndex": new},
            ),
            WatchedField(
                "selected",
                lambda: self._table.selected_row,
                EVENT_TABLE_ITEM_SELECTED,
                lambda old, new: {"oldSelected": old, "newSelected": new},
            ),
            WatchedField("focused", lambda: self._table.focused, EVENT_FOCUS_CHANGED, focus_payload),
        ]

    def binding_context(self) -> dict[str, Any]:
        context: dict[str, Any] = {"index": self._table.cursor}
        row = self._table.selected_row
        if row is not None:
            context["selected"] = row
        return context

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        row = self._table.selected_row
        changes = {
            f"{self.id}_selected_row": self._table.cursor,
            f"{self.id}_selected_data": row,
        }
        return changes, row is not None

    def render(self, bounds: Rect) -> list[str]:
        return self._table.render(bounds)
