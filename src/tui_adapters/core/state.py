"""State snapshots and change detection.

Components list the fields they want watched. The dispatcher captures a
snapshot before and after delegating a message to the widget, and each field
that differs becomes a notification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from tui_adapters.core.commands import Command
from tui_adapters.core.events import publish_event

# Ordered field name -> value, valid for a single dispatch
ObservableState = dict[str, Any]


@dataclass(frozen=True)
class FieldChange:
    field: str
    old: Any
    new: Any


def _has_structural_eq(value: Any) -> bool:
    return type(value).__eq__ is not object.__eq__


def values_equal(old: Any, new: Any) -> bool:
    """Compare two snapshot values.

    Identity wins; otherwise only values whose type defines ``__eq__`` are
    compared structurally. Anything else, or a comparison that raises, counts
    as changed.
    """
    if old is new:
        return True
    if not (_has_structural_eq(old) and _has_structural_eq(new)):
        return False
    try:
        return bool(old == new)
    except Exception:
        return False


def diff(old: ObservableState, new: ObservableState) -> list[FieldChange]:
    """Fields whose values differ, in the order of ``new``.

    A field present on only one side counts as changed.
    """
    changes = []
    for name, value in new.items():
        if name not in old or not values_equal(old[name], value):
            changes.append(FieldChange(name, old.get(name), value))
    for name, value in old.items():
        if name not in new:
            changes.append(FieldChange(name, value, None))
    return changes


PayloadBuilder = Callable[[Any, Any], dict[str, Any]]


@dataclass(frozen=True)
class WatchedField:
    """A snapshot field and the notification its change produces.

    Attributes:
        name: Snapshot key
        getter: Side-effect-free read of the current value
        event: Notification name, or ``None`` to track without notifying
        payload: Builds the payload from (old, new); defaults to
            ``{"oldValue": old, "newValue": new}``
    """
    name: str
    getter: Callable[[], Any]
    event: Optional[str] = None
    payload: Optional[PayloadBuilder] = None

    def build_payload(self, old: Any, new: Any) -> dict[str, Any]:
        if self.payload is not None:
            return self.payload(old, new)
        return {"oldValue": old, "newValue": new}


class StateWatcher:
    """Captures and compares a component's observable state.

    Example:
        watcher = StateWatcher("name", [
            WatchedField("value", lambda: widget.value, EVENT_INPUT_VALUE_CHANGED),
        ])
        before = watcher.capture()
        cmd = widget.update(msg)
        after = watcher.capture()
        notifications = watcher.notifications(before, after)
    """

    def __init__(self, component_id: str, fields: Sequence[WatchedField]) -> None:
        self.component_id = component_id
        self.fields = tuple(fields)
        self._by_name = {f.name: f for f in self.fields}

    def capture(self) -> ObservableState:
        return {f.name: f.getter() for f in self.fields}

    def changes(self, old: ObservableState, new: ObservableState) -> list[FieldChange]:
        return diff(old, new)

    def notifications(self, old: ObservableState, new: ObservableState) -> list[Command]:
        """One notification command per changed field that has an event."""
        cmds = []
        for change in diff(old, new):
            watched = self._by_name.get(change.field)
            if watched is None or watched.event is None:
                continue
            cmds.append(publish_event(
                self.component_id,
                watched.event,
                watched.build_payload(change.old, change.new),
            ))
        return cmds
