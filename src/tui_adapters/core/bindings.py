"""Component key bindings.

A component carries an ordered table of user-configured bindings. Each
binding maps one or more key chords to exactly one of three behaviours:

* ``action``: hand a :class:`BindingAction` to the host for execution,
* ``event``: publish a named notification with the component's context,
* ``use_default``: claim the key but let the component's own handling run.

Patterns are normalized once when the table is built; a malformed pattern is
logged and never matches.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Iterator, Mapping, Optional

from tui_adapters.core.commands import Command
from tui_adapters.core.config import ConfigurationError
from tui_adapters.core.dispatch import BubbleSignal
from tui_adapters.core.events import publish_event
from tui_adapters.core.input import Key, KeyEvent, parse_key_string
from tui_adapters.core.messages import ExecuteActionMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindingAction:
    """Host-side action triggered by a binding.

    Attributes:
        process: Named process to run on the host
        script: Script path, requires ``method``
        method: Function inside ``script``
        args: Positional arguments; when empty the component context is injected
        on_success: Action name to run after success
        on_error: Action name to run on failure
        payload: Free-form data passed through to the host
    """
    process: str = ""
    script: str = ""
    method: str = ""
    args: tuple[Any, ...] = ()
    on_success: str = ""
    on_error: str = ""
    payload: dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        """Raise ConfigurationError unless the action names something to run."""
        if not self.process and not self.script:
            raise ConfigurationError("Action requires either 'process' or 'script'")
        if self.script and not self.method:
            raise ConfigurationError("Action with 'script' requires 'method'")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BindingAction:
        """Build and validate an action from a props mapping.

        Accepts both ``onSuccess`` and ``on_success`` spellings.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Action must be an object, got {type(data).__name__}")
        args = data.get("args") or ()
        if not isinstance(args, (list, tuple)):
            raise ConfigurationError("Action 'args' must be a list")
        payload = data.get("payload") or {}
        if not isinstance(payload, Mapping):
            raise ConfigurationError("Action 'payload' must be an object")
        action = cls(
            process=str(data.get("process") or ""),
            script=str(data.get("script") or ""),
            method=str(data.get("method") or ""),
            args=tuple(args),
            on_success=str(data.get("onSuccess") or data.get("on_success") or ""),
            on_error=str(data.get("onError") or data.get("on_error") or ""),
            payload=dict(payload),
        )
        action.validate()
        return action


@dataclass(frozen=True)
class ComponentBinding:
    """One user-configured key binding.

    Exactly one mode applies, checked in order: ``action``, ``event``,
    ``use_default``.
    """
    keys: tuple[str, ...]
    action: Optional[BindingAction] = None
    event: str = ""
    use_default: bool = False
    enabled: bool = True
    description: str = ""
    shortcut: str = ""

    @property
    def mode(self) -> str:
        if self.action is not None:
            return "action"
        if self.event:
            return "event"
        if self.use_default:
            return "use_default"
        return ""

    @property
    def key_display(self) -> str:
        """Display string for the keys, or the ``shortcut`` override."""
        if self.shortcut:
            return self.shortcut
        return "/".join(_chord_to_display(k) for k in self.keys)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ComponentBinding:
        """Build a binding from a props entry.

        Key patterns are kept as given; the table normalizes them.

        Raises:
            ConfigurationError: If the entry has no keys or no mode.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Binding must be an object, got {type(data).__name__}")

        keys: list[Any] = []
        if "keys" in data:
            raw_keys = data["keys"]
            if isinstance(raw_keys, str):
                keys.append(raw_keys)
            elif isinstance(raw_keys, (list, tuple)):
                keys.extend(raw_keys)
            else:
                raise ConfigurationError("Binding 'keys' must be a string or a list")
        if "key" in data:
            keys.insert(0, data["key"])
        if not keys:
            raise ConfigurationError("Binding requires 'key' or 'keys'")

        action = None
        if data.get("action") is not None:
            action = BindingAction.from_dict(data["action"])
        event = data.get("event") or ""
        if not isinstance(event, str):
            raise ConfigurationError("Binding 'event' must be a string")
        use_default = bool(data.get("useDefault", data.get("use_default", False)))
        if action is None and not event and not use_default:
            raise ConfigurationError(
                f"Binding for {keys[0]!r} needs one of 'action', 'event' or 'useDefault'"
            )

        return cls(
            keys=tuple(keys),
            action=action,
            event=event,
            use_default=use_default,
            enabled=bool(data.get("enabled", True)),
            description=str(data.get("description") or ""),
            shortcut=str(data.get("shortcut") or ""),
        )


_DISPLAY_NAMES: dict[Key, str] = {
    Key.UP: "↑",
    Key.DOWN: "↓",
    Key.LEFT: "←",
    Key.RIGHT: "→",
    Key.ENTER: "Enter",
    Key.ESCAPE: "Esc",
    Key.TAB: "Tab",
    Key.BACKSPACE: "Bksp",
    Key.HOME: "Home",
    Key.END: "End",
    Key.PAGE_UP: "PgUp",
    Key.PAGE_DOWN: "PgDn",
    Key.DELETE: "Del",
    Key.INSERT: "Ins",
}


def _chord_to_display(pattern: Any) -> str:
    """Convert a key pattern to display text, e.g. ``ctrl+s`` -> ``Ctrl+S``."""
    if not isinstance(pattern, str):
        return repr(pattern)
    try:
        key, char, mods = parse_key_string(pattern)
    except ValueError:
        return pattern
    parts = [m.capitalize() for m in ("ctrl", "alt", "shift") if m in mods]
    if key is not None:
        parts.append(_DISPLAY_NAMES.get(key, key.name))
    elif char == " ":
        parts.append("Space")
    else:
        parts.append(char.upper() if mods else char)
    return "+".join(parts)


def _normalize_pattern(pattern: Any) -> Optional[str]:
    if not isinstance(pattern, str):
        return None
    try:
        return KeyEvent.parse(pattern).string
    except ValueError:
        return None


class BindingTable:
    """Ordered, immutable set of bindings with pre-normalized patterns.

    Example:
        table = BindingTable([
            ComponentBinding(keys=("ctrl+s",), event="SAVE", description="Save"),
        ])
        binding = table.match(event)
        if binding:
            cmd, signal, consumed = handle_binding(component, event, binding)
    """

    def __init__(self, bindings: Iterable[ComponentBinding] = ()) -> None:
        self._bindings: tuple[ComponentBinding, ...] = tuple(bindings)
        self._entries: list[tuple[frozenset[str], ComponentBinding]] = []
        for binding in self._bindings:
            patterns: set[str] = set()
            for pattern in binding.keys:
                normalized = _normalize_pattern(pattern)
                if normalized is None:
                    logger.warning("Ignoring malformed key pattern %r in binding %r", pattern, binding.description or binding.mode)
                    continue
                patterns.add(normalized)
            self._entries.append((frozenset(patterns), binding))

    def __iter__(self) -> Iterator[ComponentBinding]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __bool__(self) -> bool:
        return bool(self._bindings)

    @property
    def bindings(self) -> tuple[ComponentBinding, ...]:
        return self._bindings

    def match(self, event: KeyEvent) -> Optional[ComponentBinding]:
        """First enabled binding whose pattern equals the event's key string."""
        key = event.string
        for patterns, binding in self._entries:
            if binding.enabled and key in patterns:
                return binding
        return None

    def generate_help_text(self, width: int = 48) -> list[str]:
        """Help lines for enabled bindings: ``"    keys          description"``."""
        lines = []
        for binding in self._bindings:
            if not binding.enabled:
                continue
            key_str = binding.key_display
            desc = binding.description or _describe_mode(binding)
            padding = max(1, 18 - len(key_str))
            line = f"    {key_str}{' ' * padding}{desc}"
            if len(line) > width:
                line = line[:width - 1] + "…"
            lines.append(line)
        return lines

    def get_status_bar_hints(self, max_hints: int = 6) -> list[tuple[str, str]]:
        """(key_display, description) pairs for bindings that have a description."""
        hints = []
        for binding in self._bindings:
            if binding.enabled and binding.description:
                hints.append((binding.key_display, binding.description))
                if len(hints) >= max_hints:
                    break
        return hints


def _describe_mode(binding: ComponentBinding) -> str:
    if binding.action is not None:
        return binding.action.process or f"{binding.action.script}:{binding.action.method}"
    if binding.event:
        return binding.event
    return "(default)"


def parse_bindings(raw: Any) -> BindingTable:
    """Build a table from the ``bindings`` prop (a list of objects).

    Raises:
        ConfigurationError: If ``raw`` is not a list or an entry is invalid.
    """
    if raw is None:
        return BindingTable()
    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError(f"'bindings' must be a list, got {type(raw).__name__}")
    bindings = []
    for i, entry in enumerate(raw):
        try:
            bindings.append(ComponentBinding.from_dict(entry))
        except ConfigurationError as e:
            raise ConfigurationError(f"bindings[{i}]: {e}") from e
    return BindingTable(bindings)


def execute_action(component: Any, action: BindingAction) -> Command:
    """Command delivering a copy of ``action`` to the host.

    Without explicit ``args`` the component context becomes the only argument.
    """
    args = action.args
    if not args:
        context = {"componentID": component.id, "timestamp": datetime.now()}
        context.update(component.binding_context())
        args = (context,)
    message = ExecuteActionMessage(
        action=dataclasses.replace(action, args=args, payload=dict(action.payload)),
        source_id=component.id,
    )

    def _execute() -> ExecuteActionMessage:
        return message

    return _execute


def handle_binding(
    component: Any,
    event: KeyEvent,
    binding: ComponentBinding,
) -> tuple[Optional[Command], BubbleSignal, bool]:
    """Run a matched binding and report ``(command, signal, consumed)``."""
    if binding.action is not None:
        logger.debug("Component[%s] binding %s -> action %s", component.id, event, binding.action.process or binding.action.method)
        return execute_action(component, binding.action), BubbleSignal.HANDLED, True

    if binding.event:
        logger.debug("Component[%s] binding %s -> event %s", component.id, event, binding.event)
        payload = {"key": event.string}
        payload.update(component.binding_context())
        return publish_event(component.id, binding.event, payload), BubbleSignal.HANDLED, True

    return None, BubbleSignal.IGNORED, False
