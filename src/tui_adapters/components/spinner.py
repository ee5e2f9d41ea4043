"""Spinner component."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Optional

from tui_adapters.components.base import BaseComponent, ComponentProps
from tui_adapters.core.commands import Command, batch
from tui_adapters.core.config import (
    DEFAULT_THEME,
    ConfigurationError,
    Theme,
    coerce_bool,
    coerce_int,
    coerce_list,
    coerce_str,
)
from tui_adapters.core.events import EVENT_SPINNER_TICK, publish_event
from tui_adapters.core.messages import StateUpdateMessage
from tui_adapters.core.state import WatchedField
from tui_adapters.widgets.base import Rect
from tui_adapters.widgets.spinner import DEFAULT_STYLE, SPINNER_STYLES, Spinner, SpinnerStyle


@dataclass
class SpinnerProps(ComponentProps):
    style: str = DEFAULT_STYLE
    frames: list[str] = field(default_factory=list)
    speed: int = 0  # milliseconds per frame, 0 = style default
    label: str = ""
    running: bool = True

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> SpinnerProps:
        style = coerce_str(props, "style", DEFAULT_STYLE).lower()
        if style not in SPINNER_STYLES:
            raise ConfigurationError(f"Unknown spinner style {style!r}; choose from {', '.join(SPINNER_STYLES)}")
        frames = coerce_list(props, "frames")
        if not all(isinstance(f, str) for f in frames):
            raise ConfigurationError("Property 'frames' must be a list of strings")
        return cls(
            **cls._common(props),
            style=style,
            frames=frames,
            speed=coerce_int(props, "speed", 0, minimum=0),
            label=coerce_str(props, "label"),
            running=coerce_bool(props, "running", True),
        )


class SpinnerComponent(BaseComponent):
    """Activity indicator. Publishes SPINNER_TICK for every frame while running."""

    kind: ClassVar[str] = "spinner"
    Props = SpinnerProps

    SUBSCRIBED_MESSAGE_TYPES: ClassVar[tuple[str, ...]] = (
        "TargetedMessage",
        "TickMessage",
        "StateUpdateMessage",
    )

    def __init__(
        self,
        component_id: str,
        props: Optional[Mapping[str, Any]] = None,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        super().__init__(component_id, theme)
        self._spinner = Spinner()
        self.apply_config(props or {})

    def configure(self, props: SpinnerProps) -> None:
        base = SPINNER_STYLES[props.style]
        frames = tuple(props.frames) or base.frames
        interval = props.speed / 1000 if props.speed else base.interval
        self._spinner.style = SpinnerStyle(frames, interval)
        self._spinner.running = props.running

    @property
    def running(self) -> bool:
        return self._spinner.running

    @property
    def interval(self) -> float:
        return self._spinner.style.interval

    def init(self) -> Optional[Command]:
        return self._spinner.tick() if self._spinner.running else None

    def cleanup(self) -> None:
        self._spinner.running = False

    def delegate(self, message: Any) -> Optional[Command]:
        if isinstance(message, StateUpdateMessage):
            if message.key == "running" and isinstance(message.value, bool):
                was_running = self._spinner.running
                self._spinner.running = message.value
                if message.value and not was_running:
                    return self._spinner.tick()
            return None
        if not self._spinner.accepts(message):
            return None
        next_tick = self._spinner.update(message)
        tick_event = publish_event(self.id, EVENT_SPINNER_TICK, {
            "running": True,
            "frame": self._spinner.frame,
        })
        return batch(next_tick, tick_event)

    def watched_fields(self) -> list[WatchedField]:
        return [WatchedField("frame", lambda: self._spinner.frame)]

    def get_state_changes(self) -> tuple[dict[str, Any], bool]:
        return {f"{self.id}_running": self._spinner.running}, True

    def render(self, bounds: Rect) -> list[str]:
        frame = self._spinner.render(bounds)[0]
        label = self.props.label
        return [f"{frame} {label}" if label else frame]
