"""Component registry: maps a kind name to the factory that builds it."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Mapping, Optional

from tui_adapters.components.base import BaseComponent
from tui_adapters.components.chat import ChatComponent
from tui_adapters.components.input import InputComponent
from tui_adapters.components.list import ListComponent
from tui_adapters.components.menu import MenuComponent
from tui_adapters.components.progress import ProgressComponent
from tui_adapters.components.spinner import SpinnerComponent
from tui_adapters.components.table import TableComponent
from tui_adapters.components.text import TextComponent
from tui_adapters.components.textarea import TextareaComponent
from tui_adapters.components.viewport import ViewportComponent
from tui_adapters.core.config import DEFAULT_THEME, ConfigurationError, Theme

logger = logging.getLogger(__name__)

ComponentFactory = Callable[[str, Optional[Mapping[str, Any]], Theme], BaseComponent]

BUILTIN_COMPONENTS: tuple[type[BaseComponent], ...] = (
    ChatComponent,
    InputComponent,
    ListComponent,
    MenuComponent,
    ProgressComponent,
    SpinnerComponent,
    TableComponent,
    TextComponent,
    TextareaComponent,
    ViewportComponent,
)


class ComponentRegistry:
    """Kind name -> factory."""

    def __init__(self) -> None:
        self._factories: dict[str, ComponentFactory] = {}

    def register(self, kind: str, factory: ComponentFactory, replace: bool = False) -> None:
        if not kind:
            raise ValueError("Component kind must be non-empty")
        if kind in self._factories and not replace:
            raise ValueError(f"Component kind {kind!r} is already registered")
        self._factories[kind] = factory
        logger.debug("Registered component kind %r", kind)

    def unregister(self, kind: str) -> None:
        self._factories.pop(kind, None)

    def create(
        self,
        kind: str,
        component_id: str,
        props: Optional[Mapping[str, Any]] = None,
        theme: Theme = DEFAULT_THEME,
    ) -> BaseComponent:
        """Build a component.

        Raises:
            ConfigurationError: If ``kind`` is unknown or ``props`` is invalid.
        """
        factory = self._factories.get(kind)
        if factory is None:
            known = ", ".join(self.kinds()) or "none"
            raise ConfigurationError(f"Unknown component kind {kind!r} (known: {known})")
        return factory(component_id, props, theme)

    def component_class(self, kind: str) -> Optional[type[BaseComponent]]:
        """The class behind ``kind``, or ``None`` for unknown kinds and plain factories."""
        factory = self._factories.get(kind)
        if isinstance(factory, type) and issubclass(factory, BaseComponent):
            return factory
        return None

    def kinds(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, kind: object) -> bool:
        return kind in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.kinds())

    def __len__(self) -> int:
        return len(self._factories)


def create_default_registry() -> ComponentRegistry:
    registry = ComponentRegistry()
    for component_class in BUILTIN_COMPONENTS:
        registry.register(component_class.kind, component_class)
    return registry


default_registry = create_default_registry()


def create_component(
    kind: str,
    component_id: str,
    props: Optional[Mapping[str, Any]] = None,
    theme: Theme = DEFAULT_THEME,
) -> BaseComponent:
    """Build a built-in component by kind."""
    return default_registry.create(kind, component_id, props, theme)
