"""Component adapters exposing widget models through one contract."""

from tui_adapters.components.base import BaseComponent, ComponentProps, FocusableComponent
from tui_adapters.components.chat import ChatComponent, ChatMessage
from tui_adapters.components.input import InputComponent
from tui_adapters.components.list import ListComponent
from tui_adapters.components.menu import MenuComponent, MenuItem
from tui_adapters.components.progress import ProgressComponent
from tui_adapters.components.spinner import SpinnerComponent
from tui_adapters.components.table import TableComponent
from tui_adapters.components.text import TextComponent
from tui_adapters.components.textarea import TextareaComponent
from tui_adapters.components.viewport import ViewportComponent
from tui_adapters.components.registry import (
    ComponentRegistry,
    create_component,
    default_registry,
)

__all__ = [
    "BaseComponent",
    "ComponentProps",
    "FocusableComponent",
    "ChatComponent",
    "ChatMessage",
    "InputComponent",
    "ListComponent",
    "MenuComponent",
    "MenuItem",
    "ProgressComponent",
    "SpinnerComponent",
    "TableComponent",
    "TextComponent",
    "TextareaComponent",
    "ViewportComponent",
    "ComponentRegistry",
    "create_component",
    "default_registry",
]
