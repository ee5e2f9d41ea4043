"""Widget models wrapped by the component adapters."""

from tui_adapters.widgets.base import BaseWidget, Rect, Widget
from tui_adapters.widgets.textinput import EchoMode, TextInput
from tui_adapters.widgets.textarea import TextArea
from tui_adapters.widgets.itemlist import ItemList, ListItem
from tui_adapters.widgets.table import Column, Table
from tui_adapters.widgets.viewport import Viewport
from tui_adapters.widgets.spinner import SPINNER_STYLES, Spinner
from tui_adapters.widgets.progress import ProgressBar

__all__ = [
    "BaseWidget",
    "Rect",
    "Widget",
    "EchoMode",
    "TextInput",
    "TextArea",
    "ItemList",
    "ListItem",
    "Column",
    "Table",
    "Viewport",
    "SPINNER_STYLES",
    "Spinner",
    "ProgressBar",
]
