"""Tests for property coercion, themes, props loading and the component registry."""

import json
from pathlib import Path

import pytest

from tui_adapters.components.registry import ComponentRegistry, create_component, default_registry
from tui_adapters.components.text import TextComponent
from tui_adapters.core.config import (
    DEFAULT_THEME,
    PLAIN_THEME,
    ConfigurationError,
    Theme,
    coerce_bool,
    coerce_float,
    coerce_int,
    coerce_list,
    coerce_str,
    load_props,
)


class TestCoercion:
    """Tests for the coerce_* helpers."""

    def test_str(self) -> None:
        assert coerce_str({"a": 3}, "a") == "3"
        assert coerce_str({"a": None}, "a", "d") == "d"
        assert coerce_str({}, "a") == ""
        with pytest.raises(ConfigurationError):
            coerce_str({"a": True}, "a")

    def test_int(self) -> None:
        assert coerce_int({"a": 4.0}, "a") == 4
        assert coerce_int({"a": " 12 "}, "a") == 12
        assert coerce_int({}, "a", 7) == 7
        for bad in (True, 1.5, "x", [1]):
            with pytest.raises(ConfigurationError):
                coerce_int({"a": bad}, "a")
        with pytest.raises(ConfigurationError, match=">= 0"):
            coerce_int({"a": -1}, "a", minimum=0)

    def test_float(self) -> None:
        assert coerce_float({"a": "2.5"}, "a") == 2.5
        assert coerce_float({"a": 3}, "a") == 3.0
        with pytest.raises(ConfigurationError):
            coerce_float({"a": "nope"}, "a")

    def test_bool(self) -> None:
        assert coerce_bool({"a": "Yes"}, "a") is True
        assert coerce_bool({"a": 0}, "a") is False
        assert coerce_bool({}, "a", True) is True
        with pytest.raises(ConfigurationError):
            coerce_bool({"a": "maybe"}, "a")

    def test_list(self) -> None:
        assert coerce_list({"a": ("x",)}, "a") == ["x"]
        assert coerce_list({}, "a") == []
        with pytest.raises(ConfigurationError):
            coerce_list({"a": "x"}, "a")


class TestTheme:
    """Tests for Theme."""

    def test_from_dict_overrides(self) -> None:
        theme = Theme.from_dict({"selected": "\x1b[31m"})
        assert theme.selected == "\x1b[31m"
        assert theme.title == DEFAULT_THEME.title

    def test_from_dict_rejects_unknown_and_non_strings(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown theme key"):
            Theme.from_dict({"sparkle": ""})
        with pytest.raises(ConfigurationError):
            Theme.from_dict({"selected": 1})

    def test_style(self) -> None:
        assert DEFAULT_THEME.style("dim", "x") == "\x1b[2mx\x1b[0m"
        assert PLAIN_THEME.style("dim", "x") == "x"
        assert DEFAULT_THEME.style("dim", "") == ""


class TestLoadProps:
    """Tests for load_props."""

    def test_inline(self) -> None:
        assert load_props('{"value": "x"}') == {"value": "x"}

    def test_empty(self) -> None:
        assert load_props(None) == {}
        assert load_props("") == {}

    def test_file(self, tmp_path: Path) -> None:
        path = tmp_path / "props.json"
        path.write_text(json.dumps({"items": ["a"]}), encoding="utf-8")
        assert load_props(str(path)) == {"items": ["a"]}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_props(str(tmp_path / "missing.json"))

    def test_invalid(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid props JSON"):
            load_props("{nope")

    def test_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="JSON object"):
            load_props(str(path))


class TestComponentRegistry:
    """Tests for ComponentRegistry."""

    def test_builtin_kinds(self) -> None:
        assert default_registry.kinds() == [
            "chat", "input", "list", "menu", "progress",
            "spinner", "table", "text", "textarea", "viewport",
        ]
        assert "menu" in default_registry
        assert len(default_registry) == 10

    def test_create(self) -> None:
        component = create_component("text", "greeting", {"content": "hi"})
        assert isinstance(component, TextComponent)
        assert component.id == "greeting"

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown component kind 'slider'"):
            create_component("slider", "s")

    def test_invalid_props_surface(self) -> None:
        with pytest.raises(ConfigurationError):
            create_component("progress", "p", {"percent": "lots"})

    def test_register_duplicate(self) -> None:
        registry = ComponentRegistry()
        registry.register("text", TextComponent)
        with pytest.raises(ValueError, match="already registered"):
            registry.register("text", TextComponent)
        registry.register("text", TextComponent, replace=True)
        assert registry.component_class("text") is TextComponent

    def test_plain_factory(self) -> None:
        registry = ComponentRegistry()
        registry.register("banner", lambda cid, props, theme: TextComponent(cid, {"content": "!"}, theme))
        assert registry.component_class("banner") is None
        assert registry.create("banner", "b").view() == "!"
        registry.unregister("banner")
        assert "banner" not in registry
