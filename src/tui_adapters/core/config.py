"""Theme and property-bag configuration helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional


class ConfigurationError(ValueError):
    """Raised when component props or binding definitions are invalid."""


# SGR sequences
RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
REVERSE = "\x1b[7m"


@dataclass(frozen=True)
class Theme:
    """Styles shared by every component view.

    Each field is an SGR prefix; views close styled runs with ``RESET``.
    """
    selected: str = "\x1b[1;36m"
    cursor: str = REVERSE
    prompt: str = "\x1b[36m"
    placeholder: str = DIM
    dim: str = DIM
    title: str = "\x1b[1;33m"
    disabled: str = "\x1b[90m"
    user_prefix: str = "\x1b[1;32m"
    assistant_prefix: str = "\x1b[1;35m"
    progress_full: str = "\x1b[32m"
    progress_empty: str = "\x1b[90m"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Theme:
        """Build a theme overriding the defaults with ``data``.

        Raises:
            ConfigurationError: On unknown keys or non-string values.
        """
        known = {f.name for f in fields(cls)}
        overrides: dict[str, str] = {}
        for key, value in data.items():
            if key not in known:
                raise ConfigurationError(f"Unknown theme key: {key!r}")
            if not isinstance(value, str):
                raise ConfigurationError(f"Theme value for {key!r} must be a string, got {type(value).__name__}")
            overrides[key] = value
        return cls(**overrides)

    def style(self, name: str, text: str) -> str:
        """Wrap ``text`` in the named style."""
        prefix = getattr(self, name)
        if not prefix or not text:
            return text
        return f"{prefix}{text}{RESET}"


# Resolved once; components receive it explicitly
DEFAULT_THEME = Theme()

# Plain theme for tests and non-terminal output
PLAIN_THEME = Theme(**{f.name: "" for f in fields(Theme)})


def coerce_str(props: Mapping[str, Any], key: str, default: str = "") -> str:
    value = props.get(key, default)
    if value is None:
        return default
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    raise ConfigurationError(f"Property {key!r} must be a string, got {type(value).__name__}")


def coerce_int(
    props: Mapping[str, Any],
    key: str,
    default: int = 0,
    minimum: Optional[int] = None,
) -> int:
    """Read an integer property.

    Accepts ints, integral floats (JSON has no int type) and digit strings.

    Raises:
        ConfigurationError: If the value is not an integer or is below ``minimum``.
    """
    value = props.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigurationError(f"Property {key!r} must be an integer, got bool")
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigurationError(f"Property {key!r} must be an integer, got {value}")
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ConfigurationError(f"Property {key!r} must be an integer, got {value!r}") from None
    elif not isinstance(value, int):
        raise ConfigurationError(f"Property {key!r} must be an integer, got {type(value).__name__}")
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"Property {key!r} must be >= {minimum}, got {value}")
    return value


def coerce_float(props: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    value = props.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigurationError(f"Property {key!r} must be a number, got {type(value).__name__}")
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Property {key!r} must be a number, got {value!r}") from None


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0", ""}


def coerce_bool(props: Mapping[str, Any], key: str, default: bool = False) -> bool:
    value = props.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ConfigurationError(f"Property {key!r} must be a boolean, got {value!r}")


def coerce_list(props: Mapping[str, Any], key: str) -> list[Any]:
    value = props.get(key)
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"Property {key!r} must be a list, got {type(value).__name__}")
    return list(value)


def load_props(source: Optional[str]) -> dict[str, Any]:
    """Load a props mapping from inline JSON or a path to a JSON file.

    Raises:
        ConfigurationError: If the JSON is invalid or is not an object.
    """
    if not source:
        return {}
    text = source
    if not source.lstrip().startswith("{"):
        path = Path(source)
        if not path.is_file():
            raise ConfigurationError(f"Props file not found: {source}")
        text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid props JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError("Props must be a JSON object")
    return data
