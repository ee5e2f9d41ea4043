"""Keyboard input handling with event abstraction."""

from __future__ import annotations

import os
import select
import sys
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    INSERT = auto()
    F1 = auto()
    F2 = auto()
    F3 = auto()
    F4 = auto()
    F5 = auto()
    F10 = auto()
    F12 = auto()


# Canonical names used in normalized key strings
KEY_NAMES: dict[Key, str] = {
    Key.UP: "up",
    Key.DOWN: "down",
    Key.LEFT: "left",
    Key.RIGHT: "right",
    Key.ENTER: "enter",
    Key.ESCAPE: "esc",
    Key.TAB: "tab",
    Key.BACKSPACE: "backspace",
    Key.HOME: "home",
    Key.END: "end",
    Key.PAGE_UP: "pgup",
    Key.PAGE_DOWN: "pgdown",
    Key.DELETE: "delete",
    Key.INSERT: "insert",
    Key.F1: "f1",
    Key.F2: "f2",
    Key.F3: "f3",
    Key.F4: "f4",
    Key.F5: "f5",
    Key.F10: "f10",
    Key.F12: "f12",
}

_NAMED_KEYS: dict[str, Key] = {name: key for key, name in KEY_NAMES.items()}

# Spellings accepted in key strings besides the canonical names
_KEY_ALIASES: dict[str, str] = {
    "escape": "esc",
    "return": "enter",
    "pageup": "pgup",
    "pagedown": "pgdown",
    "pgdn": "pgdown",
    "del": "delete",
    "ins": "insert",
    "bksp": "backspace",
    "space": " ",
    "comma": ",",
}

# Modifier order in normalized strings
MODIFIERS = ("ctrl", "alt", "shift")


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character if printable
    raw: str = ""  # Raw escape sequence
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.char is not None and self.key is None

    @property
    def string(self) -> str:
        """Normalized key string, e.g. ``"enter"``, ``"ctrl+c"``, ``"a"``."""
        if self.key is not None:
            base = KEY_NAMES[self.key]
        elif self.char is not None:
            base = self.char
        else:
            return self.raw
        parts = [
            name for name, on in zip(MODIFIERS, (self.ctrl, self.alt, self.shift)) if on
        ]
        parts.append(base)
        return "+".join(parts)

    @classmethod
    def parse(cls, text: str) -> KeyEvent:
        """Build an event from a key string such as ``"shift+enter"``.

        Raises:
            ValueError: If the string is not a valid key.
        """
        key, char, mods = parse_key_string(text)
        return cls(
            key=key,
            char=char,
            raw=text,
            ctrl="ctrl" in mods,
            alt="alt" in mods,
            shift="shift" in mods,
        )

    def __str__(self) -> str:
        return self.string


def parse_key_string(text: str) -> tuple[Optional[Key], Optional[str], frozenset[str]]:
    """Split a key string into (named key, character, modifiers).

    Exactly one of named key / character is set. Modifiers are case-insensitive,
    named keys are case-insensitive, single characters keep their case.

    Raises:
        ValueError: If the string is empty, has an unknown modifier, a
            modifier without a key, or an unknown multi-character key name.
    """
    if not isinstance(text, str) or text == "":
        raise ValueError(f"Empty key string: {text!r}")

    # A lone "+" or a chord ending in "++" means the plus character itself
    if text == "+":
        return None, "+", frozenset()
    if text.endswith("++"):
        head, base = text[:-2], "+"
        mod_parts = head.split("+") if head else []
    else:
        parts = text.split("+")
        base = parts[-1]
        mod_parts = parts[:-1]

    mods: set[str] = set()
    for part in mod_parts:
        name = part.strip().lower()
        if name not in MODIFIERS:
            raise ValueError(f"Unknown modifier {part!r} in key string {text!r}")
        mods.add(name)

    if base == "":
        raise ValueError(f"Modifier without a key in key string {text!r}")

    if len(base) == 1:
        if base == "\t":
            return Key.TAB, None, frozenset(mods)
        if base in "\r\n":
            return Key.ENTER, None, frozenset(mods)
        # ctrl+letter chords are case-insensitive
        char = base.lower() if "ctrl" in mods else base
        return None, char, frozenset(mods)

    name = base.strip().lower()
    name = _KEY_ALIASES.get(name, name)
    if name in (" ", ","):
        return None, name, frozenset(mods)
    if name not in _NAMED_KEYS:
        raise ValueError(f"Unknown key name {base!r} in key string {text!r}")
    return _NAMED_KEYS[name], None, frozenset(mods)


def normalize_key_string(text: str) -> str:
    """Return the canonical form of a key string.

    Raises:
        ValueError: If the string is not a valid key.
    """
    return KeyEvent.parse(text).string


class InputReader:
    """
    Non-blocking keyboard input reader.

    Uses os.read() to bypass Python's I/O buffering and properly
    handle escape sequences that may arrive split across reads.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[str, KeyEvent] = {
        # Arrow keys (CSI)
        '[A': KeyEvent(key=Key.UP),
        '[B': KeyEvent(key=Key.DOWN),
        '[C': KeyEvent(key=Key.RIGHT),
        '[D': KeyEvent(key=Key.LEFT),
        # Arrow keys (SS3 - application mode)
        'OA': KeyEvent(key=Key.UP),
        'OB': KeyEvent(key=Key.DOWN),
        'OC': KeyEvent(key=Key.RIGHT),
        'OD': KeyEvent(key=Key.LEFT),
        # Navigation
        '[H': KeyEvent(key=Key.HOME),
        '[F': KeyEvent(key=Key.END),
        '[1~': KeyEvent(key=Key.HOME),
        '[4~': KeyEvent(key=Key.END),
        '[5~': KeyEvent(key=Key.PAGE_UP),
        '[6~': KeyEvent(key=Key.PAGE_DOWN),
        '[2~': KeyEvent(key=Key.INSERT),
        '[3~': KeyEvent(key=Key.DELETE),
        '[Z': KeyEvent(key=Key.TAB, shift=True),
        # Function keys
        'OP': KeyEvent(key=Key.F1),
        'OQ': KeyEvent(key=Key.F2),
        'OR': KeyEvent(key=Key.F3),
        'OS': KeyEvent(key=Key.F4),
        '[15~': KeyEvent(key=Key.F5),
        '[21~': KeyEvent(key=Key.F10),
        '[24~': KeyEvent(key=Key.F12),
    }

    SIMPLE_KEYS: dict[str, Key] = {
        '\r': Key.ENTER,
        '\n': Key.ENTER,
        '\t': Key.TAB,
        '\x7f': Key.BACKSPACE,
        '\x08': Key.BACKSPACE,
    }

    def __init__(self, fd: Optional[int] = None) -> None:
        self._buffer = ""
        self._explicit_fd = fd

    @property
    def _fd(self) -> int:
        # Resolved lazily so feed()-only readers never touch stdin
        if self._explicit_fd is None:
            self._explicit_fd = sys.stdin.fileno()
        return self._explicit_fd

    def feed(self, data: str) -> None:
        """Append already-read input to the buffer."""
        self._buffer += data

    def read(self, timeout: float = 0.1) -> Optional[KeyEvent]:
        """
        Read a single key event.

        Returns None if no input available within timeout.
        """
        # Process any buffered input first
        if self._buffer:
            return self._process_buffer()

        if not self._has_input(timeout):
            return None

        self._read_available()

        if self._buffer:
            return self._process_buffer()

        return None

    def _read_available(self) -> None:
        """Read all currently available input into buffer using os.read."""
        try:
            data = os.read(self._fd, 1024)
            self._buffer += data.decode('utf-8', errors='replace')
        except (OSError, BlockingIOError):
            pass

        # If buffer is just escape, wait for potential sequence
        if self._buffer == '\x1b':
            self._wait_for_escape_sequence()

    def _wait_for_escape_sequence(self) -> None:
        """Wait for escape sequence to complete with proper timeouts."""
        deadline = time.monotonic() + 0.1

        while time.monotonic() < deadline:
            remaining = deadline - time.monotonic()
            wait_time = min(remaining, 0.025)

            if wait_time <= 0:
                break

            if self._has_input(wait_time):
                try:
                    data = os.read(self._fd, 1024)
                    self._buffer += data.decode('utf-8', errors='replace')
                except (OSError, BlockingIOError):
                    pass

                if len(self._buffer) > 1:
                    rest = self._buffer[1:]
                    if rest and (rest[-1].isalpha() or rest[-1] == '~'):
                        return
                    if rest in self.SEQUENCES:
                        return

    def _process_buffer(self) -> Optional[KeyEvent]:
        """Process buffered input and return next key event."""
        if not self._buffer:
            return None

        first = self._buffer[0]

        if first in self.SIMPLE_KEYS:
            self._buffer = self._buffer[1:]
            return KeyEvent(key=self.SIMPLE_KEYS[first], raw=first)

        if first == '\x1b':
            return self._parse_escape_sequence()

        # Control characters 0x01-0x1a map to ctrl+letter
        if '\x01' <= first <= '\x1a':
            self._buffer = self._buffer[1:]
            letter = chr(ord(first) + ord('a') - 1)
            return KeyEvent(char=letter, raw=first, ctrl=True)

        if first.isprintable():
            self._buffer = self._buffer[1:]
            return KeyEvent(char=first, raw=first)

        # Unknown control character - skip it
        self._buffer = self._buffer[1:]
        return None

    def _parse_escape_sequence(self) -> KeyEvent:
        """Parse an escape sequence from the buffer."""
        if len(self._buffer) == 1:
            self._buffer = ""
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        rest = self._buffer[1:]

        # ESC followed by a plain key is the alt-modified key
        if rest[0] not in '[O\x1b':
            ch = rest[0]
            self._buffer = self._buffer[2:]
            if ch in self.SIMPLE_KEYS:
                return KeyEvent(key=self.SIMPLE_KEYS[ch], raw='\x1b' + ch, alt=True)
            return KeyEvent(char=ch, raw='\x1b' + ch, alt=True)

        end_idx = 0
        for i, ch in enumerate(rest):
            if ch == '\x1b':
                end_idx = i
                break
            if i > 0 and (ch.isalpha() or ch == '~'):
                end_idx = i + 1
                break
            end_idx = i + 1

        if end_idx == 0:
            self._buffer = self._buffer[1:]
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        seq = rest[:end_idx]
        raw = '\x1b' + seq
        self._buffer = self._buffer[1 + end_idx:]

        known = self.SEQUENCES.get(seq)
        if known is not None:
            return KeyEvent(key=known.key, raw=raw, shift=known.shift)

        # Unknown sequence
        return KeyEvent(raw=raw)

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            return False
