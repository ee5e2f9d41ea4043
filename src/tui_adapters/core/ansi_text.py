"""ANSI text utilities - measuring and fitting styled view output."""

from __future__ import annotations

import re

# SGR and other CSI sequences (including ~ terminator)
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]')

RESET = '\x1b[0m'


def strip_ansi(s: str) -> str:
    """Remove escape sequences, leaving only visible text."""
    return _ANSI_ESCAPE.sub('', s)


def visible_len(s: str) -> int:
    """Visible length of a single line (escape codes excluded)."""
    return len(strip_ansi(s))


def truncate(s: str, max_width: int, ellipsis: str = '') -> str:
    """
    Cut a styled line to at most max_width visible columns.

    Escape sequences are kept whole. If anything was cut, a reset is appended
    so the style does not bleed into the next line, and ``ellipsis`` replaces
    the last visible columns.
    """
    if max_width <= 0:
        return ''
    if visible_len(s) <= max_width:
        return s

    budget = max_width - len(ellipsis)
    if budget < 0:
        return ellipsis[:max_width]

    out: list[str] = []
    vis = 0
    pos = 0
    while pos < len(s) and vis < budget:
        match = _ANSI_ESCAPE.match(s, pos)
        if match:
            out.append(match.group())
            pos = match.end()
            continue
        out.append(s[pos])
        vis += 1
        pos += 1
    return ''.join(out) + RESET + ellipsis


def pad_to_width(s: str, width: int, char: str = ' ') -> str:
    """Pad a line with char to reach width visible columns."""
    current = visible_len(s)
    if current >= width:
        return s
    return s + char * (width - current)


def truncate_and_pad(s: str, width: int) -> str:
    """Exactly width visible columns: cut if too long, pad if too short."""
    return pad_to_width(truncate(s, width), width)


def fit_lines(lines: list[str], width: int, height: int | None = None) -> list[str]:
    """Fit a block of lines into a width x height box."""
    fitted = [truncate_and_pad(line, width) for line in lines]
    if height is None:
        return fitted
    fitted = fitted[:height]
    fitted.extend(' ' * width for _ in range(height - len(fitted)))
    return fitted
