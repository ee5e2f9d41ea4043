"""Deferred commands.

A command is a zero-argument callable that produces a message (or ``None``).
Components never run commands themselves; they hand them back to the host,
which runs them and redelivers the resulting messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

Command = Callable[[], Any]


@dataclass(frozen=True)
class BatchMessage:
    """Message produced by :func:`batch`: commands to run, in order."""
    commands: tuple[Command, ...]


def batch(*commands: Optional[Command]) -> Optional[Command]:
    """Combine commands, dropping ``None``.

    Returns ``None`` when nothing is left and the command itself when only
    one remains, so callers never build empty batches.
    """
    valid = tuple(cmd for cmd in commands if cmd is not None)
    if not valid:
        return None
    if len(valid) == 1:
        return valid[0]

    def _batch() -> BatchMessage:
        return BatchMessage(valid)

    return _batch


def message_command(message: Any) -> Command:
    """Wrap an already-built message in a command."""
    def _cmd() -> Any:
        return message
    return _cmd


def iter_messages(cmd: Optional[Command]) -> Iterator[Any]:
    """Run a command tree depth-first and yield every non-``None`` message.

    Batches are expanded in order, so a widget command batched ahead of
    notifications yields its message first.
    """
    if cmd is None:
        return
    msg = cmd()
    if msg is None:
        return
    if isinstance(msg, BatchMessage):
        for sub in msg.commands:
            yield from iter_messages(sub)
        return
    yield msg


def run_command(cmd: Optional[Command]) -> list[Any]:
    """Run a command tree and return its messages as a list."""
    return list(iter_messages(cmd))
