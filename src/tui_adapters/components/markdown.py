"""Markdown to ANSI text via rich."""

from __future__ import annotations

import io
import logging

from rich.console import Console
from rich.markdown import Markdown

logger = logging.getLogger(__name__)


def render_markdown(text: str, width: int = 80, code_theme: str = "monokai") -> str:
    """Render markdown as styled terminal text.

    Falls back to the raw text if rendering fails.
    """
    if not text:
        return ""
    console = Console(
        file=io.StringIO(),
        width=max(20, width),
        force_terminal=True,
        color_system="standard",
        highlight=False,
    )
    try:
        with console.capture() as capture:
            console.print(Markdown(text, code_theme=code_theme))
    except Exception as e:
        logger.debug("Markdown rendering failed, using raw text: %s", e)
        return text
    return capture.get().rstrip("\n")
