"""Markdown highlighting for issue descriptions via Pygments."""

from __future__ import annotations

from functools import lru_cache

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import MarkdownLexer
from pygments.styles import get_all_styles, get_style_by_name
from pygments.util import ClassNotFound

from .ansi import sanitize_terminal_text

DEFAULT_STYLE = "monokai"


def available_styles() -> list[str]:
    return sorted(get_all_styles())


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=8)
def _formatter(style: str) -> Terminal256Formatter:
    return Terminal256Formatter(style=style)


def colorize_description(text: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> list[str]:
    """Sanitize ``text`` and return it as display lines, colored unless ``no_color``."""
    safe = sanitize_terminal_text(text)
    if not safe:
        return []
    if no_color:
        return safe.split("\n")
    rendered = highlight(safe, MarkdownLexer(stripnl=False), _formatter(normalize_style(style)))
    if not safe.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered.split("\n")
