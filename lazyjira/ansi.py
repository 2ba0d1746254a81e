"""ANSI-aware text measurement and line shaping utilities.

Escape sequences are carried through untouched and never count toward width;
East Asian wide characters count as two columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
TAB_WIDTH = 4
RESET = "\033[0m"


def char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Terminal columns taken by ``text`` once escapes are stripped."""
    return sum(char_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def sanitize_terminal_text(text: str) -> str:
    """Make untrusted text safe to print: expand tabs, escape control bytes."""
    text = text.replace("\r\n", "\n").replace("\t", " " * TAB_WIDTH)
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def _tokens(text: str):
    """Yield ``(is_escape, chunk)`` pairs, one visible character per chunk."""
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                yield True, match.group(0)
                i = match.end()
                continue
        yield False, text[i]
        i += 1


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""
    out: list[str] = []
    col = 0
    for is_escape, chunk in _tokens(text):
        if is_escape:
            out.append(chunk)
            continue
        width = char_width(chunk)
        if col + width > max_cols:
            break
        out.append(chunk)
        col += width
    return "".join(out)


def pad_ansi_line(text: str, cols: int) -> str:
    """Clip then right-pad a styled line to exactly ``cols`` columns."""
    clipped = clip_ansi_line(text, cols)
    padding = max(0, cols - display_width(clipped))
    suffix = RESET if "\x1b" in clipped else ""
    return clipped + suffix + " " * padding


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Hard-wrap a styled line at ``width`` columns.

    Each continuation row starts with the last SGR sequence seen so colors
    carry across the break. Empty input yields one empty row.
    """
    if width <= 0:
        return [text]
    rows: list[str] = []
    current: list[str] = []
    col = 0
    active_sgr = ""
    for is_escape, chunk in _tokens(text):
        if is_escape:
            current.append(chunk)
            if chunk.endswith("m"):
                active_sgr = "" if chunk in {RESET, "\x1b[m"} else chunk
            continue
        ch_width = char_width(chunk)
        if col + ch_width > width and col > 0:
            rows.append("".join(current))
            current = [active_sgr] if active_sgr else []
            col = 0
        current.append(chunk)
        col += ch_width
    rows.append("".join(current))
    return rows
