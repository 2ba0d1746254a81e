"""Full-frame ANSI renderer for the issue list, detail pane, and status line."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from .ansi import clip_ansi_line, display_width, pad_ansi_line, sanitize_terminal_text, wrap_ansi_line
from .highlight import DEFAULT_STYLE, colorize_description
from .issues import Issue
from .notifications import ERROR, SUCCESS, WARNING
from .state import AppState

MIN_LEFT_WIDTH = 20
MIN_RIGHT_WIDTH = 20
LEFT_WIDTH_RATIO = 0.4
DETAIL_HEADER_ROWS = 3

STATUS_HINT_LIST = "j/k move  e edit  E $EDITOR  ? help  q quit"
STATUS_HINT_EDIT = "Ctrl+S save  Esc cancel"

HELP_LINES: tuple[str, ...] = (
    "\033[1;38;5;81mKEYS\033[0m",
    "\033[2;38;5;250mlist:\033[0m \033[38;5;229mj/k\033[0m move  \033[38;5;229mg/G\033[0m top/bottom  \033[38;5;229mPgUp/PgDn\033[0m page",
    "\033[2;38;5;250mdetail:\033[0m \033[38;5;229mJ/K\033[0m scroll description  \033[38;5;229mCtrl+D/U\033[0m half page",
    "\033[2;38;5;250medit:\033[0m \033[38;5;229me\033[0m inline  \033[38;5;229mE / Ctrl+E\033[0m external editor  \033[38;5;229mCtrl+S\033[0m save  \033[38;5;229mEsc\033[0m cancel",
    "\033[2;38;5;250mmeta:\033[0m \033[38;5;229m?\033[0m help  \033[38;5;229mq\033[0m quit",
)

_NOTIFICATION_COLORS: dict[str, str] = {
    ERROR: "\033[1;38;5;203m",
    WARNING: "\033[1;38;5;214m",
    SUCCESS: "\033[1;38;5;42m",
}
_STATUS_COLORS: dict[str, str] = {
    "done": "\033[38;5;42m",
    "closed": "\033[38;5;42m",
    "in progress": "\033[38;5;81m",
    "in review": "\033[38;5;177m",
}


@dataclass(frozen=True)
class RenderContext:
    state: AppState
    width: int
    height: int
    style: str = DEFAULT_STYLE
    no_color: bool = False


def compute_left_width(width: int) -> int:
    """Split the screen, keeping both panes readable where possible."""
    if width < MIN_LEFT_WIDTH + MIN_RIGHT_WIDTH + 1:
        return max(1, width // 2)
    desired = int(width * LEFT_WIDTH_RATIO)
    return max(MIN_LEFT_WIDTH, min(desired, width - MIN_RIGHT_WIDTH - 1))


def content_rows(height: int) -> int:
    """Rows between the header and the status line."""
    return max(1, height - 2)


def description_rows(height: int) -> int:
    return max(1, content_rows(height) - DETAIL_HEADER_ROWS)


def help_row_count(height: int, show_help: bool) -> int:
    if not show_help:
        return 0
    return min(len(HELP_LINES), max(0, content_rows(height) - 1))


def selected_with_ansi(text: str) -> str:
    """Apply reverse video without discarding existing colors."""
    if not text:
        return text
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def format_issue_row(issue: Issue, width: int, no_color: bool = False) -> str:
    key = sanitize_terminal_text(issue.key)
    status = sanitize_terminal_text(issue.status)
    summary = sanitize_terminal_text(issue.summary).replace("\n", " ")
    if no_color or not status:
        badge = f"[{status}]" if status else ""
    else:
        color = _STATUS_COLORS.get(status.casefold(), "\033[38;5;250m")
        badge = f"{color}[{status}]\033[0m"
    parts = [f"\033[1m{key}\033[0m" if not no_color else key]
    if badge:
        parts.append(badge)
    if summary:
        parts.append(summary)
    return pad_ansi_line(" ".join(parts), width)


def issue_list_rows(state: AppState, width: int, rows: int, no_color: bool = False) -> list[str]:
    out: list[str] = []
    for row in range(rows):
        idx = state.list_start + row
        if idx >= len(state.issues):
            out.append(" " * width)
            continue
        line = format_issue_row(state.issues[idx], width, no_color=no_color)
        out.append(selected_with_ansi(line) if idx == state.selected_idx else line)
    return out


def _wrap_all(lines: list[str], width: int) -> list[str]:
    wrapped: list[str] = []
    for line in lines:
        wrapped.extend(wrap_ansi_line(line, width))
    return wrapped


def detail_rows(ctx: RenderContext, width: int, rows: int) -> list[str]:
    """Header rows plus the scrolled description (or the inline edit buffer)."""
    state = ctx.state
    issue = state.selected_issue
    edit = state.inline_edit
    if edit is not None:
        issue = state.store.get(edit.issue_key) or issue
    if issue is None:
        return [pad_ansi_line("No issues loaded.", width)] + [" " * width] * (rows - 1)

    bold = "" if ctx.no_color else "\033[1m"
    dim = "" if ctx.no_color else "\033[2m"
    reset = "" if ctx.no_color else "\033[0m"
    title = f"{bold}{sanitize_terminal_text(issue.key)}{reset} {sanitize_terminal_text(issue.summary)}"
    meta_parts = [f"status: {issue.status or '-'}", f"assignee: {issue.assignee or '-'}"]
    if edit is not None:
        meta_parts.append("EDITING*" if edit.dirty else "EDITING")
    header = [title, f"{dim}{sanitize_terminal_text('  '.join(meta_parts))}{reset}", ""]

    if edit is not None:
        body = _wrap_all(sanitize_terminal_text(edit.buffer + "█").split("\n"), width)
        body_start = max(0, len(body) - max(1, rows - len(header)))
    else:
        body = _wrap_all(colorize_description(issue.description, ctx.style, ctx.no_color), width)
        if not body:
            body = [f"{dim}(no description){reset}"]
        body_start = min(state.description_start, max(0, len(body) - 1))

    visible = header + body[body_start:]
    out = [pad_ansi_line(line, width) for line in visible[:rows]]
    out.extend(" " * width for _ in range(rows - len(out)))
    return out


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left = clip_ansi_line(left_text, max(0, usable - len(right_text) - 1))
    gap = " " * max(0, usable - display_width(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def build_frame(ctx: RenderContext) -> str:
    """Compose one full screen as a single string."""
    state = ctx.state
    width = max(1, ctx.width)
    rows = content_rows(ctx.height)
    help_rows = help_row_count(ctx.height, state.show_help)
    body_rows = rows - help_rows

    out: list[str] = ["\033[H\033[J"]
    header = f"lazyjira  {len(state.issues)} issues"
    out.append(pad_ansi_line(header if ctx.no_color else f"\033[1;38;5;81m{header}\033[0m", width - 1))
    out.append("\r\n")

    left_width = compute_left_width(width)
    right_width = max(1, width - left_width - 2)
    list_lines = issue_list_rows(state, left_width, body_rows, no_color=ctx.no_color)
    detail_lines = detail_rows(ctx, right_width, body_rows)
    divider = "│" if ctx.no_color else "\033[2m│\033[0m"
    for left, right in zip(list_lines, detail_lines):
        out.append(left)
        out.append(divider)
        out.append(right)
        out.append("\r\n")
    for line in HELP_LINES[:help_rows]:
        out.append(pad_ansi_line(line, width - 1))
        out.append("\r\n")

    notification = state.notifications.latest()
    if notification is not None:
        left_status = notification.label()
        color = "" if ctx.no_color else _NOTIFICATION_COLORS.get(notification.kind, "")
    else:
        left_status = STATUS_HINT_EDIT if state.editing else STATUS_HINT_LIST
        color = ""
    status = build_status_line(sanitize_terminal_text(left_status).replace("\n", " "), width)
    if ctx.no_color:
        out.append(status)
    else:
        out.append(f"\033[7m{color}{status}\033[0m")
    return "".join(out)


def render_frame(ctx: RenderContext) -> None:
    os.write(sys.stdout.fileno(), build_frame(ctx).encode("utf-8", errors="replace"))
