"""Main interactive event loop for the terminal UI.

Each pass expires notifications, services a pending external edit, renders
when dirty, then waits briefly for one key. Everything runs on one thread.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 120


@dataclass(frozen=True)
class LoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    read_key: Callable[[int, int], str]
    render: Callable[[int, int], None]
    run_pending_edit: Callable[[], bool]
    handle_key: Callable[[str], bool]
    visible_list_rows: Callable[[int], int]


def normalize_enter(state: AppState, key: str) -> str | None:
    """Collapse CR, LF and CRLF into one ``ENTER``; ``None`` means swallow the key."""
    if state.skip_next_lf and key == "ENTER_LF":
        state.skip_next_lf = False
        return None
    if key == "ENTER_CR":
        state.skip_next_lf = True
        return "ENTER"
    state.skip_next_lf = False
    if key == "ENTER_LF":
        return "ENTER"
    return key


def clamp_list_window(state: AppState, rows: int) -> None:
    """Keep the selection inside the issue list and the list viewport."""
    count = len(state.issues)
    state.selected_idx = max(0, min(state.selected_idx, count - 1)) if count else 0
    prev_start = state.list_start
    if state.selected_idx < state.list_start:
        state.list_start = state.selected_idx
    elif state.selected_idx >= state.list_start + rows:
        state.list_start = state.selected_idx - rows + 1
    state.list_start = max(0, min(state.list_start, max(0, count - rows)))
    if state.list_start != prev_start:
        state.dirty = True


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: LoopCallbacks,
) -> None:
    """Run the TUI until a quit key is pressed."""
    ops = callbacks
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            if (term.columns, term.lines) != last_size:
                last_size = (term.columns, term.lines)
                state.dirty = True
            state.usable = max(1, term.lines - 1)
            if state.notifications.expire():
                state.dirty = True
            clamp_list_window(state, ops.visible_list_rows(term.lines))

            if ops.run_pending_edit():
                # Terminal was just restored with a cleared screen.
                state.dirty = True
                continue

            if state.dirty:
                ops.render(term.columns, term.lines)
                state.dirty = False

            try:
                key = ops.read_key(stdin_fd, KEY_POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            normalized = normalize_enter(state, key)
            if normalized is None:
                continue
            if ops.handle_key(normalized):
                logger.debug("Quit requested")
                break
