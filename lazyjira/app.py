"""Runtime composition layer for lazyjira.

Builds initial state, wires the terminal, editor orchestration, renderer and
key handling into callbacks, and starts the loop.
"""

from __future__ import annotations

import logging
import sys
from functools import partial

from .config import load_notification_seconds
from .highlight import normalize_style
from .input import read_key
from .issues import IssueStore
from .key_handlers import KeyContext, handle_key
from .loop import LoopCallbacks, run_main_loop
from .notifications import NotificationQueue
from .orchestrator import EditOrchestrator
from .render import RenderContext, content_rows, description_rows, help_row_count, render_frame
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_state(store: IssueStore) -> AppState:
    return AppState(
        store=store,
        notifications=NotificationQueue(duration_override=load_notification_seconds()),
    )


def run_app(store: IssueStore, style: str, no_color: bool) -> None:
    """Run the interactive viewer over ``store`` until the user quits.

    Raises ``TerminalIOError`` when stdin is not a usable terminal.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    state = build_state(store)
    style = normalize_style(style)
    orchestrator = EditOrchestrator(state, terminal)
    screen = {"lines": 24}

    def list_rows(lines: int) -> int:
        return max(1, content_rows(lines) - help_row_count(lines, state.show_help))

    def render(columns: int, lines: int) -> None:
        screen["lines"] = lines
        render_frame(RenderContext(state=state, width=columns, height=lines, style=style, no_color=no_color))

    key_context = KeyContext(
        state=state,
        visible_list_rows=lambda: list_rows(screen["lines"]),
        visible_description_rows=lambda: description_rows(screen["lines"]),
    )
    callbacks = LoopCallbacks(
        read_key=read_key,
        render=render,
        run_pending_edit=orchestrator.run_pending,
        handle_key=partial(handle_key, context=key_context),
        visible_list_rows=list_rows,
    )
    logger.info("Starting UI with %d issues", len(store.issues))
    run_main_loop(state=state, terminal=terminal, stdin_fd=stdin_fd, callbacks=callbacks)
    if state.pending_edit is not None:
        logger.debug("Dropping unconsumed edit request for %s", state.pending_edit.issue_key)
