"""Keyboard handling for the issue list and the inline description editor."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .errors import IssueStoreError
from .notifications import SUCCESS
from .state import AppState

logger = logging.getLogger(__name__)

QUIT_KEYS = {"q", "CTRL_C"}
EXTERNAL_EDIT_KEYS = {"E", "CTRL_E"}
INLINE_EDIT_KEYS = {"e", "ENTER"}


@dataclass(frozen=True)
class KeyContext:
    """State and bound layout queries required for key handling."""

    state: AppState
    visible_list_rows: Callable[[], int]
    visible_description_rows: Callable[[], int]


def _move_selection(state: AppState, delta: int) -> None:
    if not state.issues:
        return
    target = max(0, min(len(state.issues) - 1, state.selected_idx + delta))
    if target != state.selected_idx:
        state.selected_idx = target
        state.description_start = 0
        state.dirty = True


def _scroll_description(state: AppState, delta: int) -> None:
    target = max(0, state.description_start + delta)
    if target != state.description_start:
        state.description_start = target
        state.dirty = True


def handle_edit_key(key: str, state: AppState) -> None:
    """Apply one key to the inline edit buffer."""
    edit = state.inline_edit
    if edit is None:
        return
    if key == "ESC":
        logger.debug("Discarded inline edit for %s (dirty=%s)", edit.issue_key, edit.dirty)
        state.cancel_inline_edit()
        return
    if key == "CTRL_S":
        try:
            state.store.save_description(edit.issue_key, edit.buffer)
        except IssueStoreError as exc:
            logger.error("Saving %s failed: %s", edit.issue_key, exc)
            state.notify_error(f"Save failed: {exc}")
            return
        state.inline_edit = None
        state.notify(f"Saved {edit.issue_key}", SUCCESS)
        return
    if key == "BACKSPACE":
        edit.backspace()
    elif key == "ENTER":
        edit.insert("\n")
    elif key == "TAB":
        edit.insert("\t")
    elif len(key) == 1 and key.isprintable():
        edit.insert(key)
    else:
        return
    state.dirty = True


def handle_key(key: str, context: KeyContext) -> bool:
    """Handle one key and return ``True`` when the app should quit."""
    state = context.state
    if state.editing:
        handle_edit_key(key, state)
        return False

    if key in QUIT_KEYS:
        return True
    if key == "?":
        state.show_help = not state.show_help
        state.dirty = True
        return False
    if key == "ESC":
        if state.show_help:
            state.show_help = False
            state.dirty = True
        return False

    issue = state.selected_issue
    if key in EXTERNAL_EDIT_KEYS:
        if issue is not None:
            state.request_edit(issue.key, state.store.description(issue.key))
        return False
    if key in INLINE_EDIT_KEYS:
        if issue is not None:
            state.start_inline_edit(issue.key)
        return False

    page = max(1, context.visible_list_rows())
    if key in {"j", "DOWN"}:
        _move_selection(state, 1)
    elif key in {"k", "UP"}:
        _move_selection(state, -1)
    elif key == "PAGE_DOWN":
        _move_selection(state, page)
    elif key == "PAGE_UP":
        _move_selection(state, -page)
    elif key in {"g", "HOME"}:
        _move_selection(state, -len(state.issues))
    elif key in {"G", "END"}:
        _move_selection(state, len(state.issues))
    elif key in {"J", "CTRL_D"}:
        _scroll_description(state, max(1, context.visible_description_rows() // 2))
    elif key in {"K", "CTRL_U"}:
        _scroll_description(state, -max(1, context.visible_description_rows() // 2))
    return False
