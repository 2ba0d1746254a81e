"""Main-loop step that services pending external-edit requests.

The edit runs synchronously on the UI thread: the terminal is released, the
editor blocks until it exits, and the TUI is restored before the outcome is
applied or reported.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from .editor import EditOutcome, ExternalEditor
from .errors import EditorError, TerminalIOError
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


class _Editor(Protocol):
    def open(self, issue_key: str, content: str) -> EditOutcome: ...


class EditOrchestrator:
    """Drive one queued edit through terminal release, editor run, and restore."""

    def __init__(
        self,
        state: AppState,
        terminal: TerminalController,
        editor_factory: Callable[[], _Editor] = ExternalEditor,
    ) -> None:
        self.state = state
        self.terminal = terminal
        self.editor_factory = editor_factory

    def run_pending(self) -> bool:
        """Service the pending edit, if any.

        Returns ``True`` when a request was consumed; the caller should then
        skip input handling for this iteration and redraw.
        """
        state = self.state
        request = state.take_pending_edit()
        if request is None:
            return False

        issue_key = request.issue_key
        logger.debug("Opening external editor for %s", issue_key)
        outcome: EditOutcome | None = None
        failure: EditorError | None = None
        try:
            with self.terminal.released():
                try:
                    outcome = self.editor_factory().open(issue_key, request.original_content)
                except EditorError as exc:
                    failure = exc
        except TerminalIOError as exc:
            logger.error("Could not release terminal for %s: %s", issue_key, exc)
            state.notify_error(f"Terminal error: {exc}")
            state.dirty = True
            return True

        if failure is not None:
            logger.error("External editor error for %s: %s", issue_key, failure)
            state.notify_error(f"Editor error: {failure}")
        elif outcome is not None and outcome.was_modified:
            logger.info("External editor content modified for %s", issue_key)
            state.apply_edited_content(issue_key, outcome.content)
        else:
            logger.debug("External editor content unchanged for %s", issue_key)

        state.dirty = True
        return True
