"""Exception taxonomy for terminal hand-off and external editing.

Terminal failures and editor failures are kept in separate branches so the
orchestrator can tell "could not leave the TUI" apart from "editor went wrong".
"""

from __future__ import annotations


class LazyJiraError(Exception):
    """Base class for errors raised by lazyjira."""


class TerminalIOError(LazyJiraError):
    """The terminal device could not be reconfigured."""


class IssueStoreError(LazyJiraError):
    """The local issue file could not be read, parsed, or written."""


class EditorError(LazyJiraError):
    """Base class for failures while running the external editor."""


class TempFileCreationError(EditorError):
    def __init__(self, reason: object) -> None:
        super().__init__(f"Failed to create temporary file: {reason}")


class EditorSpawnError(EditorError):
    def __init__(self, editor: str, reason: object) -> None:
        self.editor = editor
        super().__init__(f"Failed to launch editor '{editor}': {reason}")


class EditorExecutionError(EditorError):
    def __init__(self, exit_code: int, message: str | None = None) -> None:
        self.exit_code = exit_code
        super().__init__(message or f"Editor exited with status code {exit_code}")


class EditorTerminatedError(EditorExecutionError):
    """Editor was killed by a signal; ``exit_code`` is the negative returncode."""

    def __init__(self, signal_number: int) -> None:
        self.signal_number = signal_number
        super().__init__(
            -signal_number,
            f"Editor was terminated by a signal ({signal_number})",
        )


class ContentReadError(EditorError):
    def __init__(self, reason: object) -> None:
        super().__init__(f"Failed to read content from temporary file: {reason}")
