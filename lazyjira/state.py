"""Mutable application state shared by the loop, key handlers, and renderer."""

from __future__ import annotations

from dataclasses import dataclass, field

from .issues import Issue, IssueStore
from .notifications import ERROR, INFO, NotificationQueue


@dataclass(frozen=True)
class PendingEditRequest:
    """An external edit asked for by the user, waiting for the next loop pass."""

    issue_key: str
    original_content: str


@dataclass
class InlineEdit:
    """In-app edit buffer for one issue description."""

    issue_key: str
    buffer: str
    saved_content: str

    @property
    def dirty(self) -> bool:
        return self.buffer != self.saved_content

    def insert(self, text: str) -> None:
        self.buffer += text

    def backspace(self) -> None:
        self.buffer = self.buffer[:-1]


@dataclass
class AppState:
    store: IssueStore
    selected_idx: int = 0
    list_start: int = 0
    description_start: int = 0
    usable: int = 24
    dirty: bool = True
    skip_next_lf: bool = False
    show_help: bool = False
    pending_edit: PendingEditRequest | None = None
    inline_edit: InlineEdit | None = None
    notifications: NotificationQueue = field(default_factory=NotificationQueue)

    @property
    def issues(self) -> list[Issue]:
        return self.store.issues

    @property
    def selected_issue(self) -> Issue | None:
        if not self.store.issues:
            return None
        idx = max(0, min(self.selected_idx, len(self.store.issues) - 1))
        return self.store.issues[idx]

    @property
    def editing(self) -> bool:
        return self.inline_edit is not None

    def request_edit(self, issue_key: str, content: str) -> None:
        """Queue an external edit; a newer request replaces an unconsumed one."""
        self.pending_edit = PendingEditRequest(issue_key=issue_key, original_content=content)

    def take_pending_edit(self) -> PendingEditRequest | None:
        """Return the queued edit request and clear the slot."""
        request, self.pending_edit = self.pending_edit, None
        return request

    def start_inline_edit(self, issue_key: str) -> None:
        saved = self.store.description(issue_key)
        self.inline_edit = InlineEdit(issue_key=issue_key, buffer=saved, saved_content=saved)
        self.dirty = True

    def apply_edited_content(self, issue_key: str, content: str) -> None:
        """Enter inline edit for ``issue_key`` pre-filled with externally edited text.

        The buffer is compared against the issue's last saved description, so
        the edit shows as unsaved until the user saves it.
        """
        self.inline_edit = InlineEdit(
            issue_key=issue_key,
            buffer=content,
            saved_content=self.store.description(issue_key),
        )
        self.description_start = 0
        self.dirty = True

    def cancel_inline_edit(self) -> None:
        self.inline_edit = None
        self.dirty = True

    def notify(self, message: str, kind: str = INFO) -> None:
        self.notifications.push(message, kind)
        self.dirty = True

    def notify_error(self, message: str) -> None:
        self.notify(message, ERROR)
