"""Tests for the pending-edit slot and inline edit state."""

from __future__ import annotations

import unittest

from lazyjira.issues import Issue, IssueStore
from lazyjira.notifications import ERROR
from lazyjira.state import AppState, InlineEdit, PendingEditRequest


def _state() -> AppState:
    store = IssueStore(
        [
            Issue(key="PROJ-1", summary="One", description="first"),
            Issue(key="PROJ-2", summary="Two", description="second"),
        ]
    )
    return AppState(store=store)


class PendingEditSlotTests(unittest.TestCase):
    def test_take_returns_request_and_clears_slot(self) -> None:
        state = _state()
        state.request_edit("PROJ-1", "first")

        self.assertEqual(state.take_pending_edit(), PendingEditRequest("PROJ-1", "first"))
        self.assertIsNone(state.pending_edit)
        self.assertIsNone(state.take_pending_edit())

    def test_newer_request_replaces_unconsumed_one(self) -> None:
        state = _state()
        state.request_edit("PROJ-1", "first")
        state.request_edit("PROJ-2", "second")

        self.assertEqual(state.take_pending_edit(), PendingEditRequest("PROJ-2", "second"))
        self.assertIsNone(state.take_pending_edit())


class InlineEditStateTests(unittest.TestCase):
    def test_applied_external_content_is_unsaved(self) -> None:
        state = _state()
        state.description_start = 4
        state.dirty = False

        state.apply_edited_content("PROJ-2", "rewritten")

        self.assertEqual(state.inline_edit, InlineEdit("PROJ-2", "rewritten", "second"))
        self.assertTrue(state.inline_edit.dirty)
        self.assertTrue(state.editing)
        self.assertEqual(state.description_start, 0)
        self.assertTrue(state.dirty)

    def test_started_inline_edit_is_clean(self) -> None:
        state = _state()
        state.start_inline_edit("PROJ-1")

        self.assertFalse(state.inline_edit.dirty)
        state.inline_edit.insert("!")
        self.assertTrue(state.inline_edit.dirty)
        state.inline_edit.backspace()
        self.assertFalse(state.inline_edit.dirty)

    def test_cancel_drops_buffer(self) -> None:
        state = _state()
        state.start_inline_edit("PROJ-1")
        state.cancel_inline_edit()

        self.assertFalse(state.editing)

    def test_selected_issue_is_clamped(self) -> None:
        state = _state()
        state.selected_idx = 10
        self.assertEqual(state.selected_issue.key, "PROJ-2")
        self.assertIsNone(AppState(store=IssueStore([])).selected_issue)

    def test_notify_error_marks_dirty(self) -> None:
        state = _state()
        state.dirty = False
        state.notify_error("boom")

        self.assertEqual(state.notifications.latest().kind, ERROR)
        self.assertTrue(state.dirty)


if __name__ == "__main__":
    unittest.main()
