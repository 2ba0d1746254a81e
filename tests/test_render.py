from __future__ import annotations

import re
import unittest
from unittest import mock

from lazyjira.issues import Issue, IssueStore
from lazyjira.render import (
    STATUS_HINT_EDIT,
    STATUS_HINT_LIST,
    RenderContext,
    build_frame,
    build_status_line,
    compute_left_width,
    render_frame,
)
from lazyjira.state import AppState

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def _state() -> AppState:
    store = IssueStore(
        [
            Issue(key="PROJ-123", summary="Fix login", status="In Progress", description="Line one\n\nLine three"),
            Issue(key="PROJ-7", summary="Docs", status="Done", description=""),
        ]
    )
    return AppState(store=store)


def _plain_rows(state: AppState, width: int = 100, height: int = 12, no_color: bool = True) -> list[str]:
    frame = build_frame(RenderContext(state=state, width=width, height=height, no_color=no_color))
    return [ANSI_RE.sub("", row) for row in frame.split("\r\n")]


class RenderBehaviorTests(unittest.TestCase):
    def test_frame_shows_header_list_detail_and_hint(self) -> None:
        rows = _plain_rows(_state())

        self.assertTrue(rows[0].startswith("lazyjira  2 issues"))
        self.assertIn("PROJ-123 [In Progress] Fix login", rows[1])
        self.assertIn("PROJ-123 Fix login", rows[1])
        self.assertIn("Line one", rows[4])
        self.assertIn("Line three", rows[6])
        self.assertIn(STATUS_HINT_LIST, rows[-1])
        self.assertEqual(len(rows), 12)

    def test_empty_description_placeholder(self) -> None:
        state = _state()
        state.selected_idx = 1
        rows = _plain_rows(state)

        self.assertIn("(no description)", rows[4])

    def test_inline_edit_shows_buffer_and_unsaved_marker(self) -> None:
        state = _state()
        state.apply_edited_content("PROJ-123", "new text")
        rows = _plain_rows(state)

        self.assertIn("EDITING*", rows[2])
        self.assertIn("new text█", rows[4])
        self.assertIn(STATUS_HINT_EDIT, rows[-1])

    def test_notification_replaces_hint(self) -> None:
        state = _state()
        state.notify_error("Editor error: Failed to launch editor 'nope': missing")
        rows = _plain_rows(state, no_color=False)

        self.assertIn("✗ Editor error: Failed to launch editor", rows[-1])
        self.assertNotIn(STATUS_HINT_LIST, rows[-1])

    def test_no_issues_message(self) -> None:
        rows = _plain_rows(AppState(store=IssueStore([])))
        self.assertIn("No issues loaded.", rows[1])

    def test_render_frame_clears_and_writes_once(self) -> None:
        writes: list[bytes] = []

        def capture(_fd: int, data: bytes) -> int:
            writes.append(data)
            return len(data)

        with mock.patch("lazyjira.render.os.write", side_effect=capture), mock.patch(
            "lazyjira.render.sys.stdout"
        ) as stdout:
            stdout.fileno.return_value = 1
            render_frame(RenderContext(state=_state(), width=80, height=10))

        self.assertEqual(len(writes), 1)
        self.assertTrue(writes[0].startswith(b"\x1b[H\x1b[J"))


class LayoutTests(unittest.TestCase):
    def test_left_width_keeps_both_panes_readable(self) -> None:
        self.assertEqual(compute_left_width(100), 40)
        self.assertEqual(compute_left_width(50), 20)
        self.assertEqual(compute_left_width(30), 15)

    def test_status_line_fits_width(self) -> None:
        line = build_status_line("x" * 200, 40)
        self.assertEqual(len(line), 39)
        self.assertTrue(line.endswith("│ ? Help"))


if __name__ == "__main__":
    unittest.main()
