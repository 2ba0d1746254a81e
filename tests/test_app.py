from __future__ import annotations

import unittest
from unittest import mock

from lazyjira import app
from lazyjira.issues import Issue, IssueStore
from lazyjira.orchestrator import EditOrchestrator


class RunAppWiringTests(unittest.TestCase):
    def test_callbacks_route_edits_through_orchestrator(self) -> None:
        store = IssueStore([Issue(key="PROJ-1", description="body")])
        captured = {}

        def fake_loop(state, terminal, stdin_fd, callbacks):
            captured["state"] = state
            captured["callbacks"] = callbacks
            self.assertFalse(callbacks.handle_key("E"))

        with mock.patch("lazyjira.app.sys.stdin") as stdin, mock.patch("lazyjira.app.sys.stdout") as stdout, mock.patch(
            "lazyjira.app.TerminalController"
        ) as terminal_cls, mock.patch("lazyjira.app.run_main_loop", side_effect=fake_loop), mock.patch(
            "lazyjira.app.load_notification_seconds", return_value=None
        ):
            stdin.fileno.return_value = 0
            stdout.fileno.return_value = 1
            app.run_app(store, "no-such-style", no_color=True)

        terminal_cls.assert_called_once_with(0, 1)
        callbacks = captured["callbacks"]
        self.assertIsInstance(callbacks.run_pending_edit.__self__, EditOrchestrator)
        self.assertEqual(captured["state"].pending_edit.issue_key, "PROJ-1")
        self.assertEqual(callbacks.visible_list_rows(24), 22)

    def test_build_state_applies_notification_override(self) -> None:
        with mock.patch("lazyjira.app.load_notification_seconds", return_value=1.5):
            state = app.build_state(IssueStore([]))
        self.assertEqual(state.notifications.duration_override, 1.5)


if __name__ == "__main__":
    unittest.main()
