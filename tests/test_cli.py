"""CLI argument and default-path behavior tests.

Verifies how ``lazyjira.cli.main`` resolves the issues file, the style, and
the terminal checks before handing off to the runtime.
"""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyjira import cli
from lazyjira.errors import TerminalIOError


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.issues_path = self.root / "issues.json"
        self.issues_path.write_text(json.dumps({"issues": [{"key": "PROJ-1", "summary": "A"}]}), encoding="utf-8")
        patches = [
            mock.patch("lazyjira.cli.init_logging"),
            mock.patch("lazyjira.cli.shutdown_logging"),
            mock.patch("lazyjira.cli.load_style_name", return_value=None),
            mock.patch("lazyjira.cli.sys.stdin", **{"isatty.return_value": True}),
            mock.patch("lazyjira.cli.sys.stdout", **{"isatty.return_value": True}),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_explicit_path_is_loaded_and_passed_to_runtime(self) -> None:
        with mock.patch("lazyjira.cli.run_app") as run_app:
            cli.main([str(self.issues_path)])

        run_app.assert_called_once()
        store, style, no_color = run_app.call_args.args
        self.assertEqual([issue.key for issue in store.issues], ["PROJ-1"])
        self.assertEqual(style, "monokai")
        self.assertFalse(no_color)

    def test_default_path_comes_from_user_data_dir(self) -> None:
        with mock.patch("lazyjira.cli.default_issues_path", return_value=self.issues_path), mock.patch(
            "lazyjira.cli.run_app"
        ) as run_app:
            cli.main([])

        self.assertEqual(run_app.call_args.args[0].path, self.issues_path)

    def test_style_flag_beats_config(self) -> None:
        with mock.patch("lazyjira.cli.load_style_name", return_value="friendly"), mock.patch(
            "lazyjira.cli.run_app"
        ) as run_app:
            cli.main([str(self.issues_path), "--no-color"])
            cli.main([str(self.issues_path), "--style", "native"])

        self.assertEqual(run_app.call_args_list[0].args[1:], ("friendly", True))
        self.assertEqual(run_app.call_args_list[1].args[1], "native")

    def test_missing_path_exits(self) -> None:
        with mock.patch("lazyjira.cli.run_app") as run_app:
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(self.root / "missing.json")])

        self.assertIn("Path not found", str(ctx.exception.code))
        run_app.assert_not_called()

    def test_malformed_file_exits_with_store_message(self) -> None:
        self.issues_path.write_text("[1, 2]", encoding="utf-8")
        with mock.patch("lazyjira.cli.run_app") as run_app:
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(self.issues_path)])

        self.assertIn("not an object", str(ctx.exception.code))
        run_app.assert_not_called()

    def test_non_terminal_exits(self) -> None:
        with mock.patch("lazyjira.cli.sys.stdin", **{"isatty.return_value": False}):
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(self.issues_path)])

        self.assertIn("interactive terminal", str(ctx.exception.code))

    def test_terminal_failure_exits_and_shuts_down_logging(self) -> None:
        with mock.patch("lazyjira.cli.run_app", side_effect=TerminalIOError("revoked")), mock.patch(
            "lazyjira.cli.shutdown_logging"
        ) as shutdown:
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(self.issues_path)])

        self.assertEqual(ctx.exception.code, "Terminal error: revoked")
        shutdown.assert_called_once()

    def test_list_styles_prints_and_returns(self) -> None:
        stdout = io.StringIO()
        with mock.patch("lazyjira.cli.sys.stdout", stdout), mock.patch("lazyjira.cli.run_app") as run_app:
            cli.main(["--list-styles"])

        self.assertIn("monokai", stdout.getvalue().split())
        run_app.assert_not_called()


if __name__ == "__main__":
    unittest.main()
