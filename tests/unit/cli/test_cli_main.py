"""CLI argument handling tests.

Verifies how ``memviz.cli.main`` loads, synchronizes, and dispatches a trace,
and how unusable input is reported.
"""

from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from memviz import cli
from memviz.profile_model import LineItem

HELLO_DIR = Path(__file__).resolve().parents[2] / "assets" / "hello"
HELLO_TRACE = HELLO_DIR / "memviz.checkpoint.28516"


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.config_path = Path(self._tmp.name) / "config.json"
        patcher = mock.patch("memviz.runtime.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)


class CliDispatchTests(CliTestCase):
    def test_main_syncs_trace_against_its_directory(self) -> None:
        with mock.patch("memviz.cli.run_pager") as run_pager:
            cli.main([str(HELLO_TRACE)])

        run_pager.assert_called_once()
        profile, path, style, no_color, nopager, theme_name, show_addresses = run_pager.call_args.args
        self.assertEqual(path, HELLO_TRACE)
        self.assertEqual(len([item for item in profile if isinstance(item, LineItem)]), 25)
        self.assertEqual(style, "monokai")
        self.assertFalse(no_color)
        self.assertFalse(nopager)
        self.assertIsNone(theme_name)
        self.assertTrue(show_addresses)

    def test_no_sync_keeps_raw_records(self) -> None:
        with mock.patch("memviz.cli.run_pager") as run_pager:
            cli.main([str(HELLO_TRACE), "--no-sync", "--nopager", "--no-color"])

        profile, _path, _style, no_color, nopager, *_rest = run_pager.call_args.args
        self.assertEqual(len(profile), 6)
        self.assertTrue(no_color)
        self.assertTrue(nopager)

    def test_source_root_overrides_trace_directory(self) -> None:
        with tempfile.TemporaryDirectory() as other_root:
            with mock.patch("memviz.cli.run_pager") as run_pager:
                cli.main([str(HELLO_TRACE), "--source-root", other_root])

        profile = run_pager.call_args.args[0]
        self.assertEqual(len(profile), 6)
        self.assertTrue(all(item.line.line_content is None for item in profile if isinstance(item, LineItem)))

    def test_relative_trace_path_resolves_sources_next_to_trace(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(HELLO_DIR.parent)
            with mock.patch("memviz.cli.run_pager") as run_pager:
                cli.main([os.path.join("hello", HELLO_TRACE.name)])
        finally:
            os.chdir(previous_cwd)

        self.assertEqual(len(run_pager.call_args.args[0]), 26)

    def test_explicit_style_and_theme_are_remembered(self) -> None:
        with mock.patch("memviz.cli.run_pager") as run_pager:
            cli.main([str(HELLO_TRACE), "--style", "dracula", "--theme", "ocean"])
        with mock.patch("memviz.cli.run_pager") as second_run:
            cli.main([str(HELLO_TRACE)])

        self.assertEqual(run_pager.call_args.args[2], "dracula")
        self.assertEqual(second_run.call_args.args[2], "dracula")
        self.assertEqual(second_run.call_args.args[5], "ocean")

    def test_render_prints_profile_and_skips_pager(self) -> None:
        stdout = io.StringIO()
        with mock.patch("memviz.cli.run_pager") as run_pager, contextlib.redirect_stdout(stdout):
            cli.main([str(HELLO_TRACE), "--render", "--no-color", "--max-cols", "100"])

        run_pager.assert_not_called()
        lines = stdout.getvalue().splitlines()
        self.assertEqual(len(lines), 27)
        self.assertIn("    9   int main() {", lines[10])


class CliErrorTests(CliTestCase):
    def test_missing_trace_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as caught:
            cli.main([str(HELLO_DIR / "absent.trace")])
        self.assertEqual(str(caught.exception), f"Path not found: {HELLO_DIR / 'absent.trace'}")

    def test_missing_source_root_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as caught:
            cli.main([str(HELLO_TRACE), "--source-root", str(HELLO_DIR / "nowhere")])
        self.assertIn("Path not found", str(caught.exception))

    def test_malformed_trace_exits_with_location(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            trace = Path(tmp) / "bad.trace"
            trace.write_text("checkpoints:\nA\ncode locations:\nfunction: f\n", encoding="utf-8")
            with mock.patch("memviz.cli.run_pager") as run_pager, self.assertRaises(SystemExit) as caught:
                cli.main([str(trace)])

        run_pager.assert_not_called()
        self.assertEqual(str(caught.exception), f"{trace}:4: function block outside of a file block")

    def test_max_cols_must_be_positive(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as caught:
            cli.main([str(HELLO_TRACE), "--render", "--max-cols", "0"])
        self.assertEqual(caught.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
