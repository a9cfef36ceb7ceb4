"""Bootstrap tests for ``run_pager``: plain output and interactive wiring."""

from __future__ import annotations

import io
import unittest
from pathlib import Path
from unittest import mock

from memviz.runtime.app import print_profile, run_pager
from memviz.trace import load_profile

HELLO_DIR = Path(__file__).resolve().parents[2] / "assets" / "hello"
HELLO_TRACE = HELLO_DIR / "memviz.checkpoint.28516"


def _profile():
    return load_profile(HELLO_TRACE).synced(HELLO_DIR)


class PrintProfileTests(unittest.TestCase):
    def test_plain_output_has_no_escapes(self) -> None:
        text = print_profile(_profile(), style="monokai", no_color=True, width=100)
        self.assertNotIn("\033", text)
        self.assertEqual(len(text.splitlines()), 27)
        self.assertIn("    9   int main() {", text)

    def test_hidden_addresses_drop_the_address_column(self) -> None:
        text = print_profile(_profile(), style="monokai", no_color=True, show_addresses=False, width=100)
        self.assertNotIn("00001089ac", text)
        self.assertNotIn("inst addr range", text)


class RunPagerTests(unittest.TestCase):
    def test_nopager_writes_plain_text_when_stdout_is_not_a_tty(self) -> None:
        stdout = io.StringIO()
        with (
            mock.patch("memviz.runtime.app.sys.stdout", stdout),
            mock.patch("memviz.runtime.app.sys.stdin") as stdin,
            mock.patch("memviz.runtime.app.os.isatty", return_value=False),
            mock.patch("memviz.runtime.app.shutil.get_terminal_size", return_value=mock.Mock(columns=90)),
            mock.patch("memviz.runtime.app.run_main_loop") as run_main_loop,
        ):
            stdin.fileno.return_value = 0
            stdout.fileno = lambda: 1
            run_pager(_profile(), HELLO_TRACE, "monokai", False, True)

        run_main_loop.assert_not_called()
        output = stdout.getvalue()
        self.assertNotIn("\033", output)
        self.assertIn("checkpoints: 0:memviz_begin 1:Before_hello", output)

    def test_interactive_session_builds_pager_state(self) -> None:
        profile = _profile()
        with (
            mock.patch("memviz.runtime.app.sys.stdin") as stdin,
            mock.patch("memviz.runtime.app.sys.stdout") as stdout,
            mock.patch("memviz.runtime.app.os.isatty", return_value=True),
            mock.patch("memviz.runtime.app.TerminalController") as controller,
            mock.patch("memviz.runtime.app.run_main_loop") as run_main_loop,
        ):
            stdin.fileno.return_value = 5
            stdout.fileno.return_value = 6
            run_pager(profile, HELLO_TRACE, "monokai", True, False, "ocean", False)

        controller.assert_called_once_with(5, 6)
        run_main_loop.assert_called_once()
        state, terminal, stdin_fd = run_main_loop.call_args.args
        self.assertIs(terminal, controller.return_value)
        self.assertEqual(stdin_fd, 5)
        self.assertEqual(len(state.rows), 26)
        self.assertEqual(state.header_indices, [0])
        self.assertEqual(state.checkpoint_names, ("memviz_begin", "Before_hello"))
        self.assertEqual(state.checkpoint_count, 2)
        self.assertEqual(state.title, str(HELLO_TRACE))
        self.assertEqual(state.stale_count, 0)
        self.assertFalse(state.show_addresses)
        self.assertEqual(state.theme.name, "plain")


if __name__ == "__main__":
    unittest.main()
