"""Tests for the checkpoint trace grammar."""

from __future__ import annotations

import tempfile
import textwrap
import unittest
from pathlib import Path

from memviz.profile_model import FileItem, LineItem
from memviz.trace import (
    TraceParseError,
    TraceRecord,
    load_profile,
    parse_trace,
    parse_trace_text,
)

HELLO_TRACE = Path(__file__).resolve().parents[2] / "assets" / "hello" / "memviz.checkpoint.28516"


def _trace(body: str) -> str:
    return textwrap.dedent(body).lstrip("\n")


class ParseTraceTests(unittest.TestCase):
    def test_bundled_hello_trace(self) -> None:
        parsed = parse_trace(HELLO_TRACE)

        self.assertEqual(parsed.checkpoints, ("memviz_begin", "Before_hello"))
        self.assertEqual(
            parsed.records,
            (
                TraceRecord("hello.c", "main", 9, 0x1089AC, 0x1089C4, (0,)),
                TraceRecord("hello.c", "main", 11, 0x1089C6, 0x1089CB, (0,)),
                TraceRecord("hello.c", "main", 13, 0x1089D1, 0x108A29, (0, 1)),
                TraceRecord("hello.c", "main", 15, 0x108A2D, 0x108A34, (1,)),
                TraceRecord("hello.c", "main", 19, 0x108A4E, 0x108A55, (1,)),
            ),
        )

    def test_multiple_files_functions_and_unknowns(self) -> None:
        parsed = parse_trace_text(
            _trace(
                """
                checkpoints:
                    start
                code locations:
                    file: src/a.c
                        function: f
                            1: 0x10 -> 0x14 | 0
                        function: g
                            7: 0X20 -> 0x2f |
                    file: ???
                        function: ???
                            0: 0xdead -> 0xbeef | 0
                """
            )
        )

        self.assertEqual(
            [(r.filename, r.function_name, r.line_number, r.checkpoint_ids) for r in parsed.records],
            [("src/a.c", "f", 1, (0,)), ("src/a.c", "g", 7, ()), ("???", "???", 0, (0,))],
        )
        self.assertEqual(parsed.records[1].addr_min, 0x20)
        self.assertEqual(parsed.records[1].addr_max, 0x2F)

    def test_comments_blank_lines_and_indentation_are_ignored(self) -> None:
        text = "# header\n\ncheckpoints:\nA\n   # note\ncode locations:\nfile: x.c\nfunction: main\n3: 0x1 -> 0x2 | 0\n"
        parsed = parse_trace_text(text)
        self.assertEqual(parsed.checkpoints, ("A",))
        self.assertEqual(len(parsed.records), 1)

    def test_empty_sections_are_allowed(self) -> None:
        parsed = parse_trace_text("checkpoints:\ncode locations:\n")
        self.assertEqual(parsed.checkpoints, ())
        self.assertEqual(parsed.records, ())

    def test_load_profile_builds_ordered_profile(self) -> None:
        profile = load_profile(HELLO_TRACE)

        self.assertEqual(profile.checkpoints, ("memviz_begin", "Before_hello"))
        self.assertIsInstance(profile[0], FileItem)
        self.assertEqual(profile[0].file.checkpoints, {0, 1})
        self.assertEqual([item.line.nb for item in profile if isinstance(item, LineItem)], [9, 11, 13, 15, 19])


class ParseTraceErrorTests(unittest.TestCase):
    def assertParseError(self, text: str, line_number: int, fragment: str) -> None:
        with self.assertRaises(TraceParseError) as caught:
            parse_trace_text(text, "t.trace")
        self.assertEqual(caught.exception.line_number, line_number)
        self.assertIn(fragment, caught.exception.message)
        self.assertTrue(str(caught.exception).startswith(f"t.trace:{line_number}: "))

    def test_statement_before_any_section(self) -> None:
        self.assertParseError("file: a.c\n", 1, "outside of any section")

    def test_locations_without_checkpoints_section(self) -> None:
        self.assertParseError("code locations:\n", 1, "must follow the checkpoints section")

    def test_duplicate_checkpoints_section(self) -> None:
        self.assertParseError("checkpoints:\nA\ncheckpoints:\n", 3, "unexpected checkpoints section")

    def test_missing_locations_section(self) -> None:
        self.assertParseError("checkpoints:\nA\n", 3, "missing code locations section")

    def test_function_outside_file(self) -> None:
        self.assertParseError("checkpoints:\ncode locations:\nfunction: f\n", 3, "function block outside")

    def test_record_outside_function(self) -> None:
        self.assertParseError("checkpoints:\ncode locations:\nfile: a.c\n1: 0x1 -> 0x2 |\n", 4, "outside of a function")

    def test_malformed_record(self) -> None:
        text = "checkpoints:\nA\ncode locations:\nfile: a.c\nfunction: f\n1: 12 -> 0x2 | 0\n"
        self.assertParseError(text, 6, "malformed line record")

    def test_undeclared_checkpoint_id(self) -> None:
        text = "checkpoints:\nA\ncode locations:\nfile: a.c\nfunction: f\n1: 0x1 -> 0x2 | 0 1\n"
        self.assertParseError(text, 6, "undeclared checkpoint id: 1")

    def test_non_numeric_checkpoint_id(self) -> None:
        text = "checkpoints:\nA\ncode locations:\nfile: a.c\nfunction: f\n1: 0x1 -> 0x2 | x\n"
        self.assertParseError(text, 6, "invalid checkpoint id")

    def test_parse_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_trace_text("bogus\n")

    def test_parse_trace_labels_errors_with_file_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.trace"
            path.write_text("checkpoints:\n", encoding="utf-8")
            with self.assertRaises(TraceParseError) as caught:
                parse_trace(path)
        self.assertEqual(str(caught.exception), f"{path}:2: missing code locations section")

    def test_missing_trace_file_raises_os_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                parse_trace(Path(tmp) / "absent.trace")


if __name__ == "__main__":
    unittest.main()
