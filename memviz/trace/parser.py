"""Line-oriented grammar for checkpoint trace files.

A trace declares its checkpoints, then lists code locations grouped as
file-blocks, function-blocks and line records::

    checkpoints:
        memviz_begin
        Before_hello
    code locations:
        file: hello.c
            function: main
                13: 0x1089d1 -> 0x108a29 | 0 1

Checkpoint ids are implicit, 0-based, in declaration order. ``???`` names an
unknown file or function. Blank lines and ``#`` comments are ignored and
indentation is cosmetic. Any malformed statement aborts the whole parse.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from ..source_text import read_text

CHECKPOINTS_HEADER = "checkpoints:"
LOCATIONS_HEADER = "code locations:"

_FILE_RE = re.compile(r"^file:\s*(?P<name>\S(?:.*\S)?)$")
_FUNCTION_RE = re.compile(r"^function:\s*(?P<name>\S(?:.*\S)?)$")
_RECORD_RE = re.compile(
    r"^(?P<line>\d+)\s*:\s*"
    r"(?P<min>0[xX][0-9a-fA-F]+)\s*->\s*(?P<max>0[xX][0-9a-fA-F]+)\s*"
    r"\|(?P<ids>[^|]*)$"
)


class TraceParseError(ValueError):
    """Fatal syntax or consistency error in a trace file."""

    def __init__(self, path: Path | str | None, line_number: int, message: str) -> None:
        self.path = path
        self.line_number = line_number
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        where = "<trace>" if self.path is None else str(self.path)
        return f"{where}:{self.line_number}: {self.message}"


class TraceRecord(NamedTuple):
    filename: str
    function_name: str
    line_number: int
    addr_min: int
    addr_max: int
    checkpoint_ids: tuple[int, ...]


@dataclass(frozen=True)
class ParsedTrace:
    checkpoints: tuple[str, ...]
    records: tuple[TraceRecord, ...]


def _parse_ids(raw: str, checkpoint_count: int, fail) -> tuple[int, ...]:
    ids: list[int] = []
    for token in raw.split():
        if not token.isdigit():
            fail(f"invalid checkpoint id: {token!r}")
        value = int(token)
        if value >= checkpoint_count:
            fail(f"undeclared checkpoint id: {value}")
        ids.append(value)
    return tuple(ids)


def parse_trace_text(text: str, path: Path | str | None = None) -> ParsedTrace:
    """Parse trace ``text``; ``path`` only labels error messages."""
    checkpoints: list[str] = []
    records: list[TraceRecord] = []
    section: str | None = None
    seen_checkpoints = False
    current_file: str | None = None
    current_function: str | None = None
    line_number = 0

    def fail(message: str):
        raise TraceParseError(path, line_number, message)

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if line == CHECKPOINTS_HEADER:
            if seen_checkpoints or section is not None:
                fail("unexpected checkpoints section")
            seen_checkpoints = True
            section = "checkpoints"
            continue
        if line == LOCATIONS_HEADER:
            if section != "checkpoints":
                fail("code locations section must follow the checkpoints section")
            section = "locations"
            continue

        if section is None:
            fail(f"statement outside of any section: {line!r}")

        if section == "checkpoints":
            checkpoints.append(line)
            continue

        file_match = _FILE_RE.match(line)
        if file_match is not None:
            current_file = file_match.group("name")
            current_function = None
            continue

        function_match = _FUNCTION_RE.match(line)
        if function_match is not None:
            if current_file is None:
                fail("function block outside of a file block")
            current_function = function_match.group("name")
            continue

        record_match = _RECORD_RE.match(line)
        if record_match is None:
            fail(f"malformed line record: {line!r}")
        if current_function is None:
            fail("line record outside of a function block")
        assert current_file is not None
        records.append(
            TraceRecord(
                filename=current_file,
                function_name=current_function,
                line_number=int(record_match.group("line")),
                addr_min=int(record_match.group("min"), 16),
                addr_max=int(record_match.group("max"), 16),
                checkpoint_ids=_parse_ids(record_match.group("ids"), len(checkpoints), fail),
            )
        )

    if section != "locations":
        line_number += 1
        fail("missing code locations section")

    return ParsedTrace(checkpoints=tuple(checkpoints), records=tuple(records))


def parse_trace(path: Path) -> ParsedTrace:
    """Read and parse the trace file at ``path``.

    ``OSError`` from reading propagates; syntax errors raise ``TraceParseError``.
    """
    return parse_trace_text(read_text(Path(path)), path)


__all__ = [
    "CHECKPOINTS_HEADER",
    "LOCATIONS_HEADER",
    "TraceParseError",
    "TraceRecord",
    "ParsedTrace",
    "parse_trace_text",
    "parse_trace",
]
