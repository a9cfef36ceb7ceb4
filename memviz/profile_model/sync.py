"""Merge of sparse trace-derived lines with the physical lines of a file.

A trace only records lines that fell inside an instrumented range. The merge
turns one file section into a gapless listing: one line item per physical
line, carrying the recorded address range, function, and checkpoints where a
record exists for that line number.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from ..source_text import read_physical_lines
from .types import FileItem, LineInfo, LineItem, ProfileItem


class SyncedFileSection:
    """Iterator over one file section synchronized with the file on disk.

    The first item is always the section's ``FileItem``. Sections whose file
    has no debug info, or cannot be read, are passed through unchanged.
    Records that cannot be placed on a physical line (line number past the
    end of the file, or below the current position) are dropped and listed in
    ``stale_records`` once iteration is complete.
    """

    def __init__(self, section: Iterable[ProfileItem], root: Path | None = None) -> None:
        self._section = iter(section)
        header = next(self._section)
        if not isinstance(header, FileItem):
            raise ValueError("file section must start with a file item")
        self.header = header
        self.file = header.file
        self.stale_records: list[LineItem] = []
        self.physical_lines: list[str] | None = None
        if self.file.has_debug_info:
            try:
                self.physical_lines = read_physical_lines(self.file.path.expand(root))
            except OSError:
                self.physical_lines = None
        if self.physical_lines is None:
            self._items = self._pass_through()
        else:
            self._items = self._merge(self.physical_lines)

    @property
    def is_synced(self) -> bool:
        return self.physical_lines is not None

    def __iter__(self) -> Iterator[ProfileItem]:
        return self

    def __next__(self) -> ProfileItem:
        return next(self._items)

    def _pass_through(self) -> Iterator[ProfileItem]:
        yield self.header
        yield from self._section

    def _next_record(self) -> LineItem | None:
        return next(self._section, None)  # type: ignore[arg-type]

    def _merge(self, physical_lines: list[str]) -> Iterator[ProfileItem]:
        yield self.header
        pending = self._next_record()
        for position, text in enumerate(physical_lines, start=1):
            while pending is not None and pending.line.nb < position:
                self.stale_records.append(pending)
                pending = self._next_record()
            if pending is not None and pending.line.nb == position:
                yield LineItem(self.file, pending.line.with_content(text))
                pending = self._next_record()
            else:
                yield LineItem(self.file, LineInfo(position, line_content=text))
        while pending is not None:
            self.stale_records.append(pending)
            pending = self._next_record()


__all__ = ["SyncedFileSection"]
