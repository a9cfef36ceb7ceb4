"""Ordered profile container and its file-section views.

A ``Profile`` keeps its items sorted by ``compare_items``. Because files order
first and a file header precedes its lines, iterating the container already
yields each file's header followed by all of its lines; file sections are
just delimited runs of the backing list.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import overload

from .sets import checkpoint_set, merge_checkpoints
from .sync import SyncedFileSection
from .types import UNKNOWN, FileInfo, FileItem, LineInfo, LineItem, PathInfo, ProfileItem, compare_items

RecordTuple = tuple[str, str, int, int, int, Iterable[int]]


class FileSection:
    """Lazy, re-iterable view of one file's items inside a profile.

    Iteration yields the ``FileItem`` header, then every ``LineItem`` up to the
    next header or the end of the profile.
    """

    def __init__(self, profile: "Profile", start: int) -> None:
        self._profile = profile
        self._start = start

    @property
    def header(self) -> FileItem:
        return self._profile._items[self._start]  # type: ignore[return-value]

    @property
    def file(self) -> FileInfo:
        return self.header.file

    @property
    def start(self) -> int:
        """Index of the header inside the profile."""
        return self._start

    def __iter__(self) -> Iterator[ProfileItem]:
        items = self._profile._items
        yield items[self._start]
        yield from self._lines_from(items)

    def lines(self) -> Iterator[LineItem]:
        return self._lines_from(self._profile._items)

    def _lines_from(self, items: list[ProfileItem]) -> Iterator[LineItem]:
        index = self._start + 1
        while index < len(items):
            item = items[index]
            if isinstance(item, FileItem):
                return
            yield item
            index += 1

    def synced(self, root: Path | None = None) -> SyncedFileSection:
        return SyncedFileSection(self, root)

    def __repr__(self) -> str:
        return f"FileSection({self.file.path.display()!r}, start={self._start})"


class Profile:
    """Ordered, duplicate-free collection of profile items plus checkpoint names.

    Uniqueness is by ordering key: inserting an item that orders equal to an
    existing one replaces it.
    """

    def __init__(self, items: Iterable[ProfileItem] = (), checkpoints: Iterable[str] = ()) -> None:
        self._items: list[ProfileItem] = []
        self.checkpoints: tuple[str, ...] = tuple(checkpoints)
        self.stale_records: tuple[LineItem, ...] = ()
        for item in items:
            self.insert(item)

    @classmethod
    def from_records(cls, records: Iterable[RecordTuple], checkpoints: Iterable[str] = ()) -> "Profile":
        """Build a profile from parsed trace records.

        Each record is ``(filename, function_name, line_number, addr_min,
        addr_max, checkpoint_ids)``. Files are created once and shared by all
        their lines; their checkpoint sets accumulate every record's ids. A
        function named ``???`` is stored as unknown (``None``).
        """
        profile = cls(checkpoints=checkpoints)
        files: dict[PathInfo, FileInfo] = {}
        for filename, function_name, line_number, addr_min, addr_max, checkpoint_ids in records:
            path = PathInfo.from_path(filename)
            file_info = files.get(path)
            if file_info is None:
                file_info = FileInfo(path)
                files[path] = file_info
                profile.insert(FileItem(file_info))
            ids = checkpoint_set(*checkpoint_ids)
            merge_checkpoints(file_info.checkpoints, ids)
            line = LineInfo(
                nb=line_number,
                addr_range=(addr_min, addr_max),
                function=None if function_name == UNKNOWN else function_name,
                checkpoints=ids,
                has_debug_info=file_info.has_debug_info,
            )
            profile.insert(LineItem(file_info, line))
        return profile

    def insert(self, item: ProfileItem) -> None:
        items = self._items
        if not items or compare_items(items[-1], item) < 0:
            items.append(item)
            return
        index = bisect_left(items, item)
        if index < len(items) and compare_items(items[index], item) == 0:
            items[index] = item
        else:
            items.insert(index, item)

    def file_sections(self) -> Iterator[FileSection]:
        """Yield one lazy section per file, in file order."""
        for index, item in enumerate(self._items):
            if isinstance(item, FileItem):
                yield FileSection(self, index)

    def file_section(self, item: ProfileItem) -> FileSection:
        """Return the section of the file ``item`` belongs to."""
        index = bisect_left(self._items, FileItem(item.file))
        if index < len(self._items):
            header = self._items[index]
            if isinstance(header, FileItem) and header.same_file(item):
                return FileSection(self, index)
        raise KeyError(f"file not in profile: {item.file.path.display()}")

    def synced(self, root: Path | None = None) -> "Profile":
        """Return a new profile with every readable file merged with its source.

        The receiver is left untouched. Records that could not be placed on a
        physical line are collected in the result's ``stale_records``.
        """
        result = Profile(checkpoints=self.checkpoints)
        stale: list[LineItem] = []
        for section in self.file_sections():
            merged = section.synced(root)
            for item in merged:
                result.insert(item)
            stale.extend(merged.stale_records)
        result.stale_records = tuple(stale)
        return result

    def file_header_indices(self) -> list[int]:
        return [section.start for section in self.file_sections()]

    def __iter__(self) -> Iterator[ProfileItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @overload
    def __getitem__(self, index: int) -> ProfileItem: ...

    @overload
    def __getitem__(self, index: slice) -> list[ProfileItem]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, (FileItem, LineItem)):
            return False
        index = bisect_left(self._items, item)
        return index < len(self._items) and self._items[index] == item

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Profile):
            return NotImplemented
        return self.checkpoints == other.checkpoints and self._items == other._items

    def __repr__(self) -> str:
        return f"Profile(files={len(self.file_header_indices())}, items={len(self._items)})"


__all__ = ["FileSection", "Profile", "RecordTuple"]
