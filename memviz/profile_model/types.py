"""Domain datatypes for profile files, lines, and ordered profile items.

Every type exposes a total three-way comparator (``compare_*``) and routes
its rich-comparison operators through it, so items can be sorted and
bisected directly. Equality stays value-based; two values may therefore
share an ordering position without being equal (e.g. the same line number
carrying different source text).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

UNKNOWN = "???"


def _sign(left: object, right: object) -> int:
    return (left > right) - (left < right)  # type: ignore[operator]


class _Ordered:
    """Rich comparisons derived from ``_compare`` (``None`` means unrelated types)."""

    def _compare(self, other: object) -> int | None:
        raise NotImplementedError

    def __lt__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result >= 0


@dataclass(frozen=True)
class PathInfo(_Ordered):
    """Source file path split into directory and filename.

    The unknown-file sentinel never keeps a directory, so every ``???`` path
    compares and hashes equal.
    """

    directory: str
    file: str

    def __post_init__(self) -> None:
        if self.file == UNKNOWN and self.directory:
            object.__setattr__(self, "directory", "")

    @classmethod
    def from_path(cls, recorded: str) -> "PathInfo":
        """Split a recorded path such as ``src/main.c`` into directory and file."""
        if recorded == UNKNOWN:
            return cls("", UNKNOWN)
        directory, file = os.path.split(recorded)
        if not file:
            return cls("", recorded)
        return cls(directory, file)

    @property
    def is_unknown(self) -> bool:
        return self.file == UNKNOWN

    def expand(self, root: Path | None = None) -> Path:
        """Return the filesystem path, anchored at ``root`` when relative."""
        path = Path(self.directory) / self.file
        if root is not None and not path.is_absolute():
            return Path(root) / path
        return path

    def display(self) -> str:
        if not self.directory:
            return self.file
        return os.path.join(self.directory, self.file)

    def _compare(self, other: object) -> int | None:
        if not isinstance(other, PathInfo):
            return None
        return compare_paths(self, other)


@dataclass
class FileInfo(_Ordered):
    """A source file plus the checkpoint ids that touched it anywhere."""

    path: PathInfo
    checkpoints: set[int] = field(default_factory=set)
    has_debug_info: bool = field(init=False)

    def __post_init__(self) -> None:
        self.has_debug_info = not self.path.is_unknown

    def _compare(self, other: object) -> int | None:
        if not isinstance(other, FileInfo):
            return None
        return compare_files(self, other)


@dataclass(frozen=True)
class LineInfo(_Ordered):
    """One line of a file: address range, owning function, text, checkpoints."""

    nb: int
    addr_range: tuple[int, int] = (0, 0)
    line_content: str | None = None
    function: str | None = None
    checkpoints: frozenset[int] = frozenset()
    has_debug_info: bool = True

    def with_content(self, text: str | None) -> "LineInfo":
        return replace(self, line_content=text)

    def _compare(self, other: object) -> int | None:
        if not isinstance(other, LineInfo):
            return None
        return compare_lines(self, other)


@dataclass(frozen=True)
class FileItem(_Ordered):
    """Header item of a file section."""

    file: FileInfo

    # Holds a mutable FileInfo.
    __hash__ = None  # type: ignore[assignment]

    def same_file(self, other: "ProfileItem") -> bool:
        return compare_files(self.file, other.file) == 0

    def _compare(self, other: object) -> int | None:
        if not isinstance(other, (FileItem, LineItem)):
            return None
        return compare_items(self, other)


@dataclass(frozen=True)
class LineItem(_Ordered):
    """A line belonging to ``file``."""

    file: FileInfo
    line: LineInfo

    # Holds a mutable FileInfo.
    __hash__ = None  # type: ignore[assignment]

    def same_file(self, other: "ProfileItem") -> bool:
        return compare_files(self.file, other.file) == 0

    def _compare(self, other: object) -> int | None:
        if not isinstance(other, (FileItem, LineItem)):
            return None
        return compare_items(self, other)


ProfileItem = FileItem | LineItem


def compare_paths(left: PathInfo, right: PathInfo) -> int:
    """Lexicographic order on ``(directory, file)``."""
    return _sign((left.directory, left.file), (right.directory, right.file))


def compare_files(left: FileInfo, right: FileInfo) -> int:
    """Order files by path with the unknown file strictly first."""
    result = compare_paths(left.path, right.path)
    if result != 0:
        if left.path.is_unknown:
            return -1
        if right.path.is_unknown:
            return 1
    return result


def compare_function_names(left: str | None, right: str | None) -> int:
    """Compare optional function names with ``None`` sorting after every name.

    This inverts the usual "missing first" convention: lines whose function
    is unknown are grouped at the end of a file without debug info.
    """
    if left == right:
        return 0
    if left is None:
        return 1
    if right is None:
        return -1
    return _sign(left, right)


def compare_lines(left: LineInfo, right: LineInfo) -> int:
    """Order by line number when ``left`` has debug info or both share a function.

    Otherwise group by function name (see ``compare_function_names``).
    """
    if left.has_debug_info or left.function == right.function:
        return _sign(left.nb, right.nb)
    return compare_function_names(left.function, right.function)


def compare_items(left: ProfileItem, right: ProfileItem) -> int:
    """Order items by file, header first, then by line order within a file."""
    result = compare_files(left.file, right.file)
    if result != 0:
        return result
    if isinstance(left, FileItem):
        return 0 if isinstance(right, FileItem) else -1
    if isinstance(right, FileItem):
        return 1
    return compare_lines(left.line, right.line)


__all__ = [
    "UNKNOWN",
    "PathInfo",
    "FileInfo",
    "LineInfo",
    "FileItem",
    "LineItem",
    "ProfileItem",
    "compare_paths",
    "compare_files",
    "compare_function_names",
    "compare_lines",
    "compare_items",
]
