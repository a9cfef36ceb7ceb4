"""Display rows for a (synchronized) profile.

Every profile item becomes one ``ProfileRow`` holding three ready-to-draw
cells: checkpoint markers, instruction-address range, and source. Rows are
built once; scrolling only slices them, so drawing never touches the
filesystem.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ..highlight import DEFAULT_STYLE, highlight_lines
from ..profile_model import UNKNOWN, FileItem, LineItem, Profile, ProfileItem
from ..source_text import sanitize_terminal_text
from ..ui_theme import DEFAULT_THEME, UITheme

CHECKPOINT_HIT = "●"
CHECKPOINT_MISS = "·"
FILE_BADGE = " [fl] "
UNAVAILABLE_TEXT = "Source file is unavailable"


@dataclass(frozen=True)
class ProfileRow:
    """Pre-rendered cells of one item; ``gutter`` holds the line number."""

    item: ProfileItem
    checkpoints: str
    address: str
    gutter: str
    source: str


def checkpoint_count(profile: Profile) -> int:
    """Number of checkpoint marker columns: declared names or highest id seen."""
    highest = -1
    for item in profile:
        ids = item.file.checkpoints if isinstance(item, FileItem) else item.line.checkpoints
        if ids:
            highest = max(highest, max(ids))
    return max(len(profile.checkpoints), highest + 1)


def format_checkpoint_cell(ids: Iterable[int], count: int, theme: UITheme = DEFAULT_THEME) -> str:
    members = set(ids)
    cells: list[str] = []
    for checkpoint_id in range(count):
        if checkpoint_id in members:
            cells.append(f"{theme.checkpoint_hit}{CHECKPOINT_HIT}{theme.reset}")
        else:
            cells.append(f"{theme.checkpoint_miss}{CHECKPOINT_MISS}{theme.reset}")
    return " " + " ".join(cells) if cells else ""


def format_address_cell(addr_range: tuple[int, int], theme: UITheme = DEFAULT_THEME) -> str:
    """``lo -> hi`` in fixed-width hex, or blank for the empty ``(0, 0)`` range."""
    if addr_range == (0, 0):
        return ""
    low, high = addr_range
    return f"  {theme.address}{low:010x} -> {high:010x}{theme.reset}"


def format_line_number(nb: int, theme: UITheme = DEFAULT_THEME) -> str:
    return f"{theme.line_number}{nb:5} {theme.reset}  "


def format_file_header(item: FileItem, theme: UITheme = DEFAULT_THEME) -> str:
    path = sanitize_terminal_text(item.file.path.display())
    return f"{theme.file_header_badge}{FILE_BADGE}{theme.reset}  {theme.file_header_path}{path}{theme.reset}"


def format_line_source(item: LineItem, text: str | None, theme: UITheme = DEFAULT_THEME) -> str:
    """Source cell for a line; ``text`` is the (highlighted) content, if any."""
    line = item.line
    if not line.has_debug_info:
        function = sanitize_terminal_text(line.function or UNKNOWN)
        return f"{theme.function_line}in function: {function}{theme.reset}"
    if text is None:
        return f"{theme.unavailable}{UNAVAILABLE_TEXT}{theme.reset}"
    return text


def _highlighted_section(lines: list[LineItem], path: Path, style: str, no_color: bool) -> list[str | None]:
    contents = [item.line.line_content for item in lines if item.line.line_content is not None]
    highlighted = iter(highlight_lines(contents, path, style, no_color=no_color))
    return [None if item.line.line_content is None else next(highlighted) for item in lines]


def build_profile_rows(
    profile: Profile,
    *,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    theme: UITheme = DEFAULT_THEME,
) -> list[ProfileRow]:
    """Build one row per profile item, in profile order."""
    count = checkpoint_count(profile)
    rows: list[ProfileRow] = []
    for section in profile.file_sections():
        header = section.header
        rows.append(
            ProfileRow(
                item=header,
                checkpoints=format_checkpoint_cell(header.file.checkpoints, count, theme),
                address="",
                gutter="",
                source=format_file_header(header, theme),
            )
        )
        lines = list(section.lines())
        texts = _highlighted_section(lines, Path(header.file.path.file), style, no_color)
        for item, text in zip(lines, texts):
            rows.append(
                ProfileRow(
                    item=item,
                    checkpoints=format_checkpoint_cell(item.line.checkpoints, count, theme),
                    address=format_address_cell(item.line.addr_range, theme),
                    gutter=format_line_number(item.line.nb, theme),
                    source=format_line_source(item, text, theme),
                )
            )
    return rows


__all__ = [
    "CHECKPOINT_HIT",
    "CHECKPOINT_MISS",
    "FILE_BADGE",
    "UNAVAILABLE_TEXT",
    "ProfileRow",
    "checkpoint_count",
    "format_checkpoint_cell",
    "format_address_cell",
    "format_line_number",
    "format_file_header",
    "format_line_source",
    "build_profile_rows",
]
