"""Rendering engine for the three-column profile view.

Columns are checkpoint markers, instruction-address ranges, and source.
Frames are composed from pre-built ``ProfileRow`` cells, so drawing any
window of rows is pure string work.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from ..ansi import display_width, fit_ansi_cell
from ..ui_theme import DEFAULT_THEME, UITheme
from .rows import ProfileRow, build_profile_rows, checkpoint_count

ADDRESS_WIDTH = 26
CHECKPOINT_TITLE = " ckpt"
ADDRESS_TITLE = "  inst addr range"


@dataclass(frozen=True)
class ColumnLayout:
    checkpoint_width: int
    address_width: int
    source_width: int


@dataclass
class RenderContext:
    rows: list[ProfileRow]
    start: int
    max_lines: int
    width: int
    checkpoint_names: tuple[str, ...]
    checkpoint_count: int
    title: str
    text_x: int = 0
    show_addresses: bool = True
    stale_count: int = 0
    theme: UITheme = DEFAULT_THEME


def column_layout(width: int, checkpoints: int, show_addresses: bool = True) -> ColumnLayout:
    """Split ``width`` columns into checkpoint, address, and source widths."""
    checkpoint_width = max(len(CHECKPOINT_TITLE), 2 * checkpoints + 1)
    address_width = ADDRESS_WIDTH if show_addresses else 0
    dividers = 2 if show_addresses else 1
    source_width = max(1, width - checkpoint_width - address_width - dividers)
    return ColumnLayout(checkpoint_width, address_width, source_width)


def max_text_offset(rows: list[ProfileRow], layout: ColumnLayout) -> int:
    """Horizontal offset at which the widest source cell ends on the right edge."""
    widest = max((display_width(row.gutter) + display_width(row.source) for row in rows), default=0)
    return max(0, widest - layout.source_width)


def checkpoint_legend(names: tuple[str, ...], theme: UITheme = DEFAULT_THEME) -> str:
    """``checkpoints: 0:name 1:name`` in declaration order."""
    if not names:
        return f"{theme.checkpoint_title}no checkpoints{theme.reset}"
    labels = " ".join(f"{index}:{name}" for index, name in enumerate(names))
    return f"{theme.checkpoint_title}checkpoints:{theme.reset} {labels}"


def compose_row(
    checkpoints: str,
    address: str,
    source: str,
    layout: ColumnLayout,
    theme: UITheme = DEFAULT_THEME,
    text_x: int = 0,
    gutter: str = "",
) -> str:
    divider = f"{theme.divider}│{theme.reset}"
    out = [fit_ansi_cell(checkpoints, layout.checkpoint_width), divider]
    if layout.address_width:
        out.append(fit_ansi_cell(address, layout.address_width))
        out.append(divider)
    gutter_width = min(display_width(gutter), layout.source_width)
    if gutter_width:
        out.append(fit_ansi_cell(gutter, gutter_width))
    body = fit_ansi_cell(source, layout.source_width - gutter_width, start_cols=text_x)
    out.append(body)
    return "".join(out)


def compose_header_row(context: RenderContext, layout: ColumnLayout) -> str:
    return compose_row(
        CHECKPOINT_TITLE,
        ADDRESS_TITLE,
        checkpoint_legend(context.checkpoint_names, context.theme),
        layout,
        context.theme,
    )


def build_status_line(left_text: str, width: int, right_text: str = "│ q Quit") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def _scroll_percent(start: int, total_rows: int, visible_rows: int) -> float:
    if total_rows <= 0:
        return 0.0
    max_start = max(0, total_rows - max(1, visible_rows))
    if max_start <= 0:
        return 0.0
    clamped_start = max(0, min(start, max_start))
    return (clamped_start / max_start) * 100.0


def status_text(context: RenderContext) -> str:
    total = len(context.rows)
    if total:
        first = max(0, min(context.start, total - 1)) + 1
        last = min(total, first - 1 + max(1, context.max_lines))
    else:
        first = last = 0
    percent = _scroll_percent(context.start, total, context.max_lines)
    left = f"{context.title} ({first}-{last}/{total} {percent:5.1f}%)"
    if context.stale_count:
        left += f" [{context.stale_count} stale records]"
    return left


def compose_profile_frame(context: RenderContext) -> str:
    """Compose one full-screen frame: header, visible rows, status line."""
    theme = context.theme
    layout = column_layout(context.width, context.checkpoint_count, context.show_addresses)
    out: list[str] = ["\033[H\033[J"]
    out.append(compose_header_row(context, layout))
    out.append("\r\n")
    for row_offset in range(max(0, context.max_lines)):
        index = context.start + row_offset
        if 0 <= index < len(context.rows):
            row = context.rows[index]
            out.append(
                compose_row(
                    row.checkpoints,
                    row.address,
                    row.source,
                    layout,
                    theme,
                    text_x=context.text_x,
                    gutter=row.gutter,
                )
            )
        out.append("\r\n")
    out.append(theme.reverse)
    out.append(build_status_line(status_text(context), context.width))
    out.append(theme.reset)
    return "".join(out)


def render_profile_page(context: RenderContext) -> None:
    frame = compose_profile_frame(context)
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


def render_profile_text(
    rows: list[ProfileRow],
    width: int,
    checkpoint_names: tuple[str, ...] = (),
    checkpoints: int | None = None,
    *,
    show_addresses: bool = True,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    """Render every row as newline-terminated text for non-interactive output."""
    count = len(checkpoint_names) if checkpoints is None else checkpoints
    layout = column_layout(width, count, show_addresses)
    context = RenderContext(
        rows=rows,
        start=0,
        max_lines=len(rows),
        width=width,
        checkpoint_names=checkpoint_names,
        checkpoint_count=count,
        title="",
        show_addresses=show_addresses,
        theme=theme,
    )
    out = [compose_header_row(context, layout).rstrip(" "), "\n"]
    for row in rows:
        out.append(compose_row(row.checkpoints, row.address, row.source, layout, theme, gutter=row.gutter).rstrip(" "))
        out.append("\n")
    return "".join(out)


__all__ = [
    "ADDRESS_WIDTH",
    "ColumnLayout",
    "RenderContext",
    "ProfileRow",
    "build_profile_rows",
    "checkpoint_count",
    "column_layout",
    "max_text_offset",
    "checkpoint_legend",
    "compose_row",
    "build_status_line",
    "status_text",
    "compose_profile_frame",
    "render_profile_page",
    "render_profile_text",
]
