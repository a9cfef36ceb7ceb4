"""ANSI-aware text measurement and cell shaping for the profile columns.

Escape sequences are preserved and never counted toward width, so highlighted
source can be clipped, scrolled horizontally, and padded into fixed columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Visible width of ``text`` once escapes are removed and tabs expanded."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Tabs are expanded into spaces so clipping aligns with rendered cells.
    """
    return slice_ansi_line(text, 0, max_cols)


def slice_ansi_line(text: str, start_cols: int, max_cols: int) -> str:
    """Return a horizontal viewport of a styled line.

    The slice starts at ``start_cols`` display columns and includes up to
    ``max_cols`` columns. When the viewport begins after an SGR sequence, that
    sequence is re-emitted so visible text keeps its styling.
    """
    if max_cols <= 0 or not text:
        return ""
    start_cols = max(0, start_cols)

    out: list[str] = []
    col = 0
    shown = 0
    i = 0
    n = len(text)
    pending_sgr = ""
    injected_style = False
    while i < n and shown < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                seq = match.group(0)
                if seq.endswith("m"):
                    pending_sgr = seq
                    if col >= start_cols:
                        out.append(seq)
                        injected_style = True
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w <= start_cols:
            col += w
            i += 1
            continue
        if not injected_style and pending_sgr:
            out.append(pending_sgr)
            injected_style = True
        if ch == "\t":
            # Partially scrolled tabs only show their visible remainder.
            visible = min(w, col + w - start_cols, max_cols - shown)
            out.append(" " * visible)
            shown += visible
            col += w
            i += 1
            continue
        if shown + w > max_cols:
            break
        out.append(ch)
        shown += w
        col += w
        i += 1

    return "".join(out)


def fit_ansi_cell(text: str, width: int, start_cols: int = 0) -> str:
    """Clip or pad ``text`` to exactly ``width`` columns, closing any styling."""
    if width <= 0:
        return ""
    clipped = slice_ansi_line(text, start_cols, width)
    padding = width - display_width(clipped)
    if "\x1b" in clipped:
        clipped += RESET
    return clipped + " " * max(0, padding)


__all__ = [
    "ANSI_ESCAPE_RE",
    "TAB_STOP",
    "RESET",
    "char_display_width",
    "display_width",
    "clip_ansi_line",
    "slice_ansi_line",
    "fit_ansi_cell",
]
