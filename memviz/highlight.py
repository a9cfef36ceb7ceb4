"""Syntax highlighting of synchronized source lines.

Highlights a whole file section at once with Pygments so multi-line tokens
(comments, strings) colour correctly, then splits the result back into one
string per physical line. Falls back to sanitized plain text.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from types import SimpleNamespace

from .source_text import sanitize_terminal_text

DEFAULT_STYLE = "monokai"


@lru_cache(maxsize=1)
def _pygments():
    """Import Pygments once; ``None`` when it cannot be imported."""
    try:
        from pygments import highlight
        from pygments.formatters import TerminalFormatter
        from pygments.lexers import TextLexer, get_lexer_for_filename
        from pygments.styles import get_style_by_name
        from pygments.util import ClassNotFound
    except ImportError:
        return None
    return SimpleNamespace(
        highlight=highlight,
        formatter=TerminalFormatter,
        text_lexer=TextLexer,
        lexer_for_filename=get_lexer_for_filename,
        style_by_name=get_style_by_name,
        class_not_found=ClassNotFound,
    )


@lru_cache(maxsize=16)
def _formatter_for_style(style: str):
    """Terminal formatter for ``style``; unknown style names use the default."""
    api = _pygments()
    try:
        api.style_by_name(style)
    except api.class_not_found:
        style = DEFAULT_STYLE
    return api.formatter(style=style)


def pygments_highlight(source: str, path: Path, style: str = DEFAULT_STYLE) -> str | None:
    """Highlight source with Pygments, returning ``None`` when unavailable.

    Lexers keep leading/trailing blank lines so line numbering is preserved.
    Unknown file types are lexed as plain text.
    """
    api = _pygments()
    if api is None:
        return None

    try:
        lexer = api.lexer_for_filename(path.name, source, stripnl=False)
    except api.class_not_found:
        lexer = api.text_lexer(stripnl=False)
    return api.highlight(source, lexer, _formatter_for_style(style))


def highlight_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE, no_color: bool = False) -> list[str]:
    """Return one display string per input line, highlighted when possible.

    Output always has ``len(lines)`` entries; if the highlighter changes the
    line count the plain sanitized lines are returned instead.
    """
    plain = [sanitize_terminal_text(line) for line in lines]
    if no_color or not plain:
        return plain

    rendered = pygments_highlight("\n".join(plain) + "\n", path, style)
    if not rendered:
        return plain

    highlighted = rendered.split("\n")
    if highlighted and highlighted[-1] == "":
        highlighted.pop()
    if len(highlighted) != len(plain):
        return plain
    return highlighted


__all__ = ["DEFAULT_STYLE", "pygments_highlight", "highlight_lines"]
