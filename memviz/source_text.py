"""Source file decoding and line splitting.

Decoding is tolerant so a profile can always be shown next to its sources,
whatever their encoding. Control bytes are neutralized before display.
"""

from __future__ import annotations

import re
from pathlib import Path

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8 with BOM stripping, then latin-1. Line endings are left
    untouched; ``split_physical_lines`` decides where lines end. ``OSError``
    propagates.
    """
    data = path.read_bytes()
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def split_physical_lines(text: str) -> list[str]:
    """Split ``text`` into numbered source lines.

    Lines end at ``\\n`` or ``\\r\\n``; a final newline does not open an extra
    empty line, so ``"a\\nb\\n"`` has two lines.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_physical_lines(path: Path) -> list[str]:
    return split_physical_lines(read_text(path))


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


__all__ = ["read_text", "split_physical_lines", "read_physical_lines", "sanitize_terminal_text"]
