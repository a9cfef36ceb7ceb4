"""Scroll position and viewport-height arithmetic for the profile pager."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass

HORIZONTAL_STEP = 8


@dataclass
class Viewport:
    """Window of ``height`` rows over ``item_count`` items starting at ``y_pos``.

    ``y_pos`` is kept within ``[0, max_start]`` so the last page is always
    full when there are more items than rows.
    """

    item_count: int = 0
    height: int = 0
    y_pos: int = 0
    text_x: int = 0
    text_limit: int | None = None

    @property
    def max_start(self) -> int:
        return max(0, self.item_count - max(0, self.height))

    @property
    def start(self) -> int:
        return max(0, min(self.y_pos, self.max_start))

    def resize(self, item_count: int, height: int) -> None:
        self.item_count = max(0, item_count)
        self.height = max(0, height)
        self.y_pos = self.start

    def visible_range(self) -> range:
        start = self.start
        return range(start, min(self.item_count, start + self.height))

    def scroll_up(self, n: int = 1) -> bool:
        return self._move_to(self.start - n)

    def scroll_down(self, n: int = 1) -> bool:
        return self._move_to(self.start + n)

    def page_up(self) -> bool:
        return self.scroll_up(max(1, self.height - 1))

    def page_down(self) -> bool:
        return self.scroll_down(max(1, self.height - 1))

    def home(self) -> bool:
        return self._move_to(0)

    def end(self) -> bool:
        return self._move_to(self.max_start)

    def jump_to(self, index: int) -> bool:
        """Bring item ``index`` to the top row (as far as scrolling allows)."""
        return self._move_to(index)

    def scroll_left(self, n: int = HORIZONTAL_STEP) -> bool:
        previous = self.text_x
        self.text_x = max(0, self.text_x - n)
        return self.text_x != previous

    def scroll_right(self, n: int = HORIZONTAL_STEP) -> bool:
        previous = self.text_x
        self.text_x += max(0, n)
        if self.text_limit is not None:
            self.text_x = max(previous, min(self.text_x, self.text_limit))
        return self.text_x != previous

    def set_text_limit(self, limit: int | None) -> bool:
        """Bound horizontal scrolling; pulls ``text_x`` back inside the bound."""
        previous = self.text_x
        self.text_limit = None if limit is None else max(0, limit)
        if self.text_limit is not None:
            self.text_x = min(self.text_x, self.text_limit)
        return self.text_x != previous

    def _move_to(self, y_pos: int) -> bool:
        previous = self.start
        self.y_pos = max(0, min(y_pos, self.max_start))
        return self.y_pos != previous


def next_section_start(header_indices: list[int], current: int) -> int | None:
    """First file-header index strictly after ``current``."""
    position = bisect_right(header_indices, current)
    if position < len(header_indices):
        return header_indices[position]
    return None


def previous_section_start(header_indices: list[int], current: int) -> int | None:
    """Last file-header index strictly before ``current``."""
    position = bisect_left(header_indices, current)
    if position > 0:
        return header_indices[position - 1]
    return None


__all__ = ["HORIZONTAL_STEP", "Viewport", "next_section_start", "previous_section_start"]
