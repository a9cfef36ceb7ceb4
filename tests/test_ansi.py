"""Regression tests for ANSI cell-shaping primitives.

These cases protect column alignment of highlighted source and horizontal
scrolling from width-measurement regressions.
"""

import unittest

from memviz import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_escapes_do_not_count(self) -> None:
        self.assertEqual(ansi_mod.display_width("\033[31mred\033[0m"), 3)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.display_width("\tx"), 9)
        self.assertEqual(ansi_mod.display_width("abc\tx"), 9)

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(ansi_mod.display_width("日本"), 4)
        self.assertEqual(ansi_mod.display_width("é"), 1)


class SliceAnsiLineTests(unittest.TestCase):
    def test_clip_keeps_leading_columns(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abcdef", 3), "abc")
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")

    def test_slice_reemits_active_style(self) -> None:
        sliced = ansi_mod.slice_ansi_line("\033[32mabcdef\033[0m", 2, 3)
        self.assertEqual(sliced, "\033[32mcde")

    def test_partially_scrolled_tab_shows_remainder(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("\tx", 6, 5), "  x")

    def test_wide_character_is_not_split(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a日b", 2), "a")


class FitAnsiCellTests(unittest.TestCase):
    def test_pads_plain_text_to_width(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_cell("ab", 5), "ab   ")

    def test_clips_and_resets_styled_text(self) -> None:
        cell = ansi_mod.fit_ansi_cell("\033[1mabcdef", 4)
        self.assertEqual(cell, "\033[1mabcd" + ansi_mod.RESET)
        self.assertEqual(ansi_mod.display_width(cell), 4)

    def test_zero_width_cell_is_empty(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_cell("abc", 0), "")

    def test_start_column_scrolls_before_fitting(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_cell("abcdef", 4, start_cols=4), "ef  ")


if __name__ == "__main__":
    unittest.main()
