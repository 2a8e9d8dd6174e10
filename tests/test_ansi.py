from __future__ import annotations

import unittest

from projdash.ansi import center_ansi_line, clip_ansi_line, display_width, strip_ansi


class AnsiHelpersTests(unittest.TestCase):
    def test_width_ignores_escape_sequences_and_counts_wide_chars(self) -> None:
        self.assertEqual(display_width("\033[1mabc\033[0m"), 3)
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(strip_ansi("\033[38;5;81mgit\033[0m"), "git")

    def test_clip_keeps_styles_and_respects_wide_chars(self) -> None:
        self.assertEqual(clip_ansi_line("\033[1mabcdef\033[0m", 3), "\033[1mabc")
        self.assertEqual(clip_ansi_line("日本語", 5), "日本")
        self.assertEqual(clip_ansi_line("abc", 0), "")

    def test_center_pads_left_only(self) -> None:
        self.assertEqual(center_ansi_line("abc", 9), "   abc")
        self.assertEqual(center_ansi_line("\033[1mabc\033[0m", 7), "  \033[1mabc\033[0m")
        self.assertEqual(center_ansi_line("toolong", 4), "toolong")


if __name__ == "__main__":
    unittest.main()
