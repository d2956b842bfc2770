"""Tests for terminal cell measurement and name sanitizing."""

import unittest

from nestview import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(ansi_mod.char_display_width("a"), 1)
        self.assertEqual(ansi_mod.char_display_width("界"), 2)
        self.assertEqual(ansi_mod.char_display_width("\uff21"), 2)
        self.assertEqual(ansi_mod.char_display_width("\u0301"), 0)


class SanitizeTests(unittest.TestCase):
    def test_control_characters_become_question_marks(self) -> None:
        self.assertEqual(ansi_mod.sanitize_terminal_text("a\tb\nc\x1bd"), "a?b?c?d")

    def test_clean_text_is_returned_unchanged(self) -> None:
        text = "résumé.txt"
        self.assertIs(ansi_mod.sanitize_terminal_text(text), text)


if __name__ == "__main__":
    unittest.main()
