"""Terminal text measurement helpers.

Panel titles and file names are placed cell by cell, so wide and combining
characters must be measured the way the terminal will draw them.
"""

from __future__ import annotations

import re
import unicodedata

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one printable character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def sanitize_terminal_text(text: str) -> str:
    """Replace control characters (tabs, newlines, escapes) in file names."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub("?", text)


__all__ = [
    "char_display_width",
    "sanitize_terminal_text",
]
