"""Frame composition for the nested panel view.

Drawing goes into an in-memory cell grid first; the finished frame is
written to the terminal with a single ``os.write`` so partial frames are
never visible.
"""

from __future__ import annotations

import os
from pathlib import Path

from .ansi import char_display_width, sanitize_terminal_text
from .entry_info import describe_entry, format_entry_info
from .file_tree_model import Node, Rect
from .layout import layout_view
from .navigation import NavigationState
from .ui_theme import UITheme

SGR_RESET = "\033[0m"
INFO_BAR_ROWS = 3
MIN_VIEW_ROWS = 2
MAX_DRAW_DEPTH = 3
FILE_MARKER = "◉"

_TOP_LEFT, _TOP_RIGHT, _BOTTOM_LEFT, _BOTTOM_RIGHT = "┌", "┐", "└", "┘"
_HORIZONTAL, _VERTICAL = "─", "│"
# Right half of a wide character.
_CONTINUATION = ""


class Screen:
    """Fixed-size grid of ``(char, sgr_style)`` cells."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.cells = [[(" ", "") for _ in range(self.width)] for _ in range(self.height)]

    def put_text(self, x: int, y: int, text: str, style: str = "", max_width: int | None = None) -> int:
        """Write ``text`` at ``(x, y)`` clipped to the grid; returns columns used."""
        if y < 0 or y >= self.height or x < 0:
            return 0
        limit = self.width - x
        if max_width is not None:
            limit = min(limit, max_width)
        col = 0
        for ch in text:
            w = char_display_width(ch)
            if w == 0:
                continue
            if col + w > limit:
                break
            self.cells[y][x + col] = (ch, style)
            if w == 2:
                self.cells[y][x + col + 1] = (_CONTINUATION, style)
            col += w
        return col

    def draw_box(self, rect: Rect, title: str = "", style: str = "") -> None:
        """Draw a single-line border around ``rect`` with ``title`` on top."""
        if rect.width < 2 or rect.height < 2:
            return
        inner = rect.width - 2
        top = _TOP_LEFT + _HORIZONTAL * inner + _TOP_RIGHT
        bottom = _BOTTOM_LEFT + _HORIZONTAL * inner + _BOTTOM_RIGHT
        self.put_text(rect.x, rect.y, top, style)
        for row in range(rect.y + 1, rect.bottom - 1):
            self.put_text(rect.x, row, _VERTICAL, style)
            self.put_text(rect.right - 1, row, _VERTICAL, style)
        self.put_text(rect.x, rect.bottom - 1, bottom, style)
        if title:
            self.put_text(rect.x + 1, rect.y, title, style, max_width=inner)

    def to_lines(self) -> list[str]:
        """Plain text rows without styling."""
        return ["".join(ch for ch, _style in row) for row in self.cells]

    def to_ansi(self) -> str:
        """Rows joined by ``\\r\\n`` with SGR runs for styled cells."""
        rows: list[str] = []
        for row in self.cells:
            out: list[str] = []
            current = ""
            for ch, style in row:
                if ch == _CONTINUATION:
                    continue
                if style != current:
                    if current:
                        out.append(SGR_RESET)
                    if style:
                        out.append(style)
                    current = style
                out.append(ch)
            if current:
                out.append(SGR_RESET)
            rows.append("".join(out))
        return "\r\n".join(rows)


def _draw_node(screen: Screen, node: Node, highlighted: bool, depth: int, theme: UITheme) -> None:
    if depth >= MAX_DRAW_DEPTH:
        return
    name = sanitize_terminal_text(node.name)
    if node.is_directory:
        screen.draw_box(node.rect, name, theme.highlight if highlighted else theme.panel)
        for child in node.children:
            _draw_node(screen, child, highlighted, depth + 1, theme)
        return

    if node.rect.width <= 0 or node.rect.height <= 0:
        return
    style = theme.highlight if highlighted else theme.status_style(node.status)
    screen.put_text(node.rect.x, node.rect.y, f"{FILE_MARKER} {name}", style, max_width=node.rect.width)


def draw_view(screen: Screen, view: Node, selected: Path | None, theme: UITheme) -> None:
    """Draw ``view`` and its laid-out descendants.

    The selected child, and everything drawn inside it, use the highlight
    style.
    """
    screen.draw_box(view.rect, sanitize_terminal_text(view.name), theme.frame)
    for child in view.children:
        _draw_node(screen, child, selected is not None and child.path == selected, 0, theme)


def draw_info_bar(screen: Screen, rect: Rect, text: str, theme: UITheme) -> None:
    screen.draw_box(rect, "Info", theme.info)
    inner_width = max(0, rect.width - 2)
    screen.put_text(rect.x + 1, rect.y + 1, sanitize_terminal_text(text), theme.info, max_width=inner_width)


def cursor_info_text(root: Node, nav: NavigationState) -> str:
    """Info bar text for the highlighted entry (or the viewed directory)."""
    selected = nav.selected_child(root)
    target = selected if selected is not None else nav.resolve(root)
    return format_entry_info(describe_entry(target.path, root.path), target.status)


def split_frame(width: int, height: int) -> tuple[Rect, Rect]:
    """Split the terminal into the panel view and the info bar below it."""
    view_rows = max(min(MIN_VIEW_ROWS, height), height - INFO_BAR_ROWS)
    return (
        Rect(0, 0, width, view_rows),
        Rect(0, view_rows, width, height - view_rows),
    )


def render_frame(
    root: Node,
    nav: NavigationState,
    width: int,
    height: int,
    theme: UITheme,
    info_text: str | None = None,
) -> Screen:
    """Lay out the viewed node and draw a complete frame."""
    screen = Screen(width, height)
    view_area, info_area = split_frame(screen.width, screen.height)
    view = nav.resolve(root)
    layout_view(view, view_area)
    selected = nav.selected_child(root)
    draw_view(screen, view, selected.path if selected is not None else None, theme)
    if info_area.height > 0:
        text = info_text if info_text is not None else cursor_info_text(root, nav)
        draw_info_bar(screen, info_area, text, theme)
    return screen


def write_frame(screen: Screen, fd: int) -> None:
    os.write(fd, ("\033[H\033[J" + screen.to_ansi()).encode("utf-8", errors="replace"))


__all__ = [
    "FILE_MARKER",
    "INFO_BAR_ROWS",
    "MAX_DRAW_DEPTH",
    "Screen",
    "cursor_info_text",
    "draw_info_bar",
    "draw_view",
    "render_frame",
    "split_frame",
    "write_frame",
]
