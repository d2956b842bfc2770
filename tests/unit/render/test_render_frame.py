"""Tests for frame composition of nested panels and the info bar."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from nestview.file_tree_model import FileStatus, Node, Rect, build_root, preload
from nestview.navigation import NavigationState
from nestview.render import Screen, cursor_info_text, render_frame, split_frame, write_frame
from nestview.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _file(parent: Path, name: str, status: FileStatus = FileStatus.UNTOUCHED) -> Node:
    return Node(name=name, path=parent / name, is_directory=False, loaded=True, status=status)


def _dir(parent: Path, name: str, children: list[Node]) -> Node:
    return Node(name=name, path=parent / name, is_directory=True, loaded=True, children=children)


def _sample_root() -> Node:
    base = Path("/root-dir")
    sub = _dir(base, "sub", [_file(base / "sub", "c.txt", FileStatus.ADDED)])
    return Node(
        name="root",
        path=base,
        is_directory=True,
        loaded=True,
        children=[_file(base, "a.txt"), _file(base, "b.txt", FileStatus.MODIFIED), sub],
    )


class ScreenTests(unittest.TestCase):
    def test_put_text_clips_at_right_edge(self) -> None:
        screen = Screen(5, 1)
        self.assertEqual(screen.put_text(3, 0, "abcdef"), 2)
        self.assertEqual(screen.to_lines(), ["   ab"])

    def test_put_text_outside_grid_is_ignored(self) -> None:
        screen = Screen(3, 1)
        self.assertEqual(screen.put_text(0, 1, "x"), 0)
        self.assertEqual(screen.put_text(-1, 0, "x"), 0)
        self.assertEqual(screen.to_lines(), ["   "])

    def test_wide_characters_take_two_cells_and_never_split(self) -> None:
        screen = Screen(5, 1)
        self.assertEqual(screen.put_text(0, 0, "日本語"), 4)
        self.assertEqual(screen.to_ansi(), "日本 ")

    def test_to_ansi_wraps_styled_runs(self) -> None:
        screen = Screen(3, 1)
        screen.put_text(0, 0, "ab", "\033[35m")
        self.assertEqual(screen.to_ansi(), "\033[35mab\033[0m ")

    def test_draw_box_skips_rectangles_too_small_for_a_border(self) -> None:
        screen = Screen(4, 4)
        screen.draw_box(Rect(0, 0, 1, 4), "x")
        screen.draw_box(Rect(0, 0, 4, 1), "x")
        self.assertEqual(screen.to_lines(), ["    "] * 4)

    def test_draw_box_title_is_clipped_to_interior(self) -> None:
        screen = Screen(6, 2)
        screen.draw_box(Rect(0, 0, 6, 2), "longtitle")
        self.assertEqual(screen.to_lines(), ["┌long┐", "└────┘"])


class SplitFrameTests(unittest.TestCase):
    def test_info_bar_takes_three_rows(self) -> None:
        self.assertEqual(split_frame(40, 12), (Rect(0, 0, 40, 9), Rect(0, 9, 40, 3)))

    def test_small_terminal_keeps_view_rows(self) -> None:
        view, info = split_frame(80, 4)
        self.assertEqual(view, Rect(0, 0, 80, 2))
        self.assertEqual(info, Rect(0, 2, 80, 2))
        view, info = split_frame(80, 1)
        self.assertEqual(view.height, 1)
        self.assertEqual(info.height, 0)


class RenderFrameTests(unittest.TestCase):
    def test_plain_frame_draws_nested_panels_and_info_bar(self) -> None:
        root = _sample_root()

        lines = render_frame(root, NavigationState(), 40, 12, PLAIN_THEME, info_text="info").to_lines()

        self.assertEqual(len(lines), 12)
        self.assertTrue(lines[0].startswith("┌root─"))
        self.assertTrue(lines[0].endswith("┐"))
        self.assertEqual(lines[1][1:8], "◉ a.txt")
        self.assertEqual(lines[2][1:8], "◉ b.txt")
        self.assertEqual(lines[3][1:5], "┌sub")
        self.assertEqual(lines[4][2:9], "◉ c.txt")
        self.assertEqual(lines[5][1], "└")
        self.assertTrue(lines[8].startswith("└"))
        self.assertTrue(lines[9].startswith("┌Info"))
        self.assertTrue(lines[10].startswith("│info"))
        self.assertTrue(lines[11].startswith("└"))

    def test_selected_file_uses_highlight_and_others_use_status_colors(self) -> None:
        root = _sample_root()

        screen = render_frame(root, NavigationState(), 40, 12, DEFAULT_THEME, info_text="info")

        self.assertEqual(screen.cells[1][1], ("◉", DEFAULT_THEME.highlight))
        self.assertEqual(screen.cells[2][1], ("◉", DEFAULT_THEME.file_modified))
        self.assertEqual(screen.cells[4][2], ("◉", DEFAULT_THEME.file_added))
        self.assertEqual(screen.cells[3][1], ("┌", DEFAULT_THEME.panel))
        self.assertEqual(screen.cells[0][0], ("┌", DEFAULT_THEME.frame))

    def test_selected_directory_highlights_its_drawn_subtree(self) -> None:
        root = _sample_root()
        nav = NavigationState()
        nav.move_down(root)
        nav.move_down(root)

        screen = render_frame(root, nav, 40, 12, DEFAULT_THEME, info_text="info")

        self.assertEqual(screen.cells[3][1], ("┌", DEFAULT_THEME.highlight))
        self.assertEqual(screen.cells[4][2], ("◉", DEFAULT_THEME.highlight))
        self.assertEqual(screen.cells[1][1], ("◉", DEFAULT_THEME.file_untouched))

    def test_nodes_three_levels_below_view_are_not_drawn(self) -> None:
        base = Path("/v")
        deepest = _file(base / "a" / "b" / "c", "hidden.txt")
        deepest.rect = Rect(5, 5, 20, 1)
        c = _dir(base / "a" / "b", "c", [deepest])
        b = _dir(base / "a", "b", [c])
        a = _dir(base, "a", [b])
        view = Node(name="v", path=base, is_directory=True, loaded=True, children=[a])

        lines = render_frame(view, NavigationState(), 40, 20, PLAIN_THEME, info_text="").to_lines()

        self.assertFalse(any("hidden.txt" in line for line in lines))
        self.assertTrue(any("┌c" in line for line in lines))

    def test_control_characters_in_names_are_replaced(self) -> None:
        base = Path("/r")
        root = Node(name="r", path=base, is_directory=True, loaded=True, children=[_file(base, "bad\nname")])

        lines = render_frame(root, NavigationState(), 30, 8, PLAIN_THEME, info_text="").to_lines()

        self.assertEqual(lines[1][1:11], "◉ bad?name")

    def test_frame_renders_inside_entered_directory(self) -> None:
        root = _sample_root()
        nav = NavigationState(path_stack=[2], selection_stack=[2, 0])

        lines = render_frame(root, nav, 30, 8, PLAIN_THEME, info_text="").to_lines()

        self.assertTrue(lines[0].startswith("┌sub"))
        self.assertEqual(lines[1][1:8], "◉ c.txt")

    def test_write_frame_sends_single_write_with_home_and_clear(self) -> None:
        screen = Screen(2, 1)
        screen.put_text(0, 0, "ok")

        with mock.patch("nestview.render.os.write") as write_mock:
            write_frame(screen, 7)

        write_mock.assert_called_once_with(7, b"\x1b[H\x1b[Jok")


class CursorInfoTests(unittest.TestCase):
    def test_info_text_describes_highlighted_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root_path = Path(tmp).resolve()
            (root_path / "main.py").write_text("print('hi')\n", encoding="utf-8")
            root = build_root(root_path)
            preload(root, 1)

            text = cursor_info_text(root, NavigationState())

            self.assertTrue(text.startswith("Name: main.py | Type: File (Python) | Permissions: "))
            self.assertTrue(text.endswith("12 bytes"))

    def test_info_text_for_empty_directory_describes_viewed_node(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root_path = Path(tmp).resolve()
            root = build_root(root_path)
            preload(root, 1)

            text = cursor_info_text(root, NavigationState())

            self.assertIn("| Type: Directory |", text)


if __name__ == "__main__":
    unittest.main()
