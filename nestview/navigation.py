"""Cursor state for descending through the lazily loaded tree.

The cursor is a pair of index stacks addressed from the root, so no node
needs a back-reference to its parent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .file_tree_model import DEFAULT_PRELOAD_DEPTH, Node, preload


@dataclass
class NavigationState:
    path_stack: list[int] = field(default_factory=list)
    selection_stack: list[int] = field(default_factory=lambda: [0])

    @property
    def depth(self) -> int:
        return len(self.path_stack)

    @property
    def selected_index(self) -> int:
        return self.selection_stack[-1]

    def resolve(self, root: Node) -> Node:
        """Return the currently viewed node.

        Indices are trusted; a stale one raises ``IndexError``.
        """
        current = root
        for index in self.path_stack:
            current = current.children[index]
        return current

    def selected_child(self, root: Node) -> Node | None:
        viewed = self.resolve(root)
        if not viewed.children:
            return None
        return viewed.children[self.selected_index]

    def move_up(self, root: Node) -> bool:
        if not self.resolve(root).children or self.selected_index == 0:
            return False
        self.selection_stack[-1] -= 1
        return True

    def move_down(self, root: Node) -> bool:
        child_count = len(self.resolve(root).children)
        if child_count == 0 or self.selected_index >= child_count - 1:
            return False
        self.selection_stack[-1] += 1
        return True

    def move_into(self, root: Node, preload_depth: int = DEFAULT_PRELOAD_DEPTH) -> Node | None:
        """Descend into the highlighted directory, returning it when entered."""
        child = self.selected_child(root)
        if child is None or not child.is_directory:
            return None
        # The entered directory itself is always materialized.
        preload(child, max(1, preload_depth))
        self.path_stack.append(self.selected_index)
        self.selection_stack.append(0)
        return child

    def move_out(self) -> bool:
        if not self.path_stack:
            return False
        self.path_stack.pop()
        self.selection_stack.pop()
        return True

    def confirm_path(self, root: Node) -> Path:
        """Path of the highlighted entry, or of the viewed node when empty."""
        child = self.selected_child(root)
        if child is not None:
            return child.path
        return self.resolve(root).path


__all__ = ["NavigationState"]
