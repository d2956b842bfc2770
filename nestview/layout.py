"""Weighted column packing of directory children into nested panels.

Children of one parent are grouped greedily into columns bounded by the
available height, the width is split evenly between columns, and rows inside
a column are handed out by weight. Directory panels recurse into their own
interior for a bounded number of levels.
"""

from __future__ import annotations

import math

from .file_tree_model import Node, Rect

MIN_DIRECTORY_WEIGHT = 3
MAX_LAYOUT_DEPTH = 2


def inner_rect(rect: Rect) -> Rect:
    """Return ``rect`` shrunk by one cell per side to leave room for a border."""
    return Rect(
        x=rect.x + 1,
        y=rect.y + 1,
        width=max(0, rect.width - 2),
        height=max(0, rect.height - 2),
    )


def node_weight(node: Node) -> int:
    """Vertical space demand of ``node`` in rows."""
    if node.is_directory:
        return max(MIN_DIRECTORY_WEIGHT, 1 + len(node.children))
    return 1


def pack_columns(weights: list[int], height: int) -> list[list[int]]:
    """Group child indices into columns whose weight fits ``height``.

    A column always takes at least one child, even one heavier than
    ``height``.
    """
    columns: list[list[int]] = []
    current: list[int] = []
    current_sum = 0
    for index, weight in enumerate(weights):
        if current and current_sum + weight > height:
            columns.append(current)
            current = []
            current_sum = 0
        current.append(index)
        current_sum += weight
    if current:
        columns.append(current)
    return columns


def _column_heights(weights: list[int], height: int) -> list[int]:
    """Row heights for one column's members, top to bottom."""
    total = sum(weights)
    if total <= height:
        extra = (height - total) // len(weights)
        return [weight + extra for weight in weights]

    scale = height / total
    heights: list[int] = []
    y = 0
    for weight in weights:
        row_height = math.floor(max(weight * scale, 1.0))
        # Truncation drift may push the tail past the bottom edge.
        row_height = min(row_height, max(0, height - y))
        heights.append(row_height)
        y += row_height
    return heights


def layout_children(
    children: list[Node],
    area: Rect,
    depth: int = 0,
    max_depth: int = MAX_LAYOUT_DEPTH,
) -> None:
    """Assign ``rect`` to every child inside ``area``, recursing into panels."""
    if not children:
        return

    weights = [node_weight(child) for child in children]
    columns = pack_columns(weights, area.height)
    column_width = area.width // len(columns)

    for column_index, members in enumerate(columns):
        x = area.x + column_index * column_width
        y = area.y
        heights = _column_heights([weights[i] for i in members], area.height)
        for member, row_height in zip(members, heights):
            child = children[member]
            child.rect = Rect(x=x, y=y, width=column_width, height=row_height)
            y += row_height
            if child.is_directory and child.children and depth < max_depth:
                layout_children(child.children, inner_rect(child.rect), depth + 1, max_depth)


def layout_view(node: Node, area: Rect) -> None:
    """Lay out the currently viewed ``node`` so it fills ``area``."""
    node.rect = area
    layout_children(node.children, inner_rect(area), 0)


__all__ = [
    "MIN_DIRECTORY_WEIGHT",
    "MAX_LAYOUT_DEPTH",
    "inner_rect",
    "node_weight",
    "pack_columns",
    "layout_children",
    "layout_view",
]
