"""Domain model for the browsed filesystem tree.

This package contains non-UI tree primitives:
- node/rect/status datatypes with parent-owned children
- lazy directory loading with bounded-depth preloading
"""

from __future__ import annotations

from .types import FileStatus, Node, Rect
from .fs import DEFAULT_PRELOAD_DEPTH, build_root, iter_nodes, load_children, preload

__all__ = [
    "FileStatus",
    "Node",
    "Rect",
    "DEFAULT_PRELOAD_DEPTH",
    "build_root",
    "load_children",
    "preload",
    "iter_nodes",
]
