"""Filesystem scanning for the lazily materialized browse tree."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from pathlib import Path

from .types import Node

logger = logging.getLogger(__name__)

DEFAULT_PRELOAD_DEPTH = 3


def _display_name(path: Path) -> str:
    return path.name or str(path)


def build_root(path: Path) -> Node:
    """Create the root node for ``path``.

    Directories start unloaded; anything else is a leaf that counts as loaded.
    """
    try:
        root = path.resolve()
    except OSError:
        root = path.absolute()
    is_directory = root.is_dir()
    return Node(
        name=_display_name(root),
        path=root,
        is_directory=is_directory,
        loaded=not is_directory,
    )


def load_children(node: Node) -> None:
    """Materialize the immediate children of ``node`` once.

    Entries whose metadata cannot be read are skipped. Children keep the
    filesystem enumeration order.
    """
    if node.loaded:
        return

    children: list[Node] = []
    try:
        with os.scandir(node.path) as entries:
            for entry in entries:
                try:
                    # Follows symlinks, so dangling links are dropped here.
                    entry_stat = entry.stat()
                except OSError as exc:
                    logger.debug("skipping %s: %s", entry.path, exc)
                    continue
                is_directory = stat.S_ISDIR(entry_stat.st_mode)
                children.append(
                    Node(
                        name=entry.name,
                        path=Path(entry.path),
                        is_directory=is_directory,
                        loaded=not is_directory,
                    )
                )
    except OSError as exc:
        logger.debug("cannot enumerate %s: %s", node.path, exc)

    node.children = children
    node.loaded = True


def preload(node: Node, depth: int) -> None:
    """Load ``node`` and its directory descendants ``depth`` levels deep."""
    if depth <= 0:
        return
    load_children(node)
    for child in node.children:
        if child.is_directory:
            preload(child, depth - 1)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and every materialized descendant in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


__all__ = [
    "DEFAULT_PRELOAD_DEPTH",
    "build_root",
    "load_children",
    "preload",
    "iter_nodes",
]
