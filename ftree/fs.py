"""Filesystem-backed tree provider.

Builds ``Node`` objects from ``os.scandir`` results. Only directories that are
explicitly loaded get children; everything else stays collapsed.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

import structlog

from .tree import Node, TreeSnapshot

logger = structlog.get_logger()


def scan_node(path: Path) -> Node:
    """Stat ``path`` without following symlinks and wrap it in a ``Node``."""
    info = path.lstat()
    is_symlink = stat.S_ISLNK(info.st_mode)
    return Node(
        name=path.name or str(path),
        path=path,
        is_dir=stat.S_ISDIR(info.st_mode),
        is_symlink=is_symlink,
        size=int(info.st_size),
        mtime=float(info.st_mtime),
        mode=stat.filemode(info.st_mode),
    )


def load_children(node: Node, show_hidden: bool = False) -> list[Node]:
    """Populate and return ``node.children`` sorted directories-first.

    Unreadable directories load as empty; entries that vanish between listing
    and stat are skipped.
    """
    if not node.is_dir:
        return []

    children: list[Node] = []
    try:
        with os.scandir(node.path) as entries:
            for entry in entries:
                if not show_hidden and entry.name.startswith("."):
                    continue
                try:
                    children.append(scan_node(Path(entry.path)))
                except OSError:
                    continue
    except OSError as exc:
        logger.debug("directory scan failed", path=str(node.path), error=str(exc))

    children.sort(key=lambda child: (not child.is_dir, child.name.lower()))
    node.children = children
    return children


def find_child(node: Node, name: str) -> Node | None:
    for child in node.children or ():
        if child.name == name:
            return child
    return None


def open_tree(
    path: Path,
    show_hidden: bool = False,
    select: str | None = None,
    mark: str | None = None,
) -> TreeSnapshot:
    """Open ``path`` as a one-level tree snapshot.

    A directory becomes the root and current directory. A file opens its parent
    directory with the file selected. Otherwise ``select`` names the selected
    child, defaulting to the first one; ``mark`` names the marked child.
    """
    path = path.resolve()
    if not path.is_dir():
        if select is None:
            select = path.name
        path = path.parent

    root = scan_node(path)
    load_children(root, show_hidden)

    selected = find_child(root, select) if select is not None else None
    if selected is None and root.children:
        selected = root.children[0]
    marked = find_child(root, mark) if mark is not None else None
    return TreeSnapshot(root=root, current_dir=root, selected=selected, marked=marked)
