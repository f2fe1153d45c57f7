"""Tree data model consumed by the renderer.

``Node`` objects are owned by the tree provider; the renderer only walks them
and compares identities while building a frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class NoSelectionError(LookupError):
    """Raised when content is requested while no child is selected."""


@dataclass(eq=False)
class Node:
    """One entry in the browsed hierarchy (file, directory, or symlink).

    ``children`` is ``None`` for non-directories and an empty list for an
    empty directory. Nodes compare by identity.
    """

    name: str
    path: Path
    is_dir: bool = False
    is_symlink: bool = False
    size: int = 0
    mtime: float = 0.0
    mode: str = "----------"
    children: list["Node"] | None = None

    def __post_init__(self) -> None:
        if self.is_dir and self.children is None:
            self.children = []


@dataclass
class TreeSnapshot:
    """Point-in-time view of the tree provider used for one frame."""

    root: Node
    current_dir: Node
    selected: Node | None = None
    marked: Node | None = None

    def read_selected_content(self, max_bytes: int) -> bytes:
        """Read at most ``max_bytes`` from the selected node.

        Raises ``NoSelectionError`` when nothing is selected. ``OSError`` from
        the filesystem (missing file, directory, permission) propagates.
        """
        if self.selected is None:
            raise NoSelectionError("no child selected")
        with self.selected.path.open("rb") as handle:
            return handle.read(max(0, max_bytes))
