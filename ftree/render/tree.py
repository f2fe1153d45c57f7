"""Tree linearization: flatten the snapshot into styled display rows."""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import display_width, sanitize_terminal_text, truncate_to_width
from ..tree import Node, TreeSnapshot
from ..ui_theme import DEFAULT_THEME, UITheme

SELECTION_ARROW = " <-"
INDENT_PARENT = "│  "
INDENT_CURRENT = "├─ "
INDENT_CURRENT_LAST = "└─ "
INDENT_EMPTY = "   "
EMPTY_DIR_CONTENT_NAME = "..."
ELLIPSIS = "..."
# Room kept free for the selection arrow and padding.
NAME_RESERVED_COLS = 6


@dataclass(frozen=True)
class DisplayRow:
    """One rendered tree line. ``node`` is ``None`` for the empty-dir placeholder."""

    indent: str
    name: str
    node: Node | None = None
    arrow: str = ""
    badge: str = ""

    @property
    def text(self) -> str:
        return f"{self.indent}{self.name}{self.arrow}{self.badge}"


@dataclass(frozen=True)
class TreeLines:
    rows: list[DisplayRow]
    selection_row: int


def fit_name(name: str, indent_width: int, pane_width: int) -> str:
    """Clip ``name`` so indent, name, and arrow stay inside ``pane_width`` columns."""
    if indent_width + display_width(name) <= pane_width - NAME_RESERVED_COLS:
        return name
    budget = max(0, pane_width - indent_width - NAME_RESERVED_COLS)
    return truncate_to_width(name, budget) + ELLIPSIS


def _style_name(node: Node, name: str, marked: bool, theme: UITheme) -> str:
    if node.is_dir:
        style = theme.tree_dir
    elif node.is_symlink:
        style = theme.tree_link
    else:
        style = theme.tree_file
    # Later SGR parameters override earlier ones, so the mark wins.
    if marked:
        style += theme.tree_marked
    return theme.paint(style, name)


def linearize(tree: TreeSnapshot, pane_width: int, theme: UITheme | None = None) -> TreeLines:
    """Flatten ``tree`` in pre-order using an explicit stack.

    Children keep their sibling order. The selected node's row carries the
    selection arrow and its index is returned as ``selection_row`` (``-1`` when
    nothing is selected). An empty current directory gets a placeholder child
    row which becomes the selection row.
    """
    active_theme = theme or DEFAULT_THEME
    arrow = active_theme.paint(active_theme.tree_selection_arrow, SELECTION_ARROW)
    rows: list[DisplayRow] = []
    selection_row = -1

    stack: list[tuple[Node, str, bool]] = [(tree.root, "", False)]
    while stack:
        node, parent_indent, is_last = stack.pop()

        if node is tree.root:
            indent = ""
            child_indent = ""
        elif is_last:
            indent = parent_indent + INDENT_CURRENT_LAST
            child_indent = parent_indent + INDENT_EMPTY
        else:
            indent = parent_indent + INDENT_CURRENT
            child_indent = parent_indent + INDENT_PARENT

        name = fit_name(sanitize_terminal_text(node.name, single_line=True), display_width(indent), pane_width)
        is_selected = node is tree.selected
        if is_selected:
            selection_row = len(rows)
        rows.append(
            DisplayRow(
                indent=active_theme.paint(active_theme.tree_indent, indent),
                name=_style_name(node, name, node is tree.marked, active_theme),
                node=node,
                arrow=arrow if is_selected else "",
            )
        )

        children = node.children
        if children is None:
            continue
        if not children and node is tree.current_dir:
            rows.append(
                DisplayRow(
                    indent=active_theme.paint(active_theme.tree_indent, child_indent + INDENT_CURRENT_LAST),
                    name=EMPTY_DIR_CONTENT_NAME,
                    arrow=arrow,
                )
            )
            selection_row = len(rows) - 1
            continue
        last = len(children) - 1
        for index in range(last, -1, -1):
            stack.append((children[index], child_indent, index == last))

    return TreeLines(rows=rows, selection_row=selection_row)
