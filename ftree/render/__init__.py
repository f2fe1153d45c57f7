"""Frame composition for the split tree/preview terminal view.

``Renderer`` turns a ``ViewState`` into one frame of exactly ``height`` lines
of ``width`` columns: the header on top, the tree pane on the left, and the
help panel plus content preview on the right.
"""

from __future__ import annotations

from ..ansi import fit_ansi_line
from ..git_status import GitStatusCache
from ..state import ViewState
from ..ui_theme import DEFAULT_THEME, UITheme
from .header import HEADER_HEIGHT, compose_header
from .help import help_panel_lines
from .preview import PREVIEW_BYTES_LIMIT, preview_content
from .scroll import ScrollState, clamp_edge_padding, crop
from .tree import DisplayRow, TreeLines, linearize

MIN_HEIGHT = 10
MIN_WIDTH = 10
TOO_SMALL_MESSAGE = "too small =("
DEFAULT_EDGE_PADDING = 2


class Renderer:
    """Stateful frame renderer.

    Owns the tree-pane scroll offset and the git status cache, both of which
    persist across frames. One frame is rendered at a time.
    """

    def __init__(
        self,
        theme: UITheme | None = None,
        edge_padding: int = DEFAULT_EDGE_PADDING,
        git_cache: GitStatusCache | None = None,
        preview_bytes_limit: int = PREVIEW_BYTES_LIMIT,
        syntax_style: str | None = None,
    ) -> None:
        self.theme = theme or DEFAULT_THEME
        self.edge_padding = edge_padding
        self.git_cache = git_cache if git_cache is not None else GitStatusCache()
        self.preview_bytes_limit = preview_bytes_limit
        self.syntax_style = syntax_style
        self.scroll = ScrollState()

    def render(self, state: ViewState, height: int, width: int) -> str:
        if width < MIN_WIDTH or height < MIN_HEIGHT:
            return TOO_SMALL_MESSAGE

        self.git_cache.refresh(state.tree.current_dir.path)

        header, header_height = compose_header(state, width, self.git_cache, self.theme)
        body_height = height - header_height
        tree_width = width // 2
        right_width = width - tree_width

        tree_lines = self.render_tree(state, body_height, tree_width)

        right_lines: list[str] = []
        if state.help_visible:
            right_lines = help_panel_lines(self.theme)[:body_height]
        preview_height = body_height - len(right_lines)
        right_lines += preview_content(
            state.tree,
            preview_height,
            self.preview_bytes_limit,
            self.theme,
            self.syntax_style,
        )

        frame = [fit_ansi_line(line, width) for line in header.split("\n")]
        for row in range(body_height):
            left = tree_lines[row] if row < len(tree_lines) else ""
            right = right_lines[row] if row < len(right_lines) else ""
            frame.append(fit_ansi_line(left, tree_width) + fit_ansi_line(right, right_width))
        return "\n".join(frame)

    def render_tree(self, state: ViewState, height: int, width: int) -> list[str]:
        """Return the visible, annotated tree rows for a pane of ``height`` x ``width``."""
        linearized = linearize(state.tree, width, self.theme)
        padding = clamp_edge_padding(self.edge_padding, height)
        visible = crop(linearized.rows, linearized.selection_row, height, padding, self.scroll)
        visible = self.git_cache.annotate(visible, self.theme)
        return [row.text for row in visible]


__all__ = [
    "DisplayRow",
    "HEADER_HEIGHT",
    "MIN_HEIGHT",
    "MIN_WIDTH",
    "Renderer",
    "ScrollState",
    "TOO_SMALL_MESSAGE",
    "TreeLines",
    "compose_header",
    "crop",
    "linearize",
    "preview_content",
]
