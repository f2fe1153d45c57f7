"""Four-line status header: path, file info, operation bar, error bar."""

from __future__ import annotations

import time

from ..ansi import clip_ansi_line, display_width, sanitize_terminal_text
from ..git_status import HEADER_BADGES, GitStatusCache
from ..sizes import format_size
from ..state import ViewState
from ..ui_theme import DEFAULT_THEME, UITheme

HEADER_HEIGHT = 4
HELP_HINT = "Press ? to toggle help"
INFO_SEP = "│"
PLACEHOLDER = "--"
MTIME_FORMAT = "%d %b %y %H:%M %Z"


def format_mtime(mtime: float) -> str:
    return time.strftime(MTIME_FORMAT, time.localtime(mtime))


def _path_line(state: ViewState, width: int, git_cache: GitStatusCache | None, theme: UITheme) -> str:
    tree = state.tree
    selected = tree.selected
    badge = ""
    if selected is None:
        path = f"{tree.current_dir.path}/..."
    else:
        path = str(selected.path)
        if git_cache is not None:
            kind = git_cache.badge_kind_for(selected.path, selected.is_dir)
            if kind is not None:
                badge = HEADER_BADGES[kind]

    raw_path = sanitize_terminal_text(f"> {path}{badge}", single_line=True)
    gap = width - display_width(raw_path) - display_width(HELP_HINT)
    if gap < 0:
        return theme.paint(theme.selected_path, clip_ansi_line(raw_path, width))
    return theme.paint(theme.selected_path, raw_path) + " " * gap + theme.paint(theme.help_hint, HELP_HINT)


def _info_line(state: ViewState, theme: UITheme) -> str:
    selected = state.tree.selected
    if selected is None:
        perm, changed, size = PLACEHOLDER, PLACEHOLDER, format_size(0)
    else:
        perm, changed, size = selected.mode, format_mtime(selected.mtime), format_size(selected.size)
    sep = theme.paint(theme.finfo_sep, INFO_SEP)
    return " ".join(
        (
            theme.paint(theme.finfo_permissions, perm),
            sep,
            theme.paint(theme.finfo_last_updated, changed),
            sep,
            theme.paint(theme.finfo_size, size),
        )
    )


def _operation_line(state: ViewState, theme: UITheme) -> str:
    bar = sanitize_terminal_text(f": {state.operation.repr()}", single_line=True)
    marked = state.tree.marked
    if marked is not None:
        bar += sanitize_terminal_text(f" [{marked.path}]", single_line=True)
    if state.operation.is_input():
        input_text = sanitize_terminal_text(state.input_text, single_line=True)
        bar += f" │ {theme.paint(theme.operation_bar_input, input_text)} │"
    return theme.paint(theme.operation_bar, bar)


def compose_header(
    state: ViewState,
    width: int,
    git_cache: GitStatusCache | None = None,
    theme: UITheme | None = None,
) -> tuple[str, int]:
    """Return the header text and its line count, which is always 4.

    The error line shows the state's error text; when that is empty, a pending
    git status error is shown instead.
    """
    active_theme = theme or DEFAULT_THEME
    error_text = state.error_text
    if not error_text and git_cache is not None and git_cache.last_error:
        error_text = git_cache.last_error
    lines = [
        _path_line(state, width, git_cache, active_theme),
        _info_line(state, active_theme),
        _operation_line(state, active_theme),
        active_theme.paint(
            active_theme.error_bar,
            sanitize_terminal_text(" ".join(error_text.splitlines()), single_line=True),
        ),
    ]
    return "\n".join(lines), len(lines)
