"""Help panel content shown above the preview when help is toggled on."""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme

HELP_ENTRIES: tuple[tuple[str, str], ...] = (
    ("j / arr down", "Select next child"),
    ("k / arr up", "Select previous child"),
    ("h / arr left", "Move up a dir"),
    ("l / arr right", "Enter selected directory"),
    ("if / id", "Create file (if) / directory (id)"),
    ("d", "Move selected child (then 'p' to paste)"),
    ("y", "Copy selected child (then 'p' to paste)"),
    ("D", "Delete selected child"),
    ("r", "Rename selected child"),
    ("e", "Edit selected file in $EDITOR"),
    ("gg", "Go to top child"),
    ("G", "Go to last child"),
    ("enter", "Collapse / expand directory"),
    ("esc", "Clear error / stop operation"),
    ("q / ctrl+c", "Exit"),
)
HELP_KEY_COLS = 15


def help_panel_lines(theme: UITheme | None = None) -> list[str]:
    """Return the styled help panel followed by one blank separator line."""
    active_theme = theme or DEFAULT_THEME
    lines = [active_theme.paint(active_theme.help_heading, "KEYS")]
    for key, description in HELP_ENTRIES:
        lines.append(f"{active_theme.paint(active_theme.help_key, key.ljust(HELP_KEY_COLS))}{description}")
    lines.append("")
    return lines
