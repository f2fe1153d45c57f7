"""UI theme definitions and selection helpers.

A theme maps each semantic fragment of the frame (tree names, header fields,
badges, preview text) to an ANSI SGR prefix. ``UITheme.paint`` wraps a fragment
so renderers never hard-code escape sequences.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    tree_indent: str
    tree_dir: str
    tree_link: str
    tree_file: str
    tree_marked: str
    tree_selection_arrow: str
    tree_git_status: str
    selected_path: str
    help_hint: str
    finfo_permissions: str
    finfo_sep: str
    finfo_last_updated: str
    finfo_size: str
    operation_bar: str
    operation_bar_input: str
    error_bar: str
    content_preview: str
    help_heading: str
    help_key: str

    def paint(self, style: str, text: str) -> str:
        """Wrap ``text`` in the SGR prefix ``style`` followed by a reset.

        Empty text and empty styles are returned untouched so plain themes
        produce escape-free output.
        """
        if not text or not style:
            return text
        return f"{style}{text}{self.reset}"


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    tree_indent="\033[38;5;240m",
    tree_dir="\033[1;34m",
    tree_link="\033[38;5;44m",
    tree_file="\033[38;5;252m",
    tree_marked="\033[7;38;5;214m",
    tree_selection_arrow="\033[1;38;5;81m",
    tree_git_status="\033[38;5;214m",
    selected_path="\033[1;38;5;81m",
    help_hint="\033[2;38;5;250m",
    finfo_permissions="\033[38;5;109m",
    finfo_sep="\033[2m",
    finfo_last_updated="\033[38;5;150m",
    finfo_size="\033[38;5;180m",
    operation_bar="\033[38;5;229m",
    operation_bar_input="\033[4;38;5;255m",
    error_bar="\033[1;38;5;203m",
    content_preview="\033[38;5;250m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    tree_indent="\033[2;38;5;31m",
    tree_dir="\033[1;38;5;45m",
    tree_link="\033[38;5;117m",
    tree_file="\033[38;5;252m",
    tree_marked="\033[7;38;5;215m",
    tree_selection_arrow="\033[1;38;5;39m",
    tree_git_status="\033[38;5;215m",
    selected_path="\033[1;38;5;45m",
    help_hint="\033[2;38;5;110m",
    finfo_permissions="\033[38;5;73m",
    finfo_sep="\033[2;38;5;31m",
    finfo_last_updated="\033[38;5;84m",
    finfo_size="\033[38;5;153m",
    operation_bar="\033[38;5;153m",
    operation_bar_input="\033[4;38;5;255m",
    error_bar="\033[1;38;5;209m",
    content_preview="\033[38;5;153m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    tree_indent="",
    tree_dir="",
    tree_link="",
    tree_file="",
    tree_marked="",
    tree_selection_arrow="",
    tree_git_status="",
    selected_path="",
    help_hint="",
    finfo_permissions="",
    finfo_sep="",
    finfo_last_updated="",
    finfo_size="",
    operation_bar="",
    operation_bar_input="",
    error_bar="",
    content_preview="",
    help_heading="",
    help_key="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
