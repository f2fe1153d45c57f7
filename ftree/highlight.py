"""Pygments syntax highlighting for preview lines."""

from __future__ import annotations

from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_SYNTAX_STYLE = "monokai"

_FORMATTERS: dict[str, Terminal256Formatter] = {}


def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, otherwise the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_SYNTAX_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def highlight_lines(lines: list[str], path: Path, style: str = DEFAULT_SYNTAX_STYLE) -> list[str]:
    """Colorize ``lines`` as the source of ``path``.

    The lexer is picked from the file name (plain text when unknown). The
    original lines are returned if highlighting changes the line count.
    """
    if not lines:
        return lines
    source = "\n".join(lines)
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)

    rendered = highlight(source, lexer, _formatter_for_style(normalize_style(style)))
    rendered_lines = rendered.split("\n")
    # Pygments always terminates its output with a newline.
    if len(rendered_lines) == len(lines) + 1 and rendered_lines[-1] == "":
        rendered_lines.pop()
    if len(rendered_lines) != len(lines):
        return lines
    return rendered_lines
