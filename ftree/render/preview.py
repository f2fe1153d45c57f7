"""Selected-file content preview for the right pane."""

from __future__ import annotations

import structlog

from ..ansi import sanitize_terminal_text
from ..highlight import highlight_lines
from ..tree import TreeSnapshot
from ..ui_theme import DEFAULT_THEME, UITheme

logger = structlog.get_logger()

PREVIEW_BYTES_LIMIT = 10_000
BINARY_CONTENT_PLACEHOLDER = "<binary content>"
# Longest UTF-8 sequence minus one: what a byte cap can cut off at the end.
_MAX_PARTIAL_SEQUENCE = 3


def decode_text(content: bytes, truncated: bool) -> str | None:
    """Decode ``content`` as UTF-8, or return ``None`` for binary data.

    When the read was cut by the byte cap, an incomplete multi-byte sequence at
    the very end is dropped instead of classifying the file as binary.
    """
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as exc:
        cut_at_end = exc.reason == "unexpected end of data" and len(content) - exc.start <= _MAX_PARTIAL_SEQUENCE
        if not (truncated and cut_at_end):
            return None
        try:
            return content[: exc.start].decode("utf-8")
        except UnicodeDecodeError:
            return None


def _read_preview(tree: TreeSnapshot, height: int, max_bytes: int) -> tuple[list[str], bool]:
    try:
        content = tree.read_selected_content(max_bytes)
    except (OSError, LookupError) as exc:
        logger.debug("preview read failed", error=str(exc))
        return [sanitize_terminal_text(f"Error: {exc}", single_line=True)], False

    text = decode_text(content, truncated=len(content) >= max_bytes)
    if text is None:
        return [BINARY_CONTENT_PLACEHOLDER], False

    lines = text.split("\n")
    lines = lines[: min(max(height, 0), len(lines))]
    return [sanitize_terminal_text(line.removesuffix("\r")) for line in lines], True


def preview_lines(
    tree: TreeSnapshot,
    height: int,
    max_bytes: int = PREVIEW_BYTES_LIMIT,
) -> list[str]:
    """Return the unstyled preview lines for the selected node.

    Read failures and a missing selection produce a single ``Error: ...`` line;
    non-UTF-8 content produces the binary placeholder. Text is limited to
    ``height`` lines and never wrapped.
    """
    lines, _is_text = _read_preview(tree, height, max_bytes)
    return lines


def preview_content(
    tree: TreeSnapshot,
    height: int,
    max_bytes: int = PREVIEW_BYTES_LIMIT,
    theme: UITheme | None = None,
    syntax_style: str | None = None,
) -> list[str]:
    """Return styled preview lines.

    Text is syntax highlighted when ``syntax_style`` is set; error and binary
    placeholders (and text without a style) use the theme's content style.
    """
    active_theme = theme or DEFAULT_THEME
    lines, is_text = _read_preview(tree, height, max_bytes)
    if is_text and syntax_style and tree.selected is not None:
        return highlight_lines(lines, tree.selected.path, syntax_style)
    return [active_theme.paint(active_theme.content_preview, line) for line in lines]
