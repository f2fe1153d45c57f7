"""Sticky scroll window for the tree pane.

The offset only moves when the selection leaves the band between the top and
bottom edge padding, so redraws keep the view stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar

RowT = TypeVar("RowT")


@dataclass
class ScrollState:
    """Top-of-viewport row index remembered between frames."""

    offset: int = 0


def clamp_edge_padding(edge_padding: int, height: int) -> int:
    """Keep padding below half of ``height`` so the padding band is never empty."""
    if height <= 0:
        return 0
    return max(0, min(edge_padding, (height - 1) // 2))


def scroll_offset(
    selection_row: int,
    total_rows: int,
    height: int,
    edge_padding: int,
    previous_offset: int,
) -> int:
    """Return the viewport offset keeping ``selection_row`` inside the padding band.

    A negative ``selection_row`` (no selection) is treated as the first row.
    The result is always within ``[0, max(0, total_rows - height)]``.
    """
    max_offset = max(0, total_rows - height)
    selection_row = max(0, selection_row)
    offset = max(0, min(previous_offset, max_offset))

    if selection_row + 1 > height + offset - edge_padding:
        offset = max(min(selection_row + 1 - height + edge_padding, max_offset), 0)
    elif selection_row < edge_padding + offset:
        offset = max(selection_row - edge_padding, 0)
    return offset


def crop(
    rows: Sequence[RowT],
    selection_row: int,
    height: int,
    edge_padding: int,
    state: ScrollState,
) -> list[RowT]:
    """Return the visible slice of ``rows`` and remember the offset in ``state``."""
    height = max(0, height)
    offset = scroll_offset(selection_row, len(rows), height, edge_padding, state.offset)
    state.offset = offset
    return list(rows[offset : min(offset + height, len(rows))])
