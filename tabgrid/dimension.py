"""Estimate the widths of the columns and the heights of the rows of a grid."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from tabgrid.plan import GridLayout

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tabgrid.config import GridConfig
    from tabgrid.records import Records

log = logging.getLogger(__name__)


class Dimensions(NamedTuple):
    """The widths of the columns and the heights of the rows, padding included."""

    widths: tuple[int, ...] = ()
    heights: tuple[int, ...] = ()

    def span_width(self, col: int, colspan: int, vertical_lines: Sequence[bool]) -> int:
        """Calculate the width of a cell spanning columns, including inner borders."""
        return sum(self.widths[col : col + colspan]) + sum(
            vertical_lines[col + 1 : col + colspan]
        )

    def span_height(
        self, row: int, rowspan: int, horizontal_lines: Sequence[bool]
    ) -> int:
        """Calculate the height of a cell spanning rows, including inner borders."""
        return sum(self.heights[row : row + rowspan]) + sum(
            horizontal_lines[row + 1 : row + rowspan]
        )


def _grow(
    sizes: list[int], start: int, span: int, required: int, lines: Sequence[bool]
) -> None:
    """Widen a run of sizes so that a spanned cell fits inside it.

    The shortfall is shared evenly between the spanned sizes, with any remainder
    going to the leftmost ones first.
    """
    available = sum(sizes[start : start + span]) + sum(lines[start + 1 : start + span])
    if (deficit := required - available) <= 0:
        return
    share, remainder = divmod(deficit, span)
    for i in range(span):
        sizes[start + i] += share + (1 if i < remainder else 0)


def estimate(
    records: Records, config: GridConfig, layout: GridLayout | None = None
) -> Dimensions:
    """Calculate the size of every column and row of a grid.

    A column is as wide as the widest of its cells which do not span several
    columns, and a row as tall as the tallest of its cells which do not span
    several rows. Spanned cells are then fitted, smallest span first.

    Args:
        records: The cells of the grid
        config: The grid configuration
        layout: A precomputed layout of the grid

    Returns:
        The column widths and row heights

    """
    if records.is_empty:
        return Dimensions()
    if layout is None:
        layout = GridLayout(records, config)

    widths = [0] * records.count_cols
    heights = [0] * records.count_rows
    spanned_cols: list[tuple[int, int, int, int]] = []
    spanned_rows: list[tuple[int, int, int, int]] = []

    for (row, col), rowspan, colspan in layout.cells():
        cell = records[row, col]
        padding = config.padding.get(row, col)
        width = cell.width + padding.left + padding.right
        height = cell.height + padding.top + padding.bottom
        if colspan == 1:
            widths[col] = max(widths[col], width)
        else:
            spanned_cols.append((colspan, row, col, width))
        if rowspan == 1:
            heights[row] = max(heights[row], height)
        else:
            spanned_rows.append((rowspan, row, col, height))

    for colspan, _row, col, width in sorted(spanned_cols):
        _grow(widths, col, colspan, width, layout.vertical_lines)
    for rowspan, row, _col, height in sorted(spanned_rows):
        _grow(heights, row, rowspan, height, layout.horizontal_lines)

    log.debug("Estimated widths %s and heights %s", widths, heights)
    return Dimensions(tuple(widths), tuple(heights))
