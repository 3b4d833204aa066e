"""Compose the borders and cell contents of a grid into lines of text."""

from __future__ import annotations

import logging
from io import StringIO
from typing import TYPE_CHECKING

from prompt_toolkit.utils import get_cwidth

from tabgrid.ansi import AnsiSyntaxError, split_styled
from tabgrid.color import AnsiColor
from tabgrid.dimension import estimate
from tabgrid.options import AlignmentHorizontal, AlignmentVertical
from tabgrid.plan import GridLayout, resolve

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tabgrid.border import BorderText
    from tabgrid.color import Color
    from tabgrid.config import GridConfig
    from tabgrid.dimension import Dimensions
    from tabgrid.plan import BorderPlan
    from tabgrid.records import Records

log = logging.getLogger(__name__)


class Canvas:
    """A rectangle of character slots, each with an optional color.

    A piece of text wider than one column fills its first slot, and the slots it
    covers to the right are left empty.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create a blank canvas."""
        self.width = width
        self.height = height
        self.texts = [[" "] * width for _ in range(height)]
        self.colors: list[list[Color | None]] = [[None] * width for _ in range(height)]

    def _clear(self, y: int, x: int) -> None:
        """Blank any wide piece of text which covers a slot."""
        texts = self.texts[y]
        start = x
        while start > 0 and texts[start] == "":
            start -= 1
        end = start + 1
        while end < self.width and texts[end] == "":
            end += 1
        if end - start > 1 or texts[x] == "":
            for i in range(start, end):
                texts[i] = " "

    def put(self, y: int, x: int, text: str, width: int, color: Color | None) -> None:
        """Place some text at a position, covering ``width`` slots."""
        if width <= 0 or not (0 <= y < self.height) or not (0 <= x < self.width):
            return
        width = min(width, self.width - x)
        for i in range(x, x + width):
            self._clear(y, i)
        texts, colors = self.texts[y], self.colors[y]
        texts[x] = text
        colors[x] = color
        for i in range(x + 1, x + width):
            texts[i] = ""
            colors[i] = color

    def fill(
        self, y: int, x: int, char: str, count: int, color: Color | None = None
    ) -> None:
        """Repeat a single character along a row."""
        for i in range(x, x + count):
            self.put(y, i, char, 1, color)

    def line(self, y: int) -> str:
        """Render one row of the canvas, merging runs of the same color."""
        out = StringIO()
        texts, colors = self.texts[y], self.colors[y]
        x = 0
        while x < self.width:
            color = colors[x]
            end = x + 1
            while end < self.width and colors[end] == color:
                end += 1
            if color is not None:
                color.write_prefix(out)
            out.write("".join(texts[x:end]))
            if color is not None:
                color.write_suffix(out)
            x = end
        return out.getvalue()


def _offsets(
    sizes: Sequence[int], lines: Sequence[bool]
) -> tuple[list[int], list[int]]:
    """Calculate where each border line and each cell starts along one axis."""
    line_starts: list[int] = []
    cell_starts: list[int] = []
    pos = 0
    for index, present in enumerate(lines):
        line_starts.append(pos)
        if present:
            pos += 1
        if index < len(sizes):
            cell_starts.append(pos)
            pos += sizes[index]
    line_starts.append(pos)
    return line_starts, cell_starts


def _draw_cell(
    canvas: Canvas,
    records: Records,
    config: GridConfig,
    row: int,
    col: int,
    area: tuple[int, int, int, int],
) -> None:
    """Draw the padded and aligned content of a cell inside an area."""
    x0, y0, width, height = area
    cell = records[row, col]
    padding = config.padding.get(row, col)
    fill = padding.fill
    halign = config.alignment_horizontal.get(row, col)
    valign = config.alignment_vertical.get(row, col)
    color = config.content_color.get(row, col)

    inner_width = max(width - padding.left - padding.right, 0)
    inner_height = max(height - padding.top - padding.bottom, 0)
    free_rows = max(inner_height - cell.height, 0)
    if valign == AlignmentVertical.CENTER:
        above = free_rows // 2
    elif valign == AlignmentVertical.BOTTOM:
        above = free_rows
    else:
        above = 0

    for y in range(height):
        if y < padding.top:
            canvas.fill(y0 + y, x0, fill.top, width)
            continue
        if y >= height - padding.bottom:
            canvas.fill(y0 + y, x0, fill.bottom, width)
            continue
        canvas.fill(y0 + y, x0, fill.left, padding.left)
        canvas.fill(y0 + y, x0 + width - padding.right, fill.right, padding.right)
        index = y - padding.top - above
        if not 0 <= index < cell.height:
            continue
        text, text_width = cell.lines[index], cell.widths[index]
        free = max(inner_width - text_width, 0)
        if halign == AlignmentHorizontal.CENTER:
            left = free // 2
        elif halign == AlignmentHorizontal.RIGHT:
            left = free
        else:
            left = 0
        canvas.put(y0 + y, x0 + padding.left + left, text, text_width, color)


def _stamp_text(canvas: Canvas, text: BorderText, y: int, total_width: int) -> None:
    """Write border text over a line of the canvas."""
    offset = text.offset
    start = total_width - offset.value if offset.from_end else offset.value
    if not 0 <= start < total_width:
        log.debug("Border text %r starts outside the grid", text.text)
        return
    try:
        chars = split_styled(text.text)
    except AnsiSyntaxError:
        log.debug("Drawing border text %r without styling", text.text)
        chars = [(char, "", "") for char in text.text]
    x = start
    for char, prefix, suffix in chars:
        width = get_cwidth(char)
        if width <= 0:
            continue
        if x + width > total_width:
            break
        color = AnsiColor(prefix, suffix) if prefix else text.color
        canvas.put(y, x, char, width, color)
        x += width


def render_lines(
    records: Records, config: GridConfig, dimensions: Dimensions, plan: BorderPlan
) -> list[str]:
    """Compose a grid into lines of text.

    Args:
        records: The cells of the grid
        config: The grid configuration
        dimensions: The column widths and row heights
        plan: The resolved border characters

    Returns:
        The lines of the grid, without line endings

    """
    if records.is_empty:
        return []
    layout = plan.layout
    vline_x, col_x = _offsets(dimensions.widths, plan.vertical_lines)
    hline_y, row_y = _offsets(dimensions.heights, plan.horizontal_lines)
    canvas = Canvas(vline_x[-1], hline_y[-1])

    for (line, col), glyphs in plan.horizontals.items():
        for i, glyph in enumerate(glyphs):
            canvas.put(hline_y[line], col_x[col] + i, glyph.char, 1, glyph.color)
    for (row, line), glyphs in plan.verticals.items():
        for i, glyph in enumerate(glyphs):
            canvas.put(row_y[row] + i, vline_x[line], glyph.char, 1, glyph.color)
    for (line_row, line_col), glyph in plan.nodes.items():
        canvas.put(hline_y[line_row], vline_x[line_col], glyph.char, 1, glyph.color)

    for (row, col), rowspan, colspan in layout.cells():
        area = (
            col_x[col],
            row_y[row],
            dimensions.span_width(col, colspan, plan.vertical_lines),
            dimensions.span_height(row, rowspan, plan.horizontal_lines),
        )
        _draw_cell(canvas, records, config, row, col, area)

    count_lines = len(plan.horizontal_lines)
    for text in config.border_texts:
        index = text.index + count_lines if text.index < 0 else text.index
        if not 0 <= index < count_lines or not plan.horizontal_lines[index]:
            log.debug("Ignoring border text on missing line %d", text.index)
            continue
        _stamp_text(canvas, text, hline_y[index], canvas.width)

    return [canvas.line(y) for y in range(canvas.height)]


def render(records: Records, config: GridConfig) -> str:
    """Lay out and draw a grid.

    Returns:
        The lines of the grid joined with newlines, with no trailing newline

    """
    if records.is_empty:
        return ""
    layout = GridLayout(records, config)
    dimensions = estimate(records, config, layout)
    plan = resolve(records, config, dimensions, layout)
    return "\n".join(render_lines(records, config, dimensions, plan))
