"""Resolve which character is drawn at every border position of a grid."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, NamedTuple

from tabgrid.border import NODE_PARTS, DirectionFlags
from tabgrid.config import place_edges
from tabgrid.data_structures import Position

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from tabgrid.border import Offset
    from tabgrid.color import Color
    from tabgrid.config import EdgeValues, GridConfig
    from tabgrid.dimension import Dimensions
    from tabgrid.records import Records

log = logging.getLogger(__name__)


class GridLayout:
    """Record which cells anchor spans, and which border lines exist.

    Spans are claimed from the last anchor to the first in row-major order. A span
    which overlaps an area already claimed is reduced to a single cell.
    """

    def __init__(self, records: Records, config: GridConfig) -> None:
        """Compute the layout of a grid.

        Args:
            records: The cells of the grid
            config: The grid configuration

        """
        self.count_rows = count_rows = records.count_rows
        self.count_cols = count_cols = records.count_cols
        self._anchors: list[list[Position]] = [
            [Position(row, col) for col in range(count_cols)]
            for row in range(count_rows)
        ]
        self.spans: dict[Position, tuple[int, int]] = {}

        claimed: set[tuple[int, int]] = set()
        for position in sorted(config.spans, reverse=True):
            row, col = position
            if not (0 <= row < count_rows and 0 <= col < count_cols):
                log.debug("Ignoring span for cell %s outside the grid", position)
                continue
            rowspan, colspan = config.spans[position]
            rowspan = min(rowspan, count_rows - row)
            colspan = min(colspan, count_cols - col)
            area = {
                (r, c)
                for r in range(row, row + rowspan)
                for c in range(col, col + colspan)
            }
            if area & claimed:
                log.debug("Dropping span at %s which overlaps another span", position)
                continue
            claimed |= area
            if (rowspan, colspan) != (1, 1):
                self.spans[Position(row, col)] = (rowspan, colspan)
                for r, c in area:
                    self._anchors[r][c] = Position(row, col)

        self.border_overrides = place_edges(config.border_overrides, self._cell_span)
        self.border_colors = place_edges(config.border_colors, self._cell_span)

        self.horizontal_lines = tuple(
            _has_horizontal(config, self.border_overrides, line, count_rows, count_cols)
            for line in range(count_rows + 1)
        )
        self.vertical_lines = tuple(
            _has_vertical(config, self.border_overrides, line, count_rows, count_cols)
            for line in range(count_cols + 1)
        )

    def _cell_span(self, position: Position) -> tuple[int, int] | None:
        row, col = position
        if (
            0 <= row < self.count_rows
            and 0 <= col < self.count_cols
            and self.is_placeholder(row, col)
        ):
            return None
        return self.span(position)

    def anchor(self, row: int, col: int) -> Position:
        """Get the position of the cell which covers a position."""
        return self._anchors[row][col]

    def span(self, position: Position) -> tuple[int, int]:
        """Get the number of rows and columns covered by a cell."""
        return self.spans.get(position, (1, 1))

    def is_placeholder(self, row: int, col: int) -> bool:
        """Determine if a position is covered by a span anchored elsewhere."""
        return self._anchors[row][col] != (row, col)

    def cells(self) -> Iterator[tuple[Position, int, int]]:
        """Yield every cell which is not a placeholder with its span, row-major."""
        for row in range(self.count_rows):
            for col in range(self.count_cols):
                if not self.is_placeholder(row, col):
                    yield Position(row, col), *self.span(Position(row, col))

    def vertical_swallowed(self, row: int, line: int) -> bool:
        """Determine if a vertical border segment lies inside a span."""
        return (
            0 < line < self.count_cols
            and self._anchors[row][line - 1] == self._anchors[row][line]
        )

    def horizontal_swallowed(self, line: int, col: int) -> bool:
        """Determine if a horizontal border segment lies inside a span."""
        return (
            0 < line < self.count_rows
            and self._anchors[line - 1][col] == self._anchors[line][col]
        )

    def node_swallowed(self, line_row: int, line_col: int) -> bool:
        """Determine if a grid node lies inside a span."""
        if not (0 < line_row < self.count_rows and 0 < line_col < self.count_cols):
            return False
        anchor = self._anchors[line_row][line_col]
        return (
            self._anchors[line_row - 1][line_col - 1] == anchor
            and self._anchors[line_row - 1][line_col] == anchor
            and self._anchors[line_row][line_col - 1] == anchor
        )

    def edge(self, position: Position, vertical: bool) -> list[tuple[bool, Position]]:
        """List the segments and nodes along the top or left edge of a cell, in order.

        The edge of a spanned cell runs along every row or column it covers. The
        last line of the grid is addressed through the row or column past the end,
        and belongs to the cells before it.

        Returns:
            ``(is_node, key)`` pairs. The list is empty if no edge starts at the
            position.

        """
        row, col = position
        rows, cols = self.count_rows, self.count_cols
        if vertical:
            if not (0 <= row < rows and 0 <= col <= cols) or not cols:
                return []
            anchor = self._anchors[row][min(col, cols - 1)]
            if anchor.row != row or (col < cols and anchor.col != col):
                return []
            length = self.span(anchor)[0]
            keys = [Position(row + i, col) for i in range(length)]
        else:
            if not (0 <= row <= rows and 0 <= col < cols) or not rows:
                return []
            anchor = self._anchors[min(row, rows - 1)][col]
            if anchor.col != col or (row < rows and anchor.row != row):
                return []
            length = self.span(anchor)[1]
            keys = [Position(row, col + i) for i in range(length)]
        edge: list[tuple[bool, Position]] = []
        for i, key in enumerate(keys):
            if i:
                edge.append((True, key))
            edge.append((False, key))
        return edge


def _has_horizontal(
    config: GridConfig, overrides: EdgeValues, line: int, rows: int, cols: int
) -> bool:
    if line in config.horizontal_lines:
        return True
    b = config.borders
    if line == 0:
        slots = (b.top, b.top_left, b.top_right, b.top_intersection)
    elif line == rows:
        slots = (b.bottom, b.bottom_left, b.bottom_right, b.bottom_intersection)
    else:
        slots = (
            b.horizontal,
            b.left_intersection,
            b.right_intersection,
            b.intersection,
        )
    if any(char is not None for char in slots):
        return True
    if line in {0, rows}:
        end = "connect1" if line == 0 else "connect2"
        if any(
            getattr(vl, end) is not None
            for index, vl in config.vertical_lines.items()
            if index <= cols
        ):
            return True
    return any(
        key[0] == line and key[1] < cols for key in overrides.horizontal
    ) or any(key[0] == line and key[1] <= cols for key in overrides.nodes)


def _has_vertical(
    config: GridConfig, overrides: EdgeValues, line: int, rows: int, cols: int
) -> bool:
    if line in config.vertical_lines:
        return True
    b = config.borders
    if line == 0:
        slots = (b.left, b.top_left, b.bottom_left, b.left_intersection)
    elif line == cols:
        slots = (b.right, b.top_right, b.bottom_right, b.right_intersection)
    else:
        slots = (
            b.vertical,
            b.top_intersection,
            b.bottom_intersection,
            b.intersection,
        )
    if any(char is not None for char in slots):
        return True
    if line in {0, cols}:
        end = "connect1" if line == 0 else "connect2"
        if any(
            getattr(hl, end) is not None
            for index, hl in config.horizontal_lines.items()
            if index <= rows
        ):
            return True
    return any(key[1] == line and key[0] < rows for key in overrides.vertical) or any(
        key[1] == line and key[0] <= rows for key in overrides.nodes
    )


class Glyph(NamedTuple):
    """A border character and its color."""

    char: str
    color: Color | None = None


class BorderPlan(NamedTuple):
    """The resolved characters of every border position in a grid.

    Segments and nodes which lie inside a span, or on a line which does not exist,
    are absent.
    """

    layout: GridLayout
    horizontals: Mapping[tuple[int, int], tuple[Glyph, ...]]
    verticals: Mapping[tuple[int, int], tuple[Glyph, ...]]
    nodes: Mapping[tuple[int, int], Glyph]

    @property
    def horizontal_lines(self) -> tuple[bool, ...]:
        """Which horizontal lines exist."""
        return self.layout.horizontal_lines

    @property
    def vertical_lines(self) -> tuple[bool, ...]:
        """Which vertical lines exist."""
        return self.layout.vertical_lines


class _Resolver:
    """Look up border characters in order of precedence."""

    def __init__(self, config: GridConfig, layout: GridLayout) -> None:
        self.config = config
        self.layout = layout
        self.overrides = layout.border_overrides
        self.rows = layout.count_rows
        self.cols = layout.count_cols

    def horizontal(self, line: int, col: int) -> str | None:
        if (char := self.overrides.horizontal.get((line, col))) is not None:
            return char
        hl = self.config.horizontal_lines.get(line)
        if hl is not None and hl.main is not None:
            return hl.main
        b = self.config.borders
        if line == 0:
            return b.top
        if line == self.rows:
            return b.bottom
        return b.horizontal

    def vertical(self, row: int, line: int) -> str | None:
        if (char := self.overrides.vertical.get((row, line))) is not None:
            return char
        vl = self.config.vertical_lines.get(line)
        if vl is not None and vl.main is not None:
            return vl.main
        b = self.config.borders
        if line == 0:
            return b.left
        if line == self.cols:
            return b.right
        return b.vertical

    def line_node(self, line_row: int, line_col: int) -> str | None:
        """Get the character a positioned line draws at a node.

        A horizontal line beats a vertical line.
        """
        config = self.config
        rows, cols = self.rows, self.cols
        if (hl := config.horizontal_lines.get(line_row)) is not None:
            if line_col == 0:
                char = hl.connect1
            elif line_col == cols:
                char = hl.connect2
            else:
                char = hl.intersection
            if char is not None:
                return char
        if (vl := config.vertical_lines.get(line_col)) is not None:
            if line_row == 0:
                char = vl.connect1
            elif line_row == rows:
                char = vl.connect2
            else:
                char = vl.intersection
            if char is not None:
                return char
        return None

    def node(self, line_row: int, line_col: int) -> str | None:
        if (char := self.overrides.nodes.get((line_row, line_col))) is not None:
            return char
        if (char := self.line_node(line_row, line_col)) is not None:
            return char
        rows, cols = self.rows, self.cols
        b = self.config.borders
        if line_row == 0:
            if line_col == 0:
                return b.top_left
            return b.top_right if line_col == cols else b.top_intersection
        if line_row == rows:
            if line_col == 0:
                return b.bottom_left
            return b.bottom_right if line_col == cols else b.bottom_intersection
        if line_col == 0:
            return b.left_intersection
        return b.right_intersection if line_col == cols else b.intersection

    def corrected_node(self, line_row: int, line_col: int, char: str) -> str:
        """Re-derive a node next to a span from the border arms which remain.

        Nodes with a cell border override are left alone. Otherwise the character
        comes from a positioned line through the node if there is one, and from the
        global style if not.
        """
        if (line_row, line_col) in self.overrides.nodes:
            return char
        layout = self.layout
        rows, cols = self.rows, self.cols
        swallowed = DirectionFlags(
            north=line_row > 0 and layout.vertical_swallowed(line_row - 1, line_col),
            east=line_col < cols and layout.horizontal_swallowed(line_row, line_col),
            south=line_row < rows and layout.vertical_swallowed(line_row, line_col),
            west=line_col > 0 and layout.horizontal_swallowed(line_row, line_col - 1),
        )
        if not any(swallowed):
            return char
        arms = DirectionFlags(
            north=line_row > 0 and not swallowed.north,
            east=line_col < cols and not swallowed.east,
            south=line_row < rows and not swallowed.south,
            west=line_col > 0 and not swallowed.west,
        )
        part = NODE_PARTS.get(arms)
        if part is None:
            return char
        if part == "horizontal":
            fill = self.horizontal(line_row, line_col if arms.east else line_col - 1)
        elif part == "vertical":
            fill = self.vertical(line_row if arms.south else line_row - 1, line_col)
        elif (fill := self.line_node(line_row, line_col)) is None:
            fill = getattr(self.config.borders, part)
        return char if fill is None else fill


def _apply_offsets(
    layout: GridLayout,
    chars: Mapping[tuple[int, int], tuple[tuple[Offset, str], ...]],
    vertical: bool,
    segments: dict[tuple[int, int], list[Glyph]],
    nodes: dict[tuple[int, int], Glyph],
) -> None:
    """Replace single characters along the top or left edges of cells."""
    for position, offsets in chars.items():
        edge = layout.edge(Position(*position), vertical)
        if not edge:
            log.debug("Ignoring border characters for cell %s", position)
            continue
        slots: list[tuple[tuple[int, int], int | None]] = []
        for is_node, key in edge:
            if is_node:
                if key in nodes:
                    slots.append((key, None))
            elif key in segments:
                slots.extend((key, i) for i in range(len(segments[key])))
        # Offsets counted from the start are applied last so they win
        for offset, char in sorted(offsets, key=lambda item: not item[0].from_end):
            if (index := offset.resolve(len(slots))) is None:
                continue
            key, i = slots[index]
            if i is None:
                nodes[key] = nodes[key]._replace(char=char)
            else:
                segments[key][i] = segments[key][i]._replace(char=char)


def resolve(
    records: Records,
    config: GridConfig,
    dimensions: Dimensions,
    layout: GridLayout | None = None,
) -> BorderPlan:
    """Resolve the character drawn at every border position of a grid.

    Args:
        records: The cells of the grid
        config: The grid configuration
        dimensions: The column widths and row heights
        layout: A precomputed layout of the grid

    Returns:
        The plan of border characters

    """
    if layout is None:
        layout = GridLayout(records, config)
    resolver = _Resolver(config, layout)
    colors = layout.border_colors
    rows, cols = layout.count_rows, layout.count_cols

    horizontals: dict[tuple[int, int], list[Glyph]] = {}
    for line, present in enumerate(layout.horizontal_lines):
        if not present:
            continue
        for col in range(cols):
            if layout.horizontal_swallowed(line, col):
                continue
            glyph = Glyph(
                resolver.horizontal(line, col) or " ",
                colors.horizontal.get((line, col)),
            )
            horizontals[line, col] = [glyph] * dimensions.widths[col]

    verticals: dict[tuple[int, int], list[Glyph]] = {}
    for line, present in enumerate(layout.vertical_lines):
        if not present:
            continue
        for row in range(rows):
            if layout.vertical_swallowed(row, line):
                continue
            glyph = Glyph(
                resolver.vertical(row, line) or " ",
                colors.vertical.get((row, line)),
            )
            verticals[row, line] = [glyph] * dimensions.heights[row]

    nodes: dict[tuple[int, int], Glyph] = {}
    for line_row, row_present in enumerate(layout.horizontal_lines):
        if not row_present:
            continue
        for line_col, col_present in enumerate(layout.vertical_lines):
            if not col_present or layout.node_swallowed(line_row, line_col):
                continue
            char = resolver.node(line_row, line_col) or " "
            if config.correct_spans and layout.spans:
                char = resolver.corrected_node(line_row, line_col, char)
            nodes[line_row, line_col] = Glyph(
                char, colors.nodes.get((line_row, line_col))
            )

    _apply_offsets(layout, config.horizontal_chars, False, horizontals, nodes)
    _apply_offsets(layout, config.vertical_chars, True, verticals, nodes)

    return BorderPlan(
        layout=layout,
        horizontals=MappingProxyType(
            {key: tuple(glyphs) for key, glyphs in horizontals.items()}
        ),
        verticals=MappingProxyType(
            {key: tuple(glyphs) for key, glyphs in verticals.items()}
        ),
        nodes=MappingProxyType(nodes),
    )
