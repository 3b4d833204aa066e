"""Define the border characters of a grid and their overrides."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from tabgrid.data_structures import GlobalEntity, iter_positions

if TYPE_CHECKING:
    from tabgrid.color import Color
    from tabgrid.data_structures import Entity
    from tabgrid.table import Table


class Borders(NamedTuple):
    """The global characters used to draw every part of a grid.

    Slot naming works as follows:

                ╭┈┈┈┈┈┈┈┈┈┈left
                ┊ ╭┈┈┈┈┈┈┈┈vertical
                ┊ ┊     ╭┈┈right
                ∨ ∨     v
          top┈> ┌─┬─────┐    top_left, top_intersection, top_right
                │ │     │
   horizontal┈> ├─┼─────┤    left_intersection, intersection, right_intersection
                │ │     │
       bottom┈> └─┴─────┘    bottom_left, bottom_intersection, bottom_right

    A value of :py:const:`None` means the part is absent.
    """  # noqa: RUF002

    top: str | None = None
    bottom: str | None = None
    left: str | None = None
    right: str | None = None
    horizontal: str | None = None
    vertical: str | None = None
    top_left: str | None = None
    top_right: str | None = None
    bottom_left: str | None = None
    bottom_right: str | None = None
    top_intersection: str | None = None
    bottom_intersection: str | None = None
    left_intersection: str | None = None
    right_intersection: str | None = None
    intersection: str | None = None

    @classmethod
    def filled(cls, char: str) -> Borders:
        """Construct an instance with every part set to one character."""
        return cls(*(char for _ in cls._fields))


class DirectionFlags(NamedTuple):
    """Flag which indicate the connection of a grid node."""

    north: bool = False
    east: bool = False
    south: bool = False
    west: bool = False


# The global slot drawn at a grid node with a given set of connections
NODE_PARTS: dict[DirectionFlags, str] = {
    DirectionFlags(False, True, False, True): "horizontal",
    DirectionFlags(False, True, False, False): "horizontal",
    DirectionFlags(False, False, False, True): "horizontal",
    DirectionFlags(True, False, True, False): "vertical",
    DirectionFlags(True, False, False, False): "vertical",
    DirectionFlags(False, False, True, False): "vertical",
    DirectionFlags(False, True, True, False): "top_left",
    DirectionFlags(False, False, True, True): "top_right",
    DirectionFlags(True, True, False, False): "bottom_left",
    DirectionFlags(True, False, False, True): "bottom_right",
    DirectionFlags(False, True, True, True): "top_intersection",
    DirectionFlags(True, True, False, True): "bottom_intersection",
    DirectionFlags(True, True, True, False): "left_intersection",
    DirectionFlags(True, False, True, True): "right_intersection",
    DirectionFlags(True, True, True, True): "intersection",
}


class Line(NamedTuple):
    """The characters of a single grid line.

    ``connect1`` is drawn where the line meets the first outer edge (the left edge
    for horizontal lines, the top edge for vertical lines) and ``connect2`` where
    it meets the second.
    """

    main: str | None = None
    intersection: str | None = None
    connect1: str | None = None
    connect2: str | None = None

    @classmethod
    def full(
        cls,
        main: str | None,
        intersection: str | None,
        connect1: str | None,
        connect2: str | None,
    ) -> Line:
        """Construct a line with every character given."""
        return cls(main, intersection, connect1, connect2)

    @classmethod
    def filled(cls, char: str) -> Line:
        """Construct a line drawn with a single character."""
        return cls(char, char, char, char)

    @classmethod
    def empty(cls) -> Line:
        """Construct a line which draws nothing of its own."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """Determine if the line sets no characters."""
        return all(char is None for char in self)


class HorizontalLine(NamedTuple):
    """Override the characters of one horizontal grid line.

    Line ``0`` is the top edge of the grid and line ``count_rows`` the bottom.
    """

    index: int
    line: Line | None = None

    @classmethod
    def empty(cls, index: int) -> HorizontalLine:
        """Construct an instance which does not override anything."""
        return cls(index, None)

    def change(self, table: Table) -> None:
        """Register the line with a table."""
        table.config.set_horizontal_line(self.index, self.line)


class VerticalLine(NamedTuple):
    """Override the characters of one vertical grid line.

    Line ``0`` is the left edge of the grid and line ``count_cols`` the right.
    """

    index: int
    line: Line | None = None

    @classmethod
    def empty(cls, index: int) -> VerticalLine:
        """Construct an instance which does not override anything."""
        return cls(index, None)

    def change(self, table: Table) -> None:
        """Register the line with a table."""
        table.config.set_vertical_line(self.index, self.line)


class Border(NamedTuple):
    """Override the border characters around a cell.

    Edges are shared between neighbouring cells, so the right edge of one cell is
    the left edge of the next. When two overrides address the same edge, the one
    applied last wins.
    """

    top: str | None = None
    bottom: str | None = None
    left: str | None = None
    right: str | None = None
    top_left: str | None = None
    top_right: str | None = None
    bottom_left: str | None = None
    bottom_right: str | None = None

    @classmethod
    def full(
        cls,
        top: str,
        bottom: str,
        left: str,
        right: str,
        top_left: str,
        top_right: str,
        bottom_left: str,
        bottom_right: str,
    ) -> Border:
        """Construct a border with every character given."""
        return cls(
            top, bottom, left, right, top_left, top_right, bottom_left, bottom_right
        )

    @classmethod
    def filled(cls, char: str) -> Border:
        """Construct a border drawn with a single character."""
        return cls(*(char for _ in cls._fields))

    @classmethod
    def empty(cls) -> Border:
        """Construct a border which removes every override around a cell."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """Determine if the border sets no characters."""
        return all(char is None for char in self)

    def change_cell(self, table: Table, entity: Entity) -> None:
        """Apply the border to the cells selected by an entity."""
        for position in iter_positions(entity, table.count_rows, table.count_cols):
            if self.is_empty:
                table.config.remove_border(position)
            else:
                table.config.set_border(position, self)


class BorderColor(NamedTuple):
    """Override the colors of the border characters around a cell."""

    top: Color | None = None
    bottom: Color | None = None
    left: Color | None = None
    right: Color | None = None
    top_left: Color | None = None
    top_right: Color | None = None
    bottom_left: Color | None = None
    bottom_right: Color | None = None

    @classmethod
    def filled(cls, color: Color) -> BorderColor:
        """Construct an instance which colors every border character."""
        return cls(*(color for _ in cls._fields))

    @classmethod
    def empty(cls) -> BorderColor:
        """Construct an instance which removes every color around a cell."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """Determine if no color is set."""
        return all(color is None for color in self)

    def change_cell(self, table: Table, entity: Entity) -> None:
        """Apply the colors to the cells selected by an entity."""
        for position in iter_positions(entity, table.count_rows, table.count_cols):
            if self.is_empty:
                table.config.remove_border_color(position)
            else:
                table.config.set_border_color(position, self)

    def change(self, table: Table) -> None:
        """Color the borders of every cell in a table."""
        self.change_cell(table, GlobalEntity())


class Offset(NamedTuple):
    """A character offset counted from the start or the end of a border segment."""

    value: int = 0
    from_end: bool = False

    @classmethod
    def begin(cls, value: int) -> Offset:
        """Count the offset from the start of the segment."""
        return cls(value, False)

    @classmethod
    def end(cls, value: int) -> Offset:
        """Count the offset from the end of the segment."""
        return cls(value, True)

    def resolve(self, length: int) -> int | None:
        """Get the index of the character addressed in a segment of some length.

        Returns:
            The index, or :py:const:`None` if it lies outside the segment

        """
        index = length - 1 - self.value if self.from_end else self.value
        if 0 <= index < length:
            return index
        return None


class BorderChar(NamedTuple):
    """Replace a single character of a cell's top or left border edge.

    Horizontal characters are placed on a cell's top edge. Selecting the row
    ``count_rows`` addresses the bottom edge of the grid. Vertical characters are
    placed on a cell's left edge, and the column ``count_cols`` addresses the right
    edge of the grid. The edge of a spanned cell runs across the whole span, and
    each node between its segments counts as one character.
    """

    char: str
    offset: Offset
    is_vertical: bool = False

    @classmethod
    def horizontal(cls, char: str, offset: Offset) -> BorderChar:
        """Replace a character on a horizontal border edge."""
        return cls(char, offset, False)

    @classmethod
    def vertical(cls, char: str, offset: Offset) -> BorderChar:
        """Replace a character on a vertical border edge."""
        return cls(char, offset, True)

    def change_cell(self, table: Table, entity: Entity) -> None:
        """Apply the character to the edges of the cells selected by an entity."""
        count_rows, count_cols = table.count_rows, table.count_cols
        if self.is_vertical:
            count_cols += 1
        else:
            count_rows += 1
        for position in iter_positions(entity, count_rows, count_cols):
            table.config.set_border_char(position, self)


class BorderText(NamedTuple):
    """Stamp some text over a horizontal grid line.

    A negative index counts lines from the bottom of the grid. Text placed with
    an offset counted from the end starts ``offset`` columns before the right end of
    the line.
    """

    index: int
    text: str
    offset: Offset = Offset.begin(0)
    color: Color | None = None

    @classmethod
    def first(cls, text: str) -> BorderText:
        """Place text on the top line of the grid."""
        return cls(0, text)

    @classmethod
    def last(cls, text: str) -> BorderText:
        """Place text on the bottom line of the grid."""
        return cls(-1, text)

    def with_offset(self, offset: Offset) -> BorderText:
        """Return a copy placed at a different offset."""
        return self._replace(offset=offset)

    def with_color(self, color: Color) -> BorderText:
        """Return a copy drawn in a color."""
        return self._replace(color=color)

    def change(self, table: Table) -> None:
        """Register the text with a table."""
        table.config.add_border_text(self)
