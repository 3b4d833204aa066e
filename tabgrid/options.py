"""Define options which change the layout and content of table cells."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

from tabgrid.data_structures import DiStr, GlobalEntity, iter_positions

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Protocol

    from tabgrid.color import Color
    from tabgrid.data_structures import Entity
    from tabgrid.objects import Target
    from tabgrid.table import Table

    class TableOption(Protocol):
        """An option which changes a whole table."""

        def change(self, table: Table) -> None:
            """Apply the option to a table."""

    class CellOption(Protocol):
        """An option which changes selected cells of a table."""

        def change_cell(self, table: Table, entity: Entity) -> None:
            """Apply the option to the cells selected by an entity."""


log = logging.getLogger(__name__)


class AlignmentHorizontal(Enum):
    """Horizontal alignment of text within a cell."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class AlignmentVertical(Enum):
    """Vertical alignment of text within a cell."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class Padding(NamedTuple):
    """Space added around the content of a cell, and the characters used to fill it.

    Padding counts toward column widths and row heights.
    """

    left: int = 1
    right: int = 1
    top: int = 0
    bottom: int = 0
    fill: DiStr = DiStr.from_value(" ")

    @classmethod
    def zero(cls) -> Padding:
        """No padding on any side."""
        return cls(0, 0, 0, 0)

    def with_fill(self, left: str, right: str, top: str, bottom: str) -> Padding:
        """Return a copy which fills each side with a different character."""
        return self._replace(fill=DiStr(top=top, right=right, bottom=bottom, left=left))

    def validate(self) -> None:
        """Check that no side is negative.

        Raises:
            ValueError: If any side is negative

        """
        if min(self.left, self.right, self.top, self.bottom) < 0:
            raise ValueError(f"Padding cannot be negative: {self}")

    def change_cell(self, table: Table, entity: Entity) -> None:
        """Pad the cells selected by an entity."""
        self.validate()
        table.config.set_padding(entity, self)

    def change(self, table: Table) -> None:
        """Pad every cell of a table."""
        self.change_cell(table, GlobalEntity())


class Alignment(NamedTuple):
    """Align the text of a cell horizontally, vertically or both."""

    horizontal: AlignmentHorizontal | None = None
    vertical: AlignmentVertical | None = None

    @classmethod
    def left(cls) -> Alignment:
        """Align text to the left."""
        return cls(horizontal=AlignmentHorizontal.LEFT)

    @classmethod
    def right(cls) -> Alignment:
        """Align text to the right."""
        return cls(horizontal=AlignmentHorizontal.RIGHT)

    @classmethod
    def center(cls) -> Alignment:
        """Center text horizontally."""
        return cls(horizontal=AlignmentHorizontal.CENTER)

    @classmethod
    def top(cls) -> Alignment:
        """Align text to the top."""
        return cls(vertical=AlignmentVertical.TOP)

    @classmethod
    def bottom(cls) -> Alignment:
        """Align text to the bottom."""
        return cls(vertical=AlignmentVertical.BOTTOM)

    @classmethod
    def center_vertical(cls) -> Alignment:
        """Center text vertically."""
        return cls(vertical=AlignmentVertical.CENTER)

    def change_cell(self, table: Table, entity: Entity) -> None:
        """Align the cells selected by an entity."""
        if self.horizontal is not None:
            table.config.set_alignment_horizontal(entity, self.horizontal)
        if self.vertical is not None:
            table.config.set_alignment_vertical(entity, self.vertical)

    def change(self, table: Table) -> None:
        """Align every cell of a table."""
        self.change_cell(table, GlobalEntity())


class Span(NamedTuple):
    """Make a cell span several rows or columns.

    A size of :py:const:`None` leaves that direction unchanged.
    """

    rowspan: int | None = None
    colspan: int | None = None

    @classmethod
    def column(cls, size: int) -> Span:
        """Span a number of columns."""
        return cls(colspan=size)

    @classmethod
    def row(cls, size: int) -> Span:
        """Span a number of rows."""
        return cls(rowspan=size)

    def change_cell(self, table: Table, entity: Entity) -> None:
        """Set the span of the cells selected by an entity.

        Raises:
            ValueError: If a span smaller than one is given

        """
        for size in (self.rowspan, self.colspan):
            if size is not None and size < 1:
                raise ValueError(f"A span must cover at least one cell: {self}")
        for position in iter_positions(entity, table.count_rows, table.count_cols):
            table.config.set_span(position, self.rowspan, self.colspan)


class Format(NamedTuple):
    """Replace the text of cells with the result of a function."""

    func: Callable[[str], str]

    def change_cell(self, table: Table, entity: Entity) -> None:
        """Format the text of the cells selected by an entity."""
        records = table.records
        for row, col in iter_positions(entity, records.count_rows, records.count_cols):
            records = records.with_text(row, col, self.func(records[row, col].text))
        table.records = records

    def change(self, table: Table) -> None:
        """Format the text of every cell."""
        self.change_cell(table, GlobalEntity())


class ContentColor(NamedTuple):
    """Color the text of cells."""

    color: Color | None

    def change_cell(self, table: Table, entity: Entity) -> None:
        """Color the text of the cells selected by an entity."""
        table.config.set_content_color(entity, self.color)

    def change(self, table: Table) -> None:
        """Color the text of every cell."""
        self.change_cell(table, GlobalEntity())


class Modify:
    """Apply cell options to the cells selected by a target."""

    def __init__(self, target: Target, *options: CellOption) -> None:
        """Create a new modifier.

        Args:
            target: The cells to change
            options: The options to apply to each selected entity

        """
        self.target = target
        self.options = list(options)

    def with_(self, *options: CellOption) -> Modify:
        """Add more options to apply to the selected cells."""
        self.options.extend(options)
        return self

    def change(self, table: Table) -> None:
        """Apply every option to every selected entity."""
        log.debug("Applying %r", self)
        for entity in self.target.entities(table.count_rows, table.count_cols):
            for option in self.options:
                option.change_cell(table, entity)

    def __repr__(self) -> str:
        """Return a representation of the modifier."""
        return f"Modify({self.target!r}, {', '.join(map(repr, self.options))})"
