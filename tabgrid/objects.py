"""Define targets which select regions of a grid for cell options."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from tabgrid.data_structures import (
    CellEntity,
    ColumnEntity,
    GlobalEntity,
    RowEntity,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Protocol

    from tabgrid.data_structures import Entity

    class Target(Protocol):
        """A selection of grid entities."""

        def entities(self, count_rows: int, count_cols: int) -> Iterator[Entity]:
            """Yield the entities selected in a grid of the given shape."""


def _resolve(index: int, count: int) -> int:
    return index + count if index < 0 else index


class Rows(NamedTuple):
    """Select whole rows, from ``start`` up to but excluding ``stop``.

    Negative indices count from the end of the grid, and a ``stop`` of
    :py:const:`None` selects every remaining row.
    """

    start: int = 0
    stop: int | None = None

    @classmethod
    def single(cls, index: int) -> Rows:
        """Select one row."""
        return cls(index, index + 1 if index != -1 else None)

    @classmethod
    def first(cls) -> Rows:
        """Select the first row."""
        return cls.single(0)

    @classmethod
    def last(cls) -> Rows:
        """Select the last row."""
        return cls.single(-1)

    def entities(self, count_rows: int, count_cols: int) -> Iterator[Entity]:
        """Yield the selected rows."""
        start = _resolve(self.start, count_rows)
        stop = count_rows if self.stop is None else _resolve(self.stop, count_rows)
        for row in range(max(start, 0), stop):
            yield RowEntity(row)


class Columns(NamedTuple):
    """Select whole columns, from ``start`` up to but excluding ``stop``.

    Negative indices count from the end of the grid, and a ``stop`` of
    :py:const:`None` selects every remaining column.
    """

    start: int = 0
    stop: int | None = None

    @classmethod
    def single(cls, index: int) -> Columns:
        """Select one column."""
        return cls(index, index + 1 if index != -1 else None)

    @classmethod
    def first(cls) -> Columns:
        """Select the first column."""
        return cls.single(0)

    @classmethod
    def last(cls) -> Columns:
        """Select the last column."""
        return cls.single(-1)

    def entities(self, count_rows: int, count_cols: int) -> Iterator[Entity]:
        """Yield the selected columns."""
        start = _resolve(self.start, count_cols)
        stop = count_cols if self.stop is None else _resolve(self.stop, count_cols)
        for col in range(max(start, 0), stop):
            yield ColumnEntity(col)


class Cells(NamedTuple):
    """Select a single cell."""

    row: int
    col: int

    def entities(self, count_rows: int, count_cols: int) -> Iterator[Entity]:
        """Yield the selected cell."""
        yield CellEntity(_resolve(self.row, count_rows), _resolve(self.col, count_cols))


class Segment(NamedTuple):
    """Select a rectangular block of cells using slices of rows and columns."""

    rows: slice = slice(None)
    cols: slice = slice(None)

    @classmethod
    def all(cls) -> Segment:
        """Select every cell of the grid."""
        return cls()

    def entities(self, count_rows: int, count_cols: int) -> Iterator[Entity]:
        """Yield the selected cells."""
        if self.rows == slice(None) and self.cols == slice(None):
            yield GlobalEntity()
            return
        for row in range(*self.rows.indices(count_rows)):
            for col in range(*self.cols.indices(count_cols)):
                yield CellEntity(row, col)
