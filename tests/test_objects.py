"""Tests for grid selection targets."""

from __future__ import annotations

from tabgrid.data_structures import CellEntity, ColumnEntity, GlobalEntity, RowEntity
from tabgrid.objects import Cells, Columns, Rows, Segment


def test_rows() -> None:
    """Row ranges select whole rows."""
    assert list(Rows(1).entities(3, 2)) == [RowEntity(1), RowEntity(2)]
    assert list(Rows(0, 2).entities(3, 2)) == [RowEntity(0), RowEntity(1)]
    assert list(Rows.first().entities(3, 2)) == [RowEntity(0)]
    assert list(Rows.last().entities(3, 2)) == [RowEntity(2)]
    assert list(Rows(-2).entities(3, 2)) == [RowEntity(1), RowEntity(2)]


def test_rows_past_the_end() -> None:
    """A row just past the grid can be selected to address the bottom edge."""
    assert list(Rows.single(3).entities(3, 2)) == [RowEntity(3)]


def test_columns() -> None:
    """Column ranges select whole columns."""
    assert list(Columns(1).entities(2, 3)) == [ColumnEntity(1), ColumnEntity(2)]
    assert list(Columns.first().entities(2, 3)) == [ColumnEntity(0)]
    assert list(Columns.last().entities(2, 3)) == [ColumnEntity(2)]
    assert list(Columns.single(1).entities(2, 3)) == [ColumnEntity(1)]


def test_cells() -> None:
    """Negative cell indices count from the end."""
    assert list(Cells(0, 1).entities(2, 3)) == [CellEntity(0, 1)]
    assert list(Cells(-1, -1).entities(2, 3)) == [CellEntity(1, 2)]


def test_segment() -> None:
    """Segments select rectangular blocks of cells."""
    assert list(Segment.all().entities(2, 2)) == [GlobalEntity()]
    assert list(Segment(slice(0, 2), slice(1, None)).entities(3, 3)) == [
        CellEntity(0, 1),
        CellEntity(0, 2),
        CellEntity(1, 1),
        CellEntity(1, 2),
    ]
