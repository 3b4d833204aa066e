"""Tests for cells which span several rows or columns."""

from __future__ import annotations

import pytest

from tabgrid.border import (
    Border,
    BorderChar,
    BorderColor,
    HorizontalLine,
    Line,
    Offset,
)
from tabgrid.color import AnsiColor
from tabgrid.config import ConfigBuilder
from tabgrid.data_structures import Position
from tabgrid.dimension import estimate
from tabgrid.objects import Cells
from tabgrid.options import Modify, Span
from tabgrid.plan import GridLayout, resolve
from tabgrid.records import Records
from tabgrid.style import Style
from tabgrid.table import Table


def lines(*rows: str) -> str:
    """Join the lines of an expected table."""
    return "\n".join(rows)


def test_column_span() -> None:
    """Inner borders of a column span are removed."""
    table = Table([["abc", "d"], ["e", "f"]], Style.modern())
    table.modify(Cells(0, 0), Span.column(2))
    assert table.render() == lines(
        "┌───┬───┐",
        "│ abc   │",
        "├───┼───┤",
        "│ e │ f │",
        "└───┴───┘",
    )


def test_column_span_corrected() -> None:
    """Span correction re-draws the nodes around a column span."""
    table = Table([["abc", "d"], ["e", "f"]], Style.modern())
    table.apply(Modify(Cells(0, 0), Span.column(2)), Style.correct_spans())
    assert table.render() == lines(
        "┌───────┐",
        "│ abc   │",
        "├───┬───┤",
        "│ e │ f │",
        "└───┴───┘",
    )


def test_row_span() -> None:
    """Inner borders of a row span are removed."""
    table = Table([["a", "b"], ["c", "d"]], Style.modern())
    table.modify(Cells(0, 0), Span.row(2))
    assert table.render() == lines(
        "┌───┬───┐",
        "│ a │ b │",
        "├   ┼───┤",
        "│   │ d │",
        "└───┴───┘",
    )


def test_row_span_corrected() -> None:
    """Span correction re-draws the nodes around a row span."""
    table = Table([["a", "b"], ["c", "d"]], Style.modern())
    table.apply(Modify(Cells(0, 0), Span.row(2)), Style.correct_spans())
    assert table.render() == lines(
        "┌───┬───┐",
        "│ a │ b │",
        "│   ├───┤",
        "│   │ d │",
        "└───┴───┘",
    )


def test_block_span_corrected() -> None:
    """A span over rows and columns removes the node inside it."""
    data = [["a", "b", "c"], ["d", "e", "f"], ["g", "h", "i"]]
    table = Table(data, Style.ascii())
    table.apply(Modify(Cells(0, 0), Span(2, 2)), Style.correct_spans())
    assert table.render() == lines(
        "+-------+---+",
        "| a     | c |",
        "|       +---+",
        "|       | f |",
        "+---+---+---+",
        "| g | h | i |",
        "+---+---+---+",
    )


def test_span_border_covers_whole_edge() -> None:
    """A border set on a column span covers its outer edges and their nodes."""
    table = Table([["a", "b"], ["c", "d"]], Style.modern())
    table.modify(Cells(0, 0), Span.column(2), Border.filled("#"))
    assert table.render() == lines(
        "#########",
        "# a     #",
        "#########",
        "│ c │ d │",
        "└───┴───┘",
    )


def test_row_span_border_covers_whole_edge() -> None:
    """A border set on a row span reaches the full height of the span."""
    table = Table([["a", "b"], ["c", "d"]], Style.modern())
    table.modify(Cells(0, 0), Span.row(2), Border.filled("#"))
    assert table.render() == lines(
        "#####───┐",
        "# a # b │",
        "#   #───┤",
        "#   # d │",
        "#####───┘",
    )


def test_span_border_color_covers_whole_edge() -> None:
    """A border color set on a span colors every segment and node along its edge."""
    red = AnsiColor("\x1b[31m", "\x1b[39m")
    records = Records([["a", "b"], ["c", "d"]])
    builder = ConfigBuilder(Style.modern())
    builder.set_span(Position(0, 0), None, 2)
    builder.set_border_color(Position(0, 0), BorderColor(bottom=red))
    config = builder.freeze()
    plan = resolve(records, config, estimate(records, config))
    assert plan.horizontals[1, 0][0].color == red
    assert plan.horizontals[1, 1][2].color == red
    assert plan.nodes[1, 1].color == red
    assert plan.nodes[1, 0].color is None
    assert plan.horizontals[2, 1][0].color is None


@pytest.mark.parametrize(
    "offset, expected",
    [
        (Offset.end(0), "┌───┬──*┐"),
        (Offset.begin(3), "┌───*───┐"),
        (Offset.begin(6), "┌───┬──*┐"),
        (Offset.begin(7), "┌───┬───┐"),
    ],
)
def test_span_border_char_along_edge(offset: Offset, expected: str) -> None:
    """Border character offsets count along the whole edge of a span."""
    table = Table([["a", "b"], ["c", "d"]], Style.modern())
    table.modify(Cells(0, 0), Span.column(2), BorderChar.horizontal("*", offset))
    assert table.lines()[0] == expected


def test_span_vertical_border_char_along_edge() -> None:
    """Vertical offsets count down the whole left edge of a row span."""
    table = Table([["a", "b"], ["c", "d"]], Style.modern())
    table.modify(Cells(0, 0), Span.row(2), BorderChar.vertical("*", Offset.begin(1)))
    assert [line[0] for line in table.lines()] == ["┌", "│", "*", "│", "└"]


def test_correction_keeps_cell_override() -> None:
    """Span correction leaves nodes set by a cell border alone."""
    table = Table([["a", "b"], ["c", "d"]], Style.modern())
    table.apply(
        Modify(Cells(1, 0), Span.column(2)),
        Modify(Cells(0, 0), Border(bottom_right="X")),
        Style.correct_spans(),
    )
    assert table.render() == lines(
        "┌───┬───┐",
        "│ a │ b │",
        "├───X───┤",
        "│ c     │",
        "└───────┘",
    )


def test_correction_keeps_positioned_line() -> None:
    """Span correction draws nodes from a positioned line through them."""
    style = Style.modern().horizontals([HorizontalLine(1, Line("═", "╪", "╞", "╡"))])
    table = Table([["a", "b"], ["c", "d"]], style)
    table.apply(Modify(Cells(0, 0), Span.column(2)), Style.correct_spans())
    assert table.render() == lines(
        "┌───────┐",
        "│ a     │",
        "╞═══╪═══╡",
        "│ c │ d │",
        "└───┴───┘",
    )


def test_span_widens_columns() -> None:
    """A wide spanned cell widens the columns it covers."""
    table = Table([["abcdefghij", ""], ["a", "b"]])
    table.modify(Cells(0, 0), Span.column(2))
    assert table.render() == lines(
        "+------+-----+",
        "| abcdefghij |",
        "+------+-----+",
        "| a    | b   |",
        "+------+-----+",
    )


def test_span_is_clamped() -> None:
    """A span reaching past the grid is clamped to its edge."""
    records = Records([["a", "b"]])
    builder = ConfigBuilder()
    builder.set_span(Position(0, 0), 3, 5)
    layout = GridLayout(records, builder.freeze())
    assert layout.spans == {Position(0, 0): (1, 2)}


def test_overlapping_spans() -> None:
    """A span overlapping a later span is reduced to a single cell."""
    records = Records([["a", "b"], ["c", "d"]])
    builder = ConfigBuilder()
    builder.set_span(Position(0, 0), None, 2)
    builder.set_span(Position(0, 1), 2, None)
    layout = GridLayout(records, builder.freeze())
    assert layout.spans == {Position(0, 1): (2, 1)}
    assert not layout.is_placeholder(0, 0)
    assert layout.is_placeholder(1, 1)
    assert layout.anchor(1, 1) == Position(0, 1)


def test_overlapping_spans_keep_later() -> None:
    """The later of two overlapping spans on one row is kept."""
    records = Records([["a", "b", "c"]])
    builder = ConfigBuilder()
    builder.set_span(Position(0, 0), None, 3)
    builder.set_span(Position(0, 1), None, 2)
    layout = GridLayout(records, builder.freeze())
    assert layout.spans == {Position(0, 1): (1, 2)}
    assert list(layout.cells()) == [(Position(0, 0), 1, 1), (Position(0, 1), 1, 2)]


def test_span_reset() -> None:
    """Setting a span of one cell removes the span."""
    builder = ConfigBuilder()
    builder.set_span(Position(0, 0), 2, 2)
    builder.set_span(Position(0, 0), None, 1)
    assert builder.spans == {Position(0, 0): (2, 1)}
    builder.set_span(Position(0, 0), 1, None)
    assert builder.spans == {}


def test_invalid_span() -> None:
    """A span must cover at least one cell."""
    with pytest.raises(ValueError, match="at least one cell"):
        Table([["a"]]).modify(Cells(0, 0), Span.column(0))


def test_span_outside_grid() -> None:
    """A span anchored outside the grid is ignored."""
    table = Table([["a"]]).modify(Cells(3, 3), Span.column(2))
    assert table.render() == lines("+---+", "| a |", "+---+")
