"""Tests for resolving border characters."""

from __future__ import annotations

from tabgrid.border import Border, BorderColor, HorizontalLine, Line, VerticalLine
from tabgrid.color import AnsiColor
from tabgrid.config import ConfigBuilder
from tabgrid.data_structures import Position
from tabgrid.dimension import estimate
from tabgrid.plan import BorderPlan, GridLayout, resolve
from tabgrid.records import Records
from tabgrid.style import Style

RECORDS = Records([["a", "b"], ["c", "d"]])


def plan_for(builder: ConfigBuilder, records: Records = RECORDS) -> BorderPlan:
    """Resolve the borders of a grid."""
    config = builder.freeze()
    return resolve(records, config, estimate(records, config))


def test_line_presence() -> None:
    """Lines exist where any character addresses them."""
    plan = plan_for(ConfigBuilder(Style.psql()))
    assert plan.horizontal_lines == (False, True, False)
    assert plan.vertical_lines == (False, True, False)


def test_line_connection_creates_edge() -> None:
    """A line end on an outer edge makes the edge exist."""
    style = Style.empty().horizontals([HorizontalLine(1, Line("-", None, "+", None))])
    plan = plan_for(ConfigBuilder(style))
    assert plan.vertical_lines == (True, False, False)
    assert plan.nodes[1, 0].char == "+"


def test_override_creates_lines() -> None:
    """A corner override makes both of its lines exist."""
    builder = ConfigBuilder(Style.empty())
    builder.set_border(Position(1, 1), Border(bottom_right="*"))
    plan = plan_for(builder)
    assert plan.horizontal_lines == (False, False, True)
    assert plan.vertical_lines == (False, False, True)
    assert list(plan.nodes) == [(2, 2)]
    assert plan.nodes[2, 2].char == "*"
    assert plan.horizontals[2, 0][0].char == " "


def test_precedence() -> None:
    """Cell overrides beat positioned lines, which beat the global style."""
    style = Style.ascii().horizontals([HorizontalLine(1, Line("=", "#", None, None))])
    builder = ConfigBuilder(style)
    builder.set_border(Position(0, 0), Border(bottom="~"))
    plan = plan_for(builder)
    assert plan.horizontals[1, 0][0].char == "~"
    assert plan.horizontals[1, 1][0].char == "="
    assert plan.horizontals[0, 0][0].char == "-"
    assert plan.nodes[1, 1].char == "#"
    assert plan.nodes[1, 0].char == "+"


def test_vertical_line_node() -> None:
    """A vertical line provides nodes where no horizontal line does."""
    style = Style.ascii().verticals([VerticalLine(1, Line("!", "*", "v", "^"))])
    plan = plan_for(ConfigBuilder(style))
    assert plan.nodes[0, 1].char == "v"
    assert plan.nodes[1, 1].char == "*"
    assert plan.nodes[2, 1].char == "^"
    assert plan.verticals[0, 1][0].char == "!"


def test_segments_have_cell_sizes() -> None:
    """Each segment has one character per column or row it runs along."""
    records = Records([["abc", "d\ne"]])
    plan = plan_for(ConfigBuilder(), records)
    assert len(plan.horizontals[0, 0]) == 5
    assert len(plan.horizontals[0, 1]) == 3
    assert len(plan.verticals[0, 0]) == 2


def test_swallowed_segments() -> None:
    """Borders inside a span are absent from the plan."""
    builder = ConfigBuilder()
    builder.set_span(Position(0, 0), 2, 2)
    plan = plan_for(builder)
    assert (1, 0) not in plan.horizontals
    assert (0, 1) not in plan.verticals
    assert (1, 1) not in plan.nodes
    assert (0, 1) in plan.nodes


def test_colors() -> None:
    """Border colors are carried by the characters they apply to."""
    red = AnsiColor("\x1b[31m", "\x1b[39m")
    builder = ConfigBuilder()
    builder.set_border_color(Position(0, 0), BorderColor(right=red))
    plan = plan_for(builder)
    assert plan.verticals[0, 1][0].color == red
    assert plan.verticals[0, 0][0].color is None


def test_layout_cells() -> None:
    """Only cells which are not placeholders are laid out."""
    builder = ConfigBuilder()
    builder.set_span(Position(0, 0), None, 2)
    layout = GridLayout(RECORDS, builder.freeze())
    assert list(layout.cells()) == [
        (Position(0, 0), 1, 2),
        (Position(1, 0), 1, 1),
        (Position(1, 1), 1, 1),
    ]


def test_layout_edge() -> None:
    """The edge of a spanned cell runs through the nodes between its segments."""
    builder = ConfigBuilder()
    builder.set_span(Position(0, 0), None, 2)
    layout = GridLayout(RECORDS, builder.freeze())
    assert layout.edge(Position(0, 0), vertical=False) == [
        (False, (0, 0)),
        (True, (0, 1)),
        (False, (0, 1)),
    ]
    assert layout.edge(Position(0, 1), vertical=False) == []
    assert layout.edge(Position(0, 2), vertical=True) == [(False, (0, 2))]
    assert layout.edge(Position(2, 1), vertical=False) == [(False, (2, 1))]
    assert layout.edge(Position(3, 0), vertical=False) == []
