"""Tests for composing grids into lines of text."""

from __future__ import annotations

from tabgrid.color import AnsiColor
from tabgrid.config import ConfigBuilder
from tabgrid.dimension import estimate
from tabgrid.plan import resolve
from tabgrid.records import Records
from tabgrid.render import Canvas, render, render_lines

RED = AnsiColor("\x1b[31m", "\x1b[39m")


def test_canvas_merges_color_runs() -> None:
    """Neighbouring slots with the same color are written as one run."""
    canvas = Canvas(4, 1)
    canvas.put(0, 0, "a", 1, RED)
    canvas.put(0, 1, "b", 1, RED)
    canvas.put(0, 3, "c", 1, AnsiColor("\x1b[31m", "\x1b[39m"))
    assert canvas.line(0) == "\x1b[31mab\x1b[39m \x1b[31mc\x1b[39m"


def test_canvas_wide_text() -> None:
    """Wide text covers several slots and is cleared when overwritten."""
    canvas = Canvas(4, 1)
    canvas.put(0, 0, "⭐", 2, None)
    assert canvas.line(0) == "⭐  "
    canvas.put(0, 1, "x", 1, None)
    assert canvas.line(0) == " x  "


def test_canvas_clips() -> None:
    """Text outside the canvas is not drawn."""
    canvas = Canvas(2, 1)
    canvas.fill(0, 1, "-", 3)
    canvas.put(1, 0, "x", 1, None)
    assert canvas.line(0) == " -"


def test_render_lines() -> None:
    """The whole pipeline can be run one stage at a time."""
    records = Records([["a"]])
    config = ConfigBuilder().freeze()
    dimensions = estimate(records, config)
    plan = resolve(records, config, dimensions)
    assert render_lines(records, config, dimensions, plan) == [
        "+---+",
        "| a |",
        "+---+",
    ]
    assert render(records, config) == "+---+\n| a |\n+---+"


def test_render_empty() -> None:
    """An empty grid renders no lines."""
    records = Records()
    config = ConfigBuilder().freeze()
    assert render(records, config) == ""
