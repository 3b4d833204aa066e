"""Tests for the grid configuration and settings."""

from __future__ import annotations

import pytest

from tabgrid.border import Border, BorderChar, BorderColor, BorderText, Offset
from tabgrid.color import AnsiColor
from tabgrid.config import (
    SCHEMA,
    SETTINGS,
    ConfigBuilder,
    Settings,
    SettingsError,
    load_settings,
    place_edges,
)
from tabgrid.data_structures import Position
from tabgrid.objects import Cells
from tabgrid.options import Alignment, Modify, Padding, Span
from tabgrid.style import Style


def _single(position: Position) -> tuple[int, int]:
    return 1, 1


def test_set_style_clears_overrides() -> None:
    """A new style discards border overrides but keeps colors and spans."""
    builder = ConfigBuilder()
    red = AnsiColor("\x1b[31m")
    builder.set_border(Position(0, 0), Border(top="*"))
    builder.set_border_char(Position(0, 0), BorderChar.horizontal("*", Offset()))
    builder.add_border_text(BorderText.first("x"))
    builder.set_border_color(Position(0, 0), BorderColor(top=red))
    builder.set_span(Position(0, 0), 2, 2)
    builder.set_style(Style.modern())
    config = builder.freeze()
    assert config.borders == Style.modern().borders
    assert config.border_overrides == ()
    assert config.horizontal_chars == {}
    assert config.border_texts == ()
    colors = place_edges(config.border_colors, _single)
    assert colors.horizontal == {(0, 0): red}
    assert config.spans == {(0, 0): (2, 2)}


def test_shared_edges() -> None:
    """Neighbouring cells address the same edges and corners."""
    builder = ConfigBuilder()
    builder.set_border(Position(0, 0), Border(right="a", bottom_right="b"))
    builder.set_border(Position(1, 1), Border(top_left="c"))
    builder.set_border(Position(0, 1), Border(left="d"))
    overrides = place_edges(builder.freeze().border_overrides, _single)
    assert overrides.vertical == {(0, 1): "d"}
    assert overrides.nodes == {(1, 1): "c"}


def test_remove_border() -> None:
    """Removing a cell's border removes every override it addresses."""
    builder = ConfigBuilder()
    builder.set_border(Position(0, 0), Border.filled("*"))
    builder.set_border(Position(0, 1), Border(right="|"))
    builder.remove_border(Position(0, 0))
    overrides = place_edges(builder.freeze().border_overrides, _single)
    assert overrides.horizontal == {}
    assert overrides.vertical == {(0, 2): "|"}
    assert overrides.nodes == {}


def test_place_edges_span() -> None:
    """A spanned cell addresses the outer edges of its whole area."""
    writes = [(Position(0, 0), Border(top="-", right="|", top_right="+"))]
    overrides = place_edges(writes, lambda position: (2, 3))
    assert overrides.horizontal == {(0, 0): "-", (0, 1): "-", (0, 2): "-"}
    assert overrides.vertical == {(0, 3): "|", (1, 3): "|"}
    assert overrides.nodes == {(0, 1): "-", (0, 2): "-", (1, 3): "|", (0, 3): "+"}


def test_place_edges_placeholder() -> None:
    """Values written around a cell covered by a span are ignored."""
    writes = [(Position(0, 1), Border.filled("*"))]
    overrides = place_edges(writes, lambda position: None)
    assert overrides == ({}, {}, {})


def test_negative_line_index() -> None:
    """Lines with negative indices are ignored."""
    builder = ConfigBuilder()
    builder.set_horizontal_line(-1, None)
    builder.set_vertical_line(-1, None)
    assert builder.freeze().horizontal_lines == {}


def test_freeze_is_a_snapshot() -> None:
    """Changing the builder does not change a frozen configuration."""
    builder = ConfigBuilder()
    config = builder.freeze()
    builder.set_span(Position(0, 0), 2, 1)
    builder.set_correct_spans()
    assert config.spans == {}
    assert config.correct_spans is False
    assert builder.freeze().correct_spans is True


def test_schema() -> None:
    """Every setting appears in the schema."""
    assert set(SCHEMA["properties"]) == set(SETTINGS)
    assert SCHEMA["properties"]["style"]["default"] == "ascii"
    assert repr(SETTINGS["collapse"]) == "<Setting collapse=False>"


def test_load_settings_defaults() -> None:
    """An empty mapping gives the default settings."""
    assert load_settings({}) == Settings()


def test_load_settings() -> None:
    """Settings are validated and normalized."""
    settings = load_settings(
        {
            "padding": 0,
            "alignment": "center",
            "style": "modern",
            "collapse": True,
            "spans": [{"row": 0, "col": 0, "colspan": 2}],
        }
    )
    assert settings == Settings(
        padding=(0, 0, 0, 0),
        alignment=("center",),
        style="modern",
        collapse=True,
        spans=((0, 0, 1, 2),),
    )


def test_load_settings_padding_list() -> None:
    """Padding can be given for each side."""
    assert load_settings({"padding": [1, 2, 3, 4]}).padding == (1, 2, 3, 4)


@pytest.mark.parametrize(
    "data",
    [
        {"style": "nope"},
        {"padding": -1},
        {"padding": [1, 2]},
        {"alignment": "middle"},
        {"collapse": "yes"},
        {"spans": [{"row": 0}]},
        {"spans": [{"row": 0, "col": 0, "colspan": 0}]},
        {"unknown": 1},
    ],
)
def test_load_settings_invalid(data: dict) -> None:
    """Invalid settings are rejected."""
    with pytest.raises(SettingsError):
        load_settings(data)


def test_load_settings_not_json() -> None:
    """Settings must be JSON serializable."""
    with pytest.raises(SettingsError, match="not JSON serializable"):
        load_settings({"style": object()})


def test_settings_options() -> None:
    """Settings are converted into table options."""
    settings = Settings(
        padding=(0, 0, 0, 0),
        alignment=("right", "center_vertical"),
        style="psql",
        spans=((0, 1, 2, 1),),
    )
    options = settings.options()
    assert options[0] == Style.psql()
    assert options[1] == Padding.zero()
    assert options[2] == Alignment.right()
    assert options[3] == Alignment.center_vertical()
    assert isinstance(options[4], Modify)
    assert options[4].target == Cells(0, 1)
    assert options[4].options == [Span(2, 1)]
