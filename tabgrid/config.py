"""Define the grid configuration and the settings which can be loaded into it."""

from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Generic, NamedTuple, TypeVar

import fastjsonschema

from tabgrid.data_structures import EntityMap, Position
from tabgrid.objects import Cells
from tabgrid.options import (
    Alignment,
    AlignmentHorizontal,
    AlignmentVertical,
    Modify,
    Padding,
    Span,
)
from tabgrid.style import PRESETS, Style

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from typing import Any

    from tabgrid.border import (
        Border,
        BorderChar,
        BorderColor,
        Borders,
        BorderText,
        Line,
        Offset,
    )
    from tabgrid.color import Color
    from tabgrid.data_structures import Entity
    from tabgrid.options import TableOption


log = logging.getLogger(__name__)

T = TypeVar("T")


class SettingsError(ValueError):
    """Raised when a settings mapping fails validation."""


class EdgeValues(NamedTuple):
    """Read-only values stored against the edges and nodes of a grid.

    Horizontal edges are keyed by ``(line, col)``, vertical edges by
    ``(row, line)`` and nodes by ``(line, line)``.
    """

    horizontal: Mapping[tuple[int, int], Any]
    vertical: Mapping[tuple[int, int], Any]
    nodes: Mapping[tuple[int, int], Any]


class EdgeMap(Generic[T]):
    """Record the border values written around cells, in the order they are written.

    Values are only placed on the edges of a grid once its spans are known, see
    :py:func:`place_edges`.
    """

    def __init__(self) -> None:
        """Create an empty map."""
        self.writes: list[tuple[Position, T | None]] = []

    def set_cell(self, position: Position, values: T) -> None:
        """Record every value which is set around a cell."""
        self.writes.append((Position(*position), values))

    def remove_cell(self, position: Position) -> None:
        """Record the removal of every value around a cell."""
        self.writes.append((Position(*position), None))

    def clear(self) -> None:
        """Forget every write."""
        self.writes.clear()

    def freeze(self) -> tuple[tuple[Position, T | None], ...]:
        """Return a read-only snapshot of the writes."""
        return tuple(self.writes)


def _edge_slots(
    position: Position, rowspan: int, colspan: int
) -> dict[str, tuple[list[tuple[int, int]], list[tuple[int, int]]]]:
    """Map each slot of a cell to the ``(edges, nodes)`` keys it covers."""
    row, col = position
    bottom, right = row + rowspan, col + colspan
    return {
        "top": (
            [(row, c) for c in range(col, right)],
            [(row, c) for c in range(col + 1, right)],
        ),
        "bottom": (
            [(bottom, c) for c in range(col, right)],
            [(bottom, c) for c in range(col + 1, right)],
        ),
        "left": (
            [(r, col) for r in range(row, bottom)],
            [(r, col) for r in range(row + 1, bottom)],
        ),
        "right": (
            [(r, right) for r in range(row, bottom)],
            [(r, right) for r in range(row + 1, bottom)],
        ),
        "top_left": ([], [(row, col)]),
        "top_right": ([], [(row, right)]),
        "bottom_left": ([], [(bottom, col)]),
        "bottom_right": ([], [(bottom, right)]),
    }


def place_edges(
    writes: Iterable[tuple[Position, Border | BorderColor | None]],
    span: Callable[[Position], tuple[int, int] | None],
) -> EdgeValues:
    """Place values written around cells on the edges and nodes of a grid.

    A cell which spans several rows or columns addresses the outer edges of its
    whole area, including the nodes along each edge. Neighbouring cells share
    edges, so a value written for the right edge of one cell replaces any value
    written earlier for the left edge of the next.

    Args:
        writes: ``(position, values)`` pairs in the order they were made. Values of
            :py:const:`None` remove everything around the cell
        span: Returns the rows and columns covered by the cell at a position, or
            :py:const:`None` if the cell is covered by a span anchored elsewhere

    Returns:
        The values keyed by the edges and nodes they apply to

    """
    horizontal: dict[tuple[int, int], Any] = {}
    vertical: dict[tuple[int, int], Any] = {}
    nodes: dict[tuple[int, int], Any] = {}
    for position, values in writes:
        if (size := span(position)) is None:
            log.debug("Ignoring border override on spanned cell %s", position)
            continue
        for name, (edges, points) in _edge_slots(position, *size).items():
            store = vertical if name in {"left", "right"} else horizontal
            if values is None:
                for key in edges:
                    store.pop(key, None)
                for key in points:
                    nodes.pop(key, None)
            elif (value := getattr(values, name)) is not None:
                store.update(dict.fromkeys(edges, value))
                nodes.update(dict.fromkeys(points, value))
    return EdgeValues(
        MappingProxyType(horizontal),
        MappingProxyType(vertical),
        MappingProxyType(nodes),
    )


class GridConfig(NamedTuple):
    """A frozen snapshot of everything which controls how a grid is drawn."""

    borders: Borders
    horizontal_lines: Mapping[int, Line]
    vertical_lines: Mapping[int, Line]
    border_overrides: tuple[tuple[Position, Border | None], ...]
    border_colors: tuple[tuple[Position, BorderColor | None], ...]
    horizontal_chars: Mapping[tuple[int, int], tuple[tuple[Offset, str], ...]]
    vertical_chars: Mapping[tuple[int, int], tuple[tuple[Offset, str], ...]]
    border_texts: tuple[BorderText, ...]
    padding: EntityMap[Padding]
    alignment_horizontal: EntityMap[AlignmentHorizontal]
    alignment_vertical: EntityMap[AlignmentVertical]
    content_color: EntityMap[Color | None]
    spans: Mapping[Position, tuple[int, int]]
    correct_spans: bool


class ConfigBuilder:
    """A mutable builder which collects the configuration of a grid."""

    def __init__(self, style: Style | None = None) -> None:
        """Create a new builder with default settings.

        Args:
            style: The initial border style. Defaults to :py:meth:`Style.ascii`

        """
        self.padding: EntityMap[Padding] = EntityMap(Padding())
        self.alignment_horizontal: EntityMap[AlignmentHorizontal] = EntityMap(
            AlignmentHorizontal.LEFT
        )
        self.alignment_vertical: EntityMap[AlignmentVertical] = EntityMap(
            AlignmentVertical.TOP
        )
        self.content_color: EntityMap[Color | None] = EntityMap(None)
        self.border_overrides: EdgeMap[Border] = EdgeMap()
        self.border_colors: EdgeMap[BorderColor] = EdgeMap()
        self.horizontal_chars: dict[tuple[int, int], dict[Offset, str]] = {}
        self.vertical_chars: dict[tuple[int, int], dict[Offset, str]] = {}
        self.border_texts: list[BorderText] = []
        self.spans: dict[Position, tuple[int, int]] = {}
        self.correct_spans = False
        self.set_style(style or Style.ascii())

    # Borders

    def set_style(self, style: Style) -> None:
        """Use a new border style, discarding every border override."""
        self.borders = style.borders
        self.horizontal_lines: dict[int, Line] = dict(style.horizontal_lines)
        self.vertical_lines: dict[int, Line] = dict(style.vertical_lines)
        self.border_overrides.clear()
        self.horizontal_chars.clear()
        self.vertical_chars.clear()
        self.border_texts.clear()

    def set_horizontal_line(self, index: int, line: Line | None) -> None:
        """Override the characters of a horizontal line, or remove the override."""
        if index < 0:
            log.debug("Ignoring horizontal line with negative index %d", index)
        elif line is None:
            self.horizontal_lines.pop(index, None)
        else:
            self.horizontal_lines[index] = line

    def set_vertical_line(self, index: int, line: Line | None) -> None:
        """Override the characters of a vertical line, or remove the override."""
        if index < 0:
            log.debug("Ignoring vertical line with negative index %d", index)
        elif line is None:
            self.vertical_lines.pop(index, None)
        else:
            self.vertical_lines[index] = line

    def set_border(self, position: Position, border: Border) -> None:
        """Override border characters around a cell."""
        self.border_overrides.set_cell(position, border)

    def remove_border(self, position: Position) -> None:
        """Remove every border character override around a cell."""
        self.border_overrides.remove_cell(position)

    def set_border_color(self, position: Position, colors: BorderColor) -> None:
        """Color border characters around a cell."""
        self.border_colors.set_cell(position, colors)

    def remove_border_color(self, position: Position) -> None:
        """Remove every border color around a cell."""
        self.border_colors.remove_cell(position)

    def set_border_char(self, position: Position, border_char: BorderChar) -> None:
        """Replace one character of a cell's top or left edge."""
        if border_char.is_vertical:
            store = self.vertical_chars
        else:
            store = self.horizontal_chars
        store.setdefault(position, {})[border_char.offset] = border_char.char

    def add_border_text(self, text: BorderText) -> None:
        """Add text to stamp over a horizontal line."""
        self.border_texts.append(text)

    # Cells

    def set_padding(self, entity: Entity, padding: Padding) -> None:
        """Set the padding of some cells."""
        self.padding.set(entity, padding)

    def set_alignment_horizontal(
        self, entity: Entity, alignment: AlignmentHorizontal
    ) -> None:
        """Set the horizontal alignment of some cells."""
        self.alignment_horizontal.set(entity, alignment)

    def set_alignment_vertical(
        self, entity: Entity, alignment: AlignmentVertical
    ) -> None:
        """Set the vertical alignment of some cells."""
        self.alignment_vertical.set(entity, alignment)

    def set_content_color(self, entity: Entity, color: Color | None) -> None:
        """Set the color of the text of some cells."""
        self.content_color.set(entity, color)

    def set_span(
        self, position: Position, rowspan: int | None, colspan: int | None
    ) -> None:
        """Set the span of the cell at a position.

        A size of :py:const:`None` keeps the current span in that direction.
        Setting a span of one row and one column removes the span.
        """
        current_rows, current_cols = self.spans.get(position, (1, 1))
        span = (rowspan or current_rows, colspan or current_cols)
        if span == (1, 1):
            self.spans.pop(position, None)
        else:
            self.spans[Position(*position)] = span

    def set_correct_spans(self, enabled: bool = True) -> None:
        """Enable or disable re-drawing of grid nodes around spans."""
        self.correct_spans = enabled

    def freeze(self) -> GridConfig:
        """Take an immutable snapshot of the configuration."""
        return GridConfig(
            borders=self.borders,
            horizontal_lines=MappingProxyType(dict(self.horizontal_lines)),
            vertical_lines=MappingProxyType(dict(self.vertical_lines)),
            border_overrides=self.border_overrides.freeze(),
            border_colors=self.border_colors.freeze(),
            horizontal_chars=_freeze_chars(self.horizontal_chars),
            vertical_chars=_freeze_chars(self.vertical_chars),
            border_texts=tuple(self.border_texts),
            padding=self.padding.freeze(),
            alignment_horizontal=self.alignment_horizontal.freeze(),
            alignment_vertical=self.alignment_vertical.freeze(),
            content_color=self.content_color.freeze(),
            spans=MappingProxyType(dict(self.spans)),
            correct_spans=self.correct_spans,
        )


def _freeze_chars(
    chars: dict[tuple[int, int], dict[Offset, str]],
) -> Mapping[tuple[int, int], tuple[tuple[Offset, str], ...]]:
    return MappingProxyType({key: tuple(value.items()) for key, value in chars.items()})


# Settings


class Setting:
    """A single item which can appear in a settings mapping."""

    def __init__(
        self,
        name: str,
        default: Any = None,
        help_: str = "",
        schema: dict[str, Any] | None = None,
    ) -> None:
        """Create a new settings item."""
        self.name = name
        self.default = default
        self.help = help_
        self._schema = schema or {}

    @property
    def schema(self) -> dict[str, Any]:
        """Return a json schema property for the settings item."""
        return {
            "description": self.help,
            **({"default": self.default} if self.default is not None else {}),
            **self._schema,
        }

    def __repr__(self) -> str:
        """Represent a :py:class`Setting` instance as a string."""
        return f"<Setting {self.name}={self.default!r}>"


_ALIGNMENTS = ["left", "right", "center", "top", "bottom", "center_vertical"]

SETTINGS: dict[str, Setting] = {
    setting.name: setting
    for setting in (
        Setting(
            "padding",
            default=[1, 1, 0, 0],
            help_="Cell padding as ``[left, right, top, bottom]`` or one number",
            schema={
                "oneOf": [
                    {"type": "integer", "minimum": 0},
                    {
                        "type": "array",
                        "items": {"type": "integer", "minimum": 0},
                        "minItems": 4,
                        "maxItems": 4,
                    },
                ]
            },
        ),
        Setting(
            "alignment",
            help_="The alignment of the text in every cell",
            schema={
                "oneOf": [
                    {"type": "string", "enum": _ALIGNMENTS},
                    {
                        "type": "array",
                        "items": {"type": "string", "enum": _ALIGNMENTS},
                    },
                ]
            },
        ),
        Setting(
            "style",
            default="ascii",
            help_="The name of the border style preset",
            schema={"type": "string", "enum": list(PRESETS)},
        ),
        Setting(
            "collapse",
            default=False,
            help_="Whether nested values are merged into one grid",
            schema={"type": "boolean"},
        ),
        Setting(
            "spans",
            help_="Cells which span several rows or columns",
            schema={
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "row": {"type": "integer", "minimum": 0},
                        "col": {"type": "integer", "minimum": 0},
                        "rowspan": {"type": "integer", "minimum": 1},
                        "colspan": {"type": "integer", "minimum": 1},
                    },
                    "required": ["row", "col"],
                    "additionalProperties": False,
                },
            },
        ),
    )
}

SCHEMA: dict[str, Any] = {
    "title": "Table settings",
    "description": "Settings for drawing a table",
    "type": "object",
    "properties": {name: item.schema for name, item in SETTINGS.items()},
    "additionalProperties": False,
}

_schema_validate = fastjsonschema.compile(SCHEMA, use_default=False)


class Settings(NamedTuple):
    """Validated table settings."""

    padding: tuple[int, int, int, int] = (1, 1, 0, 0)
    alignment: tuple[str, ...] = ()
    style: str = "ascii"
    collapse: bool = False
    spans: tuple[tuple[int, int, int, int], ...] = ()

    def options(self) -> list[TableOption]:
        """Convert the settings into options which can be applied to a table."""
        options: list[TableOption] = [Style.preset(self.style), Padding(*self.padding)]
        for name in self.alignment:
            if name == "center_vertical":
                options.append(Alignment.center_vertical())
            else:
                options.append(getattr(Alignment, name)())
        options.extend(
            Modify(Cells(row, col), Span(rowspan, colspan))
            for row, col, rowspan, colspan in self.spans
        )
        return options


def load_settings(data: Mapping[str, Any]) -> Settings:
    """Validate a plain mapping of settings.

    Args:
        data: A mapping which may contain the keys ``padding``, ``alignment``,
            ``style``, ``collapse`` and ``spans``

    Returns:
        The validated settings

    Raises:
        SettingsError: If the mapping does not match the settings schema

    """
    # Convert to json and back to attain json types
    try:
        json_data = json.loads(json.dumps(dict(data)))
    except (TypeError, ValueError) as error:
        raise SettingsError(f"Settings are not JSON serializable: {error}") from error
    try:
        _schema_validate(json_data)
    except fastjsonschema.JsonSchemaValueException as error:
        log.debug("Invalid settings %r", json_data)
        raise SettingsError(error.message.replace("data.", "")) from error

    padding = json_data.get("padding", SETTINGS["padding"].default)
    if isinstance(padding, int):
        padding = [padding] * 4
    alignment = json_data.get("alignment", [])
    if isinstance(alignment, str):
        alignment = [alignment]
    return Settings(
        padding=tuple(padding),
        alignment=tuple(alignment),
        style=json_data.get("style", SETTINGS["style"].default),
        collapse=json_data.get("collapse", SETTINGS["collapse"].default),
        spans=tuple(
            (
                span["row"],
                span["col"],
                span.get("rowspan", 1),
                span.get("colspan", 1),
            )
            for span in json_data.get("spans", [])
        ),
    )
