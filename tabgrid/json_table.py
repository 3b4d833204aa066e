"""Draw nested JSON-like values as tables."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from tabgrid.objects import Cells
from tabgrid.options import Modify, Span
from tabgrid.style import Style
from tabgrid.table import Table

if TYPE_CHECKING:
    from typing import Any

    from tabgrid.config import Settings
    from tabgrid.options import TableOption

log = logging.getLogger(__name__)


def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_container(value: Any) -> bool:
    return isinstance(value, Mapping) or _is_array(value)


def scalar_text(value: Any) -> str:
    """Convert a scalar value to text, using JSON spelling for literals."""
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return str(value)


def footprint(value: Any) -> tuple[int, int]:
    """Calculate how many rows and columns a value occupies in a collapsed grid.

    Scalars and empty containers occupy one cell. Arrays stack their items, and
    objects add a column of keys to the left of their stacked values.
    """
    if not _is_container(value) or not value:
        return 1, 1
    values = value.values() if isinstance(value, Mapping) else value
    sizes = [footprint(item) for item in values]
    rows = sum(size[0] for size in sizes)
    cols = max(size[1] for size in sizes)
    if isinstance(value, Mapping):
        cols += 1
    return rows, cols


def _place(
    value: Any,
    row: int,
    col: int,
    rows: int,
    cols: int,
    cells: list[list[str]],
    spans: list[tuple[int, int, int, int]],
) -> None:
    """Write a value into an area of a grid.

    The last child of a container takes any spare rows, and scalars span every
    column of the area they are given.
    """
    if not _is_container(value) or not value:
        cells[row][col] = "" if _is_container(value) else scalar_text(value)
        if rows > 1 or cols > 1:
            spans.append((row, col, rows, cols))
        return

    is_object = isinstance(value, Mapping)
    items = list(value.items()) if is_object else [(None, item) for item in value]
    top = row
    for i, (key, item) in enumerate(items):
        if i == len(items) - 1:
            height = row + rows - top
        else:
            height = footprint(item)[0]
        if is_object:
            cells[top][col] = str(key)
            if height > 1:
                spans.append((top, col, height, 1))
            _place(item, top, col + 1, height, cols - 1, cells, spans)
        else:
            _place(item, top, col, height, cols, cells, spans)
        top += height


def build_matrix(
    value: Any,
) -> tuple[list[list[str]], list[tuple[int, int, int, int]]]:
    """Flatten a nested value into one grid of cells.

    Returns:
        The rows of cell text, and a list of ``(row, col, rowspan, colspan)`` spans
        which keep the grid rectangular

    """
    rows, cols = footprint(value)
    cells = [[""] * cols for _ in range(rows)]
    spans: list[tuple[int, int, int, int]] = []
    _place(value, 0, 0, rows, cols, cells, spans)
    return cells, spans


class JsonTable:
    """Draw a nested value as a table.

    Objects are drawn as rows of keys and values, and arrays as a column of items.
    By default nested containers are drawn as separate tables inside their parent's
    cells. In collapsed mode they are merged into a single grid whose borders join
    up.
    """

    def __init__(
        self, value: Any, style: Style | None = None, collapse: bool = False
    ) -> None:
        """Create a new table for a value.

        Args:
            value: A value made of mappings, sequences and scalars
            style: The border style. Defaults to :py:meth:`Style.ascii`
            collapse: Whether nested containers are merged into one grid

        """
        self.value = value
        self.style = style or Style.ascii()
        self.collapsed = collapse
        self.options: list[TableOption] = []

    @classmethod
    def from_settings(cls, value: Any, settings: Settings) -> JsonTable:
        """Create a table for a value using validated settings."""
        table = cls(value, Style.preset(settings.style), settings.collapse)
        return table.apply(*settings.options())

    def set_style(self, style: Style) -> JsonTable:
        """Set the border style of the table and of every nested table."""
        self.style = style
        return self

    def collapse(self) -> JsonTable:
        """Merge nested containers into a single grid."""
        self.collapsed = True
        return self

    def apply(self, *options: TableOption) -> JsonTable:
        """Add options which are applied to the table and every nested table."""
        self.options.extend(options)
        return self

    def into_table(self) -> Table:
        """Convert the value into a :py:class:`Table`."""
        if self.collapsed:
            return self._collapsed_table()
        return self._nested_table(self.value)

    def _nested_table(self, value: Any) -> Table:
        if isinstance(value, Mapping):
            data = [[str(key), self._cell_text(item)] for key, item in value.items()]
        elif _is_array(value):
            data = [[self._cell_text(item)] for item in value]
        else:
            data = [[scalar_text(value)]]
        return Table(data, self.style).apply(*self.options)

    def _cell_text(self, value: Any) -> str:
        if not _is_container(value):
            return scalar_text(value)
        if not value:
            return ""
        return self._nested_table(value).render()

    def _collapsed_table(self) -> Table:
        cells, spans = build_matrix(self.value)
        log.debug("Collapsed value into %d spans", len(spans))
        table = Table(cells, self.style)
        table.apply(
            *(
                Modify(Cells(row, col), Span(rowspan, colspan))
                for row, col, rowspan, colspan in spans
            ),
            Style.correct_spans(),
            *self.options,
        )
        return table

    def render(self) -> str:
        """Draw the table."""
        return self.into_table().render()

    def __str__(self) -> str:
        """Draw the table."""
        return self.render()

    def __repr__(self) -> str:
        """Return a representation of the table."""
        return f"{self.__class__.__name__}(collapse={self.collapsed})"


def json_to_table(value: Any) -> JsonTable:
    """Create a table for a nested value."""
    return JsonTable(value)
