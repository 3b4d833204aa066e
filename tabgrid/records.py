"""Contain the matrix of cell text which a table renders."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from tabgrid.ansi import AnsiSyntaxError, balance_lines
from tabgrid.utils import split_lines, str_width

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from typing import Any

log = logging.getLogger(__name__)


class CellText(NamedTuple):
    """The text of a cell, split into lines."""

    text: str
    lines: tuple[str, ...]
    widths: tuple[int, ...]

    @classmethod
    def from_text(cls, text: str) -> CellText:
        """Measure some text and construct a cell from it.

        Styling which continues over a line break is re-applied to each line.
        """
        lines = split_lines(text)
        if len(lines) > 1 and "\x1b" in text:
            try:
                lines = balance_lines(lines)
            except AnsiSyntaxError:
                log.debug("Cannot balance styling of invalid text %r", text)
        return cls(text, tuple(lines), tuple(str_width(line) for line in lines))

    @property
    def width(self) -> int:
        """The display width of the widest line."""
        return max(self.widths, default=0)

    @property
    def height(self) -> int:
        """The number of lines in the cell."""
        return len(self.lines)


EMPTY_CELL = CellText.from_text("")


class Records:
    """An immutable rectangular matrix of cells.

    Rows which are shorter than the longest row are padded with empty cells.
    """

    def __init__(self, data: Iterable[Iterable[Any]] = ()) -> None:
        """Create a new matrix from rows of values.

        Args:
            data: Rows of values, each converted to text with :py:func:`str`

        """
        rows = [
            [
                value if isinstance(value, CellText) else CellText.from_text(str(value))
                for value in row
            ]
            for row in data
        ]
        self.count_cols = max((len(row) for row in rows), default=0)
        self.count_rows = len(rows) if self.count_cols else 0
        self._rows: tuple[tuple[CellText, ...], ...] = tuple(
            tuple(row + [EMPTY_CELL] * (self.count_cols - len(row)))
            for row in rows[: self.count_rows]
        )

    @property
    def shape(self) -> tuple[int, int]:
        """The number of rows and columns."""
        return self.count_rows, self.count_cols

    @property
    def is_empty(self) -> bool:
        """Determine if the matrix contains no cells."""
        return not (self.count_rows and self.count_cols)

    def __getitem__(self, position: tuple[int, int]) -> CellText:
        """Get the cell at a position."""
        row, col = position
        return self._rows[row][col]

    def __iter__(self) -> Iterator[tuple[CellText, ...]]:
        """Iterate over the rows of the matrix."""
        return iter(self._rows)

    def __len__(self) -> int:
        """Return the number of rows."""
        return self.count_rows

    def texts(self) -> list[list[str]]:
        """Return the text of every cell."""
        return [[cell.text for cell in row] for row in self._rows]

    def with_text(self, row: int, col: int, text: str) -> Records:
        """Return a copy of the matrix with the text of one cell replaced."""
        if not (0 <= row < self.count_rows and 0 <= col < self.count_cols):
            log.debug("Ignoring text for cell (%d, %d) outside the grid", row, col)
            return self
        rows = [list(cells) for cells in self._rows]
        rows[row][col] = CellText.from_text(text)
        return Records(rows)

    def __repr__(self) -> str:
        """Return a representation of the matrix."""
        return f"Records({self.texts()!r})"
