"""Allow drawing tables as text."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from prompt_toolkit.formatted_text import ANSI, to_formatted_text

from tabgrid.config import ConfigBuilder
from tabgrid.options import Modify
from tabgrid.records import Records
from tabgrid.render import render
from tabgrid.utils import lines_width, str_width

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from typing import Any

    from prompt_toolkit.formatted_text import StyleAndTextTuples

    from tabgrid.objects import Target
    from tabgrid.options import CellOption, TableOption
    from tabgrid.style import Style

log = logging.getLogger(__name__)

_FORMAT_SPEC_RE = re.compile(r"(?:(?P<fill>.)?(?P<align>[<>^]))?(?P<width>\d+)?")


class Table:
    """A grid of text cells which can be drawn with borders.

    Options are applied in order with :py:meth:`apply`, and the table is drawn
    when it is converted to a string.
    """

    def __init__(
        self, data: Iterable[Iterable[Any]] = (), style: Style | None = None
    ) -> None:
        """Create a new table.

        Args:
            data: Rows of cell values, each converted to text with :py:func:`str`
            style: The border style. Defaults to :py:meth:`Style.ascii`

        """
        self.records = data if isinstance(data, Records) else Records(data)
        self.config = ConfigBuilder(style)

    @property
    def count_rows(self) -> int:
        """The number of rows in the table."""
        return self.records.count_rows

    @property
    def count_cols(self) -> int:
        """The number of columns in the table."""
        return self.records.count_cols

    @property
    def shape(self) -> tuple[int, int]:
        """The number of rows and columns in the table."""
        return self.records.shape

    def apply(self, *options: TableOption) -> Table:
        """Apply options to the table.

        Returns:
            The table, so calls can be chained

        """
        for option in options:
            log.debug("Applying %r", option)
            option.change(self)
        return self

    def modify(self, target: Target, *options: CellOption) -> Table:
        """Apply cell options to the cells selected by a target."""
        return self.apply(Modify(target, *options))

    def render(self) -> str:
        """Draw the table."""
        return render(self.records, self.config.freeze())

    def lines(self) -> list[str]:
        """Draw the table as a list of lines."""
        output = self.render()
        return output.split("\n") if output else []

    @property
    def total_width(self) -> int:
        """The display width of the drawn table."""
        return lines_width(self.lines())

    @property
    def total_height(self) -> int:
        """The number of lines in the drawn table."""
        return len(self.lines())

    def __str__(self) -> str:
        """Draw the table."""
        return self.render()

    def __format__(self, format_spec: str) -> str:
        """Draw the table, padding each line to a width.

        The format specification takes an optional fill character and alignment
        followed by a width, as for strings. For example ``format(table, "*^40")``
        centers the table in 40 columns filled with asterisks.

        Raises:
            ValueError: If the format specification is invalid

        """
        output = self.render()
        if not format_spec:
            return output
        match = _FORMAT_SPEC_RE.fullmatch(format_spec)
        if match is None:
            raise ValueError(f"Invalid format specifier {format_spec!r} for Table")
        if match["width"] is None:
            return output
        width = int(match["width"])
        fill = match["fill"] or " "
        align = match["align"] or "<"
        lines = []
        for line in output.split("\n"):
            free = width - str_width(line)
            if free <= 0:
                lines.append(line)
            elif align == "<":
                lines.append(line + fill * free)
            elif align == ">":
                lines.append(fill * free + line)
            else:
                lines.append(fill * (free // 2) + line + fill * (free - free // 2))
        return "\n".join(lines)

    def __pt_formatted_text__(self) -> StyleAndTextTuples:
        """Render the table as formatted text."""
        return to_formatted_text(ANSI(self.render()))

    def __repr__(self) -> str:
        """Return a representation of the table."""
        rows, cols = self.shape
        return f"{self.__class__.__name__}(rows={rows}, cols={cols})"


class Builder:
    """Collect the rows of a table one at a time."""

    def __init__(self, records: Iterable[Iterable[Any]] = ()) -> None:
        """Create a new builder, optionally with some rows."""
        self._header: list[str] | None = None
        self._records: list[list[str]] = [[str(x) for x in row] for row in records]

    def set_header(self, header: Iterable[Any]) -> Builder:
        """Set the first row of the table."""
        self._header = [str(x) for x in header]
        return self

    def remove_header(self) -> Builder:
        """Remove the first row of the table."""
        self._header = None
        return self

    def push_record(self, record: Iterable[Any]) -> Builder:
        """Add a row to the end of the table."""
        self._records.append([str(x) for x in record])
        return self

    def insert_record(self, index: int, record: Iterable[Any]) -> Builder:
        """Insert a row before a position."""
        self._records.insert(index, [str(x) for x in record])
        return self

    @classmethod
    def from_dicts(cls, rows: Iterable[Mapping[str, Any]]) -> Builder:
        """Create a builder from mappings, using their keys as the header.

        Keys are collected in the order in which they are first seen, and missing
        values are left empty.
        """
        rows = list(rows)
        keys: dict[str, None] = {}
        for row in rows:
            keys.update(dict.fromkeys(row))
        builder = cls([[row.get(key, "") for key in keys] for row in rows])
        return builder.set_header(keys)

    def build(self, style: Style | None = None) -> Table:
        """Create a table from the collected rows."""
        data = self._records if self._header is None else [self._header, *self._records]
        return Table(data, style)

    def __len__(self) -> int:
        """Return the number of rows collected, including the header."""
        return len(self._records) + (self._header is not None)
