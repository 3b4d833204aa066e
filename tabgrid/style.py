"""Define border styles and the built-in style presets."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, NamedTuple

from tabgrid.border import Borders, HorizontalLine, Line, VerticalLine

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from tabgrid.table import Table

log = logging.getLogger(__name__)


class CorrectSpans(NamedTuple):
    """Re-draw the grid nodes around spanned cells so no border end dangles."""

    enabled: bool = True

    def change(self, table: Table) -> None:
        """Enable span correction on a table."""
        table.config.set_correct_spans(self.enabled)


class Style:
    """An immutable description of the characters used to draw a grid.

    Every builder method returns a new style. Setting a line also draws the
    corners and intersections where it meets the lines already present, so
    ``Style.empty().left("|").top("-")`` draws a top left corner of ``-``.
    """

    __slots__ = ("_borders", "_horizontals", "_verticals")

    def __init__(
        self,
        borders: Borders | None = None,
        horizontals: Iterable[HorizontalLine] = (),
        verticals: Iterable[VerticalLine] = (),
    ) -> None:
        """Create a new style.

        Args:
            borders: The global border characters
            horizontals: Horizontal lines drawn in place of the global characters
            verticals: Vertical lines drawn in place of the global characters

        """
        self._borders = borders or Borders()
        self._horizontals = MappingProxyType(
            {hl.index: hl.line for hl in horizontals if hl.line is not None}
        )
        self._verticals = MappingProxyType(
            {vl.index: vl.line for vl in verticals if vl.line is not None}
        )

    @property
    def borders(self) -> Borders:
        """The global border characters."""
        return self._borders

    @property
    def horizontal_lines(self) -> Mapping[int, Line]:
        """The positioned horizontal lines, keyed by line index."""
        return self._horizontals

    @property
    def vertical_lines(self) -> Mapping[int, Line]:
        """The positioned vertical lines, keyed by line index."""
        return self._verticals

    def _copy(
        self,
        horizontals: Mapping[int, Line] | None = None,
        verticals: Mapping[int, Line] | None = None,
        **slots: str | None,
    ) -> Style:
        if horizontals is None:
            horizontals = self._horizontals
        if verticals is None:
            verticals = self._verticals
        return Style(
            self._borders._replace(**slots),
            [HorizontalLine(i, line) for i, line in horizontals.items()],
            [VerticalLine(i, line) for i, line in verticals.items()],
        )

    def _connected(self, char: str, **connections: str) -> dict[str, str | None]:
        """Set a slot and the slots where it meets a line which is present."""
        slots: dict[str, str | None] = {}
        for slot, other in connections.items():
            if getattr(self._borders, other) is not None:
                slots[slot] = char
        return slots

    # Lines

    def top(self, char: str) -> Style:
        """Draw the top edge of the grid."""
        return self._copy(
            top=char,
            **self._connected(
                char,
                top_left="left",
                top_right="right",
                top_intersection="vertical",
            ),
        )

    def bottom(self, char: str) -> Style:
        """Draw the bottom edge of the grid."""
        return self._copy(
            bottom=char,
            **self._connected(
                char,
                bottom_left="left",
                bottom_right="right",
                bottom_intersection="vertical",
            ),
        )

    def left(self, char: str) -> Style:
        """Draw the left edge of the grid."""
        return self._copy(
            left=char,
            **self._connected(
                char,
                top_left="top",
                bottom_left="bottom",
                left_intersection="horizontal",
            ),
        )

    def right(self, char: str) -> Style:
        """Draw the right edge of the grid."""
        return self._copy(
            right=char,
            **self._connected(
                char,
                top_right="top",
                bottom_right="bottom",
                right_intersection="horizontal",
            ),
        )

    def horizontal(self, char: str) -> Style:
        """Draw the lines between rows."""
        return self._copy(
            horizontal=char,
            **self._connected(
                char,
                intersection="vertical",
                left_intersection="left",
                right_intersection="right",
            ),
        )

    def vertical(self, char: str) -> Style:
        """Draw the lines between columns."""
        return self._copy(
            vertical=char,
            **self._connected(
                char,
                intersection="horizontal",
                top_intersection="top",
                bottom_intersection="bottom",
            ),
        )

    # Single characters

    def top_left_corner(self, char: str) -> Style:
        """Set the top left corner character."""
        return self._copy(top_left=char)

    def top_right_corner(self, char: str) -> Style:
        """Set the top right corner character."""
        return self._copy(top_right=char)

    def bottom_left_corner(self, char: str) -> Style:
        """Set the bottom left corner character."""
        return self._copy(bottom_left=char)

    def bottom_right_corner(self, char: str) -> Style:
        """Set the bottom right corner character."""
        return self._copy(bottom_right=char)

    def top_intersection(self, char: str) -> Style:
        """Set the character where vertical lines meet the top edge."""
        return self._copy(top_intersection=char)

    def bottom_intersection(self, char: str) -> Style:
        """Set the character where vertical lines meet the bottom edge."""
        return self._copy(bottom_intersection=char)

    def left_intersection(self, char: str) -> Style:
        """Set the character where horizontal lines meet the left edge."""
        return self._copy(left_intersection=char)

    def right_intersection(self, char: str) -> Style:
        """Set the character where horizontal lines meet the right edge."""
        return self._copy(right_intersection=char)

    def inner_intersection(self, char: str) -> Style:
        """Set the character where inner lines cross."""
        return self._copy(intersection=char)

    def with_borders(self, **slots: str | None) -> Style:
        """Replace global slots by name without touching any connected slot."""
        return self._copy(**slots)

    # Removal

    def off_top(self) -> Style:
        """Remove the top edge of the grid."""
        return self._copy(
            verticals=_without_connection(self._verticals, "connect1"),
            top=None,
            top_left=None,
            top_right=None,
            top_intersection=None,
        )

    def off_bottom(self) -> Style:
        """Remove the bottom edge of the grid."""
        return self._copy(
            verticals=_without_connection(self._verticals, "connect2"),
            bottom=None,
            bottom_left=None,
            bottom_right=None,
            bottom_intersection=None,
        )

    def off_left(self) -> Style:
        """Remove the left edge of the grid."""
        return self._copy(
            horizontals=_without_connection(self._horizontals, "connect1"),
            left=None,
            top_left=None,
            bottom_left=None,
            left_intersection=None,
        )

    def off_right(self) -> Style:
        """Remove the right edge of the grid."""
        return self._copy(
            horizontals=_without_connection(self._horizontals, "connect2"),
            right=None,
            top_right=None,
            bottom_right=None,
            right_intersection=None,
        )

    def off_horizontal(self) -> Style:
        """Remove the global lines between rows."""
        return self._copy(
            horizontal=None,
            intersection=None,
            left_intersection=None,
            right_intersection=None,
        )

    def off_vertical(self) -> Style:
        """Remove the global lines between columns."""
        return self._copy(
            vertical=None,
            intersection=None,
            top_intersection=None,
            bottom_intersection=None,
        )

    # Positioned lines

    def horizontals(self, lines: Iterable[HorizontalLine]) -> Style:
        """Replace the positioned horizontal lines."""
        return Style(self._borders, lines, self._vertical_list())

    def verticals(self, lines: Iterable[VerticalLine]) -> Style:
        """Replace the positioned vertical lines."""
        return Style(self._borders, self._horizontal_list(), lines)

    def off_horizontals(self) -> Style:
        """Remove every positioned horizontal line."""
        return Style(self._borders, (), self._vertical_list())

    def off_verticals(self) -> Style:
        """Remove every positioned vertical line."""
        return Style(self._borders, self._horizontal_list(), ())

    def _horizontal_list(self) -> list[HorizontalLine]:
        return [HorizontalLine(i, line) for i, line in self._horizontals.items()]

    def _vertical_list(self) -> list[VerticalLine]:
        return [VerticalLine(i, line) for i, line in self._verticals.items()]

    # Line getters

    def get_top(self) -> Line:
        """Get the top edge as a line."""
        b = self._borders
        return Line(b.top, b.top_intersection, b.top_left, b.top_right)

    def get_bottom(self) -> Line:
        """Get the bottom edge as a line."""
        b = self._borders
        return Line(b.bottom, b.bottom_intersection, b.bottom_left, b.bottom_right)

    def get_horizontal(self) -> Line:
        """Get the global lines between rows as a line."""
        b = self._borders
        return Line(
            b.horizontal, b.intersection, b.left_intersection, b.right_intersection
        )

    def get_left(self) -> Line:
        """Get the left edge as a line."""
        b = self._borders
        return Line(b.left, b.left_intersection, b.top_left, b.bottom_left)

    def get_right(self) -> Line:
        """Get the right edge as a line."""
        b = self._borders
        return Line(b.right, b.right_intersection, b.top_right, b.bottom_right)

    def get_vertical(self) -> Line:
        """Get the global lines between columns as a line."""
        b = self._borders
        return Line(
            b.vertical, b.intersection, b.top_intersection, b.bottom_intersection
        )

    # Options

    @staticmethod
    def correct_spans() -> CorrectSpans:
        """Return an option which fixes the grid nodes around spanned cells."""
        return CorrectSpans()

    def change(self, table: Table) -> None:
        """Apply this style to a table."""
        table.config.set_style(self)

    def __eq__(self, other: object) -> bool:
        """Styles are equal if they draw the same characters."""
        if not isinstance(other, Style):
            return NotImplemented
        return (
            self._borders == other._borders
            and self._horizontals == other._horizontals
            and self._verticals == other._verticals
        )

    def __hash__(self) -> int:
        """Hash the style."""
        return hash(
            (
                self._borders,
                tuple(sorted(self._horizontals.items())),
                tuple(sorted(self._verticals.items())),
            )
        )

    def __repr__(self) -> str:
        """Return a representation of the style."""
        return (
            f"Style({self._borders!r}, horizontals={dict(self._horizontals)!r}, "
            f"verticals={dict(self._verticals)!r})"
        )

    # Presets

    @classmethod
    def empty(cls) -> Style:
        """A style with no borders at all."""
        return cls()

    @classmethod
    def blank(cls) -> Style:
        """A style which separates columns with spaces."""
        return cls(Borders(vertical=" "))

    @classmethod
    def ascii(cls) -> Style:
        """A style drawn with plain ASCII characters."""
        return cls(
            Borders(
                top="-",
                bottom="-",
                left="|",
                right="|",
                horizontal="-",
                vertical="|",
                top_left="+",
                top_right="+",
                bottom_left="+",
                bottom_right="+",
                top_intersection="+",
                bottom_intersection="+",
                left_intersection="+",
                right_intersection="+",
                intersection="+",
            )
        )

    @classmethod
    def psql(cls) -> Style:
        """A style which looks like the output of ``psql``."""
        return cls(
            Borders(vertical="|"),
            [HorizontalLine(1, Line("-", "+", None, None))],
        )

    @classmethod
    def markdown(cls) -> Style:
        """A style which draws a markdown table."""
        return cls(
            Borders(left="|", right="|", vertical="|"),
            [HorizontalLine(1, Line("-", "|", "|", "|"))],
        )

    @classmethod
    def modern(cls) -> Style:
        """A style drawn with box drawing characters."""
        return cls(
            Borders(
                top="─",
                bottom="─",
                left="│",
                right="│",
                horizontal="─",
                vertical="│",
                top_left="┌",
                top_right="┐",
                bottom_left="└",
                bottom_right="┘",
                top_intersection="┬",
                bottom_intersection="┴",
                left_intersection="├",
                right_intersection="┤",
                intersection="┼",
            )
        )

    @classmethod
    def sharp(cls) -> Style:
        """A box drawing style with a single line under the header."""
        return cls(
            Borders(
                top="─",
                bottom="─",
                left="│",
                right="│",
                vertical="│",
                top_left="┌",
                top_right="┐",
                bottom_left="└",
                bottom_right="┘",
                top_intersection="┬",
                bottom_intersection="┴",
            ),
            [HorizontalLine(1, Line("─", "┼", "├", "┤"))],
        )

    @classmethod
    def rounded(cls) -> Style:
        """A box drawing style with rounded corners and a line under the header."""
        return cls(
            Borders(
                top="─",
                bottom="─",
                left="│",
                right="│",
                vertical="│",
                top_left="╭",
                top_right="╮",
                bottom_left="╰",
                bottom_right="╯",
                top_intersection="┬",
                bottom_intersection="┴",
            ),
            [HorizontalLine(1, Line("─", "┼", "├", "┤"))],
        )

    @classmethod
    def extended(cls) -> Style:
        """A style drawn with double line box drawing characters."""
        return cls(
            Borders(
                top="═",
                bottom="═",
                left="║",
                right="║",
                horizontal="═",
                vertical="║",
                top_left="╔",
                top_right="╗",
                bottom_left="╚",
                bottom_right="╝",
                top_intersection="╦",
                bottom_intersection="╩",
                left_intersection="╠",
                right_intersection="╣",
                intersection="╬",
            )
        )

    @classmethod
    def dots(cls) -> Style:
        """A style drawn with dots and colons."""
        return cls(
            Borders(
                top=".",
                bottom=".",
                left=":",
                right=":",
                horizontal=".",
                vertical=":",
                top_left=".",
                top_right=".",
                bottom_left=":",
                bottom_right=":",
                top_intersection=".",
                bottom_intersection=":",
                left_intersection=":",
                right_intersection=":",
                intersection=":",
            )
        )

    @classmethod
    def re_structured_text(cls) -> Style:
        """A style which draws a reStructuredText simple table."""
        return cls(
            Borders(
                top="=",
                bottom="=",
                vertical=" ",
                top_intersection=" ",
                bottom_intersection=" ",
            ),
            [HorizontalLine(1, Line("=", " ", None, None))],
        )

    @classmethod
    def ascii_rounded(cls) -> Style:
        """A plain ASCII style with rounded looking corners."""
        return cls(
            Borders(
                top="-",
                bottom="-",
                left="|",
                right="|",
                vertical="|",
                top_left=".",
                top_right=".",
                bottom_left="'",
                bottom_right="'",
                top_intersection="-",
                bottom_intersection="-",
            )
        )

    @classmethod
    def preset(cls, name: str) -> Style:
        """Look up a preset style by name.

        Raises:
            KeyError: If no preset has the given name

        """
        try:
            factory = PRESETS[name]
        except KeyError:
            log.debug("Unknown style preset `%s`", name)
            raise
        return factory()


def _without_connection(lines: Mapping[int, Line], slot: str) -> dict[int, Line]:
    return {index: line._replace(**{slot: None}) for index, line in lines.items()}


PRESETS: dict[str, Callable[[], Style]] = {
    "empty": Style.empty,
    "blank": Style.blank,
    "ascii": Style.ascii,
    "psql": Style.psql,
    "markdown": Style.markdown,
    "modern": Style.modern,
    "sharp": Style.sharp,
    "rounded": Style.rounded,
    "extended": Style.extended,
    "dots": Style.dots,
    "re_structured_text": Style.re_structured_text,
    "ascii_rounded": Style.ascii_rounded,
}
