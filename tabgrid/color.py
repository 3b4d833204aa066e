"""Define color annotations which can be wrapped around cell and border text."""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from typing import TYPE_CHECKING

from tabgrid.ansi import AnsiSyntaxError, leading_style

if TYPE_CHECKING:
    from typing import Protocol

    class Writer(Protocol):
        """An object with a text ``write`` method."""

        def write(self, text: str, /) -> int | None:
            """Write some text."""


log = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when a color cannot be read from a string."""


class Color(metaclass=ABCMeta):
    """A pair of escape sequences which start and end a colored run of text."""

    @property
    @abstractmethod
    def prefix(self) -> str:
        """The sequence written before the colored text."""

    @property
    @abstractmethod
    def suffix(self) -> str:
        """The sequence written after the colored text."""

    def write_prefix(self, out: Writer) -> None:
        """Write the opening escape sequence to ``out``."""
        if prefix := self.prefix:
            out.write(prefix)

    def write_suffix(self, out: Writer) -> None:
        """Write the closing escape sequence to ``out``."""
        if suffix := self.suffix:
            out.write(suffix)

    def colorize(self, text: str) -> str:
        """Wrap some text in this color's escape sequences."""
        if not text:
            return text
        return f"{self.prefix}{text}{self.suffix}"

    def __eq__(self, other: object) -> bool:
        """Colors are equal if they write the same sequences."""
        if not isinstance(other, Color):
            return NotImplemented
        return (self.prefix, self.suffix) == (other.prefix, other.suffix)

    def __hash__(self) -> int:
        """Hash the color by its sequences."""
        return hash((self.prefix, self.suffix))

    def __bool__(self) -> bool:
        """A color is truthy if it writes anything."""
        return bool(self.prefix or self.suffix)


class AnsiColor(Color):
    """A color made of arbitrary ANSI escape sequences."""

    __slots__ = ("_prefix", "_suffix")

    def __init__(self, prefix: str, suffix: str = "\x1b[0m") -> None:
        """Create a new color from an opening and a closing sequence."""
        self._prefix = prefix
        self._suffix = suffix

    @property
    def prefix(self) -> str:
        """The sequence written before the colored text."""
        return self._prefix

    @property
    def suffix(self) -> str:
        """The sequence written after the colored text."""
        return self._suffix

    @classmethod
    def parse(cls, text: str) -> AnsiColor:
        """Read a color from the styling applied to the start of some text.

        The styling in effect at the first visible character of ``text`` becomes
        the prefix, and the codes needed to switch it off again become the suffix.
        For example, ``"\\x1b[34m\\x1b[42m-\\x1b[0m"`` gives the prefix
        ``"\\x1b[34;42m"`` and the suffix ``"\\x1b[39m\\x1b[49m"``.

        Args:
            text: Text which begins with one or more SGR escape sequences

        Returns:
            A new color

        Raises:
            ParseError: If the text carries no styling or is malformed

        """
        if "\x1b" not in text:
            raise ParseError(f"No escape sequences found in {text!r}")
        try:
            style = leading_style(text)
        except AnsiSyntaxError as error:
            raise ParseError(str(error)) from error
        if style is None:
            raise ParseError(f"No styling applied in {text!r}")
        log.debug("Parsed color %r from %r", style, text)
        return cls(*style)

    def __repr__(self) -> str:
        """Return a representation of the color."""
        return f"AnsiColor(prefix={self._prefix!r}, suffix={self._suffix!r})"


class NoColor(Color):
    """A color which writes nothing."""

    __slots__ = ()

    @property
    def prefix(self) -> str:
        """Empty."""
        return ""

    @property
    def suffix(self) -> str:
        """Empty."""
        return ""

    def __repr__(self) -> str:
        """Return a representation of the color."""
        return "NoColor()"
