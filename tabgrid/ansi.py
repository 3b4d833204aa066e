"""Contain helpers for handling ANSI escape sequences in cell and border text."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import TYPE_CHECKING

from prompt_toolkit.formatted_text import ANSI as PTANSI
from prompt_toolkit.output.vt100 import BG_ANSI_COLORS, FG_ANSI_COLORS

if TYPE_CHECKING:
    from collections.abc import Generator

log = logging.getLogger(__name__)

# Control sequences (CSI) and operating system commands (OSC)
_ESCAPE_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
)

# Maps a style string attribute to the SGR codes which switch it on and off
_ATTRIBUTE_CODES: dict[str, tuple[str, str]] = {
    "bold": ("1", "22"),
    "dim": ("2", "22"),
    "underline": ("4", "24"),
    "strike": ("9", "29"),
    "italic": ("3", "23"),
    "blink": ("5", "25"),
    "reverse": ("7", "27"),
    "hidden": ("8", "28"),
}


class AnsiSyntaxError(ValueError):
    """Raised when text contains an escape character which starts no valid sequence."""


def strip_ansi(text: str) -> str:
    """Remove all escape sequences from a string."""
    if "\x1b" not in text:
        return text
    return _ESCAPE_RE.sub("", text)


def has_ansi(text: str) -> bool:
    """Determine if a string contains any escape sequences."""
    return "\x1b" in text and _ESCAPE_RE.search(text) is not None


def sgr_params(params: str) -> list[int]:
    """Flatten the parameters of an SGR sequence into a list of integers.

    Colon separated sub-parameters are read for extended colors
    (``38:2::r:g:b``, ``38:5:n``) and underline styles (``4:n``). Other
    sub-parameters are ignored.
    """
    result: list[int] = []
    for group in params.split(";"):
        code, *subs = group.split(":")
        if not all(part.isdigit() for part in (code, *subs) if part):
            log.debug("Ignoring SGR parameter `%s`", group)
            continue
        value = min(int(code or 0), 9999)
        if not subs:
            result.append(value)
        elif value in {38, 48} and subs[0] == "2" and len(subs) >= 4:
            result.extend([value, 2, *(int(part or 0) for part in subs[-3:])])
        elif value in {38, 48} and subs[0] == "5" and len(subs) >= 2:
            result.extend([value, 5, int(subs[1] or 0)])
        elif value == 4:
            result.append(24 if subs[0] in {"", "0"} else 4)
        else:
            log.debug("Ignoring SGR parameter `%s`", group)
    return result


class ANSI(PTANSI):
    """Convert ANSI text into formatted text, keeping only the visible characters.

    SGR sequences set the style of the characters which follow them. Other control
    sequences and operating system commands are dropped.

    Raises:
        AnsiSyntaxError: If an escape character does not start a valid sequence

    """

    def __init__(self, value: str) -> None:
        """Parse some ANSI text."""
        self._sequence = ""
        super().__init__(value)
        if self._sequence:
            raise AnsiSyntaxError(f"Unterminated escape sequence {self._sequence!r}")

    @property
    def final_style(self) -> str:
        """The style string in effect at the end of the text."""
        return self._create_style_string()

    def _parse_corot(self) -> Generator[None, str, None]:
        """Coroutine that parses the ANSI escape sequences.

        Yields:
            Accepts characters from a string.

        """
        style = ""
        formatted_text = self._formatted_text

        while True:
            char = yield
            if char != "\x1b":
                formatted_text.append((style, char))
                continue

            self._sequence = char
            char = yield
            self._sequence += char

            if char == "[":
                # Parameter bytes, then intermediate bytes, then a single final byte
                params = ""
                char = yield
                self._sequence += char
                while 0x30 <= ord(char) <= 0x3F:
                    params += char
                    char = yield
                    self._sequence += char
                intermediate = ""
                while 0x20 <= ord(char) <= 0x2F:
                    intermediate += char
                    char = yield
                    self._sequence += char
                if not 0x40 <= ord(char) <= 0x7E:
                    raise AnsiSyntaxError(
                        f"Invalid control sequence {self._sequence!r}"
                    )
                if char == "m" and not intermediate:
                    self._select_graphic_rendition(sgr_params(params))
                    style = self._create_style_string()

            elif char == "]":
                # Operating system commands end with BEL or ST
                last = ""
                while True:
                    char = yield
                    self._sequence += char
                    if char == "\x07" or (last == "\x1b" and char == "\\"):
                        break
                    last = char

            else:
                raise AnsiSyntaxError(f"Invalid escape sequence {self._sequence!r}")

            self._sequence = ""


def _color_code(color: str, bg: bool) -> str | None:
    table = BG_ANSI_COLORS if bg else FG_ANSI_COLORS
    if color == "ansidefault":
        return None
    if color in table:
        return str(table[color])
    if color.startswith("#") and len(color) == 7:
        rgb = int(color[1:], 16)
        return f"{48 if bg else 38};2;{rgb >> 16 & 0xFF};{rgb >> 8 & 0xFF};{rgb & 0xFF}"
    log.debug("Ignoring unknown color `%s`", color)
    return None


@lru_cache(maxsize=1_000)
def style_codes(style: str) -> tuple[str, str]:
    """Convert a style string into escape sequences.

    Args:
        style: A style string as produced by :py:class:`ANSI`

    Returns:
        A ``(prefix, suffix)`` pair: the sequence which switches the style on, and
        the sequences which switch it off again. Both are empty for unstyled text.

    """
    codes: list[str] = []
    resets: list[str] = []
    for token in style.split():
        if token.startswith("bg:"):
            code, reset = _color_code(token[3:], bg=True), "49"
        elif token in _ATTRIBUTE_CODES:
            code, reset = _ATTRIBUTE_CODES[token]
        else:
            code, reset = _color_code(token, bg=False), "39"
        if code is None:
            continue
        codes.append(code)
        if reset not in resets:
            resets.append(reset)
    if not codes:
        return "", ""
    return f"\x1b[{';'.join(codes)}m", "".join(f"\x1b[{reset}m" for reset in resets)


def split_styled(text: str) -> list[tuple[str, str, str]]:
    """Split text into visible characters and the styling active for each.

    Returns:
        A list of ``(char, prefix, suffix)`` tuples. The prefix and suffix are empty
        strings for characters with no active styling.

    """
    return [
        (char, *style_codes(style))
        for style, char, *_ in ANSI(text).__pt_formatted_text__()
    ]


def leading_style(text: str) -> tuple[str, str] | None:
    """Find the styling applied to the first visible character of some text.

    If the text consists only of escape sequences, the styling in effect at the end
    of the text is used.

    Returns:
        A ``(prefix, suffix)`` pair, or :py:const:`None` if no styling is applied

    """
    parsed = ANSI(text)
    fragments = parsed.__pt_formatted_text__()
    style = fragments[0][0] if fragments else parsed.final_style
    prefix, suffix = style_codes(style)
    if not prefix:
        return None
    return prefix, suffix


def balance_lines(lines: list[str]) -> list[str]:
    """Make styling which carries over a line break apply to each line on its own.

    Each line is prefixed with the styling active at its start, and suffixed with
    the codes which switch off the styling active at its end.
    """
    parsed = ANSI("\n".join(lines))
    # The style of each line break is the style in effect at the end of its line
    ends = [
        style for style, char, *_ in parsed.__pt_formatted_text__() if char == "\n"
    ]
    ends.append(parsed.final_style)
    result: list[str] = []
    start = ""
    for line, end in zip(lines, ends):
        result.append(f"{style_codes(start)[0]}{line}{style_codes(end)[1]}")
        start = end
    return result
