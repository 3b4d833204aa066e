"""Tests for escape sequence helpers."""

from __future__ import annotations

import pytest

from tabgrid.ansi import (
    ANSI,
    AnsiSyntaxError,
    balance_lines,
    has_ansi,
    leading_style,
    sgr_params,
    split_styled,
    strip_ansi,
    style_codes,
)


def test_strip_ansi() -> None:
    """Control sequences and hyperlinks are removed."""
    assert strip_ansi("\x1b[31mred\x1b[0m") == "red"
    assert strip_ansi("\x1b]8;;https://example.com\x1b\\link\x1b]8;;\x1b\\") == "link"
    assert strip_ansi("plain") == "plain"


def test_has_ansi() -> None:
    """Only valid sequences count as escape sequences."""
    assert has_ansi("\x1b[1mbold")
    assert not has_ansi("plain")
    assert not has_ansi("\x1bX")


@pytest.mark.parametrize(
    "params, expected",
    [
        ("", [0]),
        ("1;31", [1, 31]),
        ("38;5;196", [38, 5, 196]),
        ("38:2::10:20:30", [38, 2, 10, 20, 30]),
        ("48:2:1:2:3", [48, 2, 1, 2, 3]),
        ("38:5:12", [38, 5, 12]),
        ("4:3", [4]),
        ("4:0", [24]),
        ("58:5:1;1", [1]),
    ],
)
def test_sgr_params(params: str, expected: list[int]) -> None:
    """Colon separated sub-parameters are flattened or dropped."""
    assert sgr_params(params) == expected


def test_ansi_drops_control_sequences() -> None:
    """Only visible characters are kept in the formatted text."""
    fragments = ANSI("a\x1b[2Kb\x1b]8;;x\x07c").__pt_formatted_text__()
    assert "".join(text for _, text, *_ in fragments) == "abc"


@pytest.mark.parametrize("text", ["a\x1bb", "a\x1b", "\x1b[31\x01m"])
def test_ansi_invalid(text: str) -> None:
    """An escape character which starts no valid sequence is an error."""
    with pytest.raises(AnsiSyntaxError):
        ANSI(text)


def test_ansi_final_style() -> None:
    """The style in effect at the end of the text is available."""
    assert ANSI("\x1b[1m").final_style == "bold"
    assert ANSI("\x1b[1mx\x1b[0m").final_style == ""


def test_style_codes() -> None:
    """Style strings are converted back into escape sequences."""
    assert style_codes("") == ("", "")
    assert style_codes("ansidefault bg:ansidefault") == ("", "")
    assert style_codes("ansired bg:ansigreen bold dim") == (
        "\x1b[31;42;1;2m",
        "\x1b[39m\x1b[49m\x1b[22m",
    )
    assert style_codes("#0a141e underline") == (
        "\x1b[38;2;10;20;30;4m",
        "\x1b[39m\x1b[24m",
    )


def test_split_styled() -> None:
    """Each visible character carries the styling active for it."""
    assert split_styled("a\x1b[31mb\x1b[0mc") == [
        ("a", "", ""),
        ("b", "\x1b[31m", "\x1b[39m"),
        ("c", "", ""),
    ]


def test_split_styled_true_color() -> None:
    """24-bit colors written with colons keep their channel values."""
    assert split_styled("\x1b[38:2::10:20:30mX") == [
        ("X", "\x1b[38;2;10;20;30m", "\x1b[39m")
    ]


def test_leading_style() -> None:
    """Only sequences before the first visible character are used."""
    assert leading_style("\x1b[4mx\x1b[31m") == ("\x1b[4m", "\x1b[24m")
    assert leading_style("x\x1b[31m") is None
    assert leading_style("\x1b[31m") == ("\x1b[31m", "\x1b[39m")


def test_balance_lines() -> None:
    """Styling which continues onto the next line is re-opened there."""
    assert balance_lines(["\x1b[31mab", "cd\x1b[0m"]) == [
        "\x1b[31mab\x1b[39m",
        "\x1b[31mcd\x1b[0m",
    ]


def test_balance_lines_unstyled_middle() -> None:
    """Lines with no styling in effect are left alone."""
    assert balance_lines(["\x1b[1ma\x1b[0m", "b", "c"]) == [
        "\x1b[1ma\x1b[0m",
        "b",
        "c",
    ]
