"""Miscellaneous utility functions."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from prompt_toolkit.utils import get_cwidth

from tabgrid.ansi import strip_ansi

if TYPE_CHECKING:
    from collections.abc import Iterable


@lru_cache(maxsize=4096)
def str_width(text: str) -> int:
    """Return the display width of a single line of text.

    Escape sequences are zero-width and double width characters are taken into
    account.
    """
    return sum(get_cwidth(c) for c in strip_ansi(text))


def split_lines(text: str) -> list[str]:
    """Split text into lines, always returning at least one line."""
    return text.replace("\r\n", "\n").split("\n")


def lines_width(lines: Iterable[str]) -> int:
    """Calculate the width of the longest of some lines."""
    return max((str_width(line) for line in lines), default=0)


def dict_merge(target_dict: dict, input_dict: dict) -> None:
    """Merge the second dictionary onto the first, extending lists."""
    for key, value in input_dict.items():
        current = target_dict.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            dict_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            target_dict[key] = [*current, *value]
        else:
            target_dict[key] = value
