"""This package renders text tables with configurable borders, spans and colors."""

__app_name__ = "tabgrid"
__version__ = "0.4.0"
__strapline__ = "Box-drawn text tables"
__author__ = "tabgrid developers"
__copyright__ = f"© {__author__}"
__license__ = "MIT"

from tabgrid.border import (
    Border,
    BorderChar,
    BorderColor,
    Borders,
    BorderText,
    HorizontalLine,
    Line,
    Offset,
    VerticalLine,
)
from tabgrid.color import AnsiColor, Color, NoColor, ParseError
from tabgrid.config import Settings, SettingsError, load_settings
from tabgrid.json_table import JsonTable, json_to_table
from tabgrid.log import setup_logs
from tabgrid.objects import Cells, Columns, Rows, Segment
from tabgrid.options import Alignment, ContentColor, Format, Modify, Padding, Span
from tabgrid.style import CorrectSpans, Style
from tabgrid.table import Builder, Table

__all__ = [
    "Alignment",
    "AnsiColor",
    "Border",
    "BorderChar",
    "BorderColor",
    "BorderText",
    "Borders",
    "Builder",
    "Cells",
    "Color",
    "Columns",
    "ContentColor",
    "CorrectSpans",
    "Format",
    "HorizontalLine",
    "JsonTable",
    "Line",
    "Modify",
    "NoColor",
    "Offset",
    "Padding",
    "ParseError",
    "Rows",
    "Segment",
    "Settings",
    "SettingsError",
    "Span",
    "Style",
    "Table",
    "VerticalLine",
    "json_to_table",
    "load_settings",
    "setup_logs",
]
