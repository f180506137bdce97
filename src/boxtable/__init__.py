"""boxtable: fixed-width box-drawing tables for text terminals."""

from boxtable.colors import DEFAULT_COLOR_MAP, colorize
from boxtable.grouped_headers import GroupedColumnsHeaderError
from boxtable.models import (
    ALIGNMENTS,
    Alignment,
    Column,
    ColumnOptions,
    ComputedColumn,
    GroupedColumnsHeader,
    Row,
    TableOptions,
    ValueTransformer,
)
from boxtable.printer import print_simple_table, render_simple_table
from boxtable.styles import DEFAULT_TABLE_STYLE, BorderStyle, TableStyle
from boxtable.table import Table
from boxtable.utils import visible_width

__all__ = [
    "ALIGNMENTS",
    "Alignment",
    "BorderStyle",
    "Column",
    "ColumnOptions",
    "ComputedColumn",
    "DEFAULT_COLOR_MAP",
    "DEFAULT_TABLE_STYLE",
    "GroupedColumnsHeader",
    "GroupedColumnsHeaderError",
    "Row",
    "Table",
    "TableOptions",
    "TableStyle",
    "ValueTransformer",
    "colorize",
    "print_simple_table",
    "render_simple_table",
    "visible_width",
]
