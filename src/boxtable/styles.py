"""Box-drawing glyph sets used to frame tables."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class BorderStyle:
    """Glyphs of one horizontal border line."""

    left: str
    mid: str
    right: str
    other: str


@dataclass(frozen=True)
class TableStyle:
    """The full glyph set of a table.

    ``header_top`` frames the top of the table, ``header_bottom`` separates
    the header from the body, ``table_bottom`` closes the table and
    ``row_separator`` is drawn between body rows when requested.
    """

    header_top: BorderStyle
    header_bottom: BorderStyle
    table_bottom: BorderStyle
    vertical: str
    row_separator: BorderStyle


DEFAULT_TABLE_STYLE = TableStyle(
    header_top=BorderStyle(left="┌", mid="┬", right="┐", other="─"),
    header_bottom=BorderStyle(left="├", mid="┼", right="┤", other="─"),
    table_bottom=BorderStyle(left="└", mid="┴", right="┘", other="─"),
    vertical="│",
    row_separator=BorderStyle(left="├", mid="┼", right="┤", other="─"),
)

_BORDER_KEYS = {
    "headerTop": "header_top",
    "header_top": "header_top",
    "headerBottom": "header_bottom",
    "header_bottom": "header_bottom",
    "tableBottom": "table_bottom",
    "table_bottom": "table_bottom",
    "rowSeparator": "row_separator",
    "row_separator": "row_separator",
}


def table_style_from_dict(
    data: Mapping[str, Any],
    base: TableStyle = DEFAULT_TABLE_STYLE,
) -> TableStyle:
    """Build a style from a (possibly partial) mapping, filling gaps from *base*."""
    changes: dict[str, Any] = {}
    for key, value in data.items():
        if key == "vertical":
            changes["vertical"] = value
            continue
        attr = _BORDER_KEYS.get(key)
        if attr is None:
            raise ValueError(f"Unknown table style key: {key!r}")
        if isinstance(value, BorderStyle):
            changes[attr] = value
        else:
            changes[attr] = replace(getattr(base, attr), **dict(value))
    return replace(base, **changes)
