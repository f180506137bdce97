"""Cell formatting: transform, wrap, pad and color a single cell."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from boxtable.colors import colorize
from boxtable.models import Column, Row
from boxtable.utils import pad_to_width, split_lines, split_to_width
from boxtable.width import wrap_width


def to_text(value: Any) -> str:
    """Render a raw value as text; ``None`` becomes the empty string."""
    if value is None:
        return ""
    return str(value)


def cell_text(column: Column, value: Any) -> str:
    """Return the display text of *value* in *column*.

    The column transform sees the raw value, ``None`` included.
    """
    if column.transform is not None:
        value = column.transform(value)
    return to_text(value)


def ensure_row_text(row: Row, column: Column) -> str:
    """Return the memoised display text of *row* for *column*.

    The transform runs the first time a cell is seen and never again, so
    repeated renders neither re-invoke it nor compound its effect.
    """
    try:
        return row.text[column.name]
    except KeyError:
        text = cell_text(column, row.data.get(column.name))
        row.text[column.name] = text
        return text


def format_cell(
    text: str,
    column: Column,
    color: str | None,
    color_map: Mapping[str, str],
    disable_colors: bool = False,
    char_length: Mapping[str, int] | None = None,
) -> list[str]:
    """Turn *text* into one or more lines of exactly ``column.length`` cells."""
    assert column.length is not None
    limit = wrap_width(column)
    alignment = column.alignment or "right"

    lines: list[str] = []
    for segment in split_lines(text):
        for fragment in split_to_width(segment, limit, char_length):
            padded = pad_to_width(fragment, column.length, alignment, char_length)
            lines.append(colorize(padded, color, color_map, disable_colors))
    return lines


def blank_line(column: Column) -> str:
    assert column.length is not None
    return " " * column.length


def pad_cell_lines(lines: list[str], height: int, column: Column) -> list[str]:
    """Extend *lines* with blank lines until it is *height* lines tall."""
    if len(lines) >= height:
        return lines
    return lines + [blank_line(column)] * (height - len(lines))
