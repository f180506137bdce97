"""Row and table assembly: join formatted cells and borders into lines."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from boxtable.cell import format_cell, pad_cell_lines
from boxtable.colors import DEFAULT_CELL_COLOR, DEFAULT_HEADER_COLOR
from boxtable.models import Column, Row
from boxtable.styles import BorderStyle, TableStyle


@dataclass
class RenderContext:
    """Per-render settings threaded through the assembler."""

    style: TableStyle
    color_map: Mapping[str, str]
    disable_colors: bool = False
    char_length: Mapping[str, int] | None = None
    row_separator: bool = False


def render_border(columns: Sequence[Column], border: BorderStyle) -> str:
    """Build a border line: ``width + 2`` glyphs per column joined by junctions."""
    segments = [border.other * (column.length + 2) for column in columns]  # type: ignore[operator]
    return border.left + border.mid.join(segments) + border.right


def render_row_lines(
    columns: Sequence[Column],
    cells: Sequence[list[str]],
    vertical: str,
) -> list[str]:
    """Join per-column line sets into the printable lines of one row.

    Every cell is framed by one space on each side; cells with fewer lines
    than the tallest one are padded with blank lines.
    """
    height = max((len(lines) for lines in cells), default=1)
    padded = [pad_cell_lines(lines, height, column) for column, lines in zip(columns, cells)]

    result: list[str] = []
    for i in range(height):
        parts = [f" {lines[i]} " for lines in padded]
        result.append(vertical + vertical.join(parts) + vertical)
    return result


def render_header(columns: Sequence[Column], ctx: RenderContext) -> list[str]:
    cells = [
        format_cell(
            column.title or "",
            column,
            DEFAULT_HEADER_COLOR,
            ctx.color_map,
            ctx.disable_colors,
            ctx.char_length,
        )
        for column in columns
    ]
    return render_row_lines(columns, cells, ctx.style.vertical)


def render_body_row(columns: Sequence[Column], row: Row, ctx: RenderContext) -> list[str]:
    cells = [
        format_cell(
            row.text.get(column.name, ""),
            column,
            row.color or column.color or DEFAULT_CELL_COLOR,
            ctx.color_map,
            ctx.disable_colors,
            ctx.char_length,
        )
        for column in columns
    ]
    return render_row_lines(columns, cells, ctx.style.vertical)


def assemble(
    columns: Sequence[Column],
    rows: Sequence[Row],
    ctx: RenderContext,
) -> list[str]:
    """Return the full line sequence of a table.

    Top border, header, header separator, body rows and bottom border.
    Columns must already carry their resolved ``length``.
    """
    style = ctx.style
    lines = [render_border(columns, style.header_top)]
    lines.extend(render_header(columns, ctx))
    lines.append(render_border(columns, style.header_bottom))

    separator = render_border(columns, style.row_separator)
    last = len(rows) - 1
    for index, row in enumerate(rows):
        lines.extend(render_body_row(columns, row, ctx))
        wants_separator = row.separator if row.separator is not None else ctx.row_separator
        if wants_separator and index != last:
            lines.append(separator)

    lines.append(render_border(columns, style.table_bottom))
    return lines
